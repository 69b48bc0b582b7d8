"""Repository adapters - Identity and code storage implementations."""

from .json_file import JsonFileIdentityStore
from .memory import InMemoryCodeRegistry, generate_code

__all__ = ["InMemoryCodeRegistry", "JsonFileIdentityStore", "generate_code"]
