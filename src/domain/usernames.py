"""Username normalization shared by both stores."""


def normalize_username(username: str) -> str:
    """
    Normalize a Telegram username for storage and lookup.

    Applies: strip whitespace + drop leading "@" + lowercase
    """
    return username.strip().lstrip("@").lower()
