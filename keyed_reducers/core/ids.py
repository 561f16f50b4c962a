"""
Identifier generation for reserved action types.

Probe action types carry a random suffix so application reducers cannot
match them by accident.
"""

import secrets


def random_suffix(length: int = 6) -> str:
    """
    Generate a short random dotted suffix.

    Example:
        random_suffix() -> "3.f.0.a.9.c"
    """
    return ".".join(secrets.token_hex(length)[:length])


def reserved_type(name: str, randomized: bool = False) -> str:
    """
    Build an action type inside the private "@@keyed_reducers/" namespace.

    Args:
        name: Action name (e.g., "INIT")
        randomized: Append a random suffix

    Returns:
        Action type string
    """
    base = f"@@keyed_reducers/{name}"
    if randomized:
        return f"{base}.{random_suffix()}"
    return base
