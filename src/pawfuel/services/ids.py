"""Identifier helpers."""

from uuid import uuid4


def new_id(prefix: str) -> str:
    """Return a short random identifier with a readable prefix."""
    return f"{prefix}{uuid4().hex[:12]}"
