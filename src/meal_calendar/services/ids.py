"""Identifier generation."""

from collections.abc import Callable
from uuid import uuid4

IdFactory = Callable[[], str]


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid4())
