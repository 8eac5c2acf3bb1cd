"""User changes, reference tokens and the reducer that applies them."""

from .errors import (
    ChangeError,
    MalformedChangeError,
    MalformedReferenceError,
    UnknownChangeError,
    UnknownEntityError,
    UnresolvedReferenceError,
)
from .reducer import apply_change
from .refs import EntityRef, LiteralRef, PendingRef
from .types import UserChange, dump_change, parse_change, parse_changes

__all__ = [
    "ChangeError",
    "MalformedChangeError",
    "MalformedReferenceError",
    "UnknownChangeError",
    "UnknownEntityError",
    "UnresolvedReferenceError",
    "apply_change",
    "EntityRef",
    "LiteralRef",
    "PendingRef",
    "UserChange",
    "dump_change",
    "parse_change",
    "parse_changes",
]
