"""Entity references inside change batches.

A change names its target either by a literal id or by a pending reference
to the N-th entity of a kind created earlier in the same ``multi`` batch.
On the wire a pending reference is the token ``@ref:<kind>:<index>``.
"""

from dataclasses import dataclass
from typing import Dict, Union

from .errors import MalformedReferenceError, UnresolvedReferenceError

REF_PREFIX = "@ref:"
REF_KINDS = ("facility", "fixture")


@dataclass(frozen=True)
class LiteralRef:
    id: str

    def __str__(self):
        return self.id


@dataclass(frozen=True)
class PendingRef:
    kind: str
    index: int

    def __str__(self):
        return f"{REF_PREFIX}{self.kind}:{self.index}"


EntityRef = Union[LiteralRef, PendingRef]


def parse_entity_ref(value) -> EntityRef:
    """Turn a wire id into an EntityRef.

    Raises:
        MalformedReferenceError: for a ``@ref:`` token that is not
            ``@ref:facility:<n>`` or ``@ref:fixture:<n>``
    """
    if isinstance(value, (LiteralRef, PendingRef)):
        return value
    if not isinstance(value, str):
        raise MalformedReferenceError(repr(value))
    if not value.startswith(REF_PREFIX):
        return LiteralRef(value)

    parts = value[len(REF_PREFIX):].split(":")
    if len(parts) != 2 or parts[0] not in REF_KINDS or not parts[1].isdigit():
        raise MalformedReferenceError(value)
    return PendingRef(parts[0], int(parts[1]))


class RefTable:
    """Ids created so far in one batch, per kind, in creation order."""

    def __init__(self):
        self._created: Dict[str, list] = {kind: [] for kind in REF_KINDS}

    def register(self, kind: str, entity_id: str):
        self._created[kind].append(entity_id)

    def resolve(self, ref: EntityRef) -> LiteralRef:
        if isinstance(ref, LiteralRef):
            return ref
        created = self._created.get(ref.kind, [])
        if ref.index >= len(created):
            raise UnresolvedReferenceError(str(ref))
        return LiteralRef(created[ref.index])


def require_literal(ref: EntityRef) -> str:
    """Id of a resolved reference; a pending one outside its batch is an error."""
    if isinstance(ref, PendingRef):
        raise UnresolvedReferenceError(str(ref))
    return ref.id


def resolve_change(change, table: RefTable):
    """Copy of a change with every pending target reference replaced by its id."""
    updates = {}
    for name in ("facility_id", "fixture_id"):
        ref = getattr(change, name, None)
        if isinstance(ref, PendingRef):
            updates[name] = table.resolve(ref)
    return change.model_copy(update=updates) if updates else change
