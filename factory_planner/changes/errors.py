"""Errors raised for changes that cannot be applied.

A change that does nothing on purpose (pinning an item on an input port,
trimming a two-point path) is not an error. These exceptions mark changes
that are invalid: unknown types, broken payloads, missing targets.
"""


class ChangeError(ValueError):
    """Base class for every rejected change."""


class UnknownChangeError(ChangeError):
    def __init__(self, change_type):
        super().__init__(f"Unknown change type: {change_type!r}")
        self.change_type = change_type


class MalformedChangeError(ChangeError):
    """A change payload is missing fields or has fields of the wrong type."""


class MalformedReferenceError(ChangeError):
    def __init__(self, token: str):
        super().__init__(f"Malformed entity reference: {token!r}")
        self.token = token


class UnresolvedReferenceError(ChangeError):
    """A pending reference names an entity the batch has not created yet."""

    def __init__(self, token: str):
        super().__init__(f"Reference {token} does not name an entity created earlier in the batch")
        self.token = token


class UnknownEntityError(ChangeError):
    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"No {kind} with id {entity_id!r}")
        self.kind = kind
        self.entity_id = entity_id
