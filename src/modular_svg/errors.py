"""modular-svg exceptions.

Everything raised while turning an input tree into a scene derives from
ModularSvgError. Solving and emitting never raise these.
"""

from __future__ import annotations


class ModularSvgError(Exception):
    """Base exception for all modular-svg errors."""

    pass


class SchemaError(ModularSvgError, ValueError):
    """Raised when the input tree fails structural validation."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class DuplicateIdError(ModularSvgError, ValueError):
    """Raised when an explicit key or id is used by more than one node."""

    def __init__(self, id: str, field: str = "id"):
        self.id = id
        self.field = field
        super().__init__(f"Duplicate {field}: {id}")


class UnresolvedReferenceError(ModularSvgError, ValueError):
    """Raised when a Ref, arrow endpoint or constraint names an unknown node."""

    def __init__(self, target: str, context: str = "ref"):
        self.target = target
        self.context = context
        super().__init__(f"Unknown {context} {target}")
