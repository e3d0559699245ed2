from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


class CompositorError(Exception):
    """Base exception for the class compositor."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidRequestError(CompositorError, ValueError):
    """Raised when a composition request item has the wrong shape."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CompositorError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ResolutionError(CompositorError, LookupError):
    """Raised when a role identifier cannot be located or loaded."""

    def __init__(
        self,
        message: str,
        *,
        identifier: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if identifier is not None:
            ctx["identifier"] = identifier
        CompositorError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)

    @property
    def identifier(self) -> str | None:
        return self.context.get("identifier")


class CompositionConflictError(CompositorError, TypeError):
    """Raised when roles applied to one class are structurally incompatible."""

    def __init__(
        self,
        message: str,
        *,
        roles: Iterable[str] = (),
        member: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx["roles"] = list(roles)
        if member is not None:
            ctx["member"] = member
        CompositorError.__init__(self, message, context=ctx)
        TypeError.__init__(self, message)

    @property
    def roles(self) -> list[str]:
        return list(self.context.get("roles", []))


class ConfigurationError(CompositorError, ValueError):
    """Raised for invalid compositor configuration."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CompositorError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class FrozenClassError(CompositorError, AttributeError):
    """Raised when code tries to change the shape of a frozen class."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CompositorError.__init__(self, message, context=context)
        AttributeError.__init__(self, message)


class ConstructionError(CompositorError, TypeError):
    """Raised when a composite instance is constructed with bad arguments."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CompositorError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


__all__ = [
    "CompositorError",
    "InvalidRequestError",
    "ResolutionError",
    "CompositionConflictError",
    "ConfigurationError",
    "FrozenClassError",
    "ConstructionError",
]
