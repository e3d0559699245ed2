"""Post-composition transforms.

A transform takes a freshly composed (not yet frozen) class and returns the
class to use in its place, usually the same class after adjusting it. Specs
name a transform in one of three ways:

- a registered name (``"strict_constructor"``)
- an import path (``"myapp.transforms:audit"``)
- the callable itself
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from compositor.core.exceptions import ConfigurationError
from compositor.core.utils.loader import import_object

Transform = Callable[[type], Optional[type]]
TransformSpec = Union[str, Transform]


def strict_constructor(cls: type) -> type:
    """Reject constructor keywords that do not name a declared attribute."""
    cls.__strict_constructor__ = True  # type: ignore[attr-defined]
    return cls


def auto_repr(cls: type) -> type:
    """Give the class a ``__repr__`` listing its attribute values.

    Left alone when a role already provides ``__repr__``.
    """
    if "__repr__" in cls.__dict__:
        return cls

    def __repr__(self: Any) -> str:
        parts = []
        for name in type(self).__attributes__:
            if name in self.__dict__:
                parts.append(f"{name}={self.__dict__[name]!r}")
        return f"{type(self).__qualname__}({', '.join(parts)})"

    cls.__repr__ = __repr__  # type: ignore[method-assign]
    return cls


BUILTIN_TRANSFORMS: Mapping[str, Transform] = {
    "strict_constructor": strict_constructor,
    "auto_repr": auto_repr,
}


class TransformRegistry:
    """Named transforms available to one object model."""

    def __init__(self, transforms: Optional[Mapping[str, Transform]] = None) -> None:
        self._transforms: Dict[str, Transform] = dict(BUILTIN_TRANSFORMS)
        self._transforms.update(transforms or {})

    def register(self, name: str, transform: Transform) -> None:
        if not callable(transform):
            raise TypeError(f"Transform '{name}' must be callable")
        self._transforms[name] = transform

    def names(self) -> List[str]:
        return sorted(self._transforms)

    def resolve(self, spec: TransformSpec) -> Transform:
        if callable(spec):
            return spec
        if not isinstance(spec, str) or not spec:
            raise ConfigurationError(f"Invalid transform spec: {spec!r}")
        if spec in self._transforms:
            return self._transforms[spec]
        if "." in spec or ":" in spec:
            try:
                transform = import_object(spec)
            except ImportError as exc:
                raise ConfigurationError(
                    f"Cannot import transform '{spec}': {exc}", context={"transform": spec}
                ) from exc
            if callable(transform):
                return transform
        raise ConfigurationError(
            f"Unknown transform '{spec}' (known: {', '.join(self.names())})",
            context={"transform": spec},
        )


__all__ = [
    "BUILTIN_TRANSFORMS",
    "Transform",
    "TransformRegistry",
    "TransformSpec",
    "auto_repr",
    "strict_constructor",
]
