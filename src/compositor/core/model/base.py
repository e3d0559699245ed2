"""Base object and metaclass for composed classes."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Tuple

from compositor.core.exceptions import ConstructionError, FrozenClassError
from compositor.core.roles.base import Attribute, RoleMeta


class CompositeMeta(type):
    """Metaclass of composed classes; supports freezing the class namespace."""

    def __setattr__(cls, name: str, value: Any) -> None:
        if cls.__dict__.get("__frozen__", False):
            raise FrozenClassError(
                f"Cannot set '{name}' on frozen class {cls.__qualname__}",
                context={"class": cls.__qualname__, "member": name},
            )
        super().__setattr__(name, value)

    def __delattr__(cls, name: str) -> None:
        if cls.__dict__.get("__frozen__", False):
            raise FrozenClassError(
                f"Cannot delete '{name}' from frozen class {cls.__qualname__}",
                context={"class": cls.__qualname__, "member": name},
            )
        super().__delattr__(name)


class CompositeObject(metaclass=CompositeMeta):
    """Base of every composed class.

    The constructor takes keyword arguments only. Each declared attribute is
    filled from its keyword, else from its default; missing required
    attributes raise ``ConstructionError``. Unknown keywords are ignored
    unless the class has a strict constructor. ``BUILD`` runs last and can be
    provided by a role.
    """

    __roles__: ClassVar[Tuple[RoleMeta, ...]] = ()
    __attributes__: ClassVar[Mapping[str, Attribute]] = MappingProxyType({})
    __strict_constructor__: ClassVar[bool] = False

    def __init__(self, **kwargs: Any) -> None:
        cls = type(self)
        attributes = cls.__attributes__

        if cls.__strict_constructor__:
            unknown = sorted(set(kwargs) - set(attributes))
            if unknown:
                raise ConstructionError(
                    f"Found unknown attribute(s) passed to the constructor of "
                    f"{cls.__qualname__}: {', '.join(unknown)}",
                    context={"class": cls.__qualname__, "unknown": unknown},
                )

        missing = []
        for name, attr in attributes.items():
            if name in kwargs:
                self.__dict__[name] = kwargs[name]
            elif attr.has_default:
                self.__dict__[name] = attr.get_default()
            elif attr.required:
                missing.append(name)
        if missing:
            raise ConstructionError(
                f"Attribute(s) required by {cls.__qualname__}: {', '.join(missing)}",
                context={"class": cls.__qualname__, "missing": missing},
            )

        self.BUILD(**kwargs)

    def BUILD(self, **kwargs: Any) -> None:
        """Post-construction hook."""

    @classmethod
    def does(cls, role: RoleMeta) -> bool:
        """True if ``role`` (or a role consuming it) was composed into this class."""
        return any(applied is role or issubclass(applied, role) for applied in cls.__roles__)


__all__ = ["CompositeMeta", "CompositeObject"]
