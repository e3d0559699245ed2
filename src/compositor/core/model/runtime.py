"""Object model runtime: builds, transforms, freezes and names composed classes.

The model owns a namespace of class identifiers (``MyApp::Class::PieEater``)
in the way a module owns its globals. Composed classes are only defined in
it once they are complete, and anything else can be defined there too; the
compositor treats every existing name as taken.
"""
from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Sequence

from compositor.core.exceptions import CompositionConflictError, CompositorError
from compositor.core.naming.identifiers import last_segment
from compositor.core.roles.base import MISSING, Attribute, RoleMeta

from .base import CompositeMeta, CompositeObject
from .transforms import TransformRegistry, TransformSpec

logger = logging.getLogger(__name__)

COMPOSED_MODULE = "compositor.composed"


class ObjectModel:
    """Namespace and factory for composed classes."""

    def __init__(
        self,
        base: type = CompositeObject,
        *,
        transforms: Optional[TransformRegistry] = None,
    ) -> None:
        if not isinstance(base, CompositeMeta):
            raise TypeError("ObjectModel base must be a CompositeObject subclass")
        self.base = base
        self.transforms = transforms if transforms is not None else TransformRegistry()
        self._classes: Dict[str, type] = {}
        self._lock = threading.Lock()

    # ---------- Namespace ----------

    def exists(self, name: str) -> bool:
        return name in self._classes

    def lookup(self, name: str) -> Optional[type]:
        return self._classes.get(name)

    def define(self, name: str, cls: type) -> None:
        """Bind ``name`` to ``cls``. Rebinding a name to another class is an error."""
        with self._lock:
            existing = self._classes.get(name)
            if existing is not None and existing is not cls:
                raise CompositorError(f"Class name '{name}' is already defined", context={"name": name})
            self._classes[name] = cls

    def names(self) -> List[str]:
        return sorted(self._classes)

    # ---------- Building ----------

    def _merge_roles(self, name: str, roles: Sequence[RoleMeta], base: type) -> tuple[Dict[str, Any], Dict[str, Attribute]]:
        members: Dict[str, Any] = {}
        owners: Dict[str, str] = {}
        attributes: Dict[str, Attribute] = dict(base.__attributes__)
        required_by: Dict[str, str] = {}

        for role in roles:
            role_name = role.__qualname__
            contributed = {**role.__role_members__, **role.__role_attributes__}
            for member, value in contributed.items():
                existing = members.get(member, MISSING)
                if existing is not MISSING and existing is not value:
                    raise CompositionConflictError(
                        f"Cannot compose {name}: '{member}' is provided by both "
                        f"{owners[member]} and {role_name}",
                        roles=[owners[member], role_name],
                        member=member,
                    )
                members[member] = value
                owners.setdefault(member, role_name)
                if isinstance(value, Attribute):
                    attributes[member] = value
            for member in sorted(role.__role_requires__):
                required_by.setdefault(member, role_name)

        for member, role_name in required_by.items():
            if member not in members and not hasattr(base, member):
                raise CompositionConflictError(
                    f"Cannot compose {name}: {role_name} requires '{member}', "
                    "which no other role provides",
                    roles=[role_name],
                    member=member,
                )
        return members, attributes

    def create_class(self, name: str, roles: Sequence[RoleMeta], base: Optional[type] = None) -> type:
        """Create a mutable class named ``name`` from ``base`` and ``roles``.

        Raises:
            CompositionConflictError: If two roles provide the same member
                differently, or a role's requirement is not met
        """
        base = base if base is not None else self.base
        members, attributes = self._merge_roles(name, roles, base)

        namespace: Dict[str, Any] = dict(members)
        namespace.update(
            {
                "__module__": COMPOSED_MODULE,
                "__qualname__": name,
                "__doc__": f"Composed from: {', '.join(r.__qualname__ for r in roles) or '(no roles)'}",
                "__roles__": tuple(roles),
                "__attributes__": MappingProxyType(attributes),
            }
        )
        cls = type(base)(last_segment(name), (base,), namespace)
        logger.debug("Created class %s with roles %s", name, [r.__qualname__ for r in roles])
        return cls

    def apply_transform(self, cls: type, spec: TransformSpec) -> type:
        transform = self.transforms.resolve(spec)
        result = transform(cls)
        if result is None:
            result = cls
        if not isinstance(result, CompositeMeta):
            raise CompositorError(
                f"Transform {spec!r} returned {result!r}, not a composed class",
                context={"transform": repr(spec)},
            )
        return result

    def freeze(self, cls: type) -> type:
        """Make the class namespace immutable; further changes raise FrozenClassError."""
        type.__setattr__(cls, "__frozen__", True)
        return cls

    @staticmethod
    def is_frozen(cls: type) -> bool:
        return bool(cls.__dict__.get("__frozen__", False))


__all__ = ["COMPOSED_MODULE", "ObjectModel"]
