"""The class compositor: a memoizing factory that builds classes from roles.

Usage:
    compositor = Compositor(
        "MyApp::Class",
        post_transforms=["strict_constructor"],
        prefix_map={"": "myapp.roles.", "=": ""},
    )

    cls = compositor.class_for("PieEater", "ContestWinner")
    obj = cls(pie_type="banana", place="2nd")

Each call builds a class by combining the requested roles with
``CompositeObject``, applies the post-composition transforms, freezes the
result and gives it a human-scannable name under the basename
(``MyApp::Class::PieEater::ContestWinner``). Requests are memoized on an
order-insensitive key, so asking for the same roles again returns the same
class.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence

from compositor.core.model.runtime import ObjectModel
from compositor.core.model.transforms import TransformSpec
from compositor.core.naming import (
    SerialCounter,
    join_identifier,
    naming_segment,
    rewrite_prefix,
    validate_basename,
)
from compositor.core.naming.prefix import PrefixTarget
from compositor.core.roles.base import RoleMeta
from compositor.core.roles.resolver import RoleResolver
from compositor.core.utils.profiling import span

from .canonical import memoization_key
from .memo import ClassRegistry, KnownClass, MemoizationTable
from .request import ParameterizedItem, normalize_request

logger = logging.getLogger(__name__)


def _snapshot_item(item: Any) -> Any:
    """Copy the containers of a request item; parameter values stay shared."""
    if isinstance(item, (tuple, list)):
        unit, moniker, parameters = item
        return (unit, moniker, dict(parameters) if parameters is not None else None)
    return item


class Compositor:
    """Build, name, freeze and memoize classes composed from roles.

    Attributes:
        basename: Namespace every composed class name starts with
        post_transforms: Transform specs applied to every new class, in order
        prefix_map: Role identifier shorthand (see ``rewrite_prefix``)
        resolver: Turns role identifiers into roles
        model: Creates the classes and holds the names already taken

    Memo table, registry and serial counter belong to this instance alone.
    ``compose`` is safe to call from several threads: builds run under one
    lock and a request already being built is never built twice.
    """

    def __init__(
        self,
        basename: str,
        *,
        post_transforms: Sequence[TransformSpec] = (),
        prefix_map: Optional[Mapping[str, PrefixTarget]] = None,
        resolver: Optional[RoleResolver] = None,
        model: Optional[ObjectModel] = None,
    ) -> None:
        self.basename = validate_basename(basename)
        self.post_transforms = tuple(post_transforms)
        self.prefix_map: Dict[str, PrefixTarget] = dict(prefix_map or {})
        self.resolver = resolver if resolver is not None else RoleResolver()
        self.model = model if model is not None else ObjectModel()

        self._memo = MemoizationTable()
        self._known = ClassRegistry()
        self._serial = SerialCounter()
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        *,
        resolver: Optional[RoleResolver] = None,
        model: Optional[ObjectModel] = None,
    ) -> "Compositor":
        """Build a compositor from loaded configuration.

        Accepts either the full config (with a ``compositor`` section, as
        returned by ``ConfigManager.load_config``) or the section itself.
        """
        section = config.get("compositor", config)
        return cls(
            section.get("basename"),
            post_transforms=section.get("post_transforms") or (),
            prefix_map=section.get("prefix_map") or {},
            resolver=resolver,
            model=model,
        )

    # ---------- Introspection ----------

    def known_classes(self) -> List[KnownClass]:
        """Return ``(identifier, request)`` pairs for every class built so far."""
        return self._known.entries()

    def memoization_key(self, *items: Any) -> str:
        return memoization_key(items)

    def rewrite_roles(self, *identifiers: str) -> List[str]:
        return rewrite_prefix(self.prefix_map, *identifiers)

    # ---------- Composition ----------

    def class_for(self, *items: Any) -> type:
        """Return the class composed from ``items``, building it if needed.

        Items are role identifiers (expanded with ``prefix_map``) or
        ``(role, moniker, parameters)`` triples for parameterized roles. The
        moniker names this application of the role, so the same
        parameterized role can be applied more than once.
        """
        identifier = self.compose(*items)
        cls = self.model.lookup(identifier)
        if cls is None:
            raise LookupError(f"Composed class '{identifier}' is missing from the object model")
        return cls

    def compose(self, *items: Any) -> str:
        """Return the identifier of the class composed from ``items``.

        Raises:
            InvalidRequestError: If an item is malformed
            ResolutionError: If a role cannot be located or loaded
            CompositionConflictError: If the roles cannot be combined
        """
        key = memoization_key(items)
        cached = self._memo.get(key)
        if cached is not None:
            logger.debug("Memo hit for [%s] -> %s", key, cached)
            return cached

        with self._lock:
            cached = self._memo.get(key)
            if cached is not None:
                return cached
            with span("compositor.compose", key=key):
                return self._build(key, items)

    def _build(self, key: str, items: Sequence[Any]) -> str:
        request = normalize_request(items)
        original = tuple(_snapshot_item(item) for item in items)

        applied: List[Optional[RoleMeta]] = []
        plain_slots: List[int] = []
        plain_names: List[str] = []
        segments: List[str] = []

        with span("compositor.resolve"):
            for item in request:
                if isinstance(item, ParameterizedItem):
                    (unit,) = self.rewrite_roles(item.unit)
                    applied.append(self.resolver.resolve(unit, item.parameters, moniker=item.moniker))
                    raw_name = item.moniker
                else:
                    plain_slots.append(len(applied))
                    plain_names.append(item.identifier)
                    applied.append(None)
                    raw_name = item.identifier
                segments.append(naming_segment(raw_name, flatten=bool(segments)))

            candidate = join_identifier(self.basename, segments)

            for slot, full_name in zip(plain_slots, self.rewrite_roles(*plain_names)):
                applied[slot] = self.resolver.resolve(full_name)

        roles = [role for role in applied if role is not None]

        checkpoint = self._serial.current
        try:
            name = self._unique_name(candidate)
            with span("compositor.build", cls=name):
                cls = self.model.create_class(name, roles)
                for transform in self.post_transforms:
                    cls = self.model.apply_transform(cls, transform)
                cls = self.model.freeze(cls)
                self.model.define(name, cls)
        except Exception:
            self._serial.reset(checkpoint)
            raise

        self._known.learn(name, original)
        self._memo.set(key, name)
        logger.debug("Composed %s for [%s]", name, key)
        return name

    def _unique_name(self, candidate: str) -> str:
        name = candidate
        while self.model.exists(name):
            name = f"{candidate}_{self._serial.next()}"
        if name != candidate:
            logger.info("Class name %s is taken; using %s", candidate, name)
        return name

    def __repr__(self) -> str:
        return f"Compositor(basename={self.basename!r}, classes={len(self._known)})"


__all__ = ["Compositor"]
