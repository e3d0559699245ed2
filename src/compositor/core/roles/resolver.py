"""Role resolution: turn role identifiers into role classes."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from compositor.core.exceptions import CompositorError, ResolutionError
from compositor.core.utils.loader import import_object
from compositor.core.utils.profiling import span

from .base import RoleMeta, is_parameterized_role, is_role

logger = logging.getLogger(__name__)


class RoleResolver:
    """Locate roles by identifier and materialize parameterized ones.

    Lookup order:
    1. Roles registered in-process via ``register()``
    2. Import by dotted path (``package.module.Role`` or ``package.module:Role``)

    Subclass and override ``load()`` to change where roles come from.
    """

    def __init__(self, roles: Optional[Mapping[str, Any]] = None) -> None:
        self._registered: Dict[str, Any] = {}
        for name, role in (roles or {}).items():
            self.register(name, role)

    def register(self, name: str, role: Any) -> None:
        """Make ``role`` resolvable under ``name`` without an import."""
        if not (is_role(role) or is_parameterized_role(role)):
            raise TypeError(f"Cannot register {role!r} as '{name}': not a role")
        self._registered[name] = role
        logger.debug("Registered role %s -> %s", name, getattr(role, "__qualname__", role))

    def registered_names(self) -> List[str]:
        return sorted(self._registered)

    def load(self, identifier: str) -> Any:
        """Return the object named by ``identifier``.

        Raises:
            ResolutionError: If the identifier cannot be located or imported
        """
        if identifier in self._registered:
            return self._registered[identifier]
        with span("resolver.import", identifier=identifier):
            try:
                return import_object(identifier)
            except ImportError as exc:
                raise ResolutionError(
                    f"Cannot load role '{identifier}': {exc}",
                    identifier=identifier,
                ) from exc
            except Exception as exc:
                raise ResolutionError(
                    f"Error while importing role '{identifier}': {type(exc).__name__}: {exc}",
                    identifier=identifier,
                ) from exc

    def resolve(
        self,
        identifier: str,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        moniker: Optional[str] = None,
    ) -> RoleMeta:
        """Resolve ``identifier`` to an applicable role.

        With ``parameters`` the identifier must name a parameterized role,
        which is instantiated with them. Without, it must name a plain role.
        """
        target = self.load(identifier)
        if parameters is None:
            if not is_role(target):
                raise ResolutionError(
                    f"'{identifier}' does not name a role",
                    identifier=identifier,
                )
            return target

        if not is_parameterized_role(target):
            raise ResolutionError(
                f"'{identifier}' does not name a parameterized role",
                identifier=identifier,
            )
        try:
            role = target.generate_role(parameters, moniker=moniker)
        except CompositorError:
            raise
        except Exception as exc:
            raise ResolutionError(
                f"Cannot generate role '{identifier}' ({moniker}): {exc}",
                identifier=identifier,
                context={"moniker": moniker},
            ) from exc
        logger.debug("Generated role %s from %s", role.__qualname__, identifier)
        return role


__all__ = ["RoleResolver"]
