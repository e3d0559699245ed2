"""
Class Compositor - a factory that builds classes from roles

Combines reusable roles into concrete, frozen, human-nameable classes and
memoizes every combination so the same request always yields the same class.
"""

__version__ = "1.0.0"

from compositor.core.composition import Compositor
from compositor.core.exceptions import (
    CompositionConflictError,
    CompositorError,
    ConfigurationError,
    ConstructionError,
    FrozenClassError,
    InvalidRequestError,
    ResolutionError,
)
from compositor.core.model import CompositeObject, ObjectModel
from compositor.core.roles import Attribute, Parameter, ParameterizedRole, Role, RoleResolver

__all__ = [
    "__version__",
    "Attribute",
    "CompositeObject",
    "CompositionConflictError",
    "Compositor",
    "CompositorError",
    "ConfigurationError",
    "ConstructionError",
    "FrozenClassError",
    "InvalidRequestError",
    "ObjectModel",
    "Parameter",
    "ParameterizedRole",
    "ResolutionError",
    "Role",
    "RoleResolver",
]
