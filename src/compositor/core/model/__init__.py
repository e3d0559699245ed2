"""Object model for composed classes: base object, transforms, runtime."""

from .base import CompositeMeta, CompositeObject
from .runtime import COMPOSED_MODULE, ObjectModel
from .transforms import BUILTIN_TRANSFORMS, TransformRegistry, auto_repr, strict_constructor

__all__ = [
    "BUILTIN_TRANSFORMS",
    "COMPOSED_MODULE",
    "CompositeMeta",
    "CompositeObject",
    "ObjectModel",
    "TransformRegistry",
    "auto_repr",
    "strict_constructor",
]
