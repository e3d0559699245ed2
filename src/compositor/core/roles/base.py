"""Roles: reusable bundles of attributes and methods that get mixed into classes.

A role is declared as a class body but is never instantiated. The compositor
flattens the members of every requested role into one freshly created class,
so two roles that provide the same member are a conflict rather than an MRO
question.

Example:
    class PieEater(Role):
        pie_type = Attribute(required=True)
        requires = ("mouth",)

        def eat(self) -> str:
            return f"ate a {self.pie_type} pie"

Parameterized roles are templates that produce a role from parameters:

    class Counter(ParameterizedRole):
        parameters = {"name": Parameter(required=True), "start": Parameter(default=0)}

        @classmethod
        def role_body(cls, params):
            name = params["name"]

            def bump(self):
                setattr(self, name, getattr(self, name) + 1)

            return {name: Attribute(default=params["start"], readonly=False), f"bump_{name}": bump}
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Mapping, Optional, Tuple

from ..exceptions import CompositionConflictError, InvalidRequestError


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class Attribute:
    """Declared instance attribute contributed by a role.

    Values live in the instance ``__dict__``; the constructor of the composite
    class fills them from keyword arguments or defaults. Read-only attributes
    reject assignment after construction.
    """

    def __init__(
        self,
        *,
        required: bool = False,
        default: Any = MISSING,
        default_factory: Optional[Callable[[], Any]] = None,
        readonly: bool = True,
        doc: Optional[str] = None,
    ) -> None:
        if default is not MISSING and default_factory is not None:
            raise ValueError("Attribute cannot have both default and default_factory")
        self.required = required
        self.default = default
        self.default_factory = default_factory
        self.readonly = readonly
        self.doc = doc
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def get_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__[self.name]
        except KeyError:
            raise AttributeError(
                f"'{type(instance).__name__}' object has no value for attribute '{self.name}'"
            ) from None

    def __set__(self, instance: Any, value: Any) -> None:
        if self.readonly:
            raise AttributeError(f"Attribute '{self.name}' is read-only")
        instance.__dict__[self.name] = value

    def __delete__(self, instance: Any) -> None:
        if self.readonly:
            raise AttributeError(f"Attribute '{self.name}' is read-only")
        instance.__dict__.pop(self.name, None)

    def __repr__(self) -> str:
        flags = []
        if self.required:
            flags.append("required")
        if self.has_default:
            flags.append("default")
        flags.append("ro" if self.readonly else "rw")
        return f"Attribute({self.name!r}, {', '.join(flags)})"


# Names Python itself puts into a class namespace; never treated as role members.
_CLASS_BOOKKEEPING = frozenset(
    {
        "__module__",
        "__qualname__",
        "__doc__",
        "__dict__",
        "__weakref__",
        "__annotations__",
        "__orig_bases__",
        "__parameters__",
        "__classcell__",
        "__firstlineno__",
        "__static_attributes__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
        "requires",
    }
)

_FORBIDDEN_MEMBERS = frozenset({"__init__", "__new__", "__init_subclass__"})


def _merge_member(
    members: Dict[str, Any],
    owners: Dict[str, str],
    name: str,
    value: Any,
    owner: str,
) -> None:
    existing = members.get(name, MISSING)
    if existing is not MISSING and existing is not value:
        raise CompositionConflictError(
            f"Role conflict: '{name}' is provided by both {owners[name]} and {owner}",
            roles=[owners[name], owner],
            member=name,
        )
    members[name] = value
    owners.setdefault(name, owner)


class RoleMeta(type):
    """Metaclass collecting a role's members, attributes and requirements."""

    __role_members__: Mapping[str, Any]
    __role_attributes__: Mapping[str, Attribute]
    __role_requires__: FrozenSet[str]

    def __new__(mcls, name: str, bases: Tuple[type, ...], namespace: Dict[str, Any], **kwargs: Any):
        cls = super().__new__(mcls, name, bases, namespace, **kwargs)

        forbidden = sorted(_FORBIDDEN_MEMBERS.intersection(namespace))
        if forbidden:
            raise TypeError(
                f"Role {name} cannot define {', '.join(forbidden)}; use BUILD() for initialisation"
            )

        members: Dict[str, Any] = {}
        owners: Dict[str, str] = {}
        attributes: Dict[str, Attribute] = {}
        requires = set()

        # Consumed roles first; the role's own body then overrides them.
        for base in bases:
            if not isinstance(base, RoleMeta):
                continue
            for member, value in base.__role_members__.items():
                _merge_member(members, owners, member, value, base.__qualname__)
            for member, attr in base.__role_attributes__.items():
                _merge_member(members, owners, member, attr, base.__qualname__)
                attributes[member] = attr
            requires.update(base.__role_requires__)

        for member, value in namespace.items():
            if member in _CLASS_BOOKKEEPING:
                continue
            members[member] = value
            owners[member] = name
            if isinstance(value, Attribute):
                attributes[member] = value

        own_requires = namespace.get("requires", ())
        if isinstance(own_requires, str):
            own_requires = (own_requires,)
        requires.update(own_requires)

        cls.__role_members__ = MappingProxyType(
            {k: v for k, v in members.items() if not isinstance(v, Attribute)}
        )
        cls.__role_attributes__ = MappingProxyType(attributes)
        cls.__role_requires__ = frozenset(requires)
        return cls

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        raise TypeError(f"Role {cls.__qualname__} cannot be instantiated; compose it into a class")


class Role(metaclass=RoleMeta):
    """Base class for plain roles."""

    requires: ClassVar[Tuple[str, ...]] = ()


@dataclass(frozen=True)
class Parameter:
    """Declared parameter of a parameterized role."""

    required: bool = False
    default: Any = None
    doc: Optional[str] = None


class ParameterizedRole:
    """Template that generates a concrete role from parameters.

    Subclasses declare ``parameters`` and implement ``role_body``, which
    returns the namespace (attributes, methods, ``requires``) of the role to
    generate.
    """

    parameters: ClassVar[Dict[str, Parameter]] = {}

    def __init__(self) -> None:
        raise TypeError(
            f"{type(self).__name__} is a role template; call generate_role() instead"
        )

    @classmethod
    def validate_parameters(cls, parameters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Apply defaults and reject unknown or missing parameters."""
        given = dict(parameters or {})
        unknown = sorted(set(given) - set(cls.parameters), key=str)
        if unknown:
            raise InvalidRequestError(
                f"Unknown parameter(s) for {cls.__qualname__}: {', '.join(map(str, unknown))}",
                context={"role": cls.__qualname__, "unknown": unknown},
            )
        values: Dict[str, Any] = {}
        missing = []
        for name, spec in cls.parameters.items():
            if name in given:
                values[name] = given[name]
            elif spec.required:
                missing.append(name)
            else:
                values[name] = spec.default
        if missing:
            raise InvalidRequestError(
                f"Missing required parameter(s) for {cls.__qualname__}: {', '.join(missing)}",
                context={"role": cls.__qualname__, "missing": missing},
            )
        return values

    @classmethod
    def role_body(cls, params: Mapping[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError(f"{cls.__qualname__} must implement role_body()")

    @classmethod
    def generate_role(
        cls,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        moniker: Optional[str] = None,
    ) -> RoleMeta:
        values = cls.validate_parameters(parameters)
        namespace = dict(cls.role_body(values))
        namespace.setdefault("__module__", cls.__module__)
        name = f"{cls.__name__}[{moniker}]" if moniker else cls.__name__
        namespace["__qualname__"] = name
        role = RoleMeta(name, (Role,), namespace)
        role.__role_template__ = cls  # type: ignore[attr-defined]
        role.__role_parameters__ = MappingProxyType(values)  # type: ignore[attr-defined]
        return role


def is_role(obj: Any) -> bool:
    return isinstance(obj, RoleMeta) and obj is not Role


def is_parameterized_role(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, ParameterizedRole) and obj is not ParameterizedRole


__all__ = [
    "MISSING",
    "Attribute",
    "Role",
    "RoleMeta",
    "Parameter",
    "ParameterizedRole",
    "is_role",
    "is_parameterized_role",
]
