"""Intermediate Representation (IR) for introspected GraphQL schemas.

This module defines dataclasses that represent the parts of an introspection
result the operation generator reads: named types, their fields and
arguments, and the wrapper chains around type references.
"""

from dataclasses import dataclass, field
from enum import Enum


class TypeKind(Enum):
    """Kinds of named GraphQL types."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"


class WrapperKind(Enum):
    """Modifiers layered around a named type."""
    LIST = "LIST"
    NON_NULL = "NON_NULL"


@dataclass(frozen=True)
class TypeRef:
    """A reference to a type, either a wrapper or a named type.

    Wrappers carry ``wrapper`` and ``of_type``; named references carry
    ``name`` and ``kind``. ``of_type`` may be None on a wrapper when the
    schema is malformed.
    """
    name: str | None = None
    kind: TypeKind | None = None
    wrapper: WrapperKind | None = None
    of_type: "TypeRef | None" = None

    @classmethod
    def named(cls, name: str, kind: TypeKind = TypeKind.OBJECT) -> "TypeRef":
        return cls(name=name, kind=kind)

    @classmethod
    def non_null(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(wrapper=WrapperKind.NON_NULL, of_type=of_type)

    @classmethod
    def list_of(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(wrapper=WrapperKind.LIST, of_type=of_type)

    @property
    def is_wrapper(self) -> bool:
        return self.wrapper is not None

    @property
    def wrapper_kinds(self) -> tuple[WrapperKind, ...]:
        """Wrapper layers from the outside in, e.g. (NON_NULL, LIST, NON_NULL)."""
        kinds = []
        ref: TypeRef | None = self
        while ref is not None and ref.is_wrapper:
            kinds.append(ref.wrapper)
            ref = ref.of_type
        return tuple(kinds)

    def __str__(self) -> str:
        """Render in GraphQL type notation: ``[ID!]!``."""
        if self.wrapper is WrapperKind.NON_NULL:
            return f"{self.of_type or ''}!"
        if self.wrapper is WrapperKind.LIST:
            return f"[{self.of_type or ''}]"
        return self.name or ""


def unwrap_type(type_ref: TypeRef | None) -> TypeRef | None:
    """Strip List/NonNull layers until a named type reference is reached.

    Returns None for None input and for wrappers with no inner type.
    """
    while type_ref is not None and type_ref.is_wrapper:
        type_ref = type_ref.of_type
    if type_ref is None or not type_ref.name:
        return None
    return type_ref


DEFAULT_DEPRECATION_REASON = "No longer supported"


@dataclass
class IRArgument:
    """Represents an argument to a field."""
    name: str
    type: TypeRef


@dataclass
class IRField:
    """Represents a field of an object or interface type."""
    name: str
    type: TypeRef
    arguments: list[IRArgument] = field(default_factory=list)
    description: str | None = None
    deprecation_reason: str | None = None

    @property
    def type_name(self) -> str | None:
        """Name of the unwrapped return type."""
        named = unwrap_type(self.type)
        return named.name if named else None

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation_reason is not None


@dataclass
class IRType:
    """Represents a named GraphQL type.

    ``fields`` is None for kinds without a field collection (scalars,
    enums, unions, input objects).
    """
    name: str
    kind: TypeKind
    fields: list[IRField] | None = None


OPERATION_TYPES = ("query", "mutation", "subscription")


@dataclass
class IRSchema:
    """Complete intermediate representation of an introspected schema."""
    types: dict[str, IRType] = field(default_factory=dict)
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None

    def get_type_by_name(self, name: str | None) -> IRType | None:
        """Look up a named type."""
        if name is None:
            return None
        return self.types.get(name)

    def root_type_name(self, operation_type: str) -> str | None:
        """Return the name of the root type for 'query', 'mutation' or 'subscription'."""
        if operation_type not in OPERATION_TYPES:
            raise ValueError(f"Unknown operation type: {operation_type}")
        return getattr(self, f"{operation_type}_type")

    def root_fields(self, operation_type: str) -> list[IRField]:
        """Return the root fields of an operation type in declaration order."""
        root = self.get_type_by_name(self.root_type_name(operation_type))
        if root is None or root.fields is None:
            return []
        return list(root.fields)

    @property
    def named_types(self) -> list[str]:
        """Return all non-introspection type names."""
        return [name for name in self.types if not name.startswith("__")]
