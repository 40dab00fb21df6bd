"""Tests for IR types and type unwrapping."""

import pytest

from gql_opgen.core.ir import (
    IRField,
    IRSchema,
    IRType,
    TypeKind,
    TypeRef,
    WrapperKind,
    unwrap_type,
)


class TestUnwrapType:
    """Tests for unwrap_type."""

    def test_named_type_is_returned_as_is(self):
        ref = TypeRef.named("User")
        assert unwrap_type(ref) is ref

    def test_strips_non_null_and_list(self):
        ref = TypeRef.non_null(TypeRef.list_of(TypeRef.non_null(TypeRef.named("User"))))
        assert unwrap_type(ref) == TypeRef.named("User")

    def test_is_idempotent(self):
        ref = TypeRef.list_of(TypeRef.named("Post"))
        once = unwrap_type(ref)
        assert unwrap_type(once) == once

    def test_none(self):
        assert unwrap_type(None) is None

    def test_wrapper_without_inner_type(self):
        """Malformed references unwrap to None."""
        assert unwrap_type(TypeRef(wrapper=WrapperKind.NON_NULL)) is None

    def test_nameless_reference(self):
        assert unwrap_type(TypeRef()) is None


class TestTypeRef:
    """Tests for TypeRef rendering."""

    @pytest.mark.parametrize(
        "ref, expected",
        [
            (TypeRef.named("ID", TypeKind.SCALAR), "ID"),
            (TypeRef.non_null(TypeRef.named("ID", TypeKind.SCALAR)), "ID!"),
            (TypeRef.list_of(TypeRef.named("Int", TypeKind.SCALAR)), "[Int]"),
            (
                TypeRef.non_null(TypeRef.list_of(TypeRef.non_null(TypeRef.named("String")))),
                "[String!]!",
            ),
            (TypeRef.list_of(TypeRef.list_of(TypeRef.named("Float"))), "[[Float]]"),
        ],
    )
    def test_str(self, ref, expected):
        assert str(ref) == expected

    def test_wrapper_kinds(self):
        ref = TypeRef.non_null(TypeRef.list_of(TypeRef.non_null(TypeRef.named("User"))))
        assert ref.wrapper_kinds == (
            WrapperKind.NON_NULL,
            WrapperKind.LIST,
            WrapperKind.NON_NULL,
        )

    def test_named_has_no_wrappers(self):
        assert TypeRef.named("User").wrapper_kinds == ()
        assert not TypeRef.named("User").is_wrapper


class TestIRField:
    """Tests for IRField helpers."""

    def test_type_name_unwraps(self):
        f = IRField(name="posts", type=TypeRef.non_null(TypeRef.list_of(TypeRef.named("Post"))))
        assert f.type_name == "Post"

    def test_type_name_of_malformed_type(self):
        f = IRField(name="broken", type=TypeRef(wrapper=WrapperKind.LIST))
        assert f.type_name is None

    def test_deprecation(self):
        assert IRField(name="old", type=TypeRef.named("String"), deprecation_reason="gone").is_deprecated
        assert not IRField(name="new", type=TypeRef.named("String")).is_deprecated


class TestIRSchema:
    """Tests for IRSchema lookups."""

    @pytest.fixture
    def schema(self):
        query = IRType(
            name="Query",
            kind=TypeKind.OBJECT,
            fields=[
                IRField(name="b", type=TypeRef.named("String", TypeKind.SCALAR)),
                IRField(name="a", type=TypeRef.named("String", TypeKind.SCALAR)),
            ],
        )
        return IRSchema(types={"Query": query}, query_type="Query")

    def test_root_fields_keep_declaration_order(self, schema):
        assert [f.name for f in schema.root_fields("query")] == ["b", "a"]

    def test_missing_root_type(self, schema):
        assert schema.root_fields("mutation") == []
        assert schema.root_fields("subscription") == []

    def test_unknown_operation_type(self, schema):
        with pytest.raises(ValueError):
            schema.root_fields("fragment")

    def test_get_type_by_name(self, schema):
        assert schema.get_type_by_name("Query").name == "Query"
        assert schema.get_type_by_name("Nope") is None
        assert schema.get_type_by_name(None) is None

    def test_named_types_skip_introspection_types(self):
        schema = IRSchema(types={
            "Query": IRType(name="Query", kind=TypeKind.OBJECT, fields=[]),
            "__Type": IRType(name="__Type", kind=TypeKind.OBJECT, fields=[]),
        })
        assert schema.named_types == ["Query"]
