"""Introspection result parser.

Converts a standard introspection result into an IRSchema. Local schemas
are supported too: introspection JSON files are read as-is, SDL files
(.graphql, .graphqls, .gql) are built with graphql-core and introspected
in memory.
"""

import hashlib
import json
import os
from typing import Any

from graphql import GraphQLError, build_schema, introspection_from_schema

from .errors import SchemaLoadError
from .ir import (
    DEFAULT_DEPRECATION_REASON,
    IRArgument,
    IRField,
    IRSchema,
    IRType,
    TypeKind,
    TypeRef,
    WrapperKind,
)
from .logger import get_logger

logger = get_logger(__name__)

SDL_EXTENSIONS = (".graphql", ".graphqls", ".gql")

FIELD_KINDS = (TypeKind.OBJECT, TypeKind.INTERFACE)


def extract_schema_payload(document: dict[str, Any]) -> dict[str, Any]:
    """Return the ``__schema`` object from an introspection response.

    Accepts ``{"data": {"__schema": ...}}``, ``{"__schema": ...}`` or the
    ``__schema`` object itself.
    """
    if isinstance(document.get("data"), dict):
        document = document["data"]
    if isinstance(document.get("__schema"), dict):
        return document["__schema"]
    if "types" in document:
        return document
    raise SchemaLoadError("Introspection result has no __schema object")


class IntrospectionParser:
    """Parses an introspection result into IR.

    Missing keys degrade quietly: a type without a field collection gets
    ``fields=None`` and an unreadable type reference becomes an empty
    ``TypeRef``.
    """

    def __init__(self, introspection: dict[str, Any]):
        self.payload = extract_schema_payload(introspection)
        self.ir = IRSchema()

    def parse(self) -> IRSchema:
        """Parse the payload and return the IR."""
        for raw_type in self.payload.get("types") or []:
            ir_type = self._parse_type(raw_type)
            if ir_type is not None:
                self.ir.types[ir_type.name] = ir_type

        self.ir.query_type = self._root_name("queryType")
        self.ir.mutation_type = self._root_name("mutationType")
        self.ir.subscription_type = self._root_name("subscriptionType")

        logger.debug(
            f"Parsed {len(self.ir.named_types)} types "
            f"(query={self.ir.query_type}, mutation={self.ir.mutation_type}, "
            f"subscription={self.ir.subscription_type})"
        )
        return self.ir

    def _root_name(self, key: str) -> str | None:
        root = self.payload.get(key)
        if isinstance(root, dict):
            return root.get("name")
        return None

    def _parse_type(self, raw: dict[str, Any]) -> IRType | None:
        name = raw.get("name")
        kind = self._parse_kind(raw.get("kind"))
        if not name or kind is None:
            logger.debug(f"Skipping unreadable type entry: {raw.get('name')!r}")
            return None

        fields = None
        if kind in FIELD_KINDS and raw.get("fields") is not None:
            fields = [self._parse_field(f) for f in raw["fields"]]

        return IRType(name=name, kind=kind, fields=fields)

    def _parse_field(self, raw: dict[str, Any]) -> IRField:
        arguments = [
            IRArgument(
                name=arg["name"],
                type=self._parse_type_ref(arg.get("type")) or TypeRef(),
            )
            for arg in raw.get("args") or []
        ]
        deprecation_reason = raw.get("deprecationReason")
        if raw.get("isDeprecated") and not (deprecation_reason or "").strip():
            deprecation_reason = DEFAULT_DEPRECATION_REASON
        return IRField(
            name=raw["name"],
            type=self._parse_type_ref(raw.get("type")) or TypeRef(),
            arguments=arguments,
            description=raw.get("description"),
            deprecation_reason=deprecation_reason,
        )

    def _parse_type_ref(self, raw: dict[str, Any] | None) -> TypeRef | None:
        """Parse a (possibly wrapped) type reference."""
        if not raw:
            return None
        kind = raw.get("kind")
        if kind in (WrapperKind.LIST.value, WrapperKind.NON_NULL.value):
            return TypeRef(wrapper=WrapperKind(kind), of_type=self._parse_type_ref(raw.get("ofType")))
        return TypeRef(name=raw.get("name"), kind=self._parse_kind(kind))

    @staticmethod
    def _parse_kind(kind: str | None) -> TypeKind | None:
        try:
            return TypeKind(kind)
        except ValueError:
            return None


def parse_introspection(introspection: dict[str, Any]) -> IRSchema:
    """Shortcut for ``IntrospectionParser(introspection).parse()``."""
    return IntrospectionParser(introspection).parse()


def load_schema_file(schema_path: str) -> dict[str, Any]:
    """Load a local schema as an introspection ``__schema`` payload.

    Args:
        schema_path: An introspection JSON file, an SDL file, or a
            directory of SDL files

    Raises:
        SchemaLoadError: If the path cannot be read or parsed
    """
    if os.path.isfile(schema_path) and schema_path.endswith(".json"):
        try:
            with open(schema_path, encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SchemaLoadError(f"Failed to read introspection file {schema_path}: {e}") from e
        if not isinstance(document, dict):
            raise SchemaLoadError(f"Introspection file {schema_path} must contain a JSON object")
        return extract_schema_payload(document)

    sdl_files = _collect_sdl_files(schema_path)
    if not sdl_files:
        raise SchemaLoadError(f"No schema files found at {schema_path}")

    sources = []
    for file_path in sdl_files:
        try:
            with open(file_path, encoding="utf-8") as f:
                sources.append(f.read())
        except OSError as e:
            raise SchemaLoadError(f"Failed to read {file_path}: {e}") from e

    try:
        schema = build_schema("\n".join(sources))
        document = introspection_from_schema(schema)
    except (GraphQLError, TypeError) as e:
        logger.error(f"Error parsing schema at {schema_path}")
        raise SchemaLoadError(f"Invalid schema at {schema_path}: {e}") from e

    logger.debug(f"Built schema from {len(sdl_files)} SDL file(s)")
    return extract_schema_payload(dict(document))


def _collect_sdl_files(schema_path: str) -> list[str]:
    """Collect SDL files from a file or directory path."""
    files = []
    if os.path.isfile(schema_path):
        if schema_path.endswith(SDL_EXTENSIONS):
            files.append(schema_path)
    else:
        for root, _, filenames in os.walk(schema_path):
            for filename in filenames:
                if filename.endswith(SDL_EXTENSIONS):
                    files.append(os.path.join(root, filename))
    return sorted(files)


def schema_fingerprint(payload: dict[str, Any]) -> str:
    """Stable hash of an introspection payload, for change detection."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
