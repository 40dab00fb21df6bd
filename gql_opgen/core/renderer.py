"""Operation document rendering.

Turns one root field into a complete operation document::

    # Fetch a user by id
    query User($id: ID!) {
      user(id: $id) {
        id
        name
      }
    }
"""

import re
from dataclasses import dataclass
from pathlib import Path

from .config import GeneratorConfig
from .cycles import TraversalPath
from .ir import DEFAULT_DEPRECATION_REASON, OPERATION_TYPES, IRArgument, IRField, IRSchema
from .selection import SelectionBuilder


@dataclass(frozen=True)
class OperationDocument:
    """A rendered operation for one root field."""
    operation_type: str  # 'query', 'mutation' or 'subscription'
    field_name: str
    operation_name: str
    content: str

    @property
    def relative_path(self) -> Path:
        """Output location below the output directory, e.g. ``query/user.graphql``."""
        return Path(self.operation_type) / f"{self.field_name}.graphql"


def to_operation_name(field_name: str) -> str:
    """Upper-case the first character only: ``getUser`` -> ``GetUser``."""
    return field_name[:1].upper() + field_name[1:]


def comment_text(text: str) -> str:
    """Collapse a description onto one line for use in a ``#`` comment."""
    return re.sub(r"\s+", " ", text).strip()


class OperationRenderer:
    """Renders root fields into operation documents."""

    def __init__(
        self,
        schema: IRSchema,
        config: GeneratorConfig,
        builder: SelectionBuilder | None = None,
    ):
        self.schema = schema
        self.config = config
        self.builder = builder or SelectionBuilder(schema, config)

    def render(self, ir_field: IRField, operation_type: str) -> str:
        """Render the document text for a root field.

        Args:
            ir_field: A field of the query, mutation or subscription root type
            operation_type: 'query', 'mutation' or 'subscription'

        Returns:
            Complete operation document ending with a newline
        """
        if operation_type not in OPERATION_TYPES:
            raise ValueError(f"Unknown operation type: {operation_type}")

        lines = []
        if ir_field.description and comment_text(ir_field.description):
            lines.append(f"# {comment_text(ir_field.description)}")

        var_decls = self._build_variable_declarations(ir_field.arguments)
        op_name = to_operation_name(ir_field.name)
        lines.append(f"{operation_type} {op_name}{var_decls} {{")

        # Fresh traversal state per root field
        selection = self.builder.synthesize(ir_field.type, TraversalPath())
        field_args = self._build_field_arguments(ir_field.arguments)
        lines.append(f"  {ir_field.name}{field_args}{selection}")
        lines.append("}")

        if ir_field.is_deprecated:
            reason = comment_text(ir_field.deprecation_reason) or DEFAULT_DEPRECATION_REASON
            lines.append(f"# @deprecated: {reason}")

        return "\n".join(lines) + "\n"

    def build_document(self, ir_field: IRField, operation_type: str) -> OperationDocument:
        """Render a root field and wrap it with its output metadata."""
        return OperationDocument(
            operation_type=operation_type,
            field_name=ir_field.name,
            operation_name=to_operation_name(ir_field.name),
            content=self.render(ir_field, operation_type),
        )

    def render_operation_type(self, operation_type: str) -> list[OperationDocument]:
        """Render every root field of one operation type, in schema order."""
        return [
            self.build_document(ir_field, operation_type)
            for ir_field in self.schema.root_fields(operation_type)
        ]

    def render_all(self) -> list[OperationDocument]:
        """Render queries, then mutations, then subscriptions."""
        documents = []
        for operation_type in OPERATION_TYPES:
            documents.extend(self.render_operation_type(operation_type))
        return documents

    @staticmethod
    def _build_variable_declarations(arguments: list[IRArgument]) -> str:
        """Build the variable declaration part: ($id: ID!, $limit: Int)"""
        if not arguments:
            return ""
        return "(" + ", ".join(f"${arg.name}: {arg.type}" for arg in arguments) + ")"

    @staticmethod
    def _build_field_arguments(arguments: list[IRArgument]) -> str:
        """Build the argument bindings for the root field: (id: $id, limit: $limit)"""
        if not arguments:
            return ""
        return "(" + ", ".join(f"{arg.name}: ${arg.name}" for arg in arguments) + ")"
