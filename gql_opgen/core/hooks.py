"""Generation hooks for customizing operation output.

Pre-generation hooks may rewrite the IR before documents are rendered (for
example to drop root fields); post-generation hooks may transform each
document before it is written.

Example usage:
    from gql_opgen.core.hooks import FilterRootFieldsHook, HookRunner

    runner = HookRunner()
    runner.add_pre_hook(FilterRootFieldsHook(exclude_fields=["_health"]))
"""

from collections.abc import Iterable
from dataclasses import replace
from typing import Protocol, runtime_checkable

from .ir import OPERATION_TYPES, IRSchema
from .logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    Example:
        class DropDeprecatedRoots:
            def pre_generate(self, ir: IRSchema) -> IRSchema:
                ...
                return ir
    """

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        """Called before rendering; returns the IR to render from."""
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    ``path`` is the document path relative to the output directory, e.g.
    ``query/user.graphql``.
    """

    def post_generate(self, path: str, content: str) -> str:
        """Called for each document; returns the content to write."""
        ...


class FilterRootFieldsHook:
    """Built-in hook to choose which root fields get a document.

    Example:
        # Only generate two queries, never anything returning AuditLog
        hook = FilterRootFieldsHook(include_fields=["user", "users"],
                                    exclude_types=["AuditLog"])
    """

    def __init__(
        self,
        include_fields: Iterable[str] = (),
        exclude_fields: Iterable[str] = (),
        exclude_types: Iterable[str] = (),
    ):
        self.include_fields = set(include_fields)
        self.exclude_fields = set(exclude_fields)
        self.exclude_types = set(exclude_types)

    def _should_include(self, name: str, type_name: str | None) -> bool:
        if self.include_fields and name not in self.include_fields:
            return False
        if name in self.exclude_fields:
            return False
        if type_name in self.exclude_types:
            return False
        return True

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        """Return a copy of the IR with filtered root types."""
        types = dict(ir.types)
        for operation_type in OPERATION_TYPES:
            root_name = ir.root_type_name(operation_type)
            root = ir.get_type_by_name(root_name)
            if root is None or root.fields is None:
                continue
            kept = [f for f in root.fields if self._should_include(f.name, f.type_name)]
            if len(kept) != len(root.fields):
                logger.debug(f"Filtered {len(root.fields) - len(kept)} {operation_type} root fields")
            types[root_name] = replace(root, fields=kept)
        return replace(ir, types=types)


class CommentHeaderHook:
    """Built-in hook to put a ``#`` comment header on every document.

    Example:
        hook = CommentHeaderHook("Generated by gql-opgen. Do not edit.")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _path: str, content: str) -> str:
        """Prefix each header line with ``# `` and separate it with a blank line."""
        lines = [
            line if line.startswith("#") else f"# {line}".rstrip()
            for line in self.header.strip("\n").splitlines()
        ]
        return "\n".join(lines) + "\n\n" + content


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        """Add a pre-generation hook."""
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        """Add a post-generation hook."""
        self.post_hooks.append(hook)

    def run_pre_hooks(self, ir: IRSchema) -> IRSchema:
        """Run all pre-generation hooks in order."""
        for hook in self.pre_hooks:
            ir = hook.pre_generate(ir)
        return ir

    def run_post_hooks(self, path: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(path, content)
        return content
