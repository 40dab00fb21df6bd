"""Operation generation pipeline.

Loads or fetches the schema, renders one document per root field and
writes them below the output directory::

    <output>/query/<field>.graphql
    <output>/mutation/<field>.graphql
    <output>/subscription/<field>.graphql
"""

import asyncio
from pathlib import Path
from typing import Any

from .config import GeneratorConfig
from .errors import ConfigError, OpgenError
from .fetcher import SchemaFetcher
from .hooks import CommentHeaderHook, FilterRootFieldsHook, HookRunner
from .ir import OPERATION_TYPES, IRSchema
from .logger import get_logger
from .parser import IntrospectionParser, load_schema_file, schema_fingerprint
from .renderer import OperationDocument, OperationRenderer

logger = get_logger(__name__)


class OperationGenerator:
    """Generates operation documents for every root field of a schema.

    Example:
        config = load_config("gqlopera.config.json")
        generator = OperationGenerator(config)
        paths = asyncio.run(generator.generate())
    """

    def __init__(
        self,
        config: GeneratorConfig,
        hooks: HookRunner | None = None,
        fetcher: SchemaFetcher | None = None,
    ):
        self.config = config
        self.output_dir = Path(config.output)
        self.hooks = hooks or self._default_hooks(config)
        self._fetcher = fetcher

    @staticmethod
    def _default_hooks(config: GeneratorConfig) -> HookRunner:
        runner = HookRunner()
        if config.include_fields or config.exclude_fields or config.exclude_types:
            runner.add_pre_hook(FilterRootFieldsHook(
                include_fields=config.include_fields,
                exclude_fields=config.exclude_fields,
                exclude_types=config.exclude_types,
            ))
        if config.header:
            runner.add_post_hook(CommentHeaderHook(config.header))
        return runner

    @property
    def fetcher(self) -> SchemaFetcher:
        if self._fetcher is None:
            if not self.config.endpoint:
                raise ConfigError("Either 'endpoint' or 'schema' must be provided")
            self._fetcher = SchemaFetcher(
                self.config.endpoint,
                self.config.headers,
                timeout=self.config.timeout,
            )
        return self._fetcher

    async def load_schema(self) -> dict[str, Any]:
        """Return the introspection payload from the local schema or the endpoint."""
        if self.config.schema_path:
            return load_schema_file(self.config.schema_path)
        return await self.fetcher.fetch()

    def parse(self, payload: dict[str, Any]) -> IRSchema:
        """Parse a payload and apply pre-generation hooks."""
        ir = IntrospectionParser(payload).parse()
        return self.hooks.run_pre_hooks(ir)

    def build_documents(self, payload: dict[str, Any]) -> list[OperationDocument]:
        """Render documents for queries, mutations and subscriptions, in schema order."""
        renderer = OperationRenderer(self.parse(payload), self.config)
        return renderer.render_all()

    def write_documents(self, documents: list[OperationDocument]) -> list[Path]:
        """Write documents below the output directory.

        Returns:
            Written file paths, in document order
        """
        for operation_type in OPERATION_TYPES:
            (self.output_dir / operation_type).mkdir(parents=True, exist_ok=True)

        written = []
        counts = dict.fromkeys(OPERATION_TYPES, 0)
        for document in documents:
            relative = document.relative_path.as_posix()
            content = self.hooks.run_post_hooks(relative, document.content)
            target = self.output_dir / document.relative_path
            target.write_text(content, encoding="utf-8")
            written.append(target)
            counts[document.operation_type] += 1

        for operation_type, count in counts.items():
            if count:
                logger.info(f"Generated {count} {operation_type} files")
        return written

    async def generate(self) -> list[Path]:
        """Load the schema, render every document and write it."""
        payload = await self.load_schema()
        return self.write_documents(self.build_documents(payload))

    async def validate(self) -> IRSchema:
        """Check that the schema can be loaded and parsed.

        Raises:
            OpgenError: If the endpoint or schema file is unusable
        """
        payload = await self.load_schema()
        ir = self.parse(payload)
        logger.debug(f"Schema has {len(ir.named_types)} types")
        return ir

    async def watch(self, iterations: int | None = None) -> int:
        """Poll the schema and regenerate when it changes.

        The first poll only records the fingerprint. Errors while loading or
        writing are logged and polling continues; a failed write keeps the
        previous fingerprint so the change is retried on the next poll.

        Args:
            iterations: Number of polls before returning; None polls forever

        Returns:
            How many times documents were regenerated
        """
        last_fingerprint = None
        regenerated = 0
        polls = 0

        while iterations is None or polls < iterations:
            if polls:
                await asyncio.sleep(self.config.watch_interval)
            polls += 1
            try:
                payload = await self.load_schema()
                fingerprint = schema_fingerprint(payload)
                if last_fingerprint is not None and fingerprint != last_fingerprint:
                    logger.info("Schema change detected, regenerating...")
                    self.write_documents(self.build_documents(payload))
                    regenerated += 1
                last_fingerprint = fingerprint
            except (OpgenError, OSError) as e:
                logger.error(f"Error during watch: {e}")

        return regenerated
