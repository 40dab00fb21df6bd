"""Core modules for GraphQL operation generation."""

from .config import (
    DEFAULT_CONFIG_FILE,
    CircularRefMode,
    GeneratorConfig,
    load_config,
    write_default_config,
)
from .cycles import CycleDecision, CycleTracker, TraversalPath
from .errors import ConfigError, OpgenError, SchemaFetchError, SchemaLoadError
from .fetcher import SchemaFetcher
from .generator import OperationGenerator
from .hooks import (
    CommentHeaderHook,
    FilterRootFieldsHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    IRArgument,
    IRField,
    IRSchema,
    IRType,
    TypeKind,
    TypeRef,
    WrapperKind,
    unwrap_type,
)
from .parser import IntrospectionParser, load_schema_file, schema_fingerprint
from .renderer import OperationDocument, OperationRenderer
from .scalars import ScalarClassifier
from .selection import SelectionBuilder

__all__ = [
    # Config
    "DEFAULT_CONFIG_FILE",
    "CircularRefMode",
    "GeneratorConfig",
    "load_config",
    "write_default_config",
    # Errors
    "OpgenError",
    "ConfigError",
    "SchemaFetchError",
    "SchemaLoadError",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "FilterRootFieldsHook",
    "CommentHeaderHook",
    "HookRunner",
    # IR types
    "IRArgument",
    "IRField",
    "IRSchema",
    "IRType",
    "TypeKind",
    "TypeRef",
    "WrapperKind",
    "unwrap_type",
    # Schema sources
    "IntrospectionParser",
    "SchemaFetcher",
    "load_schema_file",
    "schema_fingerprint",
    # Selection building
    "ScalarClassifier",
    "CycleDecision",
    "CycleTracker",
    "TraversalPath",
    "SelectionBuilder",
    # Rendering
    "OperationDocument",
    "OperationRenderer",
    "OperationGenerator",
]
