"""Selection set builder for generated operations.

Walks the type graph below a field's return type and renders the selection
block, bounded by ``maxDepth`` and ``maxFields`` and guarded against
circular type references.
"""

from .config import GeneratorConfig
from .cycles import CycleDecision, CycleTracker, TraversalPath
from .ir import IRField, IRSchema, IRType, TypeRef, unwrap_type
from .logger import get_logger
from .scalars import ScalarClassifier

logger = get_logger(__name__)

INDENT = "  "

MAX_DEPTH_MARK = " # Max depth ({limit}) reached"
CIRCULAR_MARK = " # Circular reference to {type_name} skipped"
REENTRY_LIMIT_MARK = " # Circular ref depth limit"
TRUNCATION_NOTE = "# ... {omitted} more fields (limited by maxFields: {limit})"


class SelectionBuilder:
    """Builds selection sets from schema types.

    Example:
        builder = SelectionBuilder(schema, GeneratorConfig(max_depth=3))
        selection = builder.synthesize(field.type)
        # " {\\n    id\\n    name\\n  }"
    """

    def __init__(
        self,
        schema: IRSchema,
        config: GeneratorConfig,
        classifier: ScalarClassifier | None = None,
        tracker: CycleTracker | None = None,
    ):
        self.schema = schema
        self.config = config
        self.classifier = classifier or ScalarClassifier(config.custom_scalars)
        self.tracker = tracker or CycleTracker(config)
        self.max_depth = config.effective_max_depth
        self.max_fields = config.max_fields
        self._excluded_types = set(config.exclude_types)

    def synthesize(self, type_ref: TypeRef | None, path: TraversalPath | None = None) -> str:
        """Build the selection for a type reference.

        Args:
            type_ref: The (possibly wrapped) type to select from
            path: Traversal state; a fresh path is used for root fields

        Returns:
            ``" {...}"`` for a selection block, ``" # ..."`` for an
            annotation, or an empty string when the field is rendered bare
        """
        return self._synthesize(type_ref, path or TraversalPath()) or ""

    def _synthesize(self, type_ref: TypeRef | None, path: TraversalPath) -> str | None:
        # None means the field is dropped from its parent's selection
        if path.depth >= self.max_depth:
            return MAX_DEPTH_MARK.format(limit=self.max_depth)

        named = unwrap_type(type_ref)
        if named is None or self.classifier.is_leaf(named.name):
            return ""

        decision = self.tracker.decide(named.name, path)
        if decision is CycleDecision.SKIP_WITH_MARK:
            return CIRCULAR_MARK.format(type_name=named.name)
        if decision is CycleDecision.OMIT_SILENTLY:
            return None

        type_def = self.schema.get_type_by_name(named.name)
        if type_def is None or not type_def.fields:
            return ""

        if decision is CycleDecision.BOUNDED_REENTER:
            budget = self.tracker.reentry_depth(named.name)
            return self._reentered_block(type_def, path, 0, budget)

        return self._expand(type_def, path.enter(named.name))

    def _expand(self, type_def: IRType, path: TraversalPath) -> str:
        """Render every selectable field of ``type_def`` one level down."""
        indent = INDENT * (path.depth + 2)
        fields, omitted = self._selectable_fields(type_def, path)
        lines = []

        for ir_field in fields:
            field_type = ir_field.type_name
            decision = self.tracker.field_decision(field_type, path)
            if decision is CycleDecision.SKIP_WITH_MARK:
                lines.append(f"{indent}{ir_field.name}{CIRCULAR_MARK.format(type_name=field_type)}")
                continue
            if decision is CycleDecision.OMIT_SILENTLY:
                continue

            nested = self._synthesize(ir_field.type, path.descend(ir_field.name))
            if nested is None:
                continue
            lines.append(f"{indent}{ir_field.name}{nested}")

        return self._block(lines, omitted, path.depth)

    def _reentered_block(
        self,
        type_def: IRType,
        path: TraversalPath,
        level: int,
        budget: int,
    ) -> str:
        """Restricted expansion of a type that is already on the path.

        Leaf fields are selected; other fields get a further restricted
        level while ``budget`` allows, otherwise a depth limit annotation.
        The cycle tracker is not consulted again below this point.
        """
        indent = INDENT * (path.depth + 2)
        fields, omitted = self._selectable_fields(type_def, path)
        lines = []

        for ir_field in fields:
            nested_def = self._expandable_type(ir_field)
            if nested_def is None:
                lines.append(f"{indent}{ir_field.name}")
                continue

            child = path.descend(ir_field.name)
            nested = ""
            if level + 1 < budget and child.depth < self.max_depth:
                nested = self._reentered_block(nested_def, child, level + 1, budget)
            lines.append(f"{indent}{ir_field.name}{nested or REENTRY_LIMIT_MARK}")

        return self._block(lines, omitted, path.depth)

    def _selectable_fields(
        self, type_def: IRType, path: TraversalPath
    ) -> tuple[list[IRField], int]:
        """Return the fields to render and how many were cut by maxFields."""
        candidates = [
            f for f in type_def.fields or []
            if not f.name.startswith("__") and f.type_name not in self._excluded_types
        ]
        retained = candidates[: self.max_fields]
        omitted = len(candidates) - len(retained)
        if omitted:
            logger.debug(
                f"{type_def.name} at {path.field_path or '<root>'}: "
                f"{omitted} fields beyond maxFields ({self.max_fields})"
            )
        return retained, omitted

    def _expandable_type(self, ir_field: IRField) -> IRType | None:
        """Return the field's type definition if it has sub-fields to select."""
        type_name = ir_field.type_name
        if self.classifier.is_leaf(type_name):
            return None
        type_def = self.schema.get_type_by_name(type_name)
        if type_def is None or not type_def.fields:
            return None
        return type_def

    def _block(self, lines: list[str], omitted: int, depth: int) -> str:
        if not lines:
            return ""
        if omitted:
            note = TRUNCATION_NOTE.format(omitted=omitted, limit=self.max_fields)
            lines.append(f"{INDENT * (depth + 2)}{note}")
        closing = INDENT * (depth + 1)
        return " {\n" + "\n".join(lines) + f"\n{closing}}}"
