"""Circular reference tracking for selection building.

A ``TraversalPath`` records which types are being expanded on the current
descent. It is immutable: descending returns a new path, so sibling
branches never see each other's visited types. A type seen on one branch is
not "visited" on an unrelated sibling branch.
"""

from dataclasses import dataclass, field
from enum import Enum

from .config import CircularRefMode, GeneratorConfig
from .logger import get_logger

logger = get_logger(__name__)


class CycleDecision(Enum):
    """What to do with a field whose type is considered for expansion."""
    PROCEED = "proceed"
    SKIP_WITH_MARK = "skip_with_mark"
    OMIT_SILENTLY = "omit_silently"
    BOUNDED_REENTER = "bounded_reenter"


@dataclass(frozen=True)
class TraversalPath:
    """Types on the current descent, plus depth and a dotted field path.

    ``field_path`` is only used in log messages.
    """
    visited: frozenset[str] = field(default_factory=frozenset)
    depth: int = 0
    field_path: str = ""

    def __contains__(self, type_name: str | None) -> bool:
        return type_name in self.visited

    def enter(self, type_name: str) -> "TraversalPath":
        """Return a copy with ``type_name`` on the path, at the same depth."""
        return TraversalPath(self.visited | {type_name}, self.depth, self.field_path)

    def descend(self, field_name: str) -> "TraversalPath":
        """Return a copy one level deeper, below ``field_name``."""
        path = f"{self.field_path}.{field_name}" if self.field_path else field_name
        return TraversalPath(self.visited, self.depth + 1, path)


class CycleTracker:
    """Applies the configured circular reference mode.

    Example:
        tracker = CycleTracker(config)
        decision = tracker.decide("Node", path)
        if decision is CycleDecision.BOUNDED_REENTER:
            ...
    """

    def __init__(self, config: GeneratorConfig):
        self.mode = config.circular_refs
        self._config = config

    def reentry_depth(self, type_name: str) -> int:
        """How many restricted levels a re-entered type may expand."""
        return self._config.reentry_depth(type_name)

    def decide(self, type_name: str, path: TraversalPath) -> CycleDecision:
        """Decide how to handle ``type_name`` at ``path``.

        In allow mode the re-entry budget counts restricted expansion levels
        below the point where the cycle is found, not the absolute depth of
        ``path``; ``path.depth`` is bounded separately by ``maxDepth``. A
        budget of 0 is handled like skip mode.
        """
        if type_name not in path:
            return CycleDecision.PROCEED

        if self.mode is CircularRefMode.SILENT:
            decision = CycleDecision.OMIT_SILENTLY
        elif self.mode is CircularRefMode.ALLOW and self.reentry_depth(type_name) > 0:
            decision = CycleDecision.BOUNDED_REENTER
        else:
            # skip mode, or allow mode with no re-entry budget left
            decision = CycleDecision.SKIP_WITH_MARK

        logger.debug(
            f"Circular reference to {type_name} at {path.field_path or '<root>'}: "
            f"{decision.value}"
        )
        return decision

    def field_decision(self, type_name: str | None, path: TraversalPath) -> CycleDecision:
        """Decision for a single field before recursing into its type.

        Only skip and silent modes act here; allow mode defers to the
        recursive call so the depth limit is checked first.
        """
        if type_name is None or type_name not in path or self.mode is CircularRefMode.ALLOW:
            return CycleDecision.PROCEED
        return self.decide(type_name, path)
