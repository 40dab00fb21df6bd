"""Leaf scalar classification for selection building.

A leaf type needs no selection set: the field is rendered bare. The
classifier only knows names; types outside the set are expanded when they
expose fields and rendered bare otherwise.

Example usage:
    from gql_opgen.core.scalars import ScalarClassifier

    classifier = ScalarClassifier()
    classifier.is_leaf("DateTime")  # True

    # Register scalars specific to a schema
    classifier = ScalarClassifier(["Money", "Cursor"])
    classifier.register("IPAddress")
"""

from collections.abc import Iterable

# Scalars defined by the GraphQL specification
BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})

# Custom scalars common enough to treat as leaves without schema help
COMMON_CUSTOM_SCALARS = frozenset({
    "DateTime", "Date", "Time", "Timestamp",
    "JSON", "JSONObject", "JSONString",
    "Long", "BigInt", "Decimal",
    "UUID", "URL", "Url", "Email", "Upload",
})

DEFAULT_LEAF_SCALARS = BUILTIN_SCALARS | COMMON_CUSTOM_SCALARS


class ScalarClassifier:
    """Decides whether a named type is a leaf.

    Example:
        classifier = ScalarClassifier()
        classifier.is_leaf("String")   # True
        classifier.is_leaf("User")     # False
    """

    def __init__(self, extra_scalars: Iterable[str] = ()):
        self._leaf_names: set[str] = set(DEFAULT_LEAF_SCALARS)
        for name in extra_scalars:
            self.register(name)

    def register(self, scalar_name: str):
        """Treat another scalar name as a leaf."""
        self._leaf_names.add(scalar_name)

    def is_leaf(self, type_name: str | None) -> bool:
        """Check if a type name is a leaf scalar."""
        return type_name is not None and type_name in self._leaf_names

    @property
    def leaf_names(self) -> frozenset[str]:
        return frozenset(self._leaf_names)
