"""Generate one GraphQL operation document per root field of a schema."""

__version__ = "0.1.0"
