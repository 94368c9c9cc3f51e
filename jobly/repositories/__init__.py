"""Repository layer: one module per table, raw SQL over a QueryExecutor."""

from .jobs import JobRepository

__all__ = ["JobRepository"]
