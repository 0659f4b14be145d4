"""Document ingestion pipeline."""

from .entrypoint import IngestionPipeline

__all__ = ["IngestionPipeline"]
