"""Document processing tasks."""

from .chunking_task import ChunkingTask
from .parsing_task import ParsingTask, normalize_page_text

__all__ = ["ChunkingTask", "ParsingTask", "normalize_page_text"]
