"""Document processing models."""

from .chunk import Chunk
from .page import ParsedDocument, ParsedPage
from .pipeline_result import PipelineResult

__all__ = ["Chunk", "ParsedDocument", "ParsedPage", "PipelineResult"]
