"""
Page-aware text chunking task.

Packs page blocks ("[p.N]" marker followed by the page text) into chunks of
roughly target_chars characters. Each new chunk is seeded with the trailing
overlap_chars characters of the previous one, so text that straddles a flush
point appears in both chunks and the page markers inside a chunk always
identify the pages its text came from.

Dependencies: pdfchat.core.document_processing.models
System role: Chunking stage of the ingestion pipeline
"""

from collections.abc import Sequence

from ..models import Chunk, ParsedPage


class ChunkingTask:
    """Split parsed pages into overlapping, page-tagged chunks."""

    def __init__(self, target_chars: int = 2000, overlap_chars: int = 300) -> None:
        """
        Initialize chunking task.

        Args:
            target_chars: Buffer length that triggers a flush
            overlap_chars: Trailing characters carried into the next chunk

        Raises:
            ValueError: When sizes are not positive or overlap >= target
        """
        if target_chars <= 0:
            raise ValueError("target_chars must be positive")
        if overlap_chars < 0 or overlap_chars >= target_chars:
            raise ValueError("overlap_chars must be in [0, target_chars)")
        self._target_chars = target_chars
        self._overlap_chars = overlap_chars

    def chunk(self, doc_id: str, pages: Sequence[ParsedPage]) -> list[Chunk]:
        """
        Chunk pages in order.

        Args:
            doc_id: Document ID stamped on every chunk
            pages: Pages in ascending page order

        Returns:
            list[Chunk]: Chunks with contiguous zero-based indices
        """
        chunks: list[Chunk] = []
        buffer = ""
        range_start = pages[0].page_number if pages else 1
        range_end = range_start

        def flush() -> None:
            text = buffer.strip()
            if not text:
                return
            chunks.append(
                Chunk(
                    doc_id=doc_id,
                    page_start=range_start,
                    page_end=range_end,
                    chunk_index=len(chunks),
                    text=text,
                )
            )

        for page in pages:
            block = f"[p.{page.page_number}]\n{page.text}\n\n"
            if len(buffer) + len(block) > self._target_chars:
                flush()
                tail_start = max(0, len(buffer) - self._overlap_chars)
                buffer = buffer[tail_start:] + block
                range_start = max(range_start, range_end)
                range_end = page.page_number
            else:
                buffer += block
                range_end = page.page_number

        flush()
        return chunks
