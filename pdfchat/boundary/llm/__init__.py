from pdfchat.boundary.llm.embedding_client import EmbeddingClient

__all__ = ["EmbeddingClient"]
