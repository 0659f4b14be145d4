from pdfchat.boundary.vdb.s3_vectors_store import S3VectorsStore
from pdfchat.boundary.vdb.vector_schemas import VectorMetadata, VectorRecord, VectorSearchResult

__all__ = ["S3VectorsStore", "VectorMetadata", "VectorRecord", "VectorSearchResult"]
