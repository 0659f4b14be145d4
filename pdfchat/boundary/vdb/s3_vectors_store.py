"""
S3 Vectors store for chunk storage and retrieval.

Talks to Amazon S3 Vectors through the boto3 "s3vectors" client. The index
uses cosine distance, so similarity is reported as 1 - distance. Every
query is filtered by doc_id, and the index doubles as the text store: the
chunk text rides along as non-filterable metadata.

Metadata Keys (matching the S3 Vectors index definition):
- Filterable: doc_id, page_start, page_end, chunk_index
- Non-filterable: text

Dependencies: boto3, botocore, tenacity
System role: Vector store adapter (upsert, top-K query, delete by document)
"""

import logging
from collections.abc import Iterator, Sequence
from typing import Any

import boto3
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from pdfchat.boundary.vdb.vector_schemas import (
    VectorMetadata,
    VectorRecord,
    VectorSearchResult,
)
from pdfchat.core.exceptions import VectorStoreError
from pdfchat.core.retry import classify_error, is_retryable_error

logger = logging.getLogger(__name__)

_provider_retry = retry(
    retry=retry_if_exception(is_retryable_error),
    stop=stop_after_attempt(5),
    wait=wait_exponential_jitter(initial=1, max=30, jitter=1),
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__} - Retry {retry_state.attempt_number}/5 after transient S3 Vectors error"
    ),
    reraise=True,
)


def _batched(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


class S3VectorsStore:
    """
    S3 Vectors store partitioned by document ID.

    Methods are blocking; async callers use run_in_threadpool.
    """

    def __init__(
        self,
        vectors_bucket: str = "pdfchat-vectors",
        index_name: str = "pdf-chunks",
        region: str = "us-east-1",
        similarity_threshold: float = 0.3,
        upsert_batch_size: int = 100,
        delete_batch_size: int = 500,
        list_page_size: int = 500,
        client=None,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            similarity_threshold: Results at or below this similarity are dropped
            upsert_batch_size: Vectors per put_vectors call
            delete_batch_size: Keys per delete_vectors call (provider max 500)
            list_page_size: Vectors per list_vectors page
            client: Optional pre-built boto3 s3vectors client
        """
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._region = region
        self._similarity_threshold = similarity_threshold
        self._upsert_batch_size = upsert_batch_size
        self._delete_batch_size = delete_batch_size
        self._list_page_size = list_page_size
        self._client = client or boto3.client("s3vectors", region_name=region)

    @property
    def similarity_threshold(self) -> float:
        return self._similarity_threshold

    def _index_args(self) -> dict[str, str]:
        return {"vectorBucketName": self._vectors_bucket, "indexName": self._index_name}

    @_provider_retry
    def _put_vectors(self, vectors: list[dict[str, Any]]) -> None:
        self._client.put_vectors(**self._index_args(), vectors=vectors)

    @_provider_retry
    def _query_vectors(self, vector: list[float], k: int, doc_id: str) -> dict[str, Any]:
        return self._client.query_vectors(
            **self._index_args(),
            queryVector={"float32": vector},
            topK=k,
            filter={"doc_id": {"$eq": doc_id}},
            returnMetadata=True,
            returnDistance=True,
        )

    @_provider_retry
    def _list_vectors_page(self, next_token: str | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            **self._index_args(),
            "maxResults": self._list_page_size,
            "returnMetadata": True,
            "returnData": False,
        }
        if next_token:
            kwargs["nextToken"] = next_token
        return self._client.list_vectors(**kwargs)

    @_provider_retry
    def _delete_vectors(self, keys: list[str]) -> None:
        self._client.delete_vectors(**self._index_args(), keys=keys)

    def upsert(self, records: Sequence[VectorRecord]) -> int:
        """
        Insert or overwrite vectors by key.

        Args:
            records: Vector records to write

        Returns:
            int: Number of records written

        Raises:
            VectorStoreError: When any batch fails
        """
        if not records:
            return 0

        written = 0
        try:
            for batch in _batched(records, self._upsert_batch_size):
                self._put_vectors([
                    {
                        "key": record.id,
                        "data": {"float32": [float(x) for x in record.vector]},
                        "metadata": record.metadata.model_dump(),
                    }
                    for record in batch
                ])
                written += len(batch)
        except Exception as e:
            logger.exception(
                "Failed to upsert vectors",
                extra={"written": written, "total": len(records), "error": str(e)},
            )
            raise VectorStoreError(
                f"Failed to upsert vectors: {e}",
                operation="upsert",
                details={"written": written, "total": len(records)},
                kind=classify_error(e),
            ) from e

        logger.info(
            "Upserted vectors",
            extra={"count": written, "bucket": self._vectors_bucket, "index": self._index_name},
        )
        return written

    def query_top_k(
        self,
        doc_id: str,
        vector: list[float],
        k: int = 8,
    ) -> list[VectorSearchResult]:
        """
        Return the k most similar chunks of one document.

        Results from other documents and results with similarity at or
        below the threshold are discarded.

        Args:
            doc_id: Document to search
            vector: Query embedding
            k: Maximum number of results

        Returns:
            list[VectorSearchResult]: Results ranked by similarity, descending

        Raises:
            VectorStoreError: When the query fails
        """
        try:
            response = self._query_vectors(vector, k, doc_id)
        except Exception as e:
            logger.error(f"{__name__}:query_top_k - {type(e).__name__}: {e}")
            raise VectorStoreError(
                f"Vector query failed: {e}",
                operation="query",
                details={"doc_id": doc_id},
                kind=classify_error(e),
            ) from e

        results: list[VectorSearchResult] = []
        for item in response.get("vectors", []):
            metadata = item.get("metadata") or {}
            if metadata.get("doc_id") != doc_id:
                continue
            score = 1.0 - float(item.get("distance", 1.0))
            if score <= self._similarity_threshold:
                continue
            results.append(
                VectorSearchResult(
                    id=item["key"],
                    metadata=VectorMetadata(
                        doc_id=metadata["doc_id"],
                        page_start=int(metadata.get("page_start", 1)),
                        page_end=int(metadata.get("page_end", metadata.get("page_start", 1))),
                        chunk_index=int(metadata.get("chunk_index", 0)),
                        text=str(metadata.get("text", "")),
                    ),
                    score=score,
                )
            )

        results.sort(key=lambda result: result.score, reverse=True)
        results = results[:k]
        logger.info(
            f"{__name__}:query_top_k - Found {len(results)} results",
            extra={"doc_id": doc_id, "k": k},
        )
        return results

    def _keys_for_document(self, doc_id: str) -> list[str]:
        keys: list[str] = []
        next_token: str | None = None
        while True:
            page = self._list_vectors_page(next_token)
            for item in page.get("vectors", []):
                if (item.get("metadata") or {}).get("doc_id") == doc_id:
                    keys.append(item["key"])
            next_token = page.get("nextToken")
            if not next_token:
                return keys

    def delete_by_doc_id(self, doc_id: str) -> int:
        """
        Delete every vector belonging to a document.

        S3 Vectors has no delete-by-filter, so the index is listed and the
        matching keys are deleted in batches.

        Args:
            doc_id: Document ID

        Returns:
            int: Number of vectors deleted

        Raises:
            VectorStoreError: When listing or any delete batch fails
        """
        deleted = 0
        try:
            keys = self._keys_for_document(doc_id)
            for batch in _batched(keys, self._delete_batch_size):
                self._delete_vectors(list(batch))
                deleted += len(batch)
        except Exception as e:
            logger.exception(
                "Failed to delete document vectors",
                extra={"doc_id": doc_id, "deleted": deleted, "error": str(e)},
            )
            raise VectorStoreError(
                f"Failed to delete vectors for document {doc_id}: {e}",
                operation="delete",
                details={"doc_id": doc_id, "deleted": deleted},
                kind=classify_error(e),
            ) from e

        logger.info("Deleted document vectors", extra={"doc_id": doc_id, "count": deleted})
        return deleted

    def check_connection(self) -> bool:
        """Describe the index; False on any failure."""
        try:
            self._client.get_index(**self._index_args())
            return True
        except Exception as e:
            logger.warning(
                "Vector store connectivity check failed",
                extra={"index": self._index_name, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            return False
