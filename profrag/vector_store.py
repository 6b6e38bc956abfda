"""Pinecone-backed index of professor reviews."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pinecone import Pinecone

from .config import config
from .models import ProfessorReview, ReviewMatch

logger = config.get_logger(__name__)


class ReviewIndex:
    """Query and load professor reviews in a Pinecone namespace."""

    def __init__(  # noqa: PLR0913
        self,
        api_key: str | None = None,
        index_name: str | None = None,
        namespace: str | None = None,
        host: str | None = None,
        index: Any = None,
    ) -> None:
        """Initialize the review index.

        Args:
            api_key: Pinecone API key. If None, reads PINECONE_API_KEY.
            index_name: Index name. If None, uses config.PINECONE_INDEX_NAME.
            namespace: Namespace holding the reviews. If None, uses
                config.PINECONE_NAMESPACE.
            host: Index host. If None, uses config.PINECONE_INDEX_HOST and
                otherwise resolves the host from the index name.
            index: Pre-built index handle; skips client construction.
        """
        self.index_name = index_name or config.PINECONE_INDEX_NAME
        self.namespace = (
            namespace if namespace is not None else config.PINECONE_NAMESPACE
        )
        self.host = host or config.PINECONE_INDEX_HOST
        self._index = index
        self._client = (
            None
            if index is not None
            else Pinecone(api_key=api_key or config.get_pinecone_api_key())
        )

    @property
    def index(self) -> Any:
        """Return the index handle, resolving it on first use."""  # noqa: DOC201
        if self._index is None:
            if self.host:
                self._index = self._client.Index(host=self.host)
            else:
                self._index = self._client.Index(self.index_name)
            logger.info(
                "Connected to Pinecone index %s (namespace=%s)",
                self.index_name,
                self.namespace,
            )
        return self._index

    @staticmethod
    def _to_match(match: Any) -> ReviewMatch:
        metadata = match.metadata or {}
        return ReviewMatch(
            professor=match.id,
            review=metadata.get("review"),
            subject=metadata.get("subject"),
            star=metadata.get("star"),
            score=getattr(match, "score", None),
        )

    def query(
        self,
        vector: Sequence[float],
        top_k: int | None = None,
    ) -> list[ReviewMatch]:
        """Return the nearest reviews to a query vector.

        Matches are returned in the order the index ranks them.

        Args:
            vector: Query embedding.
            top_k: Number of neighbours to request. If None, uses
                config.RETRIEVAL_TOP_K.

        Returns:
            list[ReviewMatch]: Up to ``top_k`` matches with metadata.
        """
        if top_k is None:
            top_k = config.RETRIEVAL_TOP_K
        result = self.index.query(
            vector=list(vector),
            top_k=top_k,
            include_metadata=True,
            namespace=self.namespace,
        )

        matches = [self._to_match(match) for match in result.matches or []]
        logger.info("Retrieved %d review(s) from index", len(matches))
        return matches

    def upsert_reviews(
        self,
        reviews: Sequence[ProfessorReview],
        embeddings: Sequence[Sequence[float]],
        batch_size: int = 100,
    ) -> int:
        """Upsert reviews with their embeddings, keyed by professor name.

        Returns:
            int: Number of records written.

        Raises:
            ValueError: If reviews and embeddings differ in length.
        """
        if len(reviews) != len(embeddings):
            msg = (
                f"Got {len(reviews)} reviews but {len(embeddings)} embeddings; "
                "counts must match"
            )
            raise ValueError(msg)

        records = [
            {
                "id": review.professor,
                "values": list(embedding),
                "metadata": {
                    "review": review.review,
                    "subject": review.subject,
                    "star": review.stars,
                },
            }
            for review, embedding in zip(reviews, embeddings, strict=True)
        ]

        for i in range(0, len(records), batch_size):
            batch = records[i : i + batch_size]
            try:
                self.index.upsert(vectors=batch, namespace=self.namespace)
            except Exception:
                logger.exception("Error upserting reviews")
                raise
            logger.info(
                "Upserted batch %d (%d records)", i // batch_size + 1, len(batch)
            )

        return len(records)

    def describe(self) -> dict[str, Any]:
        """Return index statistics as a plain dictionary."""  # noqa: DOC201
        stats = self.index.describe_index_stats()
        return stats.to_dict() if hasattr(stats, "to_dict") else dict(stats)
