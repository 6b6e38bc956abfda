"""Text embeddings for review search, as plain float vectors."""

from collections.abc import Sequence

from openai import OpenAI

from .config import config

logger = config.get_logger(__name__)

Vector = list[float]


class EmbeddingService:
    """Turns questions and review texts into index-ready vectors."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the EmbeddingService.

        Args:
            api_key: OpenAI API key. If None, reads OPENAI_API_KEY.
            model: Embedding model name. If None, uses config.EMBEDDING_MODEL.
                It must match the dimension of the Pinecone index.
            client: Pre-built OpenAI client to share with other services.
        """
        if client is None:
            default_headers = config.get_api_headers()
            client = OpenAI(
                api_key=api_key or config.get_openai_api_key(),
                base_url=config.OPENAI_BASE_URL,
                default_headers=default_headers or None,
            )
        self.client = client
        self.model = model or config.EMBEDDING_MODEL

    def _embed(self, texts: str | Sequence[str]) -> list[Vector]:
        response = self.client.embeddings.create(model=self.model, input=texts)
        return [list(item.embedding) for item in response.data]

    def get_embedding(self, text: str) -> Vector:
        """Embed a single query text.

        Errors from the API propagate unchanged; the caller decides how to
        report them.

        Returns:
            Vector: The embedding, ready to send as a Pinecone query vector.
        """
        [vector] = self._embed(text)
        logger.debug("Embedded query with %s (%d dims)", self.model, len(vector))
        return vector

    def get_embeddings_batch(
        self,
        texts: Sequence[str],
        batch_size: int = 100,
    ) -> list[Vector]:
        """Embed review texts in batches, keeping input order.

        Returns:
            list[Vector]: One vector per input text.
        """
        vectors: list[Vector] = []
        for start in range(0, len(texts), batch_size):
            try:
                vectors.extend(self._embed(list(texts[start : start + batch_size])))
            except Exception:
                logger.exception("Error embedding reviews %d onwards", start)
                raise
            logger.info("Embedded %d/%d reviews", len(vectors), len(texts))
        return vectors
