"""Retrieval-augmented professor recommendations."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from openai import OpenAI

from .chat import ChatCompletionService
from .config import config
from .embeddings import EmbeddingService
from .prompts import build_messages
from .vector_store import ReviewIndex

if TYPE_CHECKING:
    from .config import Config
    from .models import ChatMessage, ReviewMatch

logger = config.get_logger(__name__)


class EmptyConversationError(ValueError):
    """Raised when a conversation has no message to answer."""


class ProfessorAdvisor:
    """Orchestrates Embed -> Retrieve -> Augment -> Generate for one request."""

    def __init__(
        self,
        embedding_service: EmbeddingService,
        review_index: ReviewIndex,
        chat_service: ChatCompletionService,
        top_k: int | None = None,
    ) -> None:
        """Initialize the advisor with its three collaborators.

        Args:
            embedding_service: Embeds the user's question.
            review_index: Looks up the nearest professor reviews.
            chat_service: Streams the generated answer.
            top_k: Reviews retrieved per question. If None, uses
                config.RETRIEVAL_TOP_K.
        """
        self.embedding_service = embedding_service
        self.review_index = review_index
        self.chat_service = chat_service
        self.top_k = top_k if top_k is not None else config.RETRIEVAL_TOP_K

    @classmethod
    def from_config(cls, settings: Config = config) -> ProfessorAdvisor:
        """Build an advisor whose clients share one set of credentials.

        Returns:
            ProfessorAdvisor: Advisor wired to OpenAI and Pinecone.
        """
        default_headers = settings.get_api_headers()
        openai_client = OpenAI(
            api_key=settings.get_openai_api_key(),
            base_url=settings.OPENAI_BASE_URL,
            default_headers=default_headers or None,
        )
        return cls(
            embedding_service=EmbeddingService(
                client=openai_client, model=settings.EMBEDDING_MODEL
            ),
            review_index=ReviewIndex(
                api_key=settings.get_pinecone_api_key(),
                index_name=settings.PINECONE_INDEX_NAME,
                namespace=settings.PINECONE_NAMESPACE,
                host=settings.PINECONE_INDEX_HOST,
            ),
            chat_service=ChatCompletionService(
                client=openai_client, model=settings.CHAT_MODEL
            ),
            top_k=settings.RETRIEVAL_TOP_K,
        )

    def retrieve(self, query: str) -> list[ReviewMatch]:
        """Embed a question and fetch the nearest reviews.

        Returns:
            list[ReviewMatch]: Matches in index order.
        """
        query_embedding = self.embedding_service.get_embedding(query)
        return self.review_index.query(query_embedding, top_k=self.top_k)

    def compose(self, conversation: Sequence[ChatMessage]) -> list[dict[str, str]]:
        """Build the completion request for a conversation.

        Returns:
            list[dict[str, str]]: System prompt, history, augmented question.

        Raises:
            EmptyConversationError: If the conversation has no messages.
        """
        if not conversation:
            msg = "Conversation must contain at least one message"
            raise EmptyConversationError(msg)

        question = conversation[-1].content
        logger.info("Processing question: %s", question)

        matches = self.retrieve(question)
        for i, match in enumerate(matches):
            logger.debug(
                "  Match %d: %s (score: %s)", i + 1, match.professor, match.score
            )

        return build_messages(conversation, matches)

    def stream_answer(self, conversation: Sequence[ChatMessage]) -> Iterator[str]:
        """Prepare a request and start generating the answer.

        Every outbound call up to and including starting the completion
        happens before this method returns.

        Returns:
            Iterator[str]: Generated text fragments.
        """
        messages = self.compose(conversation)
        return self.chat_service.start_stream(messages)
