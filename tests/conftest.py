"""Test configuration and fixtures for ProfRAG tests.

This module provides reusable test fixtures organized by functionality:
- Constants and test data
- Mock OpenAI responses and streams
- Mock Pinecone index handles
- Service and advisor fixtures
- HTTP client fixtures
"""

from collections.abc import Iterator
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from profrag import (
    ChatCompletionService,
    ChatMessage,
    EmbeddingService,
    ProfessorAdvisor,
    ReviewIndex,
    ReviewMatch,
    create_app,
)


class TestConstants:
    """Centralized test constants shared across the test suite."""

    TEST_API_KEY = "test-key"
    TEST_EMBEDDING_MODEL = "text-embedding-ada-002"
    TEST_CHAT_MODEL = "gpt-4"
    TEST_NAMESPACE = "ns1"
    TEST_EMBEDDING = [0.1, 0.2, 0.3, 0.4, 0.5]


def create_mock_openai_response(embeddings: list[list[float]]) -> Mock:
    """Create a mock OpenAI embeddings API response.

    Args:
        embeddings: List of embedding vectors to return.

    Returns:
        Mock object representing OpenAI embeddings API response.
    """
    mock_response = Mock()
    mock_response.data = [Mock(embedding=emb) for emb in embeddings]
    return mock_response


def create_stream_chunk(content: str | None) -> Mock:
    """Create one chunk of a streaming chat completion."""
    chunk = Mock()
    chunk.choices = [Mock(delta=Mock(content=content))]
    return chunk


def create_mock_stream(
    fragments: list[str | None], error: Exception | None = None
) -> Iterator[Mock]:
    """Yield stream chunks for each fragment, then optionally raise."""
    for fragment in fragments:
        yield create_stream_chunk(fragment)
    if error is not None:
        raise error


def create_pinecone_match(
    professor: str, review: str, subject: str, star: float, score: float = 0.9
) -> Mock:
    """Create a Pinecone query match with review metadata."""
    match = Mock()
    match.id = professor
    match.score = score
    match.metadata = {"review": review, "subject": subject, "star": star}
    return match


@pytest.fixture
def sample_matches() -> list[ReviewMatch]:
    return [
        ReviewMatch("Dr. A", "great", "CS", 5, 0.91),
        ReviewMatch("Dr. B", "tough grader but fair", "Math", 3, 0.85),
        ReviewMatch("Dr. C", "clear lectures", "Physics", 4, 0.80),
    ]


@pytest.fixture
def sample_conversation() -> list[ChatMessage]:
    return [
        ChatMessage(role="user", content="Who teaches intro CS?"),
        ChatMessage(role="assistant", content="Several professors do."),
        ChatMessage(role="user", content="best CS professor?"),
    ]


@pytest.fixture
def mock_pinecone_index():
    """Pinecone index handle returning no matches by default."""
    index = Mock()
    index.query.return_value = Mock(matches=[])
    return index


@pytest.fixture
def review_index(mock_pinecone_index) -> ReviewIndex:
    return ReviewIndex(
        namespace=TestConstants.TEST_NAMESPACE, index=mock_pinecone_index
    )


@pytest.fixture
def openai_embeddings_api_mock():
    """Patch OpenAI embeddings.create with a single-vector response."""
    with patch("openai.resources.embeddings.Embeddings.create") as mock_create:
        mock_create.return_value = create_mock_openai_response(
            [TestConstants.TEST_EMBEDDING]
        )
        yield mock_create


@pytest.fixture
def embedding_service() -> EmbeddingService:
    return EmbeddingService(
        api_key=TestConstants.TEST_API_KEY, model=TestConstants.TEST_EMBEDDING_MODEL
    )


@pytest.fixture
def chat_service() -> ChatCompletionService:
    return ChatCompletionService(
        api_key=TestConstants.TEST_API_KEY, model=TestConstants.TEST_CHAT_MODEL
    )


@pytest.fixture
def openai_chat_api_mock(chat_service):
    """Patch the chat service's completions.create with an empty stream."""
    with patch.object(chat_service.client.chat.completions, "create") as mock_create:
        mock_create.return_value = create_mock_stream([])
        yield mock_create


@pytest.fixture
def advisor(embedding_service, review_index, chat_service) -> ProfessorAdvisor:
    """Advisor wired to real client wrappers with patched transports."""
    return ProfessorAdvisor(
        embedding_service=embedding_service,
        review_index=review_index,
        chat_service=chat_service,
        top_k=3,
    )


@pytest.fixture
def api_client_factory():
    """Factory for TestClient instances around an injected advisor."""

    def _create_client(advisor, **kwargs) -> TestClient:
        return TestClient(create_app(advisor), **kwargs)

    return _create_client


@pytest.fixture
def embeddings_response_factory():
    """Expose ``create_mock_openai_response`` to tests."""
    return create_mock_openai_response


@pytest.fixture
def chat_stream_factory():
    """Expose ``create_mock_stream`` to tests."""
    return create_mock_stream


@pytest.fixture
def pinecone_match_factory():
    """Expose ``create_pinecone_match`` to tests."""
    return create_pinecone_match
