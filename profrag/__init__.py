"""ProfRAG - streaming professor recommendations over retrieved reviews."""

from .advisor import EmptyConversationError, ProfessorAdvisor
from .api import create_app
from .chat import ChatCompletionService
from .embeddings import EmbeddingService
from .ingest import ingest_reviews, load_reviews
from .models import ChatMessage, ProfessorReview, ReviewMatch
from .vector_store import ReviewIndex

__all__ = [
    "ChatCompletionService",
    "ChatMessage",
    "EmbeddingService",
    "EmptyConversationError",
    "ProfessorAdvisor",
    "ProfessorReview",
    "ReviewIndex",
    "ReviewMatch",
    "create_app",
    "ingest_reviews",
    "load_reviews",
]
