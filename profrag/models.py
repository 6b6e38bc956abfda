"""Data models for the professor review assistant."""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel


class ChatMessage(BaseModel):
    """A single conversation message as sent by the client."""

    role: Literal["system", "user", "assistant"]
    content: str

    def to_openai(self) -> dict[str, str]:
        """Return the message in chat completion request format."""  # noqa: DOC201
        return {"role": self.role, "content": self.content}


@dataclass
class ReviewMatch:
    """A professor review returned by the vector index."""

    professor: str
    review: Any
    subject: Any
    star: Any
    score: float | None = None


@dataclass
class ProfessorReview:
    """A professor review to be loaded into the vector index."""

    professor: str
    review: str
    subject: str
    stars: int | float
