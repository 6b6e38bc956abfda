"""HTTP interface: one streaming chat endpoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from .advisor import EmptyConversationError, ProfessorAdvisor
from .config import config
from .models import ChatMessage
from .streaming import encode_fragments

logger = config.get_logger(__name__)

CHAT_ROUTE = "/api/chat"
ERROR_BODY = "Internal Server Error"
STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"


def create_app(advisor: ProfessorAdvisor | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        advisor: Advisor used to answer requests. If None, one is built from
            the environment configuration when the application starts.

    Returns:
        FastAPI: The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if advisor is not None:
            app.state.advisor = advisor
        else:
            config.validate()
            app.state.advisor = ProfessorAdvisor.from_config(config)
        logger.info("Professor advisor ready (environment=%s)", config.ENVIRONMENT)
        yield

    app = FastAPI(title="ProfRAG", lifespan=lifespan)

    @app.post(CHAT_ROUTE)
    def chat(messages: list[ChatMessage], request: Request):  # noqa: ANN202
        """Answer the last message of a conversation as a text stream."""
        current: ProfessorAdvisor = request.app.state.advisor
        try:
            fragments = current.stream_answer(messages)
        except EmptyConversationError as exc:
            return JSONResponse(status_code=400, content={"detail": str(exc)})
        except Exception:
            logger.exception("Error handling request")
            return PlainTextResponse(ERROR_BODY, status_code=500)

        return StreamingResponse(
            encode_fragments(fragments), media_type=STREAM_MEDIA_TYPE
        )

    return app
