"""Streaming OpenAI chat completions."""

from collections.abc import Iterable, Iterator
from typing import Any

from openai import OpenAI

from .config import config

logger = config.get_logger(__name__)


class ChatCompletionService:
    """Starts streaming chat completions and yields their text deltas."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: OpenAI | None = None,
    ) -> None:
        """Initialize the ChatCompletionService.

        Args:
            api_key: OpenAI API key. If None, reads OPENAI_API_KEY.
            model: Chat model name. If None, uses config.CHAT_MODEL.
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
        self.model = model or config.CHAT_MODEL

    def start_stream(self, messages: list[dict[str, str]]) -> Iterator[str]:
        """Open a streaming completion and return its content fragments.

        The request is issued before this method returns, so failures to
        start generation raise here rather than from the iterator.

        Args:
            messages: Messages in chat completion request format.

        Returns:
            Iterator[str]: Non-empty content fragments in emission order.
        """
        stream = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            stream=True,
        )
        logger.info("Started %s completion with %d messages", self.model, len(messages))
        return self._iter_content(stream)

    @staticmethod
    def _iter_content(stream: Iterable[Any]) -> Iterator[str]:
        try:
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()
