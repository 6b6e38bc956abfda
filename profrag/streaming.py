"""Relay of generated text fragments to a byte stream."""

from collections.abc import Iterable, Iterator

from .config import config

logger = config.get_logger(__name__)


def encode_fragments(
    fragments: Iterable[str], encoding: str = "utf-8"
) -> Iterator[bytes]:
    """Encode text fragments one at a time, preserving their order.

    Each fragment is pulled from the producer only after the previous one has
    been handed to the consumer. An error raised by the producer is logged
    and re-raised so the transport ends the response in an error state;
    bytes already yielded stay delivered. The producer is closed whenever the
    relay stops, including when the consumer goes away early.

    Args:
        fragments: Producer of text fragments.
        encoding: Output encoding.

    Yields:
        bytes: Each non-empty fragment, encoded.
    """
    count = 0
    try:
        for fragment in fragments:
            if not fragment:
                continue
            count += 1
            yield fragment.encode(encoding)
    except Exception:
        logger.exception("Stream failed after %d fragment(s)", count)
        raise
    finally:
        close = getattr(fragments, "close", None)
        if close is not None:
            close()
    logger.debug("Stream completed with %d fragment(s)", count)
