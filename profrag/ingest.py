"""Loading professor reviews into the vector index."""

import json
from pathlib import Path

from .config import config
from .embeddings import EmbeddingService
from .models import ProfessorReview
from .vector_store import ReviewIndex

logger = config.get_logger(__name__)

REQUIRED_FIELDS = ("professor", "review", "subject", "stars")


def load_reviews(file_path: Path) -> list[ProfessorReview]:
    """Read reviews from a JSON file of the form ``{"reviews": [...]}``.

    Returns:
        list[ProfessorReview]: Reviews in file order.

    Raises:
        ValueError: If the file has no review list or an entry lacks a field.
    """
    with Path(file_path).open(encoding="utf-8") as f:
        data = json.load(f)

    entries = data.get("reviews") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        msg = f"{file_path} must contain a 'reviews' list"
        raise ValueError(msg)

    reviews = []
    for i, entry in enumerate(entries):
        missing = [field for field in REQUIRED_FIELDS if field not in entry]
        if missing:
            msg = f"Review {i} in {file_path} is missing: {', '.join(missing)}"
            raise ValueError(msg)
        reviews.append(
            ProfessorReview(
                professor=entry["professor"],
                review=entry["review"],
                subject=entry["subject"],
                stars=entry["stars"],
            )
        )

    logger.info("Loaded %d reviews from %s", len(reviews), file_path)
    return reviews


def ingest_reviews(
    file_path: Path,
    embedding_service: EmbeddingService,
    review_index: ReviewIndex,
) -> int:
    """Embed every review in a file and upsert it into the index.

    Returns:
        int: Number of reviews written.
    """
    reviews = load_reviews(file_path)
    if not reviews:
        logger.warning("No reviews found in %s", file_path)
        return 0

    embeddings = embedding_service.get_embeddings_batch(
        [review.review for review in reviews]
    )
    written = review_index.upsert_reviews(reviews, embeddings)
    logger.info("Review ingestion completed: %d records", written)
    return written
