"""Prompt policy and message assembly for professor recommendations."""

from collections.abc import Sequence

from .models import ChatMessage, ReviewMatch

SYSTEM_PROMPT = """
You are an AI assistant designed to help students find the best professors \
according to their specific queries. Your goal is to provide students with up to \
the top 3 professors that match their criteria, ranked by relevance. If fewer \
than 3 professors match the query, you should return only the matching \
professors. If no professors match the description, inform the user politely.

When responding, consider factors such as teaching style, difficulty, student \
feedback, and overall ratings. Always aim to give concise, helpful, and accurate \
information based on the student's request.

Example queries include:
- "Who are the best Computer Science professors at UC Berkeley?"
- "Can you recommend a professor who is known for being approachable and \
supportive in the Psychology department?"
- "I need a professor who has great ratings for Math 101 and isn't too difficult."

In these cases:
1. If there are 3 or more professors that match the criteria, list the top 3 \
with brief explanations.
2. If there are 1-2 professors, provide only those with the relevant explanations.
3. If no professors match, explain that there are no exact matches but offer \
advice or suggest trying different criteria.

Always be polite, informative, and focused on helping students make informed \
decisions.
"""

RESULTS_HEADER = "Returned Result from vector db (done automatically):"


def format_match(match: ReviewMatch) -> str:
    """Render one retrieved review as a text block."""  # noqa: DOC201
    return (
        f"\nProfessor: {match.professor}\n"
        f"Review: {match.review}\n"
        f"Subject: {match.subject}\n"
        f"Star: {match.star}\n\n"
    )


def format_matches(matches: Sequence[ReviewMatch]) -> str:
    """Build the retrieved-context block appended to the user's question.

    Matches are rendered in the order the index returned them.

    Returns:
        str: The results header followed by one block per match.
    """
    return RESULTS_HEADER + "".join(format_match(match) for match in matches)


def augment_message(text: str, matches: Sequence[ReviewMatch]) -> str:
    """Append the retrieved-context block right after the text."""  # noqa: DOC201
    return text + format_matches(matches)


def build_messages(
    conversation: Sequence[ChatMessage],
    matches: Sequence[ReviewMatch],
) -> list[dict[str, str]]:
    """Assemble the outbound chat completion message list.

    The list is the system prompt, every message but the last unchanged, and
    the last message's text augmented with the retrieved reviews.

    Returns:
        list[dict[str, str]]: Messages in chat completion request format.
    """
    *history, last = conversation
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        *(message.to_openai() for message in history),
        {"role": "user", "content": augment_message(last.content, matches)},
    ]
