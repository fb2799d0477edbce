"""Flashcard generation prompts and response parsing for examcraft.

Shared by every LLM provider: models are asked for a bare JSON object
but often wrap it in markdown fences or trailing prose, so parsing
cuts the outermost JSON object out of the reply before decoding it.
"""

import json
import re
from typing import Any

from examcraft.exceptions import GenerationError
from examcraft.logging import get_logger
from examcraft.models.generation import FlashcardGenerationRequest, GeneratedFlashcard

__all__ = [
    "SYSTEM_PROMPT",
    "build_flashcard_prompt",
    "extract_json_object",
    "parse_flashcards",
]

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are an expert educational content creator specialized in creating effective "
    "flashcards for studying. You must respond with ONLY valid JSON - no markdown, no "
    "explanations, no additional text. Start your response with { and end with }. "
    "Generate flashcards in the exact JSON format requested. Focus on creating clear, "
    "concise questions with accurate answers that promote active recall."
)

_RULES = """Rules for creating effective flashcards:
- Questions should be clear, specific, and test understanding
- Answers should be concise but complete
- Focus on key concepts, definitions, and important facts
- Use active recall principles - questions should make the user think
- Avoid yes/no questions unless they test important concepts
- Include context or examples in answers when helpful
- Make questions atomic - test one concept per flashcard
- Use varied question types (what, how, why, when, where)
- Ensure answers are factually accurate and educational"""

_FENCE = re.compile(r"```(?:json)?\n?")
_OBJECT = re.compile(r"\{[\s\S]*\}")


def build_flashcard_prompt(request: FlashcardGenerationRequest) -> str:
    """Build the user prompt for a generation request."""
    parts = [
        f'Generate {request.num_flashcards} flashcards about "{request.topic_name}" '
        f"at {request.difficulty_label} difficulty level."
    ]
    if request.content_source:
        parts.append(f"Base the flashcards on this content:\n{request.content_source[:8000]}")
    if request.additional_instructions:
        parts.append(f"Additional Instructions: {request.additional_instructions}")

    example = {
        "flashcards": [
            {
                "question": "Clear, concise question that promotes active recall",
                "answer": "Accurate, comprehensive answer with key details",
                "difficulty": request.difficulty,
                "explanation": "Optional brief explanation or context",
            }
        ]
    }
    parts.append(
        "Return ONLY a JSON object in this exact format:\n" + json.dumps(example, indent=2)
    )
    parts.append(_RULES)
    parts.append(
        f"Generate exactly {request.num_flashcards} high-quality flashcards "
        "for effective studying."
    )
    return "\n\n".join(parts)


def extract_json_object(content: str) -> dict[str, Any]:
    """Decode the outermost JSON object embedded in an LLM reply.

    Raises:
        GenerationError: If no JSON object can be decoded
    """
    cleaned = _FENCE.sub("", content.strip())
    match = _OBJECT.search(cleaned)
    candidate = match.group(0) if match else cleaned
    try:
        result = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning("llm_json_parse_failed", preview=content[:200], error=str(e))
        raise GenerationError(
            f"Failed to parse AI response as JSON. Content preview: {content[:500]}"
        ) from e
    if not isinstance(result, dict):
        raise GenerationError("AI response is not a JSON object")
    return result


def _coerce_difficulty(value: Any, default: int) -> int:
    """Return value as a 1-5 difficulty, or default when it is not one."""
    if isinstance(value, bool):
        return default
    try:
        difficulty = int(value)
    except (TypeError, ValueError):
        return default
    if difficulty != value and not isinstance(value, str):
        return default
    return difficulty if 1 <= difficulty <= 5 else default


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def parse_flashcards(
    content: str,
    request: FlashcardGenerationRequest,
) -> list[GeneratedFlashcard]:
    """Turn an LLM reply into validated flashcards.

    Items with a blank question or answer are dropped, the list is cut
    to the requested count, and difficulties that are missing or not an
    integer in 1-5 default to the requested one.

    Raises:
        GenerationError: If the reply has no flashcards array or no usable cards
    """
    payload = extract_json_object(content)
    items = payload.get("flashcards")
    if not isinstance(items, list):
        raise GenerationError("AI response does not contain valid flashcards array")

    cards: list[GeneratedFlashcard] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        question = _text(item.get("question"))
        answer = _text(item.get("answer"))
        if not question or not answer:
            logger.debug("generated_flashcard_skipped", item=str(item)[:200])
            continue
        cards.append(
            GeneratedFlashcard(
                question=question,
                answer=answer,
                difficulty=_coerce_difficulty(item.get("difficulty"), request.difficulty),
                explanation=_text(item.get("explanation")) or None,
            )
        )
        if len(cards) >= request.num_flashcards:
            break

    if not cards:
        raise GenerationError("No valid flashcards generated by AI")
    return cards
