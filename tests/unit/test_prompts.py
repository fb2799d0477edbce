"""Unit tests for LLM prompt building and response parsing."""

import json

import pytest

from examcraft.exceptions import GenerationError
from examcraft.infra.llm.prompts import (
    build_flashcard_prompt,
    extract_json_object,
    parse_flashcards,
)
from examcraft.models.generation import FlashcardGenerationRequest


@pytest.fixture
def request_for_three() -> FlashcardGenerationRequest:
    return FlashcardGenerationRequest(
        user_id="user-1",
        topic_name="Photosynthesis",
        num_flashcards=3,
        difficulty=2,
    )


def _reply(*cards: dict) -> str:
    return json.dumps({"flashcards": list(cards)})


class TestBuildFlashcardPrompt:
    """Tests for build_flashcard_prompt."""

    def test_mentions_count_topic_and_difficulty(
        self, request_for_three: FlashcardGenerationRequest
    ) -> None:
        prompt = build_flashcard_prompt(request_for_three)

        assert 'Generate 3 flashcards about "Photosynthesis"' in prompt
        assert "Easy difficulty level" in prompt
        assert '"flashcards"' in prompt

    def test_includes_optional_sections(self) -> None:
        request = FlashcardGenerationRequest(
            user_id="user-1",
            topic_name="Photosynthesis",
            num_flashcards=2,
            content_source="Chlorophyll absorbs light.",
            additional_instructions="Focus on the light reactions",
        )

        prompt = build_flashcard_prompt(request)

        assert "Chlorophyll absorbs light." in prompt
        assert "Additional Instructions: Focus on the light reactions" in prompt


class TestExtractJsonObject:
    """Tests for extract_json_object."""

    def test_plain_json(self) -> None:
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_markdown_fences(self) -> None:
        content = '```json\n{"flashcards": []}\n```'
        assert extract_json_object(content) == {"flashcards": []}

    def test_surrounding_prose(self) -> None:
        content = 'Here you go:\n{"flashcards": [{"question": "Q"}]}\nHope this helps!'
        assert extract_json_object(content) == {"flashcards": [{"question": "Q"}]}

    def test_not_json(self) -> None:
        with pytest.raises(GenerationError, match="Failed to parse AI response"):
            extract_json_object("I cannot help with that.")

    def test_not_an_object(self) -> None:
        with pytest.raises(GenerationError):
            extract_json_object("[1, 2, 3]")


class TestParseFlashcards:
    """Tests for parse_flashcards."""

    def test_parses_cards(self, request_for_three: FlashcardGenerationRequest) -> None:
        content = _reply(
            {"question": "What is chlorophyll?", "answer": "A pigment", "difficulty": 1},
            {"question": "Where does it happen?", "answer": "Chloroplasts"},
        )

        cards = parse_flashcards(content, request_for_three)

        assert [c.question for c in cards] == ["What is chlorophyll?", "Where does it happen?"]
        assert cards[0].difficulty == 1
        assert cards[1].difficulty == 2

    def test_skips_incomplete_items(self, request_for_three: FlashcardGenerationRequest) -> None:
        content = _reply(
            {"question": "No answer here"},
            {"answer": "No question here"},
            "not a dict",
            {"question": "Q?", "answer": "A"},
        )

        cards = parse_flashcards(content, request_for_three)

        assert len(cards) == 1
        assert cards[0].question == "Q?"

    def test_invalid_difficulty_falls_back_to_requested(
        self, request_for_three: FlashcardGenerationRequest
    ) -> None:
        content = _reply(
            {"question": "Q1?", "answer": "A1", "difficulty": 7},
            {"question": "Q2?", "answer": "A2", "difficulty": "hard"},
            {"question": "Q3?", "answer": "A3", "difficulty": 4},
        )

        cards = parse_flashcards(content, request_for_three)

        assert [c.question for c in cards] == ["Q1?", "Q2?", "Q3?"]
        assert [c.difficulty for c in cards] == [2, 2, 4]

    @pytest.mark.parametrize(
        ("difficulty", "expected"),
        [("5", 5), (3.0, 3), (4.5, 2), (0, 2), (True, 2), (None, 2), ([1], 2)],
    )
    def test_difficulty_coercion(
        self,
        request_for_three: FlashcardGenerationRequest,
        difficulty: object,
        expected: int,
    ) -> None:
        content = _reply({"question": "Q?", "answer": "A", "difficulty": difficulty})

        cards = parse_flashcards(content, request_for_three)

        assert cards[0].difficulty == expected

    def test_skips_blank_question_or_answer(
        self, request_for_three: FlashcardGenerationRequest
    ) -> None:
        content = _reply(
            {"question": "   ", "answer": "A1"},
            {"question": "Q2?", "answer": "\n\t"},
            {"question": "  Q3?  ", "answer": " A3 ", "explanation": "  "},
        )

        cards = parse_flashcards(content, request_for_three)

        assert len(cards) == 1
        assert cards[0].question == "Q3?"
        assert cards[0].answer == "A3"
        assert cards[0].explanation is None

    def test_truncates_to_requested_count(
        self, request_for_three: FlashcardGenerationRequest
    ) -> None:
        content = _reply(*({"question": f"Q{i}?", "answer": f"A{i}"} for i in range(5)))

        cards = parse_flashcards(content, request_for_three)

        assert len(cards) == 3

    def test_missing_flashcards_array(
        self, request_for_three: FlashcardGenerationRequest
    ) -> None:
        with pytest.raises(GenerationError, match="valid flashcards array"):
            parse_flashcards('{"cards": []}', request_for_three)

    def test_no_usable_cards(self, request_for_three: FlashcardGenerationRequest) -> None:
        with pytest.raises(GenerationError, match="No valid flashcards"):
            parse_flashcards(_reply({"question": "Q?"}), request_for_three)
