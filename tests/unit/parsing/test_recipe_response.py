"""Unit tests for the model response normalizer.

Tests cover:
- Building blocks (reasoning/fence stripping, span extraction, repairs)
- Each fallback step of the chain
- Recipe construction from decoded objects
- Structural failures
"""

from __future__ import annotations

import pytest

from recipe_generator.parsing.recipe_response import (
    ExtractedPayload,
    ParseFailure,
    ParseStep,
    ResponseNormalizer,
    clean_response_text,
    decode_object,
    iter_balanced_objects,
    iter_candidates,
    normalize_recipe_response,
    outermost_span,
    repair_json_text,
    strip_code_fences,
    strip_reasoning,
    try_last_resort,
    try_repaired,
)
from recipe_generator.schemas.recipe import Recipe, RecipeIngredient
from tests.fixtures.llm_responses import (
    INCOMPLETE_RECIPE,
    LABELLED_TRAILING_COMMA_RECIPE,
    PLAIN_JSON_RECIPE,
    REASONING_FENCED_RECIPE,
    REFUSAL_RESPONSE,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def normalizer() -> ResponseNormalizer:
    """Create a normalizer."""
    return ResponseNormalizer()


class TestDecodeObject:
    """Tests for decode_object."""

    def test_decodes_object(self) -> None:
        """Should decode a JSON object into a dict."""
        assert decode_object('{"name": "Soup"}') == {"name": "Soup"}

    @pytest.mark.parametrize("text", ["[1, 2]", '"Soup"', "42", "null"])
    def test_rejects_non_object_json(self, text: str) -> None:
        """Should return None for valid JSON that is not an object."""
        assert decode_object(text) is None

    def test_rejects_invalid_json(self) -> None:
        """Should return None for invalid JSON."""
        assert decode_object('{"name": "Soup",}') is None


class TestStripping:
    """Tests for reasoning and fence removal."""

    @pytest.mark.parametrize("tag", ["think", "thinking", "reasoning", "THINK"])
    def test_strips_reasoning_blocks(self, tag: str) -> None:
        """Should remove reasoning blocks of every supported tag."""
        text = f"<{tag}>let me {{consider}} this</{tag}>{{}}"

        assert strip_reasoning(text) == "{}"

    def test_strips_multiline_reasoning(self) -> None:
        """Should remove reasoning spanning several lines."""
        text = "<think>\nline one\nline two\n</think>\nanswer"

        assert strip_reasoning(text) == "\nanswer"

    def test_strips_fence_markers(self) -> None:
        """Should remove opening and closing fences but keep the content."""
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}\n'

    def test_clean_response_text_trims(self) -> None:
        """Should combine both strips and trim whitespace."""
        raw = '<think>hmm</think>\n```\n{"a": 1}\n```\n'

        assert clean_response_text(raw) == '{"a": 1}'


class TestSpans:
    """Tests for brace span extraction."""

    def test_outermost_span(self) -> None:
        """Should return text from the first { to the last }."""
        assert outermost_span('text {"a": {"b": 1}} more') == '{"a": {"b": 1}}'

    @pytest.mark.parametrize("text", ["no braces", "} reversed {", "{ unclosed"])
    def test_outermost_span_missing(self, text: str) -> None:
        """Should return None without an ordered brace pair."""
        assert outermost_span(text) is None

    def test_balanced_objects_in_order(self) -> None:
        """Should yield each top-level object in order."""
        text = 'first {"a": 1} then {"b": {"c": 2}} end'

        assert list(iter_balanced_objects(text)) == ['{"a": 1}', '{"b": {"c": 2}}']

    def test_balanced_objects_ignore_braces_in_strings(self) -> None:
        """Should not close an object on a brace inside a string literal."""
        text = 'x {"a": "}"} y {"b": "\\"{"}'

        assert list(iter_balanced_objects(text)) == ['{"a": "}"}', '{"b": "\\"{"}']

    def test_unclosed_object_yields_nothing(self) -> None:
        """Should not yield an object that never closes."""
        assert list(iter_balanced_objects('{"a": {"b": 1}')) == []

    def test_candidates_order(self) -> None:
        """Should try fenced, labelled, balanced, then outermost candidates."""
        reasoning_free = 'recipe: {"a": 1} ```json\n{"b": 2}\n```'
        cleaned = clean_response_text(reasoning_free)

        candidates = list(iter_candidates(reasoning_free, cleaned))

        assert candidates[0] == '{"b": 2}'
        assert candidates[1] == '{"a": 1}'
        assert candidates[-1] == outermost_span(cleaned)


class TestRepairs:
    """Tests for lenient syntax repairs."""

    def test_removes_trailing_commas(self) -> None:
        """Should drop commas before closing brackets."""
        assert repair_json_text('{"a": [1, 2,],}') == '{"a": [1, 2]}'

    def test_quotes_bare_keys(self) -> None:
        """Should quote unquoted object keys."""
        assert repair_json_text('{name: "Soup", serves_two: "yes"}') == (
            '{"name": "Soup", "serves_two": "yes"}'
        )

    def test_double_quotes_single_quoted_values(self) -> None:
        """Should turn single-quoted values into JSON strings."""
        assert repair_json_text("{\"name\": 'Soup'}") == '{"name": "Soup"}'

    def test_replaces_newlines(self) -> None:
        """Should replace newlines with spaces."""
        assert repair_json_text('{"a":\r\n1}') == '{"a": 1}'

    def test_try_repaired_decodes_bare_keys(self) -> None:
        """Should decode an object with unquoted keys."""
        assert try_repaired('{name: "Toast"}') == {"name": "Toast"}

    def test_try_last_resort_strips_markup(self) -> None:
        """Should strip markup tags from the original text."""
        raw = '<p>{"name": "Tea",<br> "ingredients": ["tea leaves"],}</p>'

        assert try_last_resort(raw) == {"name": "Tea", "ingredients": ["tea leaves"]}


class TestExtract:
    """Tests for the fallback chain."""

    def test_direct_json(self, normalizer: ResponseNormalizer) -> None:
        """Should decode JSON-only input on the first step."""
        result = normalizer.extract(PLAIN_JSON_RECIPE)

        assert isinstance(result, ExtractedPayload)
        assert result.step == ParseStep.DIRECT
        assert result.payload["name"] == "Tomato Basil Pasta"

    def test_cleaned_json(self, normalizer: ResponseNormalizer) -> None:
        """Should decode once reasoning and fences are removed."""
        raw = f"<think>pasta it is</think>\n```json\n{PLAIN_JSON_RECIPE}\n```"

        result = normalizer.extract(raw)

        assert isinstance(result, ExtractedPayload)
        assert result.step == ParseStep.CLEANED

    def test_fenced_block_in_prose(self, normalizer: ResponseNormalizer) -> None:
        """Should extract a fenced block surrounded by prose."""
        result = normalizer.extract(REASONING_FENCED_RECIPE)

        assert isinstance(result, ExtractedPayload)
        assert result.step == ParseStep.PATTERN
        assert result.payload["name"] == "Tomato Basil Pasta"

    def test_first_decodable_balanced_object(self, normalizer: ResponseNormalizer) -> None:
        """Should skip a broken object and take the next balanced one."""
        raw = 'Draft: {"name": broken} Final answer {"name": "Soup", "ingredients": ["water"]}'

        result = normalizer.extract(raw)

        assert isinstance(result, ExtractedPayload)
        assert result.step == ParseStep.PATTERN
        assert result.payload["name"] == "Soup"

    def test_repaired_json(self, normalizer: ResponseNormalizer) -> None:
        """Should repair trailing commas after patterns fail."""
        result = normalizer.extract(LABELLED_TRAILING_COMMA_RECIPE)

        assert isinstance(result, ExtractedPayload)
        assert result.step == ParseStep.REPAIRED
        assert result.payload["name"] == "Omelette"

    def test_last_resort(self, normalizer: ResponseNormalizer) -> None:
        """Should fall back to stripping markup from the original text."""
        raw = '{"name": "Tea",<br> "ingredients": ["tea leaves"]}'

        result = normalizer.extract(raw)

        assert isinstance(result, ExtractedPayload)
        assert result.step == ParseStep.LAST_RESORT

    def test_no_json_is_failure(self, normalizer: ResponseNormalizer) -> None:
        """Should fail on text without any object."""
        result = normalizer.extract(REFUSAL_RESPONSE)

        assert isinstance(result, ParseFailure)
        assert result.raw_text == REFUSAL_RESPONSE
        assert result.cleaned_text == REFUSAL_RESPONSE

    def test_non_object_json_is_failure(self, normalizer: ResponseNormalizer) -> None:
        """Should fail when the only JSON is an array."""
        assert isinstance(normalizer.extract('["onion", "garlic"]'), ParseFailure)

    def test_failure_keeps_cleaned_text(self, normalizer: ResponseNormalizer) -> None:
        """Should report the cleaned text for display."""
        raw = "<think>no idea</think>\nSorry, try other ingredients."

        result = normalizer.extract(raw)

        assert isinstance(result, ParseFailure)
        assert result.cleaned_text == "Sorry, try other ingredients."


class TestNormalize:
    """Tests for end-to-end normalization."""

    def test_json_only_input(self, normalizer: ResponseNormalizer) -> None:
        """Should build the decoded recipe."""
        recipe = normalizer.normalize(PLAIN_JSON_RECIPE)

        assert isinstance(recipe, Recipe)
        assert recipe.name == "Tomato Basil Pasta"
        assert recipe.ingredients[0] == RecipeIngredient(name="spaghetti", quantity="200 g")
        assert recipe.dietary_preference == ["Vegetarian"]
        assert recipe.additional_information == {"tips": "Save some pasta water."}
        assert recipe.is_complete

    def test_wrapped_input_matches_bare(self, normalizer: ResponseNormalizer) -> None:
        """Fences and reasoning should not change the recipe."""
        assert normalizer.normalize(REASONING_FENCED_RECIPE) == normalizer.normalize(
            PLAIN_JSON_RECIPE
        )

    def test_trailing_commas_match_clean_input(self, normalizer: ResponseNormalizer) -> None:
        """Trailing commas should normalize to the same structure."""
        with_commas = '{"name": "Soup", "ingredients": [{"name": "onion", "quantity": "1"},],}'
        without = '{"name": "Soup", "ingredients": [{"name": "onion", "quantity": "1"}]}'

        assert normalizer.normalize(with_commas) == normalizer.normalize(without)

    def test_prose_fence_and_trailing_commas(self, normalizer: ResponseNormalizer) -> None:
        """Should recover a fenced recipe with trailing commas."""
        raw = (
            "Here's your recipe:\n```json\n"
            '{"name":"Soup","ingredients":[{"name":"onion","quantity":"1",}],'
            '"instructions":["Chop.",]}\n```'
        )

        recipe = normalizer.normalize(raw)

        assert recipe == Recipe(
            name="Soup",
            ingredients=[RecipeIngredient(name="onion", quantity="1")],
            instructions=["Chop."],
        )

    def test_refusal_is_failure(self, normalizer: ResponseNormalizer) -> None:
        """Should report a structural failure for a refusal."""
        assert isinstance(normalizer.normalize("I cannot help with that."), ParseFailure)

    def test_incomplete_recipe_is_not_failure(self, normalizer: ResponseNormalizer) -> None:
        """Should return an incomplete recipe rather than a failure."""
        recipe = normalizer.normalize(INCOMPLETE_RECIPE)

        assert isinstance(recipe, Recipe)
        assert recipe.missing_fields == ["ingredients"]
        assert recipe.has_instructions

    def test_module_shortcut(self) -> None:
        """Should behave like a default normalizer."""
        assert normalize_recipe_response(PLAIN_JSON_RECIPE) == ResponseNormalizer().normalize(
            PLAIN_JSON_RECIPE
        )

    def test_deterministic(self, normalizer: ResponseNormalizer) -> None:
        """Should give the same result for the same input."""
        assert normalizer.normalize(REASONING_FENCED_RECIPE) == normalizer.normalize(
            REASONING_FENCED_RECIPE
        )
