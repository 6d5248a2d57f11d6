"""Best-effort extraction of a structured recipe from model output.

Language models asked for JSON still wrap it in prose, chain-of-thought
blocks and markdown fences, or emit trailing commas and unquoted keys. The
normalizer runs an ordered chain of decode attempts, strict and cheap first:

1. direct decode of the whole text
2. decode after removing reasoning blocks and fence markers
3. extraction patterns: fenced block, labelled object, balanced spans,
   first-to-last brace span
4. syntactic repairs on the cleaned text, then the first-to-last brace span
5. markup stripped from the original text, trailing commas removed

The first attempt that decodes to a JSON object wins. A decoded object
missing a name or ingredients still wins; the Recipe reports it as
incomplete. Every step is a plain function so it can be exercised alone.

The module is pure: no I/O, no logging, no shared state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from recipe_generator.schemas.recipe import Recipe


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


# =============================================================================
# Patterns
# =============================================================================

_REASONING_BLOCK = re.compile(
    r"<(think|thinking|reasoning)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_FENCE_MARKER = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_FENCED_OBJECT = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.IGNORECASE | re.DOTALL)
_LABELLED_OBJECT = re.compile(r"\b(?:recipe|json)\s*:\s*(?=\{)", re.IGNORECASE)

_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_]\w*)(\s*):")
_SINGLE_QUOTED_VALUE = re.compile(r":\s*'([^']*)'")
_NEWLINE = re.compile(r"\r?\n")
_MARKUP_TAG = re.compile(r"<[^>]*>")


class ParseStep(StrEnum):
    """Normalization step that produced the decoded object."""

    DIRECT = "direct"
    CLEANED = "cleaned"
    PATTERN = "pattern"
    REPAIRED = "repaired"
    LAST_RESORT = "last_resort"


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """No JSON object could be recovered from a model response.

    Not an error for the request: the generation itself succeeded, so callers
    show ``cleaned_text`` with a notice instead of a structured recipe.
    """

    raw_text: str
    cleaned_text: str
    reason: str = "No JSON object could be decoded from the response"


@dataclass(frozen=True, slots=True)
class ExtractedPayload:
    """A decoded JSON object and the step that recovered it."""

    payload: dict[str, Any]
    step: ParseStep
    raw_text: str
    cleaned_text: str


# =============================================================================
# Building Blocks
# =============================================================================


def decode_object(text: str) -> dict[str, Any] | None:
    """Decode ``text`` as JSON, returning None unless it is an object."""
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def strip_reasoning(text: str) -> str:
    """Remove ``<think>``, ``<thinking>`` and ``<reasoning>`` blocks."""
    return _REASONING_BLOCK.sub("", text)


def strip_code_fences(text: str) -> str:
    """Remove markdown fence markers, keeping the fenced content."""
    return _FENCE_MARKER.sub("", text)


def clean_response_text(raw: str) -> str:
    """Reasoning blocks and fence markers removed, surrounding whitespace trimmed."""
    return strip_code_fences(strip_reasoning(raw)).strip()


def outermost_span(text: str) -> str | None:
    """Text from the first ``{`` to the last ``}``, if both exist in that order."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def iter_balanced_objects(text: str) -> Iterator[str]:
    """Yield each top-level balanced ``{...}`` span in order.

    Braces inside double-quoted string literals are ignored. Quotes outside
    any object are prose and do not open a string.
    """
    depth = 0
    start = 0
    in_string = False
    escaped = False

    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = depth > 0
        elif char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                yield text[start : index + 1]


def balanced_object_at(text: str, start: int) -> str | None:
    """The balanced object opening at ``text[start]``, or None if it never closes."""
    return next(iter_balanced_objects(text[start:]), None)


def repair_json_text(text: str) -> str:
    """Apply lenient syntax repairs.

    Removes trailing commas before ``}``/``]``, quotes bare object keys,
    turns single-quoted values into double-quoted ones and replaces
    newlines with spaces.
    """
    repaired = _TRAILING_COMMA.sub(r"\1", text)
    repaired = _BARE_KEY.sub(r'\1"\2"\3:', repaired)
    repaired = _SINGLE_QUOTED_VALUE.sub(r': "\1"', repaired)
    return _NEWLINE.sub(" ", repaired)


def iter_candidates(reasoning_free: str, cleaned: str) -> Iterator[str]:
    """Yield extraction candidates, most specific pattern first.

    Fenced blocks are searched in ``reasoning_free`` because ``cleaned`` has
    its fence markers removed already.
    """
    for match in _FENCED_OBJECT.finditer(reasoning_free):
        yield match.group(1)

    for match in _LABELLED_OBJECT.finditer(cleaned):
        if (span := balanced_object_at(cleaned, match.end())) is not None:
            yield span

    yield from iter_balanced_objects(cleaned)

    if (span := outermost_span(cleaned)) is not None:
        yield span


# =============================================================================
# Steps
# =============================================================================


def try_direct(raw: str) -> dict[str, Any] | None:
    """Step 1: the whole response is JSON."""
    return decode_object(raw)


def try_cleaned(cleaned: str) -> dict[str, Any] | None:
    """Step 2: JSON once reasoning blocks and fences are gone."""
    return decode_object(cleaned)


def try_patterns(reasoning_free: str, cleaned: str) -> dict[str, Any] | None:
    """Step 3: first extraction candidate that decodes to an object."""
    for candidate in iter_candidates(reasoning_free, cleaned):
        if (payload := decode_object(candidate)) is not None:
            return payload
    return None


def try_repaired(cleaned: str) -> dict[str, Any] | None:
    """Step 4: outermost span of the repaired cleaned text."""
    span = outermost_span(repair_json_text(cleaned))
    return decode_object(span) if span is not None else None


def try_last_resort(raw: str) -> dict[str, Any] | None:
    """Step 5: original text with markup stripped and trailing commas removed."""
    span = outermost_span(_MARKUP_TAG.sub("", raw))
    if span is None:
        return None
    return decode_object(_TRAILING_COMMA.sub(r"\1", span))


# =============================================================================
# Normalizer
# =============================================================================


class ResponseNormalizer:
    """Convert raw model output into a Recipe or a ParseFailure.

    Stateless and side-effect free; one instance can serve concurrent
    requests.
    """

    def extract(self, raw: str) -> ExtractedPayload | ParseFailure:
        """Run the fallback chain and return the first decoded object.

        Args:
            raw: Text returned by the model.

        Returns:
            The decoded object with the step that produced it, or a
            ParseFailure when every step failed.
        """
        reasoning_free = strip_reasoning(raw)
        cleaned = strip_code_fences(reasoning_free).strip()

        steps: tuple[tuple[ParseStep, Callable[[], dict[str, Any] | None]], ...] = (
            (ParseStep.DIRECT, lambda: try_direct(raw)),
            (ParseStep.CLEANED, lambda: try_cleaned(cleaned)),
            (ParseStep.PATTERN, lambda: try_patterns(reasoning_free, cleaned)),
            (ParseStep.REPAIRED, lambda: try_repaired(cleaned)),
            (ParseStep.LAST_RESORT, lambda: try_last_resort(raw)),
        )
        for step, attempt in steps:
            payload = attempt()
            if payload is not None:
                return ExtractedPayload(
                    payload=payload,
                    step=step,
                    raw_text=raw,
                    cleaned_text=cleaned,
                )

        return ParseFailure(raw_text=raw, cleaned_text=cleaned)

    def build_recipe(self, extracted: ExtractedPayload) -> Recipe | ParseFailure:
        """Validate a decoded object into a Recipe.

        Missing fields do not fail here; see ``Recipe.missing_fields``.
        """
        try:
            return Recipe.model_validate(extracted.payload)
        except ValidationError as e:
            return ParseFailure(
                raw_text=extracted.raw_text,
                cleaned_text=extracted.cleaned_text,
                reason=f"Decoded object is not a recipe: {e.error_count()} errors",
            )

    def normalize(self, raw: str) -> Recipe | ParseFailure:
        """Structure a raw model response.

        Args:
            raw: Text returned by the model.

        Returns:
            The Recipe (possibly incomplete) or a ParseFailure.
        """
        extracted = self.extract(raw)
        if isinstance(extracted, ParseFailure):
            return extracted
        return self.build_recipe(extracted)


def normalize_recipe_response(raw: str) -> Recipe | ParseFailure:
    """Module-level shortcut for ``ResponseNormalizer().normalize``."""
    return ResponseNormalizer().normalize(raw)
