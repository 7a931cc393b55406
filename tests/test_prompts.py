"""Tests for prompt construction."""

import pytest

from images import encode_image
from models import Feature, Framework
from prompts import (
    FEATURE_INSTRUCTIONS,
    FRAMEWORK_INSTRUCTIONS,
    GUIDELINES,
    PREAMBLE,
    build_prompt,
)


@pytest.mark.parametrize("framework", list(Framework))
def test_prompt_contains_framework_instruction(framework):
    text = build_prompt(framework.value).text
    assert FRAMEWORK_INSTRUCTIONS[framework] in text
    assert text.startswith(PREAMBLE)
    assert GUIDELINES in text


@pytest.mark.parametrize("value", ["svelte", "", None, "HTML5"])
def test_unknown_framework_matches_html(value):
    assert build_prompt(value, ["responsive"]).text == build_prompt("html", ["responsive"]).text


def test_framework_value_is_case_insensitive():
    assert build_prompt("React").framework is Framework.REACT


def test_feature_instructions_present_iff_requested():
    text = build_prompt("html", ["responsive", "modern"]).text
    assert FEATURE_INSTRUCTIONS[Feature.RESPONSIVE] in text
    assert FEATURE_INSTRUCTIONS[Feature.MODERN] in text
    assert FEATURE_INSTRUCTIONS[Feature.ACCESSIBLE] not in text
    assert FEATURE_INSTRUCTIONS[Feature.INTERACTIVE] not in text


def test_unknown_features_contribute_nothing():
    assert build_prompt("vue", ["responsive", "sparkles", 42]).text == build_prompt("vue", ["responsive"]).text
    assert build_prompt("vue", ["sparkles"]).text == build_prompt("vue", []).text


def test_feature_instructions_keep_order_and_drop_duplicates():
    spec = build_prompt("html", ["modern", "accessible", "modern"])
    assert spec.feature_instructions == (
        FEATURE_INSTRUCTIONS[Feature.MODERN],
        FEATURE_INSTRUCTIONS[Feature.ACCESSIBLE],
    )


def test_prompt_is_deterministic():
    assert build_prompt("tailwind", ["interactive"]) == build_prompt("tailwind", ["interactive"])


def test_guidelines_forbid_fences_and_mention_tailwind_cdn():
    assert "https://cdn.tailwindcss.com" in GUIDELINES
    assert "no code fences" in GUIDELINES
    assert GUIDELINES.count("\n") == 10


def test_text_only_prompt_asks_for_generic_component():
    spec = build_prompt("react", [], encode_image(b"\x89PNG", "image/png"))
    degraded = spec.text_only()
    assert degraded.startswith(spec.text)
    assert "generic" in degraded
    assert "React" in degraded


def test_spec_is_immutable():
    spec = build_prompt("html")
    with pytest.raises(AttributeError):
        spec.framework = Framework.VUE
