"""Tests for recovering JSON from model output."""

import json
import time

from title_agent.tools.json_extractor import (
    TRUNCATION_WINDOW,
    balanced_end_offsets,
    extract_json,
    slice_from_first_bracket,
    strip_assignment,
    strip_code_fence,
)


class TestExtractJson:
    """Tests for the full recovery chain."""

    def test_plain_json_is_returned_as_canonical_json(self):
        """Given valid JSON, should return an equivalent document."""
        # Given
        text = '{"suggestions": ["feat: add login"], "confidence": 0.9}'

        # When
        result = extract_json(text)

        # Then
        assert json.loads(result) == {"suggestions": ["feat: add login"], "confidence": 0.9}

    def test_fenced_json_is_unwrapped(self):
        """Given JSON inside a ```json fence with prose around it, should extract it."""
        # Given
        text = 'Sure!\n```json\n{"suggestions": ["fix: handle nulls"]}\n```\nLet me know.'

        # When
        result = extract_json(text)

        # Then
        assert json.loads(result) == {"suggestions": ["fix: handle nulls"]}

    def test_variable_assignment_is_stripped(self):
        """Given `const x = {...};`, should return the object."""
        assert json.loads(extract_json('const result = {"a": 1};')) == {"a": 1}

    def test_trailing_commas_and_comments_are_tolerated(self):
        """Given JSON with trailing commas and a comment, should parse it."""
        # Given
        text = '{\n  // best first\n  "suggestions": ["docs: explain setup",],\n}'

        # When
        result = extract_json(text)

        # Then
        assert json.loads(result) == {"suggestions": ["docs: explain setup"]}

    def test_leading_and_trailing_prose_are_dropped(self):
        """Given an object followed by commentary, should keep only the object."""
        # Given
        text = 'Here you go: {"suggestions": ["feat: add search"]} I hope {this} helps'

        # When
        result = extract_json(text)

        # Then
        assert json.loads(result) == {"suggestions": ["feat: add search"]}

    def test_braces_inside_strings_do_not_end_the_object(self):
        """Given a closing brace inside a string value, should not cut there."""
        # Given
        text = '{"reasoning": "uses } and \\" inside"} trailing words'

        # When
        result = extract_json(text)

        # Then
        assert json.loads(result) == {"reasoning": 'uses } and " inside'}

    def test_text_without_brackets_is_returned_unchanged(self):
        """Given no JSON at all, should return the input."""
        text = "I could not come up with anything."
        assert extract_json(text) == text

    def test_unrecoverable_truncation_returns_input(self):
        """Given an object cut off mid-string, should return the input."""
        text = '{"suggestions": ["feat: add login"], "reasoning": "cut off he'
        assert extract_json(text) == text

    def test_array_followed_by_one_character_is_recovered(self):
        """Given an array with a single stray character after it, should drop the character."""
        assert json.loads(extract_json("[1, 2]x")) == [1, 2]

    def test_truncation_scan_recovers_what_nesting_scan_misses(self):
        """Given a single-quoted brace the nesting scan miscounts, should still recover the object."""
        # Given
        text = "{'a': '}'} and more"

        # When
        result = extract_json(text)

        # Then
        assert json.loads(result) == {"a": "}"}

    def test_truncation_window_includes_its_last_offset(self):
        """Given the object ending exactly at the window edge, should recover it; one further, should not."""
        # Given
        obj = "{'a': '}'}"
        at_edge = obj + "x" * TRUNCATION_WINDOW
        past_edge = obj + "x" * (TRUNCATION_WINDOW + 1)

        # Then
        assert json.loads(extract_json(at_edge)) == {"a": "}"}
        assert extract_json(past_edge) == past_edge

    def test_long_unterminated_string_fails_fast(self):
        """Given a few KB cut off inside a string, should give up quickly."""
        # Given
        text = '{"suggestions": ["feat: a"], "reasoning": "' + "word " * 600

        # When
        started = time.monotonic()
        result = extract_json(text)
        elapsed = time.monotonic() - started

        # Then
        assert result == text
        assert elapsed < 2.0


class TestHelpers:
    """Tests for the individual recovery steps."""

    def test_strip_code_fence_without_fence_is_identity(self):
        assert strip_code_fence('{"a": 1}') == '{"a": 1}'

    def test_strip_assignment_without_assignment_is_identity(self):
        assert strip_assignment('{"a": 1}') == '{"a": 1}'

    def test_slice_from_first_bracket_prefers_earliest(self):
        assert slice_from_first_bracket('x [1, {"a": 2}]') == '[1, {"a": 2}]'
        assert slice_from_first_bracket("nothing here") is None

    def test_balanced_end_offsets_reports_each_top_level_close(self):
        """Given two objects in a row, should report both end offsets."""
        assert balanced_end_offsets('{"a": {}} {"b": 1}') == [9, 18]
