"""Tests for the GitHub Actions step outputs."""

import json

from title_agent.models import ActionTaken, ProcessingResult
from title_agent.tools import build_action_outputs, format_outputs, write_action_outputs


def make_result(**overrides) -> ProcessingResult:
    values = dict(
        is_conventional=False,
        suggestions=("feat: add login page", "feat(auth): add login page"),
        reasoning="Adds a feature",
        action_taken=ActionTaken.COMMENTED,
    )
    values.update(overrides)
    return ProcessingResult(**values)


class TestBuildActionOutputs:
    """Tests for flattening a result into outputs."""

    def test_successful_result(self):
        # When
        outputs = build_action_outputs(make_result(), "Add login page")

        # Then
        assert outputs["is-conventional"] == "false"
        assert json.loads(outputs["suggested-titles"]) == [
            "feat: add login page",
            "feat(auth): add login page",
        ]
        assert outputs["original-title"] == "Add login page"
        assert outputs["action-taken"] == "commented"
        assert "error-message" not in outputs

    def test_error_result_carries_message(self):
        result = make_result(action_taken=ActionTaken.ERROR, error_message="Backend down")

        outputs = build_action_outputs(result, "Add login page")

        assert outputs["action-taken"] == "error"
        assert outputs["error-message"] == "Backend down"


class TestWriteActionOutputs:
    """Tests for the $GITHUB_OUTPUT file format."""

    def test_single_line_values_use_key_value_syntax(self):
        assert format_outputs({"action-taken": "skipped"}) == "action-taken=skipped\n"

    def test_multiline_values_use_heredoc_syntax(self):
        # When
        text = format_outputs({"error-message": "first\nsecond"})

        # Then
        lines = text.splitlines()
        assert lines[0].startswith("error-message<<ghadelimiter_")
        assert lines[1:3] == ["first", "second"]
        assert lines[3] == lines[0].split("<<", 1)[1]

    def test_appends_to_output_file(self, tmp_path):
        # Given
        path = tmp_path / "github_output"
        path.write_text("existing=1\n")

        # When
        written = write_action_outputs({"action-taken": "updated"}, str(path))

        # Then
        assert written is True
        assert path.read_text() == "existing=1\naction-taken=updated\n"

    def test_without_output_file_nothing_is_written(self, monkeypatch):
        monkeypatch.delenv("GITHUB_OUTPUT", raising=False)

        assert write_action_outputs({"action-taken": "updated"}) is False
