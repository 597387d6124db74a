"""Tests for reading and validating the run configuration."""

import json

import pytest

from title_agent.config import ActionConfig, ConfigurationError
from title_agent.models import DEFAULT_TYPES, OperationMode, ValidationOptions


BASE_ENV = {
    "INPUT_GITHUB-TOKEN": "ghp_test",
    "GITHUB_REPOSITORY": "octo/app",
    "PR_NUMBER": "12",
}


class TestFromEnv:
    """Tests for building config from action inputs."""

    def test_defaults(self):
        """Given only the required inputs, should use documented defaults."""
        # When
        config = ActionConfig.from_env(dict(BASE_ENV))

        # Then
        assert config.github_token == "ghp_test"
        assert config.repo == "octo/app"
        assert config.pr_number == 12
        assert config.mode is OperationMode.SUGGEST
        assert config.validation_options == ValidationOptions()
        assert config.validation_options.allowed_types == DEFAULT_TYPES
        assert config.max_retries == 3
        assert config.skip_if_conventional is False

    def test_inputs_are_read_with_hyphens_or_underscores(self):
        """Given inputs in both spellings, should read all of them."""
        # Given
        env = dict(
            BASE_ENV,
            **{
                "INPUT_MODE": "AUTO",
                "INPUT_ALLOWED-TYPES": "feat, fix ,chore",
                "INPUT_MAX_LENGTH": "50",
                "INPUT_REQUIRE-SCOPE": "true",
                "INPUT_SKIP_IF_CONVENTIONAL": "yes",
                "INPUT_MATCH-LANGUAGE": "false",
            },
        )

        # When
        config = ActionConfig.from_env(env)

        # Then
        assert config.mode is OperationMode.AUTO
        assert config.validation_options.allowed_types == ("feat", "fix", "chore")
        assert config.validation_options.max_length == 50
        assert config.validation_options.require_scope is True
        assert config.skip_if_conventional is True
        assert config.match_language is False

    def test_unknown_mode_falls_back_to_suggest(self):
        config = ActionConfig.from_env(dict(BASE_ENV, INPUT_MODE="yolo"))

        assert config.mode is OperationMode.SUGGEST

    def test_unparseable_numbers_keep_defaults(self):
        config = ActionConfig.from_env(dict(BASE_ENV, **{"INPUT_MAX-RETRIES": "many"}))

        assert config.max_retries == 3

    def test_pr_number_from_event_payload(self, tmp_path):
        """Given no PR_NUMBER, should read it from the event file."""
        # Given
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps({"pull_request": {"number": 42}}))
        env = {"GITHUB_REPOSITORY": "octo/app", "GITHUB_EVENT_PATH": str(event_path)}

        # When
        config = ActionConfig.from_env(env)

        # Then
        assert config.pr_number == 42

    def test_generation_options_follow_validation_rules(self):
        # Given
        config = ActionConfig.from_env(dict(BASE_ENV, **{
            "INPUT_ALLOWED-TYPES": "fix,docs",
            "INPUT_INCLUDE-SCOPE": "true",
        }))

        # When
        options = config.generation_options()

        # Then
        assert options.preferred_types == ("fix", "docs")
        assert options.include_scope is True
        assert options.max_length == 72


class TestValidate:
    """Tests for rejecting unusable configuration up front."""

    def test_valid_config_passes(self):
        ActionConfig.from_env(dict(BASE_ENV)).validate()

    def test_all_problems_are_reported_together(self):
        """Given several problems, should list each of them."""
        # Given
        config = ActionConfig(
            validation_options=ValidationOptions(allowed_types=(), max_length=5),
        )

        # When/Then
        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        fields = [issue.field for issue in exc_info.value.issues]
        assert fields == ["github-token", "repository", "pr-number", "allowed-types", "max-length"]
        assert str(exc_info.value).startswith("Configuration errors:\n- github-token:")

    def test_github_settings_are_optional_for_local_checks(self):
        ActionConfig().validate(require_github=False)

    def test_blank_allowed_types_input_is_rejected(self):
        config = ActionConfig.from_env(dict(BASE_ENV, **{"INPUT_ALLOWED-TYPES": " , "}))

        with pytest.raises(ConfigurationError, match="allowed-types"):
            config.validate()
