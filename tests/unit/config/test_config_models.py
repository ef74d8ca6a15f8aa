"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from gitscribe.config import (
    DEFAULT_DIRECTORY_MODE,
    DEFAULT_FILE_MODE,
    GitScribeConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    parse_mode,
)


class TestParseMode:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0o644, 0o644),
            ("0644", 0o644),
            ("644", 0o644),
            ("0o755", 0o755),
            (" 0O700 ", 0o700),
            (0, 0),
            ("7777", 0o7777),
        ],
    )
    def test_accepts_ints_and_octal_strings(self, value: object, expected: int) -> None:
        assert parse_mode(value) == expected

    @pytest.mark.parametrize("value", ["0999", "rw-r--r--", "", 0o10000, -1])
    def test_rejects_invalid_modes(self, value: object) -> None:
        with pytest.raises(ValueError):  # noqa: PT011
            parse_mode(value)

    @pytest.mark.parametrize("value", [True, 6.44, None])
    def test_rejects_other_types(self, value: object) -> None:
        with pytest.raises(ValueError, match="integer or octal string"):
            parse_mode(value)


class TestLoggingConfig:
    def test_defaults(self) -> None:
        config = LoggingConfig()

        assert config.level == LogLevel.WARNING
        assert config.format == LogFormat.JSON
        assert config.file == ""

    def test_is_frozen(self) -> None:
        config = LoggingConfig()
        with pytest.raises(ValidationError):
            config.level = LogLevel.DEBUG  # pyright: ignore[reportAttributeAccessIssue]


class TestGitScribeConfig:
    def test_defaults(self) -> None:
        config = GitScribeConfig()

        assert config.file_mode == DEFAULT_FILE_MODE
        assert config.directory_mode == DEFAULT_DIRECTORY_MODE
        assert config.author is None
        assert config.git_binary == "git"
        assert config.logging == LoggingConfig()

    def test_modes_accept_octal_strings(self) -> None:
        config = GitScribeConfig.model_validate(
            {"file_mode": "0600", "directory_mode": "0700"}
        )

        assert config.file_mode == 0o600
        assert config.directory_mode == 0o700

    def test_mode_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GitScribeConfig.model_validate({"file_mode": 0o17777})

        assert exc_info.value.errors()[0]["loc"] == ("file_mode",)

    def test_author_is_stripped(self) -> None:
        config = GitScribeConfig(author="  Jo Doe <jo@example.com> ")

        assert config.author == "Jo Doe <jo@example.com>"

    def test_blank_author_is_none(self) -> None:
        assert GitScribeConfig(author="   ").author is None

    @pytest.mark.parametrize("author", ["Jo Doe", "<jo@example.com>", "Jo <a> <b>"])
    def test_malformed_author_rejected(self, author: str) -> None:
        with pytest.raises(ValidationError):
            GitScribeConfig(author=author)

    def test_empty_git_binary_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GitScribeConfig(git_binary="")

    def test_unknown_keys_ignored(self) -> None:
        config = GitScribeConfig.model_validate({"unknown": 1, "logging": {"x": 2}})

        assert not hasattr(config, "unknown")

    def test_nested_logging_section(self) -> None:
        config = GitScribeConfig.model_validate(
            {"logging": {"level": "debug", "format": "text", "file": "/tmp/g.log"}}
        )

        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.TEXT
        assert config.logging.file == "/tmp/g.log"
