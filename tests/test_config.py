"""Tests for ralph.lib.config module."""

from pathlib import Path

import pytest

from ralph.lib.config import (
    LoopConfig,
    load_loop_config,
    parse_iterations,
    resolve_config_dir,
)
from ralph.lib.errors import ConfigError


class TestParseIterations:
    """Test parse_iterations precedence and validation."""

    def test_first_valid_wins(self):
        assert parse_iterations("5", "20") == 5

    def test_skips_missing(self):
        assert parse_iterations(None, "", "7") == 7

    def test_default_when_nothing_given(self):
        assert parse_iterations(None, None) == 10

    def test_invalid_falls_through(self, caplog):
        assert parse_iterations("abc", "4") == 4
        assert "Ignoring invalid iteration count 'abc'" in caplog.text

    @pytest.mark.parametrize("value", ["0", "-3"])
    def test_non_positive_falls_through(self, value):
        assert parse_iterations(value) == 10

    @pytest.mark.parametrize("value", ["5abc", "2.5", "1e3"])
    def test_partial_numbers_are_rejected(self, value):
        assert parse_iterations(value, "8") == 8

    def test_invalid_positional_uses_environment(self, tmp_path):
        config = load_loop_config(tmp_path / ".ralph", "abc", environ={"MAX_ITERATIONS": "3"})
        assert config.max_iterations == 3


class TestLoadLoopConfig:
    """Test load_loop_config."""

    def test_defaults(self, tmp_path):
        config = load_loop_config(tmp_path / ".ralph", environ={})
        assert config.agent_command == "claude"
        assert config.max_iterations == 10
        assert config.dry_run is False
        assert config.project_root == tmp_path
        assert config.prd_path == tmp_path / ".ralph" / "prd.json"
        assert config.progress_path.name == "progress.md"
        assert config.prompt_path.name == "prompt.md"

    def test_environment_values(self, tmp_path):
        config = load_loop_config(
            tmp_path / ".ralph",
            environ={
                "AGENT_CMD": "cursor-agent",
                "MAX_ITERATIONS": "3",
                "RALPH_DRY_RUN": "1",
                "LINT_CMD": "ruff check --fix .",
                "TYPECHECK_CMD": "mypy .",
            },
        )
        assert config.agent_command == "cursor-agent"
        assert config.max_iterations == 3
        assert config.dry_run is True
        assert config.lint_command == "ruff check --fix ."
        assert config.typecheck_command == "mypy ."

    def test_positional_beats_environment(self, tmp_path):
        config = load_loop_config(tmp_path / ".ralph", "2", environ={"MAX_ITERATIONS": "9"})
        assert config.max_iterations == 2

    @pytest.mark.parametrize("value", ["true", "yes", "0", ""])
    def test_dry_run_requires_exactly_one(self, tmp_path, value):
        config = load_loop_config(tmp_path / ".ralph", environ={"RALPH_DRY_RUN": value})
        assert config.dry_run is False

    def test_env_file_is_read(self, tmp_path):
        config_dir = tmp_path / ".ralph"
        config_dir.mkdir()
        (config_dir / "ralph.env").write_text(
            '# project defaults\nAGENT_CMD="my-agent"\nMAX_ITERATIONS=4\nRALPH_DRY_RUN=1\n'
        )
        config = load_loop_config(config_dir, environ={})
        assert config.agent_command == "my-agent"
        assert config.max_iterations == 4
        assert config.dry_run is True

    def test_environment_overrides_env_file(self, tmp_path):
        config_dir = tmp_path / ".ralph"
        config_dir.mkdir()
        (config_dir / "ralph.env").write_text("AGENT_CMD=my-agent\nMAX_ITERATIONS=4\n")
        config = load_loop_config(
            config_dir, environ={"AGENT_CMD": "claude", "MAX_ITERATIONS": "6"},
        )
        assert config.agent_command == "claude"
        assert config.max_iterations == 6

    def test_invalid_env_file_raises(self, tmp_path):
        config_dir = tmp_path / ".ralph"
        config_dir.mkdir()
        (config_dir / "ralph.env").write_text("LINT_CMD=lint $(whoami)\n")
        with pytest.raises(ConfigError, match="forbidden"):
            load_loop_config(config_dir, environ={})


class TestResolveConfigDir:
    """Test resolve_config_dir."""

    def test_cli_dir_wins(self, tmp_path):
        result = resolve_config_dir(str(tmp_path / "a"), {"RALPH_DIR": str(tmp_path / "b")})
        assert result == tmp_path / "a"

    def test_env_dir(self, tmp_path):
        assert resolve_config_dir(None, {"RALPH_DIR": str(tmp_path)}) == tmp_path

    def test_default_is_dot_ralph_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_config_dir(None, {}) == tmp_path.resolve() / ".ralph"


class TestLoopConfigDefaults:
    def test_iteration_delay(self, tmp_path):
        assert LoopConfig(config_dir=tmp_path, project_root=tmp_path).iteration_delay == 2.0
