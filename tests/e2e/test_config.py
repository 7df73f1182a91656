"""End-to-end scenarios for ``config``: cascade, precedence, purge, and failures."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lib_dotenv_flow import ConfigOptions, FileAccessError, NoFilesFound, PatternMisuse, config
from tests.support import MemoryFileSystem, create_dotenv_sandbox


def _options(sandbox, **fields) -> ConfigOptions:
    return ConfigOptions(path=str(sandbox.root), **fields)


def test_local_overrides_base(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env": "A=1\n", ".env.local": "A=2\nB=3\n"})
    result = config(_options(sandbox), store=sandbox.store)
    assert result.parsed == {"A": "2", "B": "3"}
    assert sandbox.store == {"A": "2", "B": "3"}
    assert result.files == (sandbox.path(".env"), sandbox.path(".env.local"))


def test_test_environment_ignores_local(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env": "A=1\n", ".env.local": "A=2\nB=3\n"})
    result = config(_options(sandbox, node_env="test"), store=sandbox.store)
    assert result.parsed == {"A": "1"}
    assert sandbox.store == {"A": "1"}


def test_full_cascade_precedence(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(
        tmp_path,
        {
            ".env.defaults": "A=defaults\nB=defaults\nC=defaults\nD=defaults\nE=defaults\n",
            ".env": "B=base\nC=base\nD=base\nE=base\n",
            ".env.local": "C=local\nD=local\nE=local\n",
            ".env.production": "D=production\nE=production\n",
            ".env.production.local": "E=production-local\n",
        },
    )
    result = config(_options(sandbox, node_env="production"), store=sandbox.store)
    assert result.parsed == {
        "A": "defaults",
        "B": "base",
        "C": "local",
        "D": "production",
        "E": "production-local",
    }


def test_predefined_variable_wins(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env": "A=1\nB=2\n"}, store={"A": "shell-value"})
    result = config(_options(sandbox, silent=True), store=sandbox.store)
    assert result.parsed == {"A": "1", "B": "2"}
    assert result.skipped == ("A",)
    assert sandbox.store == {"A": "shell-value", "B": "2"}


def test_purge_reapplies_cascade_precedence(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env": "A=1\n", ".env.local": "A=2\n"}, store={"A": "1"})
    result = config(_options(sandbox, purge_dotenv=True), store=sandbox.store)
    assert result.ok
    assert sandbox.store["A"] == "2"


def test_without_purge_stale_value_stays(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env": "A=1\n", ".env.local": "A=2\n"}, store={"A": "1"})
    config(_options(sandbox, silent=True), store=sandbox.store)
    assert sandbox.store["A"] == "1"


def test_purge_failure_is_returned_immediately() -> None:
    fs = MemoryFileSystem({"/p/.env.local": "A=2\n"}, unreadable=("/p/.env",))
    store = {"A": "1"}
    result = config(ConfigOptions(path="/p", purge_dotenv=True), store=store, filesystem=fs)
    assert isinstance(result.error, FileAccessError)
    assert fs.reads == ["/p/.env"]
    assert store == {"A": "1"}


def test_no_files_found_reports_path_and_pattern(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="lib_dotenv_flow")
    store = {"KEEP": "me"}
    result = config(ConfigOptions(path=str(tmp_path), node_env="development"), store=store)
    assert isinstance(result.error, NoFilesFound)
    message = str(result.error)
    assert str(tmp_path) in message
    assert ".env[.development][.local]" in message
    assert store == {"KEEP": "me"}
    assert any(record.message == "no_files_found" for record in caplog.records)


def test_no_files_found_without_node_env_keeps_raw_pattern(tmp_path: Path) -> None:
    result = config(ConfigOptions(path=str(tmp_path), silent=True), store={})
    assert '".env[.node_env][.local]"' in str(result.error)


def test_read_failure_leaves_store_untouched() -> None:
    fs = MemoryFileSystem({"/p/.env": "A=1\n"}, unreadable=("/p/.env.local",))
    store: dict[str, str] = {}
    result = config(ConfigOptions(path="/p"), store=store, filesystem=fs)
    assert isinstance(result.error, FileAccessError)
    assert store == {}


def test_node_env_option_beats_store_indicator(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(
        tmp_path,
        {".env.production": "MODE=production\n", ".env.staging": "MODE=staging\n"},
        store={"NODE_ENV": "staging"},
    )
    result = config(_options(sandbox, node_env="production"), store=sandbox.store)
    assert result.parsed == {"MODE": "production"}


def test_store_indicator_beats_default(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(
        tmp_path,
        {".env.production": "MODE=production\n", ".env.staging": "MODE=staging\n"},
        store={"NODE_ENV": "staging"},
    )
    result = config(_options(sandbox, default_node_env="production"), store=sandbox.store)
    assert result.parsed == {"MODE": "staging"}


def test_default_node_env_is_the_last_fallback(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env.production": "MODE=production\n"})
    result = config(_options(sandbox, default_node_env="production"), store=sandbox.store)
    assert result.parsed == {"MODE": "production"}


def test_explicit_files_bypass_cascade(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(
        tmp_path,
        {".env": "A=base\n", "custom/first.env": "A=first\nB=first\n", "second.env": "B=second\n"},
    )
    result = config(
        _options(sandbox, node_env="test", files=("custom/first.env", "second.env")),
        store=sandbox.store,
    )
    assert result.parsed == {"A": "first", "B": "second"}
    assert result.files == (sandbox.path("custom/first.env"), sandbox.path("second.env"))


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    result = config(ConfigOptions(path=str(tmp_path), files=("nope.env",)), store={})
    assert isinstance(result.error, FileAccessError)


def test_empty_explicit_file_list_is_no_files_found(tmp_path: Path) -> None:
    result = config(ConfigOptions(path=str(tmp_path), files=(), silent=True), store={})
    assert isinstance(result.error, NoFilesFound)


def test_custom_pattern(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(
        tmp_path,
        {"config/app.env": "A=base\n", "config/app.staging.env": "A=staging\n"},
    )
    result = config(_options(sandbox, pattern="config/app[.node_env].env", node_env="staging"), store=sandbox.store)
    assert result.parsed == {"A": "staging"}


def test_malformed_pattern_propagates(tmp_path: Path) -> None:
    with pytest.raises(PatternMisuse):
        config(ConfigOptions(path=str(tmp_path), pattern=".env[.local"), store={})


def test_defaults_to_current_directory(tmp_path: Path, monkeypatch) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env": "A=cwd\n"})
    monkeypatch.chdir(sandbox.root)
    assert config(store={}).parsed == {"A": "cwd"}


def test_single_explicit_file_string(tmp_path: Path) -> None:
    sandbox = create_dotenv_sandbox(tmp_path, {".env.custom": "A=1\n"})
    result = config(_options(sandbox, files=".env.custom"), store=sandbox.store)
    assert result.parsed == {"A": "1"}
    assert result.files == (sandbox.path(".env.custom"),)
