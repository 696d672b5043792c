# pyright: reportAny=false, reportUnknownArgumentType=false
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from gitsource.config import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from gitsource.exceptions import ConfigLoadError


class TestReadTomlFile:
    def test_parses_valid_toml(self, fs: FakeFilesystem) -> None:
        content = """
[fetch]
default_branch = "main"
timeout = 30
"""
        path = Path("/etc/gitsource.toml")
        fs.create_file(path, contents=content)

        result = read_toml_file(path)

        assert result == {"fetch": {"default_branch": "main", "timeout": 30}}

    def test_raises_file_not_found_for_missing_file(self, fs: FakeFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            _ = read_toml_file(Path("/etc/missing.toml"))

    def test_raises_config_load_error_for_invalid_toml(self, fs: FakeFilesystem) -> None:
        path = Path("/etc/invalid.toml")
        fs.create_file(path, contents="[fetch\ndefault_branch = 1\n")

        with pytest.raises(ConfigLoadError, match="Failed to parse TOML file") as exc_info:
            _ = read_toml_file(path)

        assert exc_info.value.path == path
        assert exc_info.value.__cause__ is not None


class TestDeepMerge:
    def test_merges_nested_tables(self) -> None:
        base = {"fetch": {"default_branch": "master", "timeout": 10}}
        override = {"fetch": {"timeout": 30}}

        assert deep_merge(base, override) == {
            "fetch": {"default_branch": "master", "timeout": 30}
        }

    def test_override_replaces_scalars_and_lists(self) -> None:
        base = {"a": 1, "b": [1, 2]}
        override = {"a": 2, "b": [3]}

        assert deep_merge(base, override) == {"a": 2, "b": [3]}

    def test_type_mismatch_override_wins(self) -> None:
        assert deep_merge({"a": {"x": 1}}, {"a": "flat"}) == {"a": "flat"}

    def test_does_not_modify_inputs(self) -> None:
        base = {"fetch": {"timeout": 10}}
        override = {"fetch": {"root": "/srv"}}

        merged = deep_merge(base, override)
        merged["fetch"]["timeout"] = 99

        assert base == {"fetch": {"timeout": 10}}
        assert override == {"fetch": {"root": "/srv"}}


class TestCopyValue:
    def test_copies_nested_containers(self) -> None:
        original = {"a": [{"b": 1}]}

        copied = copy_value(original)
        copied["a"][0]["b"] = 2

        assert original == {"a": [{"b": 1}]}


class TestParseEnvVars:
    def test_maps_nested_keys(self) -> None:
        environ = {
            "GITSOURCE_FETCH__DEFAULT_BRANCH": "main",
            "GITSOURCE_FETCH__TIMEOUT": "30",
            "GITSOURCE_LOGGING__LEVEL": "debug",
            "HOME": "/root",
        }

        result = parse_env_vars("GITSOURCE_", environ)

        assert result == {
            "fetch": {"default_branch": "main", "timeout": "30"},
            "logging": {"level": "debug"},
        }

    def test_ignores_bare_prefix(self) -> None:
        assert parse_env_vars("GITSOURCE_", {"GITSOURCE_": "x"}) == {}

    def test_reads_process_environment_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITSOURCE_FETCH__ROOT", "/srv/git")

        assert parse_env_vars("GITSOURCE_")["fetch"] == {"root": "/srv/git"}


class TestSetNestedKey:
    def test_creates_intermediate_tables(self) -> None:
        d: dict[str, object] = {}

        set_nested_key(d, "a.b.c", 1)

        assert d == {"a": {"b": {"c": 1}}}

    def test_replaces_non_table_in_the_way(self) -> None:
        d: dict[str, object] = {"a": 1}

        set_nested_key(d, "a.b", 2)

        assert d == {"a": {"b": 2}}
