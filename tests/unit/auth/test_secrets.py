from pathlib import Path

import pytest

from gitsource.auth import GitSecrets, read_secret
from gitsource.exceptions import AuthResolutionError


class TestReadSecret:
    def test_reads_direct_variable(self) -> None:
        assert read_secret({"GIT_HTTP_TOKEN": "abc"}, "GIT_HTTP_TOKEN") == "abc"

    def test_unset_returns_none(self) -> None:
        assert read_secret({}, "GIT_HTTP_TOKEN") is None

    def test_empty_value_returns_none(self) -> None:
        assert read_secret({"GIT_HTTP_TOKEN": ""}, "GIT_HTTP_TOKEN") is None

    def test_reads_file_variant(self, tmp_path: Path) -> None:
        secret_file = tmp_path / "token"
        secret_file.write_text("from-file\n")

        value = read_secret({"GIT_HTTP_TOKEN_FILE": str(secret_file)}, "GIT_HTTP_TOKEN")

        assert value == "from-file"

    def test_direct_variable_wins_over_file(self, tmp_path: Path) -> None:
        secret_file = tmp_path / "token"
        secret_file.write_text("from-file")
        environ = {"GIT_HTTP_TOKEN": "direct", "GIT_HTTP_TOKEN_FILE": str(secret_file)}

        assert read_secret(environ, "GIT_HTTP_TOKEN") == "direct"

    def test_unreadable_file_raises(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing"

        with pytest.raises(AuthResolutionError, match="GIT_HTTP_TOKEN_FILE") as exc_info:
            _ = read_secret({"GIT_HTTP_TOKEN_FILE": str(missing)}, "GIT_HTTP_TOKEN")

        assert isinstance(exc_info.value.cause, OSError)

    def test_file_with_only_newline_returns_none(self, tmp_path: Path) -> None:
        secret_file = tmp_path / "token"
        secret_file.write_text("\n")

        assert read_secret({"GIT_HTTP_TOKEN_FILE": str(secret_file)}, "GIT_HTTP_TOKEN") is None


class TestGitSecrets:
    def test_from_env_reads_all_secrets(self) -> None:
        secrets = GitSecrets.from_env(
            {
                "GIT_HTTP_PASSWORD": "pw",
                "GIT_HTTP_TOKEN": "tok",
                "GIT_SSH_KEY": "key",
            }
        )

        assert secrets.http_password is not None
        assert secrets.http_password.get_secret_value() == "pw"
        assert secrets.http_token is not None
        assert secrets.http_token.get_secret_value() == "tok"
        assert secrets.ssh_key is not None
        assert secrets.ssh_key.get_secret_value() == "key"

    def test_from_env_defaults_to_process_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GIT_HTTP_TOKEN", "from-process")

        secrets = GitSecrets.from_env()

        assert secrets.http_token is not None
        assert secrets.http_token.get_secret_value() == "from-process"

    def test_empty_environment_has_no_secrets(self) -> None:
        secrets = GitSecrets.from_env({})

        assert secrets.http_password is None
        assert secrets.http_token is None
        assert secrets.ssh_key is None

    def test_repr_hides_secret_values(self) -> None:
        secrets = GitSecrets.from_env({"GIT_HTTP_PASSWORD": "hunter2"})

        assert "hunter2" not in repr(secrets)
