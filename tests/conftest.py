"""Shared test fixtures for gitsource tests."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from dulwich.index import commit_tree
from dulwich.objects import Blob, Commit, Tag
from dulwich.repo import BaseRepo, MemoryRepo, Repo
from rich.console import Console

from gitsource.snapshot import TreeFilesystem

AUTHOR = b"John Doe <john@doe.org>"
COMMIT_TIME = 1_700_000_000

_SECRET_VARS = (
    "GIT_HTTP_PASSWORD",
    "GIT_HTTP_PASSWORD_FILE",
    "GIT_HTTP_TOKEN",
    "GIT_HTTP_TOKEN_FILE",
    "GIT_SSH_KEY",
    "GIT_SSH_KEY_FILE",
)


@dataclass(frozen=True, slots=True)
class GitRoot:
    """Paths for the fixture repositories under a fake filesystem root."""

    root: Path
    repo: Path
    bare: Path
    master: bytes
    feature: bytes


# ---------------------------------------------------------------------------
# Helper functions for building repository content
# ---------------------------------------------------------------------------


def commit_files(
    repo: BaseRepo,
    files: dict[str, bytes],
    *,
    ref: bytes = b"refs/heads/master",
    message: bytes = b"initial commit",
) -> bytes:
    """Commit ``files`` straight into the object store and point ``ref`` at it."""
    entries: list[tuple[bytes, bytes, int]] = []
    for path, content in files.items():
        blob = Blob.from_string(content)
        repo.object_store.add_object(blob)
        entries.append((path.encode(), blob.id, 0o100644))

    commit = Commit()
    commit.tree = commit_tree(repo.object_store, entries)
    commit.author = commit.committer = AUTHOR
    commit.author_time = commit.commit_time = COMMIT_TIME
    commit.author_timezone = commit.commit_timezone = 0
    commit.encoding = b"UTF-8"
    commit.message = message
    repo.object_store.add_object(commit)
    repo.refs[ref] = commit.id
    return commit.id


def tag_commit(repo: BaseRepo, name: bytes, commit_id: bytes) -> bytes:
    """Create an annotated tag ``refs/tags/<name>`` for ``commit_id``."""
    tag = Tag()
    tag.name = name
    tag.object = (Commit, commit_id)
    tag.tagger = AUTHOR
    tag.tag_time = COMMIT_TIME
    tag.tag_timezone = 0
    tag.message = b"release " + name
    repo.object_store.add_object(tag)
    repo.refs[b"refs/tags/" + name] = tag.id
    return tag.id


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SECRET_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("GITSOURCE_DEBUG", raising=False)
    monkeypatch.delenv("GITSOURCE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("GITSOURCE_LOGGING__LEVEL", raising=False)
    monkeypatch.delenv("GITSOURCE_FETCH__DEFAULT_BRANCH", raising=False)
    monkeypatch.delenv("GITSOURCE_FETCH__ROOT", raising=False)
    monkeypatch.delenv("GITSOURCE_FETCH__TIMEOUT", raising=False)


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def git_root(tmp_path: Path) -> GitRoot:
    """Create real repositories beneath a directory used as the local root.

    Structure:
        tmp_path/git/
            repo/                   # working copy
                .git/
                foo/bar/hi.txt      # "hello world" on master
            bare.git/               # bare repository
                hello.txt           # "hello world" on master (in the tree)

    The working copy also has a ``feature`` branch, a lightweight tag
    ``v1`` and an annotated tag ``v2``.
    """
    root = tmp_path / "git"
    root.mkdir()

    repo_path = root / "repo"
    with Repo.init(str(repo_path), mkdir=True, default_branch=b"master") as repo:
        hi = repo_path / "foo" / "bar" / "hi.txt"
        hi.parent.mkdir(parents=True)
        hi.write_bytes(b"hello world")
        master = commit_files(repo, {"foo/bar/hi.txt": b"hello world"})
        feature = commit_files(
            repo,
            {"foo/bar/hi.txt": b"hello feature", "extra.txt": b"more"},
            ref=b"refs/heads/feature",
            message=b"feature commit",
        )
        repo.refs[b"refs/tags/v1"] = master
        _ = tag_commit(repo, b"v2", feature)

    bare_path = root / "bare.git"
    with Repo.init_bare(str(bare_path), mkdir=True, default_branch=b"master") as bare:
        _ = commit_files(bare, {"hello.txt": b"hello world"})

    return GitRoot(root=root, repo=repo_path, bare=bare_path, master=master, feature=feature)


@pytest.fixture
def memory_repo() -> MemoryRepo:
    repo = MemoryRepo()
    _ = commit_files(
        repo,
        {
            "foo/bar/hi.txt": b"hello world",
            "foo/baz.json": b'{"a": 1}',
            "top.txt": b"top",
        },
    )
    return repo


@pytest.fixture
def tree_fs(memory_repo: MemoryRepo) -> TreeFilesystem:
    commit = memory_repo[memory_repo.refs[b"refs/heads/master"]]
    assert isinstance(commit, Commit)
    return TreeFilesystem(memory_repo.object_store, commit.tree)
