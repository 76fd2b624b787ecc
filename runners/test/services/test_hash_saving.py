from __future__ import annotations

from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.git.repository import GitError, GitIdentity
from runners.output.console import MockConsole
from runners.services.publish.hash_saving import HashSaver


class FakeRepository:
    def __init__(
        self,
        path: Path,
        *,
        staged: bool = True,
        fail: str | None = None,
    ) -> None:
        self.path = path
        self.calls: list[tuple[object, ...]] = []
        self._staged = staged
        self._fail = fail

    def _result(self, name: str) -> Result[None, GitError]:
        if self._fail == name:
            return Err(GitError(command=name, message=f"{name} rejected"))
        return Ok(None)

    def add_all(self, paths: list[Path] | None = None) -> Result[None, GitError]:
        self.calls.append(("add",))
        return self._result("add")

    def has_staged_changes(self) -> Result[bool, GitError]:
        self.calls.append(("diff",))
        return Ok(self._staged)

    def commit(self, message: str, *, identity: GitIdentity) -> Result[None, GitError]:
        self.calls.append(("commit", message, identity))
        return self._result("commit")

    def push(self, *, username: str | None, token: str) -> Result[None, GitError]:
        self.calls.append(("push", username, token))
        return self._result("push")


def _saver(repo: FakeRepository) -> HashSaver:
    return HashSaver(
        console=MockConsole(),
        repository_factory=lambda _path: repo,  # type: ignore[arg-type,return-value]
    )


def _clone(tmp_path: Path) -> Path:
    clone = tmp_path / "clone"
    (clone / "src" / "Resources").mkdir(parents=True)
    return clone


def test_without_clearing_keeps_resources(tmp_path: Path) -> None:
    clone = _clone(tmp_path)
    resource = clone / "src" / "Resources" / "data.json"
    resource.write_text("{}", encoding="utf-8")
    repo = FakeRepository(clone)

    result = _saver(repo).save_hash_without_clearing_resources(
        clone, "abc", "hash.txt", "Bot", "bot@example.com", "tok"
    )

    assert isinstance(result, Ok)
    assert (clone / "hash.txt").read_text(encoding="utf-8") == "abc"
    assert resource.exists()
    assert repo.calls == [
        ("add",),
        ("diff",),
        ("commit", "Automated update", GitIdentity("Bot", "bot@example.com")),
        ("push", None, "tok"),
    ]


def test_as_file_removes_resource_and_pushes_with_username(tmp_path: Path) -> None:
    clone = _clone(tmp_path)
    resource = clone / "src" / "Resources" / "data.json"
    resource.write_text("{}", encoding="utf-8")
    repo = FakeRepository(clone)

    result = _saver(repo).save_hash_as_file(
        clone, "abc", "data.json", "hash.txt", "Bot", "bot@example.com", "acme", "tok"
    )

    assert isinstance(result, Ok)
    assert not resource.exists()
    assert (clone / "hash.txt").read_text(encoding="utf-8") == "abc"
    assert repo.calls[-1] == ("push", "acme", "tok")


def test_as_directory_empties_target(tmp_path: Path) -> None:
    clone = _clone(tmp_path)
    target = clone / "src" / "Resources" / "Data"
    (target / "nested").mkdir(parents=True)
    (target / "a.txt").write_text("a", encoding="utf-8")
    (target / "nested" / "b.txt").write_text("b", encoding="utf-8")
    repo = FakeRepository(clone)

    result = _saver(repo).save_hash_as_directory(
        clone, "abc", target, "hash.txt", "Bot", "bot@example.com", "acme", "tok"
    )

    assert isinstance(result, Ok)
    assert target.is_dir()
    assert list(target.iterdir()) == []


def test_nothing_staged_skips_commit_and_push(tmp_path: Path) -> None:
    clone = _clone(tmp_path)
    repo = FakeRepository(clone, staged=False)

    result = _saver(repo).save_hash_without_clearing_resources(
        clone, "abc", "hash.txt", "Bot", "bot@example.com", "tok"
    )

    assert isinstance(result, Ok)
    assert repo.calls == [("add",), ("diff",)]


def test_push_failure_is_git_failed(tmp_path: Path) -> None:
    clone = _clone(tmp_path)
    repo = FakeRepository(clone, fail="push")

    result = _saver(repo).save_hash_as_file(
        clone, "abc", "data.json", "hash.txt", "Bot", "bot@example.com", "acme", "tok"
    )

    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert result.error.message == "git push failed"
    assert result.error.hint == "push rejected"
