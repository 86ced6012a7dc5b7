"""Tests for tag-file generation."""

from __future__ import annotations

from pathlib import Path

from stagelint.config import TagsConfig
from stagelint.tags import TagsGenerator
from tests._fixtures.fake_git import FakeGit, failing


def _config(tmp_path: Path, **overrides) -> TagsConfig:  # type: ignore[no-untyped-def]
    values = {"roots": [str(tmp_path / "src")], "options_file": str(tmp_path / "etc" / "ctags.options")}
    values.update(overrides)
    return TagsConfig(**values)


def test_write_options_renders_one_option_per_line(tmp_path: Path) -> None:
    config = _config(tmp_path, languages=["Perl", "Python"], exclude=[".git", "local"], extra_options=["--fields=+n"])

    path = TagsGenerator(config).write_options()

    assert path == tmp_path / "etc" / "ctags.options"
    assert path.read_text(encoding="utf-8").splitlines() == [
        "--recurse=yes",
        "--languages=Perl,Python",
        "--exclude=.git",
        "--exclude=local",
        "--fields=+n",
    ]


def test_enumerate_projects_lists_visible_directories(tmp_path: Path) -> None:
    src = tmp_path / "src"
    for name in ("zeta", "alpha", ".cache"):
        (src / name).mkdir(parents=True)
    (src / "notes.txt").write_text("x", encoding="utf-8")
    config = _config(tmp_path, roots=[str(src), str(tmp_path / "missing")])

    projects = TagsGenerator(config).enumerate_projects()

    assert projects == [src / "alpha", src / "zeta"]


def test_generate_runs_ctags_per_project(tmp_path: Path) -> None:
    src = tmp_path / "src"
    (src / "app").mkdir(parents=True)
    (src / "lib").mkdir()
    fake = FakeGit(tmp_path)

    outcomes = TagsGenerator(_config(tmp_path), runner=fake).generate()

    assert [outcome.ok for outcome in outcomes] == [True, True]
    calls = fake.calls_to("ctags")
    assert [call.cwd for call in calls] == [src / "app", src / "lib"]
    assert calls[0].args == [
        "ctags",
        f"--options={tmp_path / 'etc' / 'ctags.options'}",
        "-f",
        str(src / "app" / "tags"),
        ".",
    ]


def test_generate_continues_after_failure(tmp_path: Path) -> None:
    src = tmp_path / "src"
    (src / "broken").mkdir(parents=True)
    (src / "fine").mkdir()
    fake = FakeGit(tmp_path)
    fake.tool("ctags", lambda args, input: failing("ctags: Warning: cannot open\n") if "broken" in args[3] else failing("", 0))

    outcomes = TagsGenerator(_config(tmp_path), runner=fake).generate()

    assert [(outcome.project.name, outcome.ok) for outcome in outcomes] == [("broken", False), ("fine", True)]
    assert "cannot open" in outcomes[0].detail


def test_generate_reports_missing_ctags(tmp_path: Path) -> None:
    (tmp_path / "src" / "app").mkdir(parents=True)
    fake = FakeGit(tmp_path)
    fake.missing_tools.add("ctags")

    outcomes = TagsGenerator(_config(tmp_path), runner=fake).generate()

    assert not outcomes[0].ok
    assert outcomes[0].detail == "cannot run ctags: command not found"
