import json
import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

from projnav import __version__
from projnav import config as config_module
from projnav.cli import app


ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


@pytest.fixture(autouse=True)
def temp_config_home(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr("projnav.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("projnav.config.CONFIG_FILE", config_file)
    config_module.save_config(
        config_module.Config(
            marker_file_names=[".git"],
            project_list_file=tmp_path / "state" / "projects.json",
            recent_history_file=tmp_path / "state" / "rank.json",
        )
    )
    return config_file


@pytest.fixture
def project(tmp_path) -> Path:
    root = tmp_path / "work" / "app"
    (root / ".git").mkdir(parents=True)
    (root / "src").mkdir()
    for rel in ("README.md", "src/main.py", "src/util.py"):
        (root / rel).write_text("x", encoding="utf-8")
    return root


def _projects(tmp_path) -> dict:
    return json.loads((tmp_path / "state" / "projects.json").read_text(encoding="utf-8"))


def test_resolve_prints_root(project):
    runner = CliRunner()
    result = runner.invoke(app, ["resolve", str(project / "src" / "main.py")])

    assert result.exit_code == 0
    assert result.stdout.strip() == str(project)


def test_resolve_register_updates_ledger(project, tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["resolve", "--register", str(project / "README.md")])

    assert result.exit_code == 0
    assert _projects(tmp_path) == {"app": str(project)}


def test_resolve_uses_workspace_folder(project, tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        app, ["resolve", "-w", str(project / "src"), str(project / "src" / "util.py")]
    )

    assert result.exit_code == 0
    assert result.stdout.strip() == str(project / "src")


def test_resolve_reports_unknown(tmp_path):
    loose = tmp_path / "loose"
    loose.mkdir()
    (loose / "notes.txt").write_text("x", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["resolve", str(loose / "notes.txt")])

    assert result.exit_code == 1
    assert "Cannot infer" in strip_ansi(result.stdout)


def test_add_list_and_remove(project, tmp_path):
    other = tmp_path / "work" / "lib"
    other.mkdir()
    runner = CliRunner()

    assert runner.invoke(app, ["add", str(project)]).exit_code == 0
    assert runner.invoke(app, ["add", str(other)]).exit_code == 0
    assert list(_projects(tmp_path)) == ["lib", "app"]

    listing = runner.invoke(app, ["list"])
    output = strip_ansi(listing.stdout)
    assert listing.exit_code == 0
    assert output.index("lib") < output.index("app")

    removed = runner.invoke(app, ["remove", "lib"])
    assert removed.exit_code == 0
    assert list(_projects(tmp_path)) == ["app"]

    missing = runner.invoke(app, ["remove", "lib"])
    assert missing.exit_code == 1


def test_add_infers_root(project, tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["add", "--infer", str(project / "src" / "main.py")])

    assert result.exit_code == 0
    assert "Project app added" in strip_ansi(result.stdout)
    assert _projects(tmp_path) == {"app": str(project)}


def test_add_rejects_missing_directory(tmp_path):
    runner = CliRunner()
    result = runner.invoke(app, ["add", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert _projects(tmp_path) == {}


def test_list_without_projects():
    runner = CliRunner()
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "No projects registered yet." in strip_ansi(result.stdout)


def test_open_records_and_files_ranks(project, tmp_path):
    runner = CliRunner()
    opened = runner.invoke(app, ["open", "--no-editor", str(project / "src" / "util.py")])
    assert opened.exit_code == 0
    assert "Recorded" in strip_ansi(opened.stdout)

    rank = json.loads((tmp_path / "state" / "rank.json").read_text(encoding="utf-8"))
    assert rank == {"app": [str(project / "src" / "util.py")]}

    result = runner.invoke(app, ["files", "app", "--porcelain"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        str(project / "src" / "util.py"),
        str(project / "README.md"),
        str(project / "src" / "main.py"),
    ]


def test_open_launches_editor(project, monkeypatch):
    calls = []

    async def fake_open(self, path):
        calls.append(path)

    monkeypatch.setattr("projnav.host.LocalHost.open_file", fake_open)
    runner = CliRunner()

    result = runner.invoke(app, ["open", str(project / "README.md")])

    assert result.exit_code == 0
    assert calls == [str(project / "README.md")]


def test_open_unowned_file_warns(tmp_path):
    loose = tmp_path / "loose"
    loose.mkdir()
    (loose / "notes.txt").write_text("x", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["open", "--no-editor", str(loose / "notes.txt")])

    assert result.exit_code == 0
    assert "nothing recorded" in " ".join(strip_ansi(result.output).split())
    assert not (tmp_path / "state" / "rank.json").exists() or json.loads(
        (tmp_path / "state" / "rank.json").read_text(encoding="utf-8")
    ) == {}


def test_files_from_path_with_excludes(project):
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["files", "--from", str(project / "src"), "--exclude-pattern", "src/", "--porcelain"],
    )

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [str(project / "README.md")]


def test_files_table_and_unknown_project(project):
    runner = CliRunner()
    table = runner.invoke(app, ["files", "--from", str(project)])
    assert table.exit_code == 0
    assert "main.py" in strip_ansi(table.stdout)

    unknown = runner.invoke(app, ["files", "nope"])
    assert unknown.exit_code == 1
    assert "No project named nope." in strip_ansi(unknown.stdout)


def test_browse_lists_like_the_picker(project):
    (project / ".env").write_text("x", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["browse", str(project)])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["src/", "README.md"]

    everything = runner.invoke(app, ["browse", "--all", str(project)])
    assert everything.stdout.splitlines() == [".git/", "src/", ".env", "README.md"]

    dirs = runner.invoke(app, ["browse", "--dirs", str(project)])
    assert dirs.stdout.splitlines() == ["src/"]


def test_browse_rejects_files(project):
    runner = CliRunner()
    result = runner.invoke(app, ["browse", str(project / "README.md")])

    assert result.exit_code == 1


def test_config_markers_and_aliases(temp_config_home):
    runner = CliRunner()

    result = runner.invoke(app, ["config", "--add-marker", "go.mod", "--set-alias", "/mnt=/data"])
    assert result.exit_code == 0
    stored = json.loads(temp_config_home.read_text(encoding="utf-8"))
    assert stored["marker_file_names"] == [".git", "go.mod"]
    assert stored["path_alias_mappings"] == {"/mnt": "/data"}

    result = runner.invoke(app, ["config", "--remove-marker", ".git", "--clear-aliases"])
    assert result.exit_code == 0
    stored = json.loads(temp_config_home.read_text(encoding="utf-8"))
    assert stored["marker_file_names"] == ["go.mod"]
    assert stored["path_alias_mappings"] == {}

    shown = runner.invoke(app, ["config", "--show"])
    assert "Marker files: go.mod" in strip_ansi(shown.stdout)


def test_config_rejects_bad_alias():
    runner = CliRunner()
    result = runner.invoke(app, ["config", "--set-alias", "broken"])

    assert result.exit_code == 1
    assert "SOURCE=TARGET" in strip_ansi(result.stdout)


def test_invalid_config_is_reported(temp_config_home):
    temp_config_home.write_text("{broken", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 1


def test_doctor_passes_with_clean_state():
    runner = CliRunner()
    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 0
    assert "All checks passed." in strip_ansi(result.stdout)
    assert __version__ in result.stdout


def test_doctor_flags_broken_ledger(tmp_path):
    (tmp_path / "state").mkdir()
    (tmp_path / "state" / "projects.json").write_text("[]", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
    assert "Some checks failed." in strip_ansi(result.stdout)


def test_edit_opens_project_list(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr("projnav.cli.resolve_editor_command", lambda: ("myeditor",))
    monkeypatch.setattr(
        "projnav.cli.subprocess.run", lambda cmd, check: calls.append(cmd)
    )
    runner = CliRunner()

    result = runner.invoke(app, ["edit"])

    assert result.exit_code == 0
    assert calls == [["myeditor", str(tmp_path / "state" / "projects.json")]]
    assert (tmp_path / "state" / "projects.json").exists()


def test_edit_without_editor_fails(monkeypatch):
    monkeypatch.setattr("projnav.cli.resolve_editor_command", lambda: None)
    runner = CliRunner()

    result = runner.invoke(app, ["edit"])

    assert result.exit_code == 1


def test_edit_reports_invalid_config(temp_config_home, monkeypatch):
    temp_config_home.write_text("{broken", encoding="utf-8")
    monkeypatch.setattr("projnav.cli.resolve_editor_command", lambda: ("myeditor",))
    runner = CliRunner()

    result = runner.invoke(app, ["edit"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)


def test_config_dir_option_reads_other_directory(tmp_path):
    other = tmp_path / "other-config"
    other.mkdir()
    (other / "config.json").write_text(
        json.dumps({"marker_file_names": ["Cargo.toml"]}), encoding="utf-8"
    )
    runner = CliRunner()

    result = runner.invoke(app, ["--config-dir", str(other), "config", "--show"])

    assert result.exit_code == 0
    assert "Marker files: Cargo.toml" in strip_ansi(result.stdout)
    assert config_module.config_file_path() == tmp_path / "config" / "config.json"


def test_config_dir_option_rejects_files(tmp_path):
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("x", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["--config-dir", str(not_a_dir), "list"])

    assert result.exit_code == 1
