"""CLI commands, run in-process through the dispatcher."""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
import yaml

from compositor.cli._dispatcher import discover_commands
from compositor.cli._dispatcher import main as cli_main


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "compositor.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "compositor": {
                    "basename": "Cli::Class",
                    "post_transforms": ["strict_constructor"],
                    "prefix_map": {"": "helpers.roles.", "=": ""},
                }
            }
        ),
        encoding="utf-8",
    )
    return path


def test_commands_are_discovered() -> None:
    assert set(discover_commands()) >= {"compose", "config", "key"}


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main([]) == 0
    assert "compose" in capsys.readouterr().out


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli_main(["--version"])
    assert exc_info.value.code == 0
    assert "1.0.0" in capsys.readouterr().out


class TestCompose:
    def test_text_output(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli_main(["compose", "--config", str(config_file), "PieEater", "ContestWinner"])
        out = capsys.readouterr().out.splitlines()

        assert code == 0
        assert out[0] == "Cli::Class::PieEater::ContestWinner"
        assert "  roles: PieEater, ContestWinner" in out
        assert "  attribute pie_type: required, ro" in out

    def test_json_output(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli_main(["compose", "--config", str(config_file), "--json", "PieEater"])
        payload = json.loads(capsys.readouterr().out)

        assert code == 0
        assert payload["status"] == "success"
        assert payload["class"] == "Cli::Class::PieEater"
        assert payload["key"] == "PieEater"
        assert payload["roles"] == ["PieEater"]
        assert payload["attributes"] == {"pie_type": {"required": True, "readonly": True}}
        assert payload["transforms"] == ["strict_constructor"]

    def test_basename_override(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli_main(["compose", "--config", str(config_file), "--basename", "Other", "Foo"])
        assert code == 0
        assert capsys.readouterr().out.splitlines()[0] == "Other::Foo"

    def test_request_file(self, config_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        request = tmp_path / "request.yaml"
        request.write_text(
            yaml.safe_dump(["Foo", {"role": "Counter", "moniker": "=hits", "parameters": {"name": "hits"}}]),
            encoding="utf-8",
        )

        code = cli_main(["compose", "--config", str(config_file), "--request", str(request), "--json"])
        payload = json.loads(capsys.readouterr().out)

        assert code == 0
        assert payload["class"] == "Cli::Class::Foo::hits"
        assert payload["roles"] == ["Foo", "Counter[=hits]"]

    def test_import_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "path", list(sys.path))
        roles_dir = tmp_path / "roles_src"
        roles_dir.mkdir()
        (roles_dir / "cli_import_path_roles.py").write_text(
            "from compositor.core.roles import Role\n\n\nclass Waver(Role):\n    def wave(self):\n        return 'o/'\n",
            encoding="utf-8",
        )

        code = cli_main(
            ["compose", "--basename", "Ext", "--import-path", str(roles_dir), "cli_import_path_roles.Waver"]
        )

        assert code == 0
        assert capsys.readouterr().out.splitlines()[0] == "Ext::cli_import_path_roles::Waver"

    def test_missing_role(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli_main(["compose", "--config", str(config_file), "NoSuchRole"])
        assert code == 1
        assert "Cannot load role 'helpers.roles.NoSuchRole'" in capsys.readouterr().err

    def test_conflict_as_json(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli_main(["compose", "--config", str(config_file), "--json", "Greeter", "Shouter"])
        payload = json.loads(capsys.readouterr().err)

        assert code == 1
        assert payload["status"] == "error"
        assert payload["code"] == "CompositionConflictError"
        assert payload["context"]["member"] == "greet"

    def test_bad_request_file(self, config_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        request = tmp_path / "request.yaml"
        request.write_text(yaml.safe_dump({"not": "a list"}), encoding="utf-8")
        code = cli_main(["compose", "--config", str(config_file), "--request", str(request)])
        assert code == 1
        assert "must contain a list" in capsys.readouterr().err

    def test_profile_summary(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli_main(["--profile", "compose", "--config", str(config_file), "Foo"])
        err = capsys.readouterr().err
        assert code == 0
        assert "profile (ms):" in err
        assert "compositor.compose" in err


class TestKey:
    def test_key_is_order_insensitive(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main(["key", "B", "A"]) == 0
        assert capsys.readouterr().out.strip() == "A; B"

    def test_key_json_does_not_load_roles(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main(["key", "--json", "Nowhere.To.Be.Found"]) == 0
        assert json.loads(capsys.readouterr().out) == {"status": "success", "key": "Nowhere.To.Be.Found"}

    def test_key_from_request_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        request = tmp_path / "request.yaml"
        request.write_text(
            yaml.safe_dump([{"role": "Counter", "parameters": {"start": 1, "name": "x"}}]),
            encoding="utf-8",
        )
        assert cli_main(["key", "--request", str(request)]) == 0
        assert capsys.readouterr().out.strip() == "Counter : { name => x, start => 1 }"


class TestConfig:
    def test_show_value(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main(["config", "compositor.basename"]) == 0
        assert capsys.readouterr().out.strip() == "Compositor::Class"

    def test_show_merged_json(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main(["config", "--config", str(config_file), "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["config"]["compositor"]["basename"] == "Cli::Class"

    def test_unknown_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli_main(["config", "compositor.nope"]) == 1
        assert "Unknown configuration key" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("compositor:\n  basename: 'bad name'\n", encoding="utf-8")
        assert cli_main(["config", "--config", str(path)]) == 1
        assert "Invalid compositor configuration" in capsys.readouterr().err
