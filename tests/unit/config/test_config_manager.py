from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from compositor.core.config import ConfigManager
from compositor.core.exceptions import ConfigurationError
from compositor.core.schemas.validation import SchemaValidationError


def _write(path: Path, data: object) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_bundled_defaults() -> None:
    cfg = ConfigManager(environ={}).load_config()
    assert cfg["compositor"] == {"basename": "Compositor::Class", "post_transforms": [], "prefix_map": {}}
    assert cfg["logging"]["level"] == "WARNING"


def test_config_files_merge_in_order(tmp_path: Path) -> None:
    first = _write(tmp_path / "a.yaml", {"compositor": {"basename": "First", "post_transforms": ["auto_repr"]}})
    second = _write(
        tmp_path / "b.yaml",
        {"compositor": {"basename": "Second", "post_transforms": ["+", "strict_constructor"]}},
    )

    section = ConfigManager([first, second], environ={}).compositor_section()

    assert section["basename"] == "Second"
    assert section["post_transforms"] == ["auto_repr", "strict_constructor"]
    assert section["prefix_map"] == {}


def test_env_overrides_win_over_files(tmp_path: Path) -> None:
    path = _write(tmp_path / "c.yaml", {"compositor": {"basename": "FromFile"}})
    environ = {
        "COMPOSITOR_COMPOSITOR__BASENAME": "From::Env",
        "COMPOSITOR_compositor__post_transforms__APPEND": "strict_constructor",
        "COMPOSITOR_compositor__prefix_map": '{"": "myapp.roles."}',
        "UNRELATED": "ignored",
    }

    section = ConfigManager([path], environ=environ).compositor_section()

    assert section["basename"] == "From::Env"
    assert section["post_transforms"] == ["strict_constructor"]
    assert section["prefix_map"] == {"": "myapp.roles."}


def test_env_values_are_coerced() -> None:
    manager = ConfigManager(environ={})
    assert manager._coerce_type("true") is True
    assert manager._coerce_type("12") == 12
    assert manager._coerce_type("1.5") == 1.5
    assert manager._coerce_type("[1, 2]") == [1, 2]
    assert manager._coerce_type(" text ") == "text"


def test_process_environment_is_read(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPOSITOR_LOGGING__LEVEL", "DEBUG")
    assert ConfigManager().load_config()["logging"]["level"] == "DEBUG"


def test_malformed_env_key() -> None:
    with pytest.raises(ConfigurationError):
        ConfigManager(environ={"COMPOSITOR_compositor____basename": "X"}).load_config()


def test_invalid_basename_fails_schema(tmp_path: Path) -> None:
    path = _write(tmp_path / "bad.yaml", {"compositor": {"basename": "not a name"}})
    with pytest.raises(SchemaValidationError) as exc_info:
        ConfigManager([path], environ={}).load_config()
    assert any("basename" in err for err in exc_info.value.context["errors"])


def test_unknown_key_fails_schema(tmp_path: Path) -> None:
    path = _write(tmp_path / "extra.yaml", {"compositor": {"basenmae": "Typo"}})
    with pytest.raises(SchemaValidationError):
        ConfigManager([path], environ={}).load_config()


def test_validation_can_be_skipped(tmp_path: Path) -> None:
    path = _write(tmp_path / "extra.yaml", {"compositor": {"basename": "not a name"}})
    assert ConfigManager([path], environ={}).load_config(validate=False)["compositor"]["basename"] == "not a name"


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigManager([tmp_path / "missing.yaml"], environ={}).load_config()


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("compositor: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        ConfigManager([path], environ={}).load_config()


def test_non_mapping_config(tmp_path: Path) -> None:
    path = _write(tmp_path / "list.yaml", ["a", "b"])
    with pytest.raises(ConfigurationError, match="mapping"):
        ConfigManager([path], environ={}).load_config()


def test_env_override_keeps_case_of_new_keys() -> None:
    environ = {"COMPOSITOR_compositor__prefix_map__Roles": "myapp.roles."}
    section = ConfigManager(environ=environ).compositor_section()
    assert section["prefix_map"] == {"Roles": "myapp.roles."}
