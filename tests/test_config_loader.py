import json

import pytest

from subevents import BusSettings, ConfigLoader, EventBus, Path
from subevents.config_loader import CONFIG_ENV_VAR, DEFAULT_SEPARATOR


def test_config_loader_reads_sections(tmp_path):
    config_path = tmp_path / "subevents.json"
    payload = {"bus": {"separator": "/", "inner_event_type_key": "__type__"}}
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    ConfigLoader.configure(path=str(config_path))
    bus_section = ConfigLoader.get_section("bus")
    assert bus_section["separator"] == "/"
    assert ConfigLoader.get("bus", "missing", default={}) == {}
    assert ConfigLoader.get("absent", default="fallback") == "fallback"


def test_missing_config_file_falls_back_to_defaults(tmp_path):
    ConfigLoader.configure(path=str(tmp_path / "nope.json"))
    settings = BusSettings.from_config()
    assert settings.separator == DEFAULT_SEPARATOR


def test_config_path_from_environment(tmp_path, monkeypatch):
    config_path = tmp_path / "env.json"
    config_path.write_text(json.dumps({"bus": {"separator": ":"}}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_path))
    ConfigLoader.configure(path=None)

    bus = EventBus()

    assert bus.separator == ":"
    assert bus.encoder.normal_key(Path("a", "b")) == "a:b"


def test_settings_overrides_beat_config(tmp_path):
    config_path = tmp_path / "subevents.json"
    config_path.write_text(json.dumps({"bus": {"separator": "/"}}), encoding="utf-8")
    ConfigLoader.configure(path=str(config_path))

    settings = BusSettings.from_config(separator="|")

    assert settings.separator == "|"


def test_configured_inner_key_is_used_for_payloads(tmp_path):
    config_path = tmp_path / "subevents.json"
    config_path.write_text(json.dumps({"bus": {"inner_event_type_key": "__type__"}}), encoding="utf-8")
    ConfigLoader.configure(path=str(config_path))
    bus = EventBus()
    captured = []

    bus.register("EVENT", captured.append)
    bus.trigger("EVENT", {"value": 1})

    assert captured[0]["__type__"].name == "EVENT"


def test_non_mapping_bus_section_is_rejected(tmp_path):
    config_path = tmp_path / "subevents.json"
    config_path.write_text(json.dumps({"bus": ["nope"]}), encoding="utf-8")
    ConfigLoader.configure(path=str(config_path))

    with pytest.raises(TypeError):
        BusSettings.from_config()


@pytest.mark.parametrize("separator", ["", "--", 3])
def test_settings_reject_bad_separator(separator):
    with pytest.raises(ValueError):
        BusSettings(separator=separator)
