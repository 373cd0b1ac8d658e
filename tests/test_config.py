import pytest

from secretgen.config import DEFAULTS, coerce_value, config_path, load_config, save_config


def test_defaults_when_missing(isolated_config):
    assert config_path() == str(isolated_config)
    assert load_config() == DEFAULTS

def test_save_and_load_round_trip():
    cfg = load_config()
    cfg["length"] = 20
    cfg["charlists"] = ["2:!@#"]
    save_config(cfg)
    loaded = load_config()
    assert loaded["length"] == 20
    assert loaded["charlists"] == ["2:!@#"]
    assert loaded["rndsrc"] == DEFAULTS["rndsrc"]

def test_malformed_file_falls_back(isolated_config):
    isolated_config.write_text("{not json")
    assert load_config() == DEFAULTS

def test_unknown_keys_dropped(isolated_config):
    isolated_config.write_text('{"length": 9, "theme": "x"}')
    cfg = load_config()
    assert cfg["length"] == 9
    assert "theme" not in cfg

def test_coerce_value():
    assert coerce_value("length", ["16"]) == 16
    assert coerce_value("no_default", ["off"]) is False
    assert coerce_value("charlists", ["a-z", "3:0-9"]) == ["a-z", "3:0-9"]
    assert coerce_value("rndsrc", ["-"]) == "-"
    with pytest.raises(ValueError):
        coerce_value("length", ["1", "2"])
    with pytest.raises(ValueError):
        coerce_value("no_default", ["maybe"])
    with pytest.raises(KeyError):
        coerce_value("colour", ["blue"])

def test_string_values_are_coerced(isolated_config):
    isolated_config.write_text('{"length": "16", "no_default": "yes", "error_level_fail": 2}')
    cfg = load_config()
    assert cfg["length"] == 16
    assert cfg["no_default"] is True
    assert cfg["error_level_fail"] == 2

def test_wrong_types_fall_back(isolated_config):
    isolated_config.write_text('{"length": "twelve", "copies": true, "charlists": "a-z", "rndsrc": 5}')
    cfg = load_config()
    assert cfg["length"] == DEFAULTS["length"]
    assert cfg["copies"] == DEFAULTS["copies"]
    assert cfg["charlists"] == DEFAULTS["charlists"]
    assert cfg["rndsrc"] == DEFAULTS["rndsrc"]
