import json

import pytest

from checksum import ChecksumConfig
from config import (ChecksumSettings, SerialConfig, configure_checksum, configure_port,
                    parse_initial_value)
from errors import UnsupportedConfig


def answers(*values):
    it = iter(values)
    return lambda prompt: next(it)


def test_defaults_when_file_missing(tmp_path):
    settings = ChecksumSettings.load(str(tmp_path / "missing.json"))
    assert settings == ChecksumSettings(16, 0)
    assert settings.to_config() == ChecksumConfig(16, 0)
    assert settings.label == "Additive (16-bit)"


def test_save_and_load(tmp_path):
    path = str(tmp_path / "checksum_config.json")
    ChecksumSettings(32, 0xABC).save(path)
    with open(path, encoding='utf-8') as f:
        assert json.load(f) == {"bit_width": 32, "initial_value": 0xABC}
    assert ChecksumSettings.load(path) == ChecksumSettings(32, 0xABC)


def test_save_rejects_unsupported_width(tmp_path):
    with pytest.raises(UnsupportedConfig):
        ChecksumSettings(24, 0).save(str(tmp_path / "c.json"))


@pytest.mark.parametrize("content", ['{"bit_width": 24, "initial_value": 0}',
                                     '{"bit_width": 16.0, "initial_value": 0}',
                                     '{"bitWidth": 8}',
                                     'not json'])
def test_broken_file_falls_back_to_defaults(tmp_path, capsys, content):
    path = tmp_path / "c.json"
    path.write_text(content, encoding='utf-8')
    assert ChecksumSettings.load(str(path)) == ChecksumSettings()
    assert "по умолчанию" in capsys.readouterr().out


def test_parse_initial_value():
    assert parse_initial_value("1F") == 31
    assert parse_initial_value("0x1f") == 31
    assert parse_initial_value(" 0 ") == 0
    with pytest.raises(ValueError):
        parse_initial_value("zz")
    with pytest.raises(ValueError):
        parse_initial_value("-5")


def test_configure_checksum_updates_and_saves(tmp_path):
    path = str(tmp_path / "c.json")
    settings = configure_checksum(path, ask=answers("y", "8", "0x1F"))
    assert settings == ChecksumSettings(8, 31)
    assert ChecksumSettings.load(path) == ChecksumSettings(8, 31)


def test_configure_checksum_keeps_invalid_values(tmp_path):
    path = str(tmp_path / "c.json")
    settings = configure_checksum(path, ask=answers("y", "24", "xyz"))
    assert settings == ChecksumSettings(16, 0)


def test_configure_checksum_declined(tmp_path):
    path = tmp_path / "c.json"
    settings = configure_checksum(str(path), ask=answers("n"))
    assert settings == ChecksumSettings()
    assert not path.exists()


def test_serial_config_round_trip(tmp_path):
    path = str(tmp_path / "serial_config.json")
    config = configure_port(path, ask=answers("y", "9", "e", "0.5"))
    assert config.baudrate == 115200
    assert config.parity == 'E'
    assert config.timeout == 0.5
    assert SerialConfig.load(path) == config
    assert config.to_dict()["baudrate"] == 115200


@pytest.mark.parametrize("content", ['not json',
                                     '{"baudrate": 9600, "flow": "rtscts"}',
                                     '[9600]'])
def test_broken_serial_file_falls_back_to_defaults(tmp_path, capsys, content):
    path = tmp_path / "serial_config.json"
    path.write_text(content, encoding='utf-8')
    assert SerialConfig.load(str(path)) == SerialConfig()
    assert "по умолчанию" in capsys.readouterr().out
