import json

import pytest

from finance_engine import config
from finance_engine.budgets import GOOD, OVERBUDGET, WARNING, classify_status


@pytest.fixture
def custom_config(tmp_path, monkeypatch):
    path = tmp_path / 'engine.json'
    path.write_text(json.dumps({'status': {'warning_percent': 50, 'overbudget_percent': 90}}))
    monkeypatch.setenv('FINANCE_ENGINE_CONFIG', str(path))
    config.clear_config_cache()
    yield path
    config.clear_config_cache()


def test_packaged_defaults_load():
    assert config.load_config(config.DEFAULT_CONFIG_PATH)['status']['warning_percent'] == 80
    assert config.get_setting('display', 'default_color') == '#6B7280'


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        config.load_config(tmp_path / 'missing.json')


def test_get_setting_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.setenv('FINANCE_ENGINE_CONFIG', str(tmp_path / 'missing.json'))
    assert config.get_setting('status', 'warning_percent', default=80) == 80
    assert config.get_setting('no', 'such', 'key', default='x') == 'x'


def test_env_override_changes_thresholds(custom_config):
    assert config.get_config_path() == custom_config.resolve()
    assert classify_status(60) == WARNING
    assert classify_status(95) == OVERBUDGET
    assert config.get_setting('display', 'default_color', default='#000000') == '#000000'


def test_default_thresholds_without_override():
    assert classify_status(60) == GOOD


def test_config_file_is_read_once(custom_config):
    assert classify_status(60) == WARNING
    custom_config.unlink()
    assert classify_status(60) == WARNING
    assert config.get_setting('status', 'warning_percent') == 50
