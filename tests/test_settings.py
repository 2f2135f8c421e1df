import json

from romdb.resolver import ART_URL_TEMPLATE
from romdb.settings import (
    DEFAULT_SETTINGS,
    load_settings,
    resolve_database_path,
    save_settings,
)


def test_missing_file_returns_defaults(tmp_path):
    settings = load_settings(str(tmp_path / 'settings.json'))
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_partial_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({'database': {'path': '/data/mupen64plus.ini'},
                                'web': {'port': 8080}}), encoding='utf-8')

    settings = load_settings(str(path))

    assert settings['database']['path'] == '/data/mupen64plus.ini'
    assert settings['web'] == {'host': '127.0.0.1', 'port': 8080}
    assert settings['urls']['art_template'] == ART_URL_TEMPLATE


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text('{not json', encoding='utf-8')
    assert load_settings(str(path)) == DEFAULT_SETTINGS


def test_save_then_load(tmp_path):
    path = tmp_path / 'nested' / 'settings.json'
    settings = load_settings(str(path))
    settings['monitor']['echo'] = True
    save_settings(settings, str(path))

    assert load_settings(str(path))['monitor']['echo'] is True


def test_resolve_database_path_order(monkeypatch):
    monkeypatch.setenv('ROMDB_DATABASE', '/env/db.ini')
    configured = {'database': {'path': '/cfg/db.ini'}}
    unconfigured = {'database': {'path': ''}}

    assert resolve_database_path(configured, '/cli/db.ini') == '/cli/db.ini'
    assert resolve_database_path(configured) == '/cfg/db.ini'
    assert resolve_database_path(unconfigured) == '/env/db.ini'

    monkeypatch.delenv('ROMDB_DATABASE')
    assert resolve_database_path(unconfigured) == ''
