"""Tests for registry configuration loading."""
import json
import os

import pytest

from component_registry_mcp.constants import DEFAULT_COMPONENT_PATTERN, DEFAULT_FILE_PATTERN
from component_registry_mcp.errors import ConfigurationMissingError, InvalidConfigurationError
from component_registry_mcp.project_settings import (
    RegistryConfig, find_up, load_config, load_project_dependencies,
    resolve_config, write_default_config
)


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


class TestLoadConfig:
    def test_found_from_nested_directory(self, tmp_path):
        _write_json(tmp_path / 'registry.config.json', {
            'root': '.',
            'name': 'acme',
            'homepage': 'https://acme.test',
            'cwd': 'src/registry',
            'output': 'public/r',
        })
        nested = tmp_path / 'src' / 'deep'
        nested.mkdir(parents=True)

        config = load_config(start_dir=str(nested))

        assert config.root == str(tmp_path)
        assert config.name == 'acme'
        assert config.homepage == 'https://acme.test'
        assert config.cwd == os.path.join(str(tmp_path), 'src', 'registry')
        assert config.output == os.path.join(str(tmp_path), 'public', 'r')
        assert config.config_path == str(tmp_path / 'registry.config.json')

    def test_defaults(self, tmp_path):
        _write_json(tmp_path / 'registry.config.json', {'root': '.'})

        config = load_config(start_dir=str(tmp_path))

        assert config.cwd == str(tmp_path)
        assert config.output == str(tmp_path)
        assert config.name == ''
        assert config.dependencies == []
        assert config.registries is None
        assert config.component_pattern == DEFAULT_COMPONENT_PATTERN
        assert config.file_pattern == DEFAULT_FILE_PATTERN

    def test_relative_root_resolves_against_config_directory(self, tmp_path):
        config_path = _write_json(tmp_path / 'config' / 'registry.config.json', {'root': '../app'})

        config = load_config(config_path=str(config_path))

        assert config.root == str(tmp_path / 'app')

    def test_optional_fields(self, tmp_path):
        _write_json(tmp_path / 'registry.config.json', {
            'root': '.',
            'dependencies': ['vue'],
            'devDependencies': ['vite'],
            'registries': {'@acme': 'https://acme.test/{name}.json'},
            'scanPatterns': {'componentPattern': '**/*', 'filePattern': '*'},
        })

        config = load_config(start_dir=str(tmp_path))

        assert config.dependencies == ['vue']
        assert config.dev_dependencies == ['vite']
        assert config.registries == {'@acme': 'https://acme.test/{name}.json'}
        assert config.component_pattern == '**/*'
        assert config.file_pattern == '*'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationMissingError):
            load_config(config_path=str(tmp_path / 'registry.config.json'))

    def test_missing_root(self, tmp_path):
        _write_json(tmp_path / 'registry.config.json', {'name': 'acme'})

        with pytest.raises(ConfigurationMissingError, match='Root path is not specified'):
            load_config(start_dir=str(tmp_path))

    def test_invalid_json(self, tmp_path):
        (tmp_path / 'registry.config.json').write_text('{"root": ', encoding='utf-8')

        with pytest.raises(InvalidConfigurationError):
            load_config(start_dir=str(tmp_path))

    def test_non_utf8_config(self, tmp_path):
        (tmp_path / 'registry.config.json').write_bytes(b'{"root": "\xff"}')

        with pytest.raises(InvalidConfigurationError):
            load_config(start_dir=str(tmp_path))

    @pytest.mark.parametrize('data', [
        ['root'],
        {'root': '.', 'name': 3},
        {'root': '.', 'dependencies': 'vue'},
        {'root': '.', 'registries': ['@acme']},
        {'root': '.', 'scanPatterns': '*/*'},
    ])
    def test_invalid_fields(self, tmp_path, data):
        _write_json(tmp_path / 'registry.config.json', data)

        with pytest.raises(InvalidConfigurationError):
            load_config(start_dir=str(tmp_path))


def test_find_up_returns_none_when_absent(tmp_path):
    assert find_up(['definitely-not-here.json'], str(tmp_path)) is None


def test_resolve_config_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = RegistryConfig(root=str(tmp_path / 'project'))

    resolved = resolve_config(config, cwd='scan', output='out')

    assert resolved.cwd == str(tmp_path / 'scan')
    assert resolved.output == str(tmp_path / 'out')


def test_resolve_config_without_overrides_keeps_values(tmp_path):
    config = RegistryConfig(root=str(tmp_path), cwd='src', output='dist')

    resolved = resolve_config(config)

    assert resolved.cwd == str(tmp_path / 'src')
    assert resolved.output == str(tmp_path / 'dist')


class TestProjectDependencies:
    def test_reads_package_and_components(self, tmp_path):
        _write_json(tmp_path / 'package.json', {
            'dependencies': {'vue': '^3.5.0'},
            'devDependencies': {'vite': '^6.0.0', 'vitest': '^3.0.0'},
        })
        _write_json(tmp_path / 'components.json', {
            'registries': {'@acme': 'https://acme.test/{name}.json'},
        })

        project = load_project_dependencies(str(tmp_path))

        assert project.dependencies == ['vue']
        assert project.dev_dependencies == ['vite', 'vitest']
        assert project.registries == {'@acme': 'https://acme.test/{name}.json'}

    def test_missing_package_json_warns(self, tmp_path, caplog):
        with caplog.at_level('WARNING'):
            project = load_project_dependencies(str(tmp_path))

        assert project.dependencies == []
        assert project.dev_dependencies == []
        assert 'package.json not found' in caplog.text

    def test_malformed_package_json_warns(self, tmp_path, caplog):
        (tmp_path / 'package.json').write_text('not json', encoding='utf-8')

        with caplog.at_level('WARNING'):
            project = load_project_dependencies(str(tmp_path))

        assert project.dependencies == []
        assert 'Failed to read package.json' in caplog.text

    def test_non_utf8_components_json_warns(self, tmp_path, caplog):
        (tmp_path / 'components.json').write_bytes(b'{"registries": {"\xff": "x"}}')
        _write_json(tmp_path / 'package.json', {'dependencies': {'vue': '^3.5.0'}})

        with caplog.at_level('WARNING'):
            project = load_project_dependencies(str(tmp_path))

        assert project.registries == {}
        assert project.dependencies == ['vue']
        assert 'registry aliases ignored' in caplog.text

    def test_package_json_without_sections(self, tmp_path):
        _write_json(tmp_path / 'package.json', {'name': 'app'})

        project = load_project_dependencies(str(tmp_path))

        assert project.dependencies == []
        assert project.dev_dependencies == []

    def test_components_json_without_registries(self, tmp_path):
        _write_json(tmp_path / 'components.json', {'style': 'default'})
        _write_json(tmp_path / 'package.json', {})

        assert load_project_dependencies(str(tmp_path)).registries == {}


def test_write_default_config(tmp_path):
    path = write_default_config(str(tmp_path))

    assert path == str(tmp_path / 'registry.config.json')
    assert json.loads((tmp_path / 'registry.config.json').read_text(encoding='utf-8')) == {
        'root': '.',
        'name': '',
        'homepage': '',
    }
    assert load_config(config_path=path).root == str(tmp_path)


def test_to_dict_uses_config_keys(tmp_path):
    config = RegistryConfig(root=str(tmp_path), dev_dependencies=['vite'])

    data = config.to_dict()

    assert data['devDependencies'] == ['vite']
    assert data['scanPatterns'] == {
        'componentPattern': DEFAULT_COMPONENT_PATTERN,
        'filePattern': DEFAULT_FILE_PATTERN,
    }
    assert data['registries'] == {}
