"""Tests for the MCP service layer and tool error handling."""
import json
from types import SimpleNamespace

import pytest

from component_registry_mcp import server
from component_registry_mcp.errors import ConfigurationMissingError
from component_registry_mcp.server import RegistryServerContext
from component_registry_mcp.services import ProjectManagementService, RegistryService
from component_registry_mcp.utils import handle_mcp_tool_errors


@pytest.fixture
def ctx():
    """Minimal stand-in for an MCP request context."""
    lifespan_context = RegistryServerContext(base_path="")
    return SimpleNamespace(request_context=SimpleNamespace(lifespan_context=lifespan_context))


@pytest.fixture
def project(tmp_path):
    (tmp_path / 'registry.config.json').write_text(json.dumps({
        'root': '.',
        'name': 'acme',
        'homepage': 'https://acme.test',
        'cwd': 'src',
        'output': 'public/r',
        'registries': {'@acme': 'https://acme.test/r/{name}.json'},
    }), encoding='utf-8')
    (tmp_path / 'package.json').write_text(json.dumps({
        'dependencies': {'vue': '^3.5.0'},
        'devDependencies': {'vite': '^6.0.0'},
    }), encoding='utf-8')
    card = tmp_path / 'src' / 'ui' / 'card'
    card.mkdir(parents=True)
    (card / 'index.vue').write_text(
        "import { ref } from 'vue'\nimport Badge from '@acme/badge'\n", encoding='utf-8'
    )
    hooks = tmp_path / 'src' / 'composables' / 'hooks'
    hooks.mkdir(parents=True)
    (hooks / 'useDark.ts').write_text("import { defineConfig } from 'vite'\n", encoding='utf-8')
    return tmp_path


class TestProjectManagementService:
    def test_initialize_project_loads_config(self, ctx, project):
        message = ProjectManagementService(ctx).initialize_project(str(project))

        assert str(project) in message
        context = ctx.request_context.lifespan_context
        assert context.base_path == str(project)
        assert context.config.name == 'acme'
        assert context.config.cwd == str(project / 'src')

    def test_initialize_missing_directory(self, ctx, tmp_path):
        with pytest.raises(ValueError, match='does not exist'):
            ProjectManagementService(ctx).initialize_project(str(tmp_path / 'missing'))

    def test_config_before_setup(self, ctx):
        data = json.loads(ProjectManagementService(ctx).get_project_config())

        assert data['status'] == 'not_configured'

    def test_config_after_setup(self, ctx, project):
        service = ProjectManagementService(ctx)
        service.initialize_project(str(project))

        data = json.loads(service.get_project_config())

        assert data['base_path'] == str(project)
        assert data['config']['name'] == 'acme'


class TestRegistryService:
    def test_generate_requires_project(self, ctx):
        with pytest.raises(ValueError, match='Project path not set'):
            RegistryService(ctx).generate()

    def test_generate_requires_config(self, ctx, tmp_path):
        ctx.request_context.lifespan_context.base_path = str(tmp_path)

        with pytest.raises(ConfigurationMissingError):
            RegistryService(ctx).generate()

    def test_generate_and_write(self, ctx, project):
        ProjectManagementService(ctx).initialize_project(str(project))

        result = RegistryService(ctx).generate()

        assert result['item_count'] == 2
        assert result['output_path'] == str(project / 'public' / 'r' / 'registry.json')
        items = {item['name']: item for item in result['registry']['items']}
        assert items['card']['dependencies'] == ['vue']
        assert items['card']['registryDependencies'] == ['https://acme.test/r/badge.json']
        assert items['useDark']['type'] == 'registry:composable'
        assert items['useDark']['devDependencies'] == ['vite']

    def test_generate_without_write(self, ctx, project):
        ProjectManagementService(ctx).initialize_project(str(project))

        result = RegistryService(ctx).generate(write=False)

        assert 'output_path' not in result
        assert not (project / 'public').exists()

    def test_generate_pattern_override_does_not_leak(self, ctx, project):
        ProjectManagementService(ctx).initialize_project(str(project))

        result = RegistryService(ctx).generate(write=False, component_pattern='ui/*/*')

        assert [item['name'] for item in result['registry']['items']] == ['card']
        assert ctx.request_context.lifespan_context.config.component_pattern == '*/*/*'

    def test_generate_rejects_escaping_pattern(self, ctx, project):
        ProjectManagementService(ctx).initialize_project(str(project))

        with pytest.raises(ValueError):
            RegistryService(ctx).generate(component_pattern='../*')

    def test_classify_with_project_defaults(self, ctx, project):
        ProjectManagementService(ctx).initialize_project(str(project))

        result = RegistryService(ctx).classify_dependencies(['src/ui/card/index.vue'])

        assert result == {
            'dependencies': ['vue'],
            'devDependencies': [],
            'registryDependencies': ['https://acme.test/r/badge.json'],
        }

    def test_classify_with_overrides(self, ctx, project):
        ProjectManagementService(ctx).initialize_project(str(project))

        result = RegistryService(ctx).classify_dependencies(
            ['src/ui/card/index.vue'], dev_dependencies=['vue']
        )

        assert result == {
            'dependencies': [],
            'devDependencies': ['vue'],
            'registryDependencies': ['@acme/badge'],
        }

    def test_classify_rejects_traversal(self, ctx, project):
        ProjectManagementService(ctx).initialize_project(str(project))

        with pytest.raises(ValueError, match='traversal'):
            RegistryService(ctx).classify_dependencies(['../outside.ts'])

    def test_registry_type_and_name(self, ctx):
        service = RegistryService(ctx)

        assert service.get_registry_type('ui/button/index.vue') == 'registry:ui'
        assert service.resolve_component_name('/app/lib', ['/app/lib/formatDate.ts']) == 'formatDate'


class TestToolErrorHandling:
    def test_tool_reports_missing_project_as_string(self, ctx):
        result = server.set_project_path('', ctx)

        assert result.startswith('Error: ')

    def test_tool_reports_errors_as_dict(self, ctx):
        result = server.generate_registry(ctx)

        assert result == {
            'error': 'Operation failed: Project path not set. Please use set_project_path '
                     'to set a project directory first.'
        }

    def test_tools_end_to_end(self, ctx, project):
        assert 'Project path set to' in server.set_project_path(str(project), ctx)

        result = server.generate_registry(ctx, write=False)

        assert result['item_count'] == 2
        assert server.get_registry_type('composables/x.ts', ctx) == 'registry:composable'

    def test_registry_errors_log_warning(self, caplog):
        @handle_mcp_tool_errors(return_type='json')
        def failing():
            raise ConfigurationMissingError('no config')

        with caplog.at_level('WARNING'):
            result = failing()

        assert json.loads(result) == {'error': 'Operation failed: no config'}
        assert 'failing failed: no config' in caplog.text

    def test_async_tools_are_wrapped(self):
        import asyncio

        @handle_mcp_tool_errors(return_type='list')
        async def failing():
            raise RuntimeError('boom')

        assert asyncio.run(failing()) == [{'error': 'Operation failed: boom'}]
