"""Test configuration for clientforge package."""

import json

import pytest

from clientforge.config import CodegenConfig, DocumentConfig, get_config
from clientforge.exceptions import ConfigurationError


class TestDocumentConfig:
    """Test DocumentConfig model."""

    def test_valid_document_config(self):
        """Test creating a valid DocumentConfig."""
        config = DocumentConfig(
            source='https://api.example.com/openapi.json', output='./generated'
        )
        assert config.source == 'https://api.example.com/openapi.json'
        assert config.output == './generated'
        assert config.models_file == 'models.py'
        assert config.client_file == 'client.py'
        assert config.client_class == 'Client'
        assert config.models_import_path is None

    def test_document_config_with_optional_fields(self):
        """Test DocumentConfig with all optional fields."""
        config = DocumentConfig(
            source='./openapi.yaml',
            output='./output',
            models_file='types.py',
            client_file='protocol.py',
            client_class='PetstoreClient',
            models_import_path='myapp.types',
        )
        assert config.models_file == 'types.py'
        assert config.client_file == 'protocol.py'
        assert config.client_class == 'PetstoreClient'
        assert config.models_import_path == 'myapp.types'

    def test_document_config_validation(self):
        """Test DocumentConfig validation."""
        with pytest.raises(ValueError):
            DocumentConfig()  # missing required fields


class TestCodegenConfig:
    """Test CodegenConfig model."""

    def test_codegen_config_multiple_documents(self):
        """Test CodegenConfig with multiple documents."""
        doc1 = DocumentConfig(source='api1.json', output='./gen1')
        doc2 = DocumentConfig(source='api2.json', output='./gen2')

        config = CodegenConfig(documents=[doc1, doc2])

        assert [d.source for d in config.documents] == ['api1.json', 'api2.json']

    def test_codegen_config_validation(self):
        """Test CodegenConfig validation."""
        with pytest.raises(ValueError):
            CodegenConfig()  # missing required documents field


class TestGetConfig:
    """Test get_config function."""

    def test_get_config_with_yaml_file(self, tmp_path):
        """Test loading config from a YAML file."""
        path = tmp_path / 'config.yaml'
        path.write_text(
            'documents:\n'
            '  - source: "https://api.example.com/openapi.json"\n'
            '    output: "./generated"\n'
            '    client_class: ExampleClient\n'
        )

        config = get_config(str(path))

        assert len(config.documents) == 1
        assert config.documents[0].source == 'https://api.example.com/openapi.json'
        assert config.documents[0].client_class == 'ExampleClient'

    def test_get_config_with_json_file(self, tmp_path):
        """Test loading config from a JSON file."""
        path = tmp_path / 'config.json'
        path.write_text(
            json.dumps({'documents': [{'source': 'api.json', 'output': './out'}]})
        )

        config = get_config(str(path))

        assert config.documents[0].output == './out'

    def test_get_config_default_yaml(self, tmp_path, monkeypatch):
        """Test loading config from clientforge.yaml in the working directory."""
        (tmp_path / 'clientforge.yaml').write_text(
            'documents:\n  - source: api.json\n    output: ./out\n'
        )
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.documents[0].source == 'api.json'

    def test_get_config_default_yml(self, tmp_path, monkeypatch):
        (tmp_path / 'clientforge.yml').write_text(
            'documents:\n  - source: other.json\n    output: ./out\n'
        )
        monkeypatch.chdir(tmp_path)

        assert get_config().documents[0].source == 'other.json'

    def test_get_config_from_pyproject_toml(self, tmp_path, monkeypatch):
        """Test loading config from [tool.clientforge] in pyproject.toml."""
        (tmp_path / 'pyproject.toml').write_text(
            '[project]\nname = "demo"\n\n'
            '[[tool.clientforge.documents]]\n'
            'source = "api.json"\n'
            'output = "./out"\n'
        )
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.documents[0].source == 'api.json'

    def test_pyproject_without_section(self, tmp_path, monkeypatch):
        (tmp_path / 'pyproject.toml').write_text('[project]\nname = "demo"\n')
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError, match='No configuration found'):
            get_config()

    def test_get_config_file_not_found(self, tmp_path, monkeypatch):
        """Test ConfigurationError when no config file exists."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError, match='No configuration found'):
            get_config()

    def test_get_config_invalid_path(self):
        """Test get_config with invalid file path."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_config('/nonexistent/path/config.yaml')
        assert exc_info.value.config_path == '/nonexistent/path/config.yaml'

    def test_invalid_configuration(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('documents:\n  - source: api.json\n')

        with pytest.raises(ConfigurationError, match='Invalid configuration'):
            get_config(str(path))


class TestEnvironmentVariables:
    """Test ${VAR} expansion in configuration values."""

    def test_variable_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv('API_HOST', 'api.example.com')
        path = tmp_path / 'config.yaml'
        path.write_text(
            'documents:\n'
            '  - source: "https://${API_HOST}/openapi.json"\n'
            '    output: ./out\n'
        )

        config = get_config(str(path))

        assert config.documents[0].source == 'https://api.example.com/openapi.json'

    def test_default_value(self, tmp_path, monkeypatch):
        monkeypatch.delenv('OUTPUT_DIR', raising=False)
        path = tmp_path / 'config.yaml'
        path.write_text(
            'documents:\n  - source: api.json\n    output: "${OUTPUT_DIR:-./generated}"\n'
        )

        assert get_config(str(path)).documents[0].output == './generated'

    def test_missing_variable(self, tmp_path, monkeypatch):
        monkeypatch.delenv('SPEC_URL', raising=False)
        path = tmp_path / 'config.yaml'
        path.write_text('documents:\n  - source: "${SPEC_URL}"\n    output: ./out\n')

        with pytest.raises(ConfigurationError) as exc_info:
            get_config(str(path))
        assert exc_info.value.field == 'SPEC_URL'


def test_config_serialization_roundtrip():
    """Test that config can be serialized and deserialized."""
    config = CodegenConfig(
        documents=[
            DocumentConfig(
                source='https://api.example.com/openapi.json',
                output='./generated',
                client_class='ExampleClient',
            )
        ]
    )

    restored = CodegenConfig.model_validate(config.model_dump())

    assert restored.documents == config.documents
