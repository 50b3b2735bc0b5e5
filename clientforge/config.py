import json
import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from clientforge.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['clientforge.yaml', 'clientforge.yml']

_ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}')


class DocumentConfig(BaseModel):
    """Represents a single document to be processed."""

    source: str = Field(..., description='Path or URL to the OpenAPI document.')

    output: str = Field(..., description='Output directory for the generated code.')

    models_file: str = Field(
        'models.py', description='File name for the generated data types.'
    )

    client_file: str = Field(
        'client.py', description='File name for the generated client protocol.'
    )

    client_class: str = Field(
        'Client', description='Name of the generated client protocol class.'
    )

    models_import_path: str | None = Field(
        None,
        description='Optional import path the client module uses for the models. '
        'Defaults to a relative import of the models file.',
    )


class CodegenConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='CLIENTFORGE_')

    documents: list[DocumentConfig] = Field(
        ..., description='List of OpenAPI documents to process.'
    )


def _expand_env_vars(value: str) -> str:
    """Expand ``${VAR}`` and ``${VAR:-default}`` references in a string."""

    def replace(match: re.Match) -> str:
        name, default = match.group(1), match.group(2)
        resolved = os.environ.get(name)
        if resolved is not None:
            return resolved
        if default is not None:
            return default
        raise ConfigurationError(
            f"Environment variable '{name}' is not set", field=name
        )

    return _ENV_VAR_PATTERN.sub(replace, value)


def _expand_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return _expand_env_vars(data)
    if isinstance(data, dict):
        return {key: _expand_env_vars_recursive(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars_recursive(item) for item in data]
    return data


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text()) or {}


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def _validate(data: dict, config_path: str) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(_expand_env_vars_recursive(data))
    except ValidationError as e:
        raise ConfigurationError(
            f'Invalid configuration: {e.error_count()} error(s)', config_path=config_path
        ) from e


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file or from the working directory."""
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        if Path(path).suffix.lower() == '.json':
            return _validate(load_json(path), path)
        return _validate(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _validate(load_yaml(candidate), str(candidate))

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        pyproject = tomllib.loads(candidate.read_text())
        tools = pyproject.get('tool', {})

        if 'clientforge' in tools:
            return _validate(tools['clientforge'], str(candidate))

    raise ConfigurationError(
        'No configuration found; expected one of '
        f'{", ".join(DEFAULT_FILENAMES)} or [tool.clientforge] in pyproject.toml'
    )
