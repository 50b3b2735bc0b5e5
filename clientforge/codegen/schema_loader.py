"""Document loading utilities for OpenAPI documents.

This module provides utilities for loading OpenAPI documents from URLs or
local file paths in JSON or YAML form, optionally inlining external $ref
references, and validating the result into the immutable document model the
generator works on.
"""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlparse

import httpx
import yaml
from pydantic import ValidationError

from clientforge.exceptions import SchemaLoadError, SchemaValidationError
from clientforge.openapi import SUPPORTED_VERSIONS, detect_version
from clientforge.openapi.v3 import OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['SchemaLoader']


class SchemaLoader:
    """Loads OpenAPI documents from URLs or file paths.

    Features:
        - Load from URLs (http/https) or local file paths
        - Support for both JSON and YAML formats
        - Version detection (OpenAPI 3.0 and 3.1 are accepted)
        - Optional inlining of external $ref references
        - Caching of loaded external documents

    Example:
        >>> loader = SchemaLoader()
        >>> openapi = loader.load('https://api.example.com/openapi.json')
        >>> # or with external ref resolution
        >>> loader = SchemaLoader(resolve_external_refs=True)
        >>> openapi = loader.load('./api.yaml')
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        resolve_external_refs: bool = False,
        base_path: str | Path | None = None,
    ):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, ``httpx.get`` is used.
            resolve_external_refs: Whether to inline external $ref references
                                  (other files or URLs) before validation.
            base_path: Base path for resolving relative file references.
                      Defaults to current working directory.
        """
        self._http_client = http_client
        self._resolve_external_refs = resolve_external_refs
        self._base_path = Path(base_path) if base_path else Path.cwd()
        self._external_cache: dict[str, dict] = {}

    def load(self, source: str) -> OpenAPI:
        """Load and validate an OpenAPI document from a URL or file path.

        Args:
            source: URL or file path to the OpenAPI document.

        Returns:
            Validated, frozen OpenAPI object.

        Raises:
            SchemaLoadError: If the document cannot be loaded from the source.
            SchemaValidationError: If the document is not valid OpenAPI 3.0/3.1.
        """
        try:
            if self._is_url(source):
                content = self._load_from_url(source)
            else:
                content = self._load_from_file(source)
                source_path = Path(source)
                if source_path.is_absolute():
                    self._base_path = source_path.parent
                else:
                    self._base_path = (self._base_path / source_path).parent

            if self._resolve_external_refs:
                content = self._resolve_refs_recursive(content, source, set())

            return self.validate(content, source)

        except (SchemaLoadError, SchemaValidationError):
            raise
        except Exception as e:
            raise SchemaLoadError(source, cause=e)

    def load_from_dict(self, content: dict, source: str = '<dict>') -> OpenAPI:
        """Validate an already parsed document."""
        return self.validate(content, source)

    def validate(self, content: Any, source: str) -> OpenAPI:
        """Validate raw document content into the document model."""
        version = detect_version(content)
        if version is None:
            raise SchemaValidationError(
                source, errors=['no OpenAPI version declaration found']
            )
        if version not in SUPPORTED_VERSIONS:
            raise SchemaValidationError(
                source, errors=[f"unsupported OpenAPI version '{version}'"]
            )

        try:
            openapi = OpenAPI.model_validate(content)
        except ValidationError as e:
            raise SchemaValidationError(
                source,
                errors=[
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ],
            )

        logger.debug(
            f"Loaded '{openapi.info.title}' {openapi.info.version} "
            f'(OpenAPI {openapi.openapi}) from {source}'
        )
        return openapi

    def _is_url(self, text: str) -> bool:
        """Check if a string is an http(s) URL."""
        try:
            result = urlparse(text)
            return result.scheme in ('http', 'https')
        except ValueError:
            return False

    def _load_from_url(self, url: str) -> dict:
        """Load document content from a URL."""
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')
            content = response.text

            if 'yaml' in content_type or url.endswith(('.yaml', '.yml')):
                return yaml.safe_load(content)
            else:
                return json.loads(content)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> dict:
        """Load document content from a file."""
        path = Path(file_path)
        if not path.is_absolute():
            path = self._base_path / path

        if not path.exists():
            raise SchemaLoadError(
                str(file_path), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                return yaml.safe_load(content)
            else:
                return json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(file_path), cause=e)
        except OSError as e:
            raise SchemaLoadError(str(file_path), cause=e)

    def _resolve_refs_recursive(self, obj: Any, base: str, visited: set[str]) -> Any:
        """Recursively inline external references, leaving local ones alone."""
        if isinstance(obj, dict):
            if '$ref' in obj:
                ref = obj['$ref']
                if not ref.startswith('#'):
                    return self._resolve_external_ref(ref, base, visited)
            return {
                k: self._resolve_refs_recursive(v, base, visited)
                for k, v in obj.items()
            }
        elif isinstance(obj, list):
            return [self._resolve_refs_recursive(item, base, visited) for item in obj]
        return obj

    def _resolve_external_ref(self, ref: str, base: str, visited: set[str]) -> Any:
        """Load and inline an external $ref reference."""
        if '#' in ref:
            file_part, pointer = ref.split('#', 1)
        else:
            file_part, pointer = ref, ''

        if self._is_url(file_part):
            location = file_part
        elif self._is_url(base):
            location = urljoin(base, file_part)
        else:
            location = str(self._base_path / file_part)

        cache_key = f'{location}#{pointer}'
        if cache_key in visited:
            logger.warning(f'Circular reference detected: {cache_key}')
            return {'$ref': ref}

        visited = visited | {cache_key}

        if location not in self._external_cache:
            if self._is_url(location):
                self._external_cache[location] = self._load_from_url(location)
            else:
                self._external_cache[location] = self._load_from_file(location)

        content = self._external_cache[location]

        if pointer:
            content = self._resolve_json_pointer(content, pointer, ref)

        return self._resolve_refs_recursive(content, location, visited)

    def _resolve_json_pointer(self, obj: Any, pointer: str, ref: str) -> Any:
        """Resolve a JSON pointer within a loaded document."""
        if not pointer or pointer == '/':
            return obj

        current = obj
        for part in pointer.strip('/').split('/'):
            part = part.replace('~1', '/').replace('~0', '~')
            if isinstance(current, dict) and part in current:
                current = current[part]
            elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
                current = current[int(part)]
            else:
                raise SchemaLoadError(
                    ref, cause=ValueError(f'JSON pointer path not found: {pointer}')
                )

        return current
