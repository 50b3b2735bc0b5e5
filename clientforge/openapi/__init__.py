from typing import Any

from clientforge.openapi.v3 import OpenAPI

__all__ = [
    'OpenAPI',
    'SUPPORTED_VERSIONS',
    'detect_version',
]

SUPPORTED_VERSIONS = ('3.0', '3.1')


def detect_version(data: Any) -> str | None:
    """Determine the major.minor OpenAPI version declared by raw document data."""
    if not isinstance(data, dict):
        return None
    # Swagger 2.0 documents use the 'swagger' field
    if 'swagger' in data:
        return str(data['swagger'])
    openapi_version = str(data.get('openapi', ''))
    parts = openapi_version.split('.')
    if len(parts) < 2:
        return None
    return f'{parts[0]}.{parts[1]}'
