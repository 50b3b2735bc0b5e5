"""Deterministic name derivation from structural context.

Every generated identifier is composed from fragments derived here. The
functions are pure: the same input always yields the same fragment, and a
fragment only depends on its own input, so editing one operation or schema
cannot change names derived elsewhere in the document.
"""

import re
from collections.abc import Iterable

from clientforge.codegen.utils import (
    capitalize,
    sanitize_name_python_keywords,
    sanitize_parameter_field_name,
)

__all__ = [
    'HTTP_METHODS',
    'STATUS_REASONS',
    'operation_fragment',
    'operation_type_fragment',
    'pascal_case',
    'status_fragment',
    'media_fragment',
    'content_type_name',
    'parameter_name',
    'uncollide',
]

HTTP_METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch', 'trace')
"""Verbs of a path item in the order operations are generated."""

# Reason phrases used in variant names, independent of http.HTTPStatus.
STATUS_REASONS: dict[int, str] = {
    100: 'Continue',
    101: 'SwitchingProtocols',
    102: 'Processing',
    103: 'EarlyHints',
    200: 'Ok',
    201: 'Created',
    202: 'Accepted',
    203: 'NonAuthoritativeInformation',
    204: 'NoContent',
    205: 'ResetContent',
    206: 'PartialContent',
    207: 'MultiStatus',
    208: 'AlreadyReported',
    226: 'ImUsed',
    300: 'MultipleChoices',
    301: 'MovedPermanently',
    302: 'Found',
    303: 'SeeOther',
    304: 'NotModified',
    305: 'UseProxy',
    307: 'TemporaryRedirect',
    308: 'PermanentRedirect',
    400: 'BadRequest',
    401: 'Unauthorized',
    402: 'PaymentRequired',
    403: 'Forbidden',
    404: 'NotFound',
    405: 'MethodNotAllowed',
    406: 'NotAcceptable',
    407: 'ProxyAuthenticationRequired',
    408: 'RequestTimeout',
    409: 'Conflict',
    410: 'Gone',
    411: 'LengthRequired',
    412: 'PreconditionFailed',
    413: 'PayloadTooLarge',
    414: 'UriTooLong',
    415: 'UnsupportedMediaType',
    416: 'RangeNotSatisfiable',
    417: 'ExpectationFailed',
    418: 'ImATeapot',
    421: 'MisdirectedRequest',
    422: 'UnprocessableEntity',
    423: 'Locked',
    424: 'FailedDependency',
    426: 'UpgradeRequired',
    428: 'PreconditionRequired',
    429: 'TooManyRequests',
    431: 'RequestHeaderFieldsTooLarge',
    451: 'UnavailableForLegalReasons',
    500: 'InternalServerError',
    501: 'NotImplemented',
    502: 'BadGateway',
    503: 'ServiceUnavailable',
    504: 'GatewayTimeout',
    505: 'HttpVersionNotSupported',
    506: 'VariantAlsoNegotiates',
    507: 'InsufficientStorage',
    508: 'LoopDetected',
    510: 'NotExtended',
    511: 'NetworkAuthenticationRequired',
}

_NON_ALNUM = re.compile(r'[^A-Za-z0-9]+')


def _words(text: str) -> list[str]:
    return [word for word in _NON_ALNUM.split(text) if word]


def operation_fragment(path: str, method: str) -> str:
    """Derive the method identifier of an operation.

    Non-empty path segments and the verb are lower-cased and joined with
    ``_``. Template braces and other characters that are invalid in
    identifiers are dropped.

    Examples:
        >>> operation_fragment('/foo/bar', 'GET')
        'foo_bar_get'
        >>> operation_fragment('/pet/{petId}', 'get')
        'pet_petid_get'
    """
    parts = []
    for segment in path.split('/'):
        cleaned = _NON_ALNUM.sub('', segment).lower()
        if cleaned:
            parts.append(cleaned)
    parts.append(method.lower())

    identifier = '_'.join(parts)
    if identifier[0].isdigit():
        identifier = '_' + identifier
    return sanitize_name_python_keywords(identifier)


def pascal_case(text: str) -> str:
    """Concatenate the alphanumeric words of ``text`` with their first character upper-cased."""
    return ''.join(capitalize(word) for word in _words(text))


def operation_type_fragment(path: str, method: str) -> str:
    """Derive the prefix of the type names generated for an operation.

    Examples:
        >>> operation_type_fragment('/pet', 'put')
        'PutPet'
        >>> operation_type_fragment('/pet/{petId}', 'get')
        'GetPetPetId'
    """
    return capitalize(method.lower()) + ''.join(
        pascal_case(segment) for segment in path.split('/')
    )


def status_fragment(status_code: int) -> str:
    """Derive the variant name of a declared response status.

    Examples:
        >>> status_fragment(404)
        'NotFound404'
        >>> status_fragment(299)
        'Status299'
    """
    reason = STATUS_REASONS.get(status_code)
    if reason is None:
        return f'Status{status_code}'
    return f'{reason}{status_code}'


def media_fragment(media_type: str) -> str:
    """Derive the variant name of a media type.

    The first character of every word in the type and subtype is upper-cased,
    a wildcard becomes ``Any`` and media-type parameters are dropped.

    Examples:
        >>> media_fragment('application/json')
        'ApplicationJson'
        >>> media_fragment('text/*')
        'TextAny'
        >>> media_fragment('application/problem+json; charset=utf-8')
        'ApplicationProblemJson'
    """
    essence = media_type.split(';', 1)[0].strip()
    fragment = ''
    for part in essence.split('/'):
        part = part.strip()
        if part == '*':
            fragment += 'Any'
            continue
        fragment += pascal_case(part)

    if not fragment:
        return 'Any'
    if fragment[0].isdigit():
        fragment = '_' + fragment
    return fragment


def content_type_name(type_fragment: str, qualifier: str) -> str:
    """Name the sum type disambiguating a multi-entry content map."""
    return f'{type_fragment}{qualifier}Content'


def parameter_name(name: str) -> str:
    """Convert a document parameter name into a Python parameter name."""
    return sanitize_parameter_field_name(name)


def uncollide(name: str, taken: Iterable[str]) -> str:
    """Append ``_`` to ``name`` until it is not in ``taken``."""
    taken = set(taken)
    while name in taken:
        name += '_'
    return name
