import keyword
import re
import unicodedata

__all__ = (
    'capitalize',
    'json_pointer',
    'pointer_child',
    'remove_accents',
    'sanitize_identifier',
    'sanitize_name_python_keywords',
    'sanitize_parameter_field_name',
)


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def sanitize_name_python_keywords(name: str) -> str:
    if keyword.iskeyword(name) or keyword.issoftkeyword(name):
        return f'{name}_'
    return name


def sanitize_parameter_field_name(name: str) -> str:
    """Sanitize parameter or field names to be valid Python identifiers.

    - Replace spaces, hyphens and dots with underscores
    - Remove other invalid characters
    - Ensure it doesn't start with a digit
    - Suffix Python keywords with an underscore
    """
    if not name:
        raise ValueError('Name cannot be empty')

    sanitized = re.sub(r'[-.\s]+', '_', remove_accents(name))
    sanitized = re.sub(r'[^A-Za-z0-9_]', '', sanitized)

    if not sanitized:
        return 'param'
    if sanitized[0].isdigit():
        sanitized = '_' + sanitized
    return sanitize_name_python_keywords(sanitized)


def sanitize_identifier(name: str) -> str:
    """Convert a document name into a class identifier.

    Only the first character is upper-cased; the rest of the name keeps its
    casing. Characters that are invalid in identifiers are dropped, a leading
    digit is prefixed with an underscore and keywords get a trailing one.
    """
    sanitized = re.sub(r'[^A-Za-z0-9_]', '', remove_accents(name or ''))
    sanitized = capitalize(sanitized)

    if sanitized and sanitized[0].isdigit():
        sanitized = '_' + sanitized

    if not sanitized:
        return 'UnnamedType'
    return sanitize_name_python_keywords(sanitized)


def json_pointer(*parts: str | int) -> str:
    """Build a document-local JSON pointer ('#/paths/~1pet/get') from raw parts."""
    escaped = [str(p).replace('~', '~0').replace('/', '~1') for p in parts]
    return '#/' + '/'.join(escaped)


def pointer_child(base: str, *parts: str | int) -> str:
    """Extend a JSON pointer with raw, unescaped parts."""
    escaped = [str(p).replace('~', '~0').replace('/', '~1') for p in parts]
    return '/'.join([base, *escaped])
