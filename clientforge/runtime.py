"""Call-time response classification.

Generated clients classify an observed HTTP status strictly against the
statuses the operation declares. Anything not declared, including statuses
in the 2xx range, is an ``UnknownResponse``.
"""

import dataclasses
from collections.abc import Collection, Mapping

__all__ = [
    'UNKNOWN_RESPONSE_VARIANT',
    'OTHER_ERROR_VARIANT',
    'ResponseClassification',
    'classify_status',
]

UNKNOWN_RESPONSE_VARIANT = 'UnknownResponse'
"""Error variant for a response whose status the operation does not declare."""

OTHER_ERROR_VARIANT = 'OtherError'
"""Error variant for failures not representable by an HTTP status."""


@dataclasses.dataclass(frozen=True)
class ResponseClassification:
    variant: str
    is_success: bool

    @property
    def is_declared(self) -> bool:
        return self.variant != UNKNOWN_RESPONSE_VARIANT


def classify_status(
    declared: Mapping[int, str],
    status_code: int,
    success_codes: Collection[int] | None = None,
) -> ResponseClassification:
    """Classify an observed status code.

    Args:
        declared: Declared status codes mapped to their variant names.
        status_code: The status code observed at call time.
        success_codes: Declared codes that belong to the success type.
            Defaults to the declared codes in the 2xx range.

    Returns:
        The variant the response belongs to and whether it is a success.
    """
    if status_code not in declared:
        return ResponseClassification(UNKNOWN_RESPONSE_VARIANT, is_success=False)

    if success_codes is None:
        is_success = 200 <= status_code < 300
    else:
        is_success = status_code in success_codes
    return ResponseClassification(declared[status_code], is_success=is_success)
