"""Processors package for OpenAPI extraction logic.

This package contains processor classes that handle extraction and
transformation of OpenAPI operation elements into descriptors.
"""

from clientforge.codegen.processors.parameter_processor import ParameterProcessor
from clientforge.codegen.processors.response_processor import (
    MediaTypeRule,
    ResponseProcessor,
    ResponseTaxonomy,
)

__all__ = [
    'MediaTypeRule',
    'ParameterProcessor',
    'ResponseProcessor',
    'ResponseTaxonomy',
]
