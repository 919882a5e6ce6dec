"""
Schemas - canonical serialization and the error taxonomy.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

from .errors import (
    CanonicalizationException,
    ConfigurationException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    IndexOutOfBoundsException,
    MalformedProofException,
    ShapeMismatchException,
    UnknownHashAlgorithmException,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "IndexOutOfBoundsException",
    "ShapeMismatchException",
    "MalformedProofException",
    "CanonicalizationException",
    "UnknownHashAlgorithmException",
    "ConfigurationException",
]
