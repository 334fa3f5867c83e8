"""Tughra: configurable, reversible text obfuscation with cycles and base-N wrapping."""

__version__ = "1.0.1"

from .alphabet import DEFAULT_CHARSET, AlphabetTable
from .base_codec import BaseCodec
from .engine import DECRYPT, ENCRYPT, CipherConfig, CipherEngine
from .errors import (
    ConfigurationError,
    InvalidSymbolError,
    MalformedInputError,
    NoInverseError,
    TughraError,
    UnknownVariantError,
)
from .key import KeyMaterial
from .keygen import UnicodeRange, generate_key, list_unicode_ranges
from .variants import VARIANT_REGISTRY, CipherStrategy, create_variant, get_variant
from .worker import BackgroundWorker, handle_request

__all__ = [
    "AlphabetTable",
    "BackgroundWorker",
    "BaseCodec",
    "CipherConfig",
    "CipherEngine",
    "CipherStrategy",
    "ConfigurationError",
    "DECRYPT",
    "DEFAULT_CHARSET",
    "ENCRYPT",
    "InvalidSymbolError",
    "KeyMaterial",
    "MalformedInputError",
    "NoInverseError",
    "TughraError",
    "UnicodeRange",
    "UnknownVariantError",
    "VARIANT_REGISTRY",
    "create_variant",
    "generate_key",
    "get_variant",
    "handle_request",
    "list_unicode_ranges",
]
