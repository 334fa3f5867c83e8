"""Exception taxonomy for the Tughra engine."""


class TughraError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(TughraError, ValueError):
    """Bad or missing key, invalid alphabet, bad mode or cycle count."""


class UnknownVariantError(ConfigurationError):
    """The requested variant identifier is not in the registry."""


class NoInverseError(ConfigurationError):
    """Affine multiplier has no modular inverse for the alphabet size."""


class InvalidSymbolError(TughraError, ValueError):
    """Base decode met a symbol that is not part of the alphabet."""


class MalformedInputError(TughraError, ValueError):
    """Ciphertext cannot be parsed by the selected variant."""
