"""
Cipher engine: mode, cycle count and optional base wrapping around one variant.

    engine = CipherEngine("encrypt", algorithm="vigenere", key="correct horse")
    token = engine.process("attack at dawn", cycles=3)

Encrypt runs the variant's encode `cycles` times, feeding each output into
the next cycle, then base-encodes the result if requested. Decrypt undoes
the base layer first, then runs decode `cycles` times. An engine holds no
per-call state, so one instance can be shared between threads.
"""
import dataclasses
from dataclasses import dataclass
from typing import Optional

from .alphabet import DEFAULT_CHARSET
from .base_codec import BaseCodec
from .ecc import ErrorCorrection, check_symbols
from .errors import ConfigurationError
from .key import KeyMaterial
from .log import log_info
from .variants import DEFAULT_VARIANT, CipherStrategy, bytes_to_text, text_to_bytes, create_variant

ENCRYPT = "encrypt"
DECRYPT = "decrypt"
MODES = (ENCRYPT, DECRYPT)


@dataclass(frozen=True)
class CipherConfig:
    mode: str = ENCRYPT
    algorithm: str = DEFAULT_VARIANT
    use_base_encoding: bool = False
    charset: str = DEFAULT_CHARSET
    key: str = ""
    affine_a: int = 5
    affine_b: int = 8
    ecc_symbols: int = 0


class CipherEngine:
    def __init__(self, mode: Optional[str] = ENCRYPT, charset: Optional[str] = None,
                 algorithm: Optional[str] = DEFAULT_VARIANT, key: Optional[str] = "",
                 use_base_encoding: bool = False, *, affine_a: int = 5,
                 affine_b: int = 8, ecc_symbols: int = 0):
        config = CipherConfig(
            mode=mode or ENCRYPT,
            algorithm=algorithm or DEFAULT_VARIANT,
            use_base_encoding=bool(use_base_encoding),
            charset=charset or DEFAULT_CHARSET,
            key=key or "",
            affine_a=affine_a,
            affine_b=affine_b,
            ecc_symbols=ecc_symbols,
        )
        if config.mode not in MODES:
            raise ConfigurationError(
                f"Mode must be one of {', '.join(MODES)}, got {config.mode!r}")
        check_symbols(config.ecc_symbols)

        self.key = KeyMaterial(config.key)
        self.codec = BaseCodec(config.charset)
        self.variant = self._build_variant(config)
        self.config = config

    @classmethod
    def from_config(cls, config: CipherConfig) -> "CipherEngine":
        return cls(config.mode, config.charset, config.algorithm, config.key,
                   config.use_base_encoding, affine_a=config.affine_a,
                   affine_b=config.affine_b, ecc_symbols=config.ecc_symbols)

    def _build_variant(self, config: CipherConfig) -> CipherStrategy:
        return create_variant(config.algorithm, self.key,
                              affine_a=config.affine_a, affine_b=config.affine_b)

    @property
    def mode(self) -> str:
        return self.config.mode

    @property
    def algorithm(self) -> str:
        return self.config.algorithm

    def set_variant(self, algorithm: str):
        """Swap in another variant, validated against the same key rules."""
        config = dataclasses.replace(self.config, algorithm=algorithm or DEFAULT_VARIANT)
        self.variant = self._build_variant(config)
        self.config = config

    def effective_cycles(self, cycles: int) -> int:
        if isinstance(cycles, bool) or not isinstance(cycles, int) or cycles < 1:
            raise ConfigurationError(f"Cycles must be a positive integer, got {cycles!r}")
        if self.variant.cycle_insensitive and cycles != 1:
            log_info(f"Variant '{self.variant.name}' runs a single cycle; ignoring cycles={cycles}.")
            return 1
        return cycles

    def process(self, text: str, cycles: int = 1) -> str:
        if not isinstance(text, str):
            raise ConfigurationError(f"Input must be text, got {type(text).__name__}")
        cycles = self.effective_cycles(cycles)
        variant = self.variant
        encrypting = self.config.mode == ENCRYPT
        step = variant.encode if encrypting else variant.decode

        if self.config.use_base_encoding and not encrypting:
            text = self.from_base(text)

        for _ in range(cycles):
            text = step(text)

        if self.config.use_base_encoding and encrypting:
            text = self.to_base(text)
        return text

    def to_base(self, text: str) -> str:
        if not text:
            return text
        data = text_to_bytes(text)
        if self.config.ecc_symbols:
            data = ErrorCorrection.encode(data, self.config.ecc_symbols)
        return self.codec.encode(data)

    def from_base(self, text: str) -> str:
        if not text:
            return text
        data = self.codec.decode(text)
        if self.config.ecc_symbols:
            data, _, _ = ErrorCorrection.decode(data)
        return bytes_to_text(data)

    def __repr__(self) -> str:
        return (f"CipherEngine(mode={self.mode!r}, algorithm={self.algorithm!r}, "
                f"use_base_encoding={self.config.use_base_encoding})")
