"""
Variant registry: the closed set of named text transforms.

Every variant is a CipherStrategy subclass registered under its public
identifier. The engine resolves the identifier once at configuration time
and then calls the bound encode/decode of that instance for each cycle.
"""
import base64
import binascii
from abc import ABC, abstractmethod
from string import ascii_lowercase, ascii_uppercase
from typing import Dict, Optional, Type

from .errors import (
    ConfigurationError,
    MalformedInputError,
    NoInverseError,
    UnknownVariantError,
)
from .key import KeyMaterial

# Size of the Unicode code-point space; code-point arithmetic wraps here
CODE_POINTS = 0x110000
LATIN_SIZE = 26

DEFAULT_VARIANT = "default"

# ==========================================
#  FRAMEWORK: Abstract Base Class & Registry
# ==========================================

class CipherStrategy(ABC):
    """Abstract base class that all variants must implement."""

    # decode(x) == encode(x) for every input
    involution = False
    # repeating the variant adds nothing, the engine runs it exactly once
    cycle_insensitive = False
    # key must pass the minimum-length check
    requires_key = False

    def __init__(self, key: Optional[KeyMaterial] = None, **params):
        self.key = key if key is not None else KeyMaterial()

    @property
    @abstractmethod
    def name(self) -> str:
        """The public identifier for this variant."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Short description for help text."""
        pass

    @classmethod
    def validate_key(cls, key: KeyMaterial):
        if cls.requires_key:
            key.check_strength()

    @abstractmethod
    def encode(self, text: str) -> str:
        pass

    @abstractmethod
    def decode(self, text: str) -> str:
        pass


VARIANT_REGISTRY: Dict[str, Type[CipherStrategy]] = {}


def register_variant(cls):
    """Decorator to auto-register variants."""
    VARIANT_REGISTRY[cls.name] = cls
    return cls


def get_variant(name: str) -> Type[CipherStrategy]:
    try:
        return VARIANT_REGISTRY[name]
    except (KeyError, TypeError):
        raise UnknownVariantError(f"Unsupported algorithm: {name!r}") from None


def create_variant(name: str, key: Optional[KeyMaterial] = None, **params) -> CipherStrategy:
    """Resolve `name`, check the key against its rules and build the instance."""
    cls = get_variant(name)
    if key is None:
        key = KeyMaterial()
    cls.validate_key(key)
    return cls(key, **params)


# ==========================================
#  HELPERS
# ==========================================

def mod_inverse(a: int, m: int) -> Optional[int]:
    """Multiplicative inverse of `a` modulo `m`, or None when gcd(a, m) != 1."""
    try:
        return pow(a, -1, m)
    except ValueError:
        return None


def _latin_table(fn) -> Dict[int, int]:
    """Translation table applying `fn` to the 0-25 index of A-Z and a-z."""
    table = {}
    for base in (ord("A"), ord("a")):
        for x in range(LATIN_SIZE):
            table[base + x] = base + fn(x) % LATIN_SIZE
    return table


def _inverted(table: Dict[int, int]) -> Dict[int, int]:
    return {v: k for k, v in table.items()}


def _shift_code_points(text: str, amount: int) -> str:
    return "".join(chr((ord(c) + amount) % CODE_POINTS) for c in text)


def text_to_bytes(text: str) -> bytes:
    return text.encode("utf-8", "surrogatepass")


def bytes_to_text(data: bytes) -> str:
    try:
        return data.decode("utf-8", "surrogatepass")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"Decoded bytes are not valid UTF-8: {e}") from None


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInputError(f"Invalid Base64 input: {e}") from None


class _LatinMap(CipherStrategy):
    """
    Letter-only variant driven by a pair of translation tables.

    Subclasses give the forward map on the 0-25 letter index; the inverse
    table is derived from it, so the two can never drift apart. Anything
    outside A-Z/a-z passes through untouched.
    """

    def __init__(self, key=None, **params):
        super().__init__(key, **params)
        self._forward = _latin_table(self.forward)
        self._inverse = _inverted(self._forward)

    @abstractmethod
    def forward(self, x: int) -> int:
        pass

    def encode(self, text: str) -> str:
        return text.translate(self._forward)

    def decode(self, text: str) -> str:
        return text.translate(self._inverse)


# ==========================================
#  DEFAULT: Tughra
# ==========================================

@register_variant
class TughraVariant(CipherStrategy):
    """
    Position-dependent shift over the full code-point space.

    Character i is moved by the code point of offsets[i % len(offsets)],
    where offsets is the key with duplicates collapsed. Works for any
    script because nothing is restricted to a sub-range.
    """

    name = DEFAULT_VARIANT
    description = "Tughra: periodic per-character shift by key code points (all scripts)."

    @classmethod
    def validate_key(cls, key: KeyMaterial):
        key.check_offsets()

    def __init__(self, key=None, **params):
        super().__init__(key, **params)
        self._offsets = [ord(c) for c in self.key.offsets]

    def _apply(self, text: str, sign: int) -> str:
        offsets = self._offsets
        period = len(offsets)
        return "".join(
            chr((ord(c) + sign * offsets[i % period]) % CODE_POINTS)
            for i, c in enumerate(text)
        )

    def encode(self, text: str) -> str:
        return self._apply(text, 1)

    def decode(self, text: str) -> str:
        return self._apply(text, -1)


# ==========================================
#  KEY-LENGTH SHIFTS
# ==========================================

class _KeyLengthShift(CipherStrategy):
    """Shift every code point by the UTF-8 byte length of the key."""

    requires_key = True

    def encode(self, text: str) -> str:
        return _shift_code_points(text, self.key.byte_length)

    def decode(self, text: str) -> str:
        return _shift_code_points(text, -self.key.byte_length)


@register_variant
class CaesarVariant(_KeyLengthShift):
    name = "caesar"
    description = "Caesar: shift every character by the key length."


# ==========================================
#  BYTE-LEVEL: XOR & Vigenere
# ==========================================

@register_variant
class XorVariant(CipherStrategy):
    name = "xor"
    description = "XOR UTF-8 bytes with the repeating key, Base64 output. Single cycle."
    requires_key = True
    cycle_insensitive = True

    def _xor(self, data: bytes) -> bytes:
        key = self.key.data
        return bytes(b ^ key[i % len(key)] for i, b in enumerate(data))

    def encode(self, text: str) -> str:
        return base64.b64encode(self._xor(text_to_bytes(text))).decode("ascii")

    def decode(self, text: str) -> str:
        return bytes_to_text(self._xor(_b64decode(text)))


@register_variant
class VigenereVariant(CipherStrategy):
    name = "vigenere"
    description = "Vigenere over UTF-8 bytes (add key bytes mod 256), Base64 output."
    requires_key = True

    def _shift(self, data: bytes, sign: int) -> bytes:
        key = self.key.data
        return bytes((b + sign * key[i % len(key)]) % 256 for i, b in enumerate(data))

    def encode(self, text: str) -> str:
        return base64.b64encode(self._shift(text_to_bytes(text), 1)).decode("ascii")

    def decode(self, text: str) -> str:
        return bytes_to_text(self._shift(_b64decode(text), -1))


# ==========================================
#  PRINTABLE-ASCII & LETTER VARIANTS
# ==========================================

@register_variant
class Rot47Variant(CipherStrategy):
    name = "ROT47"
    description = "ROT47 over printable ASCII (0x21-0x7E). Self-inverse, single cycle."
    involution = True
    cycle_insensitive = True

    TABLE = {c: 33 + (c + 14) % 94 for c in range(0x21, 0x7F)}

    def encode(self, text: str) -> str:
        return text.translate(self.TABLE)

    def decode(self, text: str) -> str:
        return self.encode(text)


@register_variant
class AtbashVariant(_LatinMap):
    name = "Atbash"
    description = "Atbash: mirror the Latin alphabet (A<->Z). Self-inverse."
    involution = True

    def forward(self, x: int) -> int:
        return 25 - x


@register_variant
class SubstitutionVariant(CipherStrategy):
    """Fixed QWERTY-order monoalphabetic substitution, case preserved."""

    name = "Substitution"
    description = "Simple substitution using a QWERTY-ordered alphabet."

    KEYBOARD = "qwertyuiopasdfghjklzxcvbnm"
    FORWARD = str.maketrans(ascii_lowercase + ascii_uppercase,
                            KEYBOARD + KEYBOARD.upper())
    INVERSE = _inverted(FORWARD)

    def encode(self, text: str) -> str:
        return text.translate(self.FORWARD)

    def decode(self, text: str) -> str:
        return text.translate(self.INVERSE)


# ==========================================
#  BASE64 & CODE-POINT SHIFTS
# ==========================================

@register_variant
class Base64Variant(CipherStrategy):
    name = "Base64"
    description = "Standard Base64 of the UTF-8 text (encoding only, no key)."

    def encode(self, text: str) -> str:
        return base64.b64encode(text_to_bytes(text)).decode("ascii")

    def decode(self, text: str) -> str:
        return bytes_to_text(_b64decode(text))


@register_variant
class AsciiShiftVariant(_KeyLengthShift):
    name = "ASCII"
    description = "ASCII shift: move every character by the key length."


# ==========================================
#  AFFINE
# ==========================================

@register_variant
class AffineVariant(_LatinMap):
    """
    y = a*x + b (mod 26) on Latin letters.

    Decoding needs a^-1 mod 26, which only exists when a is coprime to 26.
    That is checked here, at construction, so a bad multiplier never
    reaches process().
    """

    name = "Affine"
    description = "Affine cipher y = a*x + b mod 26 (defaults a=5, b=8)."

    def __init__(self, key=None, affine_a: int = 5, affine_b: int = 8, **params):
        if isinstance(affine_a, bool) or not isinstance(affine_a, int):
            raise ConfigurationError(f"Affine 'a' must be an integer, got {affine_a!r}")
        if isinstance(affine_b, bool) or not isinstance(affine_b, int):
            raise ConfigurationError(f"Affine 'b' must be an integer, got {affine_b!r}")
        self.a = affine_a
        self.b = affine_b
        self.m = LATIN_SIZE
        self.a_inv = mod_inverse(self.a % self.m, self.m)
        if self.a_inv is None:
            raise NoInverseError(
                f"No modular inverse exists for a={self.a} mod {self.m}")
        super().__init__(key, **params)
        self._inverse = _latin_table(self.backward)

    def forward(self, x: int) -> int:
        return self.a * x + self.b

    def backward(self, y: int) -> int:
        return self.a_inv * (y - self.b)


@register_variant
class UnicodeShiftVariant(_KeyLengthShift):
    name = "Unicode Shift"
    description = "Unicode shift: move every code point by the key length."


@register_variant
class NumericVariant(CipherStrategy):
    name = "Numeric"
    description = "Numeric: dash-separated decimal code points."

    SEPARATOR = "-"

    def encode(self, text: str) -> str:
        return self.SEPARATOR.join(str(ord(c)) for c in text)

    def decode(self, text: str) -> str:
        if not text:
            return ""
        chars = []
        for pos, token in enumerate(text.split(self.SEPARATOR)):
            if not (token.isascii() and token.isdigit()):
                raise MalformedInputError(
                    f"Non-numeric token {token!r} at index {pos}")
            value = int(token)
            if value >= CODE_POINTS:
                raise MalformedInputError(
                    f"Token {token!r} at index {pos} is not a valid code point")
            chars.append(chr(value))
        return "".join(chars)


@register_variant
class ReversedCaesarVariant(_LatinMap):
    """
    Atbash followed by a shift of the key's byte length.

    x -> 25 - x + L is a reflection of Z/26, so applying it twice gives
    back the input; the derived inverse table is the forward table itself.
    """

    name = "Reversed Caesar"
    description = "Reversed Caesar: mirror the alphabet then shift by key length."
    requires_key = True
    involution = True

    def forward(self, x: int) -> int:
        return 25 - x + self.key.byte_length


# ==========================================
#  ROT FAMILY
# ==========================================

class _Rotate(_LatinMap):
    SHIFT = 0

    def forward(self, x: int) -> int:
        return x + self.SHIFT


@register_variant
class Rot13Variant(_Rotate):
    name = "ROT13"
    description = "ROT13 letter rotation. Self-inverse, single cycle."
    involution = True
    cycle_insensitive = True
    SHIFT = 13


@register_variant
class Rot18Variant(_Rotate):
    name = "ROT18"
    description = "Rotate letters by 18."
    SHIFT = 18


@register_variant
class Rot25Variant(_Rotate):
    name = "ROT25"
    description = "Rotate letters by 25."
    SHIFT = 25


@register_variant
class Rot30Variant(_Rotate):
    name = "ROT30"
    description = "Rotate letters by 30 (4 positions mod 26)."
    SHIFT = 30 % LATIN_SIZE


# ==========================================
#  PRO VARIANTS
# ==========================================

@register_variant
class XorProVariant(CipherStrategy):
    """
    Character-level XOR against the deduplicated key.

    Only the low 16 bits of each key code point are used, so the result
    stays in the same 64K plane as the input and never leaves the
    code-point space.
    """

    name = "XOR Pro"
    description = "XOR each code point with the repeating key. Self-inverse."
    requires_key = True
    involution = True

    def __init__(self, key=None, **params):
        super().__init__(key, **params)
        self._mask = [ord(c) & 0xFFFF for c in self.key.offsets]

    def encode(self, text: str) -> str:
        mask = self._mask
        return "".join(chr(ord(c) ^ mask[i % len(mask)]) for i, c in enumerate(text))

    def decode(self, text: str) -> str:
        return self.encode(text)


@register_variant
class AffineProVariant(AffineVariant):
    name = "Affine Pro"
    description = "Affine cipher with configurable a and b (a must be coprime to 26)."


@register_variant
class SubstitutionProVariant(SubstitutionVariant):
    name = "Substitution Pro"
    description = "Substitution using the QWERTY table with derived inverse."
