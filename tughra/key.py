from .errors import ConfigurationError

MIN_KEY_LENGTH = 8


class KeyMaterial:
    """
    Immutable view of the caller's key.

    - `text`: the key as given
    - `data`: its UTF-8 bytes (byte-level variants and shift amounts)
    - `offsets`: the key with repeated characters collapsed, first occurrence
      kept; the default variant and XOR Pro walk this periodically
    """

    __slots__ = ("text", "data", "offsets")

    def __init__(self, key: str = ""):
        if key is None:
            key = ""
        if not isinstance(key, str):
            raise ConfigurationError("Encryption key must be a string.")
        object.__setattr__(self, "text", key)
        object.__setattr__(self, "data", key.encode("utf-8", "surrogatepass"))
        object.__setattr__(self, "offsets", "".join(dict.fromkeys(key)))

    def __setattr__(self, name, value):
        raise AttributeError("KeyMaterial is immutable")

    @property
    def byte_length(self) -> int:
        return len(self.data)

    @property
    def utf16_length(self) -> int:
        return len(self.text.encode("utf-16-le", "surrogatepass")) // 2

    def check_strength(self):
        # astral characters count twice, as UTF-16 code units
        if self.utf16_length < MIN_KEY_LENGTH:
            raise ConfigurationError(
                f"Key must be at least {MIN_KEY_LENGTH} characters long.")

    def check_offsets(self):
        if not self.offsets:
            raise ConfigurationError("Key offsets must contain at least one valid value.")

    def __len__(self) -> int:
        return len(self.text)

    def __bool__(self) -> bool:
        return bool(self.text)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyMaterial):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __repr__(self) -> str:
        return f"KeyMaterial(<{len(self.text)} chars>)"
