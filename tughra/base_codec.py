"""
Generic base-N codec over an arbitrary alphabet.

Bytes are flattened into one continuous bit string (8 bits per byte, MSB
first) and cut into fixed-size chunks. Each chunk's value indexes one
symbol of the alphabet. Decoding reverses this and drops any trailing
group shorter than 8 bits, which is exactly the zero padding added to the
last chunk.

Chunk size is floor(log2(base)), capped at 8 bits:
- for power-of-two alphabets this equals ceil(log2(base));
- for any other size, ceil(log2(base)) would produce chunk values past the
  end of the alphabet, so the top symbols are simply never emitted;
- with chunks wider than 8 bits the pad could reach a whole byte and decode
  would return an extra trailing 0x00.
"""
from typing import Union

from .alphabet import AlphabetTable, DEFAULT_CHARSET
from .errors import InvalidSymbolError

MAX_CHUNK_BITS = 8


def chunk_size_for(base: int) -> int:
    """Number of bits carried by one symbol of an alphabet of size `base`."""
    return min(base.bit_length() - 1, MAX_CHUNK_BITS)


class BaseCodec:
    def __init__(self, alphabet: Union[AlphabetTable, str] = DEFAULT_CHARSET):
        if not isinstance(alphabet, AlphabetTable):
            alphabet = AlphabetTable(alphabet)
        self.alphabet = alphabet
        self.chunk_size = chunk_size_for(alphabet.base)

    @property
    def base(self) -> int:
        return self.alphabet.base

    def encode(self, data: bytes) -> str:
        if not data:
            return ""
        size = self.chunk_size
        bits = "".join(f"{b:08b}" for b in data)

        output = []
        for i in range(0, len(bits), size):
            chunk = bits[i:i + size].ljust(size, "0")
            output.append(self.alphabet.symbol(int(chunk, 2)))
        return "".join(output)

    def decode(self, text: str) -> bytes:
        if not text:
            return b""
        size = self.chunk_size
        limit = 1 << size

        parts = []
        for pos, symbol in enumerate(text):
            index = self.alphabet.index(symbol)
            if index == -1:
                raise InvalidSymbolError(
                    f"Invalid base character {symbol!r} at position {pos}.")
            if index >= limit:
                raise InvalidSymbolError(
                    f"Symbol {symbol!r} at position {pos} does not fit in "
                    f"{size} bits for a base-{self.base} alphabet.")
            parts.append(format(index, f"0{size}b"))
        bits = "".join(parts)

        whole = len(bits) - len(bits) % 8
        return bytes(int(bits[i:i + 8], 2) for i in range(0, whole, 8))

    def __repr__(self) -> str:
        return f"BaseCodec(base={self.base}, chunk_size={self.chunk_size})"
