from typing import Dict, Iterator

from .errors import ConfigurationError

# Base64 symbols plus the '=' pad, 65 in total
DEFAULT_CHARSET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/="


class AlphabetTable:
    """
    Ordered set of distinct symbols used by the base codec.

    Index <-> symbol mapping is fixed at construction. Duplicate symbols
    would make two indices decode to the same value, and a one-symbol
    alphabet carries no information, so both are rejected here.
    """

    def __init__(self, symbols: str):
        if not isinstance(symbols, str):
            raise ConfigurationError("Alphabet must be a string of symbols.")
        if len(symbols) < 2:
            raise ConfigurationError(
                f"Alphabet needs at least 2 symbols, got {len(symbols)}.")

        self._symbols = symbols
        self._index: Dict[str, int] = {}
        for i, symbol in enumerate(symbols):
            if symbol in self._index:
                raise ConfigurationError(
                    f"Duplicate symbol {symbol!r} in alphabet at position {i}.")
            self._index[symbol] = i

    @property
    def base(self) -> int:
        return len(self._symbols)

    @property
    def symbols(self) -> str:
        return self._symbols

    def symbol(self, index: int) -> str:
        return self._symbols[index]

    def index(self, symbol: str) -> int:
        """Return the index of `symbol`, or -1 if it is not in the table."""
        return self._index.get(symbol, -1)

    def __contains__(self, symbol) -> bool:
        return symbol in self._index

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AlphabetTable):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"AlphabetTable({self._symbols!r})"
