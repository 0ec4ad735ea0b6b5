# alphabet.py
from __future__ import annotations

import string

from errors import BadAlphabet, IndexOutOfRange, UnknownSymbol


class Alphabet:
    """Ordered, duplicate-free symbols; symbol K has index K."""

    def __init__(self, symbols: str = string.ascii_uppercase) -> None:
        if not symbols:
            raise BadAlphabet("Alphabet must contain at least one symbol")

        self.symbols: str = symbols
        self.symbol_to_index: dict[str, int] = {}
        for i, ch in enumerate(symbols):
            if ch in self.symbol_to_index:
                raise BadAlphabet(f"Symbol {ch!r} repeated in alphabet {symbols!r}")
            self.symbol_to_index[ch] = i

    def size(self) -> int:
        return len(self.symbols)

    __len__ = size

    def contains(self, symbol: str) -> bool:
        return symbol in self.symbol_to_index

    __contains__ = contains

    # symbol → integer signal
    def to_index(self, symbol: str) -> int:
        try:
            return self.symbol_to_index[symbol]
        except KeyError:
            raise UnknownSymbol(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self.symbols)):
            hi = len(self.symbols) - 1
            raise IndexOutOfRange(f"Signal {index} out of range 0–{hi}")
        return self.symbols[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self.symbols == other.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self.symbols}>"
