# permutation.py
from __future__ import annotations

import re

from alphabet import Alphabet
from errors import MalformedCycles

_cycle_re = re.compile(r"\(([^()]*)\)")


class Permutation:
    """
    A permutation of alphabet indices written in cycle notation, e.g.
    ``"(AELT) (BKNW) (S)"``.  Symbols missing from every cycle map to
    themselves; whitespace is ignored.

    The notation is parsed once into successor / predecessor tables, so
    `permute` and `invert` are plain list lookups.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet

        n = alphabet.size()
        self._fwd: list[int] = list(range(n))
        self._rev: list[int] = list(range(n))
        self._cycles: list[str] = []
        self._charted: set[int] = set()

        for cycle in self._split(cycles):
            self.add_cycle(cycle)

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet) -> "Permutation":
        """Build from a straight wiring string: alphabet[i] → wiring[i]."""
        if sorted(wiring) != sorted(alphabet.symbols):
            raise MalformedCycles("wiring must be a permutation of alphabet")

        seen: set[int] = set()
        groups: list[str] = []
        for start in range(alphabet.size()):
            cycle = []
            i = start
            while i not in seen:
                seen.add(i)
                cycle.append(alphabet.to_symbol(i))
                i = alphabet.to_index(wiring[i])
            if cycle:
                groups.append("(" + "".join(cycle) + ")")
        return cls(" ".join(groups), alphabet)

    # ── construction helpers ─────────────────────────────────────
    @staticmethod
    def _split(cycles: str) -> list[str]:
        text = "".join(cycles.split())
        groups: list[str] = []
        pos = 0
        while pos < len(text):
            m = _cycle_re.match(text, pos)
            if m is None:
                raise MalformedCycles(f"Malformed cycle notation near {text[pos:]!r}")
            groups.append(m.group(1))
            pos = m.end()
        return groups

    def add_cycle(self, cycle: str) -> None:
        """Add the cycle c0->c1->...->cm->c0, where `cycle` is c0c1...cm."""
        if not cycle:
            raise MalformedCycles("Empty cycle '()' in cycle notation")

        indices: list[int] = []
        for ch in cycle:
            idx = self.alphabet.to_index(ch)
            if idx in self._charted or idx in indices:
                raise MalformedCycles(f"Symbol {ch!r} appears more than once in cycles")
            indices.append(idx)

        for j, idx in enumerate(indices):
            nxt = indices[(j + 1) % len(indices)]
            self._fwd[idx] = nxt
            self._rev[nxt] = idx

        self._charted.update(indices)
        self._cycles.append(cycle)

    # ── index forms ──────────────────────────────────────────────
    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        """Return `p` reduced into 0..size-1 (never negative)."""
        return p % self.size()

    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── symbol forms ─────────────────────────────────────────────
    def permute_symbol(self, symbol: str) -> str:
        return self.alphabet.to_symbol(self.permute(self.alphabet.to_index(symbol)))

    def invert_symbol(self, symbol: str) -> str:
        return self.alphabet.to_symbol(self.invert(self.alphabet.to_index(symbol)))

    # ── properties ───────────────────────────────────────────────
    def derangement(self) -> bool:
        """True iff every symbol sits in a cycle of length two or more."""
        if len(self._charted) != self.size():
            return False
        return all(len(c) >= 2 for c in self._cycles)

    @property
    def cycles(self) -> tuple[str, ...]:
        return tuple(self._cycles)

    def cycle_text(self) -> str:
        return " ".join(f"({c})" for c in self._cycles)

    def __repr__(self) -> str:
        return f"<Permutation {self.cycle_text() or 'identity'}>"
