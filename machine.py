# machine.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from copy import copy
from typing import Iterable, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import (
    BadSettingLength,
    ConfigError,
    DuplicateRotor,
    MisplacedRotor,
    MissingSettings,
    NotAReflector,
    TooManyRotatingRotors,
    UnknownRotor,
)
from permutation import Permutation
from rotor_and_reflector import Rotor


class Machine:
    """
    A rotor machine with `num_slots` slots and `max_rotating` pawls.

    Slot 0 holds the reflector and slot ``num_slots - 1`` the fast rotor.
    `catalog` holds the available wheels; they are templates only, every
    `insert_rotors` works on fresh copies.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_slots: int,
        max_rotating: int,
        catalog: Iterable[Rotor],
    ) -> None:
        if num_slots < 2:
            raise ConfigError(f"Need at least 2 rotor slots, got {num_slots}")
        if not 0 <= max_rotating < num_slots:
            raise ConfigError(
                f"Pawl count must be in 0–{num_slots - 1}, got {max_rotating}"
            )

        self.alphabet = alphabet
        self.num_slots = num_slots
        self.max_rotating = max_rotating

        self.catalog: dict[str, Rotor] = {}
        for rotor in catalog:
            if rotor.name in self.catalog:
                raise DuplicateRotor(f"Rotor {rotor.name} defined twice")
            self.catalog[rotor.name] = rotor

        self.rotors: list[Rotor] = []
        self.plugboard = Permutation("", alphabet)

    # ── arrangement & settings ──────────────────────────────────

    def rotor(self, k: int) -> Rotor:
        """Return the occupant of slot `k` (0 is the reflector)."""
        self._require_rotors()
        return self.rotors[k]

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill slots 0..num_slots-1 with fresh copies of the named wheels,
        all at position and ring setting 0."""
        self.rotors = self._arrange(names)

    def configure(
        self,
        names: Sequence[str],
        positions: str,
        rings: str = "",
        plugboard: Permutation | None = None,
    ) -> None:
        """Insert `names`, set positions, rings and plugboard in one go.

        Everything is checked before anything changes, so a bad argument
        leaves the previous arrangement running untouched.
        """
        chosen = self._arrange(names)
        pos = self._indices(positions, "position")
        ring = self._indices(rings, "ring")
        if plugboard is None:
            plugboard = Permutation("", self.alphabet)

        for rotor, p, r in zip(chosen[1:], pos, ring):
            rotor.position, rotor.ring_setting = p, r
        self.rotors = chosen
        self.plugboard = plugboard

    def set_positions(self, setting: str) -> None:
        """Set slots 1.. from `setting`, leftmost rotor first."""
        self._require_rotors()
        for rotor, idx in zip(self.rotors[1:], self._indices(setting, "position")):
            rotor.position = idx

    def set_ring_settings(self, setting: str) -> None:
        """Apply ring-stellung to slots 1..; "" puts every ring at the first symbol."""
        self._require_rotors()
        for rotor, idx in zip(self.rotors[1:], self._indices(setting, "ring")):
            rotor.ring_setting = idx

    def set_plugboard(self, plugboard: Permutation) -> None:
        self.plugboard = plugboard

    def window(self) -> str:
        """Symbols showing at slots 1.., leftmost first."""
        return "".join(r.window for r in self.rotors[1:])

    # ── stepping logic  ─────────────────────────────────────────

    def advance_rotors(self, debug: Debug | None = None) -> None:
        """Advance rotors one key-press.

        Every decision is taken against the positions *before* the press,
        then all chosen rotors move together; a rotor at its notch with a
        rotating left neighbour moves itself and that neighbour, which is
        what produces the double step of the middle rotor.
        """
        self._require_rotors()
        rotors = self.rotors
        moves = [False] * len(rotors)
        moves[-1] = True

        for i in range(len(rotors) - 1, 0, -1):
            rotor, left = rotors[i], rotors[i - 1]
            if rotor.rotates and left.rotates and rotor.at_notch():
                moves[i] = moves[i - 1] = True

        before = self.window()
        for rotor, move in zip(rotors, moves):
            if move:
                rotor.advance()

        if debug is not None and debug.active("stepping"):
            slots = [i for i, move in enumerate(moves) if move]
            debug.log("stepping", f"{before} -> {self.window()} (slots {slots})")

    # ── encipher  ───────────────────────────────────────────────

    def convert_index(self, c: int, debug: Debug | None = None) -> int:
        """Advance the machine, then return the image of index `c`."""
        self.advance_rotors(debug)

        plugged = self.plugboard.permute(c)
        if debug is not None:
            debug.log("plugboard", f"{c} -> {plugged}")

        signal = plugged
        for rotor in reversed(self.rotors[1:]):
            signal = rotor.convert_forward(signal)
        for rotor in self.rotors:
            signal = rotor.convert_backward(signal)
        out = self.plugboard.permute(signal)

        if debug is not None and debug.active("encipher"):
            sym = self.alphabet.to_symbol
            debug.log(
                "encipher",
                f"[{self.window()}] {sym(self.plugboard.wrap(c))} -> "
                f"{sym(plugged)} -> {sym(signal)} -> {sym(out)}",
            )
        return out

    def convert(self, msg: str, debug: Debug | None = None) -> str:
        """Encode / decode `msg`, one key-press per symbol."""
        return "".join(
            self.alphabet.to_symbol(self.convert_index(self.alphabet.to_index(ch), debug))
            for ch in msg
        )

    # ── helpers ─────────────────────────────────────────────────

    def _require_rotors(self) -> None:
        if not self.rotors:
            raise MissingSettings("No rotors inserted")

    def _arrange(self, names: Sequence[str]) -> list[Rotor]:
        if len(names) != self.num_slots:
            raise BadSettingLength(
                f"Expected {self.num_slots} rotor names, got {len(names)}"
            )

        chosen: list[Rotor] = []
        for name in names:
            try:
                template = self.catalog[name]
            except KeyError:
                raise UnknownRotor(f"Rotor {name!r} does not exist") from None
            if name in (r.name for r in chosen):
                raise DuplicateRotor(f"Rotor {name} used more than once")
            rotor = copy(template)
            rotor.position = rotor.ring_setting = 0
            chosen.append(rotor)

        if not chosen[0].reflecting:
            raise NotAReflector(f"Rotor {chosen[0].name} in slot 0 must be a reflector")
        for rotor in chosen[1:]:
            if rotor.reflecting:
                raise MisplacedRotor(f"Reflector {rotor.name} may only sit in slot 0")
        if not chosen[-1].rotates:
            raise MisplacedRotor(f"Rotor {chosen[-1].name} in the fast slot must rotate")

        moving = sum(r.rotates for r in chosen)
        if moving > self.max_rotating:
            raise TooManyRotatingRotors(
                f"{moving} rotating rotors but only {self.max_rotating} pawls"
            )
        return chosen

    def _indices(self, setting: str, what: str) -> list[int]:
        """Validate a position / ring string and return its indices.
        An empty ring string means every ring at the first symbol."""
        need = self.num_slots - 1
        if not setting and what == "ring":
            return [0] * need
        if len(setting) != need:
            raise BadSettingLength(
                f"{what.capitalize()} setting {setting!r} must have {need} symbols"
            )
        return [self.alphabet.to_index(ch) for ch in setting]

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self.rotors) or "empty"
        return f"<Machine slots={self.num_slots} pawls={self.max_rotating} [{names}]>"
