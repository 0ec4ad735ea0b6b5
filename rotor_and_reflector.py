# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from errors import ConfigError, IllegalAdvance, IllegalSetting, NotADerangement
from permutation import Permutation


class RotorKind(Enum):
    """Type letters as they appear in a configuration file."""

    REFLECTOR = "R"
    FIXED = "N"
    MOVING = "M"


class Rotor:
    """
    One wheel: a wiring permutation plus its rotational state.

    Reflectors, fixed wheels and moving wheels share this class and are told
    apart by `kind`; only moving wheels carry notches or may `advance`.
    Build them with `Rotor.reflector`, `Rotor.fixed` or `Rotor.moving`.
    """

    def __init__(
        self,
        name: str,
        kind: RotorKind,
        permutation: Permutation,
        notches: str = "",
    ) -> None:
        if kind is RotorKind.REFLECTOR and not permutation.derangement():
            raise NotADerangement(
                f"Reflector {name} wiring must map no symbol to itself"
            )
        if notches and kind is not RotorKind.MOVING:
            raise ConfigError(f"Rotor {name}: only moving rotors carry notches")

        self.name = name
        self.kind = kind
        self.permutation = permutation
        self.alphabet = permutation.alphabet
        self.size = permutation.size()

        for ch in notches:
            self.alphabet.to_index(ch)         # unknown notch symbols fail here
        self.notches = frozenset(notches)

        self.position = 0
        self.ring_setting = 0

    # ── constructors ─────────────────────────────────────────────
    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, RotorKind.REFLECTOR, permutation)

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, RotorKind.FIXED, permutation)

    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> "Rotor":
        return cls(name, RotorKind.MOVING, permutation, notches)

    # ── capabilities ─────────────────────────────────────────────
    @property
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    @property
    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    @property
    def window(self) -> str:
        """Symbol currently showing at the rotor's window."""
        return self.alphabet.to_symbol(self.position)

    # ── ring & position ──────────────────────────────────────────
    def _index_of(self, setting: int | str) -> int:
        if isinstance(setting, str):
            return self.alphabet.to_index(setting)
        return self.permutation.wrap(setting)

    def set_position(self, setting: int | str) -> None:
        idx = self._index_of(setting)
        if self.reflecting and idx != 0:
            raise IllegalSetting(f"Reflector {self.name} cannot be turned")
        self.position = idx

    def set_ring(self, setting: int | str) -> None:
        idx = self._index_of(setting)
        if self.reflecting and idx != 0:
            raise IllegalSetting(f"Reflector {self.name} has no ring setting")
        self.ring_setting = idx

    # ── stepping ─────────────────────────────────────────────────
    def at_notch(self) -> bool:
        return self.rotates and self.window in self.notches

    def advance(self) -> None:
        if not self.rotates:
            raise IllegalAdvance(f"Rotor {self.name} ({self.kind.name.lower()}) cannot advance")
        self.position = (self.position + 1) % self.size

    # ── signal paths ─────────────────────────────────────────────
    def _convert(self, sig: int, forward: bool) -> int:
        apply = self.permutation.permute if forward else self.permutation.invert
        if self.kind is RotorKind.REFLECTOR:
            return apply(sig)
        shift = self.position - self.ring_setting
        return self.permutation.wrap(apply(sig + shift) - shift)

    def convert_forward(self, sig: int) -> int:
        return self._convert(sig, forward=True)

    def convert_backward(self, sig: int) -> int:
        return self._convert(sig, forward=False)

    def __repr__(self) -> str:
        return (
            f"<Rotor {self.name} {self.kind.name.lower()} "
            f"pos={self.position} ring={self.ring_setting}>"
        )
