# config_reader.py
from __future__ import annotations

from typing import List

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorKind

RESERVED = set("()*")


# ────────────────────────────────────────────────────────────────────────
#  0. Token helpers
# ────────────────────────────────────────────────────────────────────────


def _is_cycle(token: str) -> bool:
    return token.startswith("(")


def is_settings_line(line: str) -> bool:
    """True when the first non-blank character of `line` is '*'."""
    return line.lstrip().startswith("*")


def _take_cycles(tokens: List[str], pos: int) -> tuple[str, int]:
    """Collect cycle tokens starting at `pos`; a group may span tokens, so
    keep going while parentheses are unbalanced."""
    parts: List[str] = []
    depth = 0
    while pos < len(tokens) and (depth > 0 or _is_cycle(tokens[pos])):
        tok = tokens[pos]
        depth += tok.count("(") - tok.count(")")
        parts.append(tok)
        pos += 1
    return " ".join(parts), pos


def _next(tokens: List[str], pos: int, what: str) -> str:
    try:
        return tokens[pos]
    except IndexError:
        raise ConfigError(f"Configuration ended before {what}") from None


def _int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ConfigError(f"Expected {what} to be an integer, got {token!r}") from None


# ────────────────────────────────────────────────────────────────────────
#  1. Machine description
# ────────────────────────────────────────────────────────────────────────


def read_rotor(name: str, kind: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """Build one wheel from its name, type token and cycle notation."""
    if not kind or _is_cycle(kind):
        raise ConfigError(f"Rotor {name}: missing type")

    perm = Permutation(cycles, alphabet)
    letter, notches = kind[0], kind[1:]

    if letter == RotorKind.MOVING.value:
        return Rotor.moving(name, perm, notches)
    if notches:
        raise ConfigError(f"Rotor {name}: bad type {kind!r}")
    if letter == RotorKind.FIXED.value:
        return Rotor.fixed(name, perm)
    if letter == RotorKind.REFLECTOR.value:
        return Rotor.reflector(name, perm)
    raise ConfigError(f"Rotor {name}: unknown type {kind!r}")


def read_config(text: str, debug: Debug | None = None) -> Machine:
    """Return a Machine described by configuration `text`:

        ALPHABET  SLOTS PAWLS
        name type (cycles)...
        ...
    """
    tokens = text.split()

    symbols = _next(tokens, 0, "the alphabet")
    bad = RESERVED & set(symbols)
    if bad:
        raise ConfigError(f"Alphabet may not contain {''.join(sorted(bad))!r}")
    alphabet = Alphabet(symbols)

    num_slots = _int(_next(tokens, 1, "the slot count"), "the slot count")
    pawls = _int(_next(tokens, 2, "the pawl count"), "the pawl count")

    rotors: List[Rotor] = []
    pos = 3
    while pos < len(tokens):
        name = tokens[pos]
        if _is_cycle(name):
            raise ConfigError(f"Cycle {name!r} does not belong to any rotor")
        kind = _next(tokens, pos + 1, f"the type of rotor {name}")
        cycles, pos = _take_cycles(tokens, pos + 2)
        rotor = read_rotor(name, kind, cycles, alphabet)
        if debug is not None:
            debug.log("config", f"{rotor!r} {rotor.permutation.cycle_text()}")
        rotors.append(rotor)

    machine = Machine(alphabet, num_slots, pawls, rotors)
    if debug is not None:
        debug.log("config", f"{machine!r} over {alphabet.symbols}")
    return machine


# ────────────────────────────────────────────────────────────────────────
#  2. Settings lines
# ────────────────────────────────────────────────────────────────────────


def apply_settings(machine: Machine, line: str, debug: Debug | None = None) -> None:
    """Configure `machine` from a settings line:

        * REFLECTOR ROTOR... POSITIONS [RINGS] [(plug)(board)...]
    """
    if not is_settings_line(line):
        raise ConfigError(f"Settings line must start with '*': {line!r}")

    tokens = line.lstrip()[1:].split()
    n = machine.num_slots
    names = tokens[:n]
    if len(names) != n:
        raise ConfigError(f"Settings line names {len(names)} rotors, need {n}")
    rest = tokens[n:]

    if not rest or _is_cycle(rest[0]):
        raise ConfigError("Settings line has no rotor positions")
    positions, rest = rest[0], rest[1:]

    rings = ""
    if rest and not _is_cycle(rest[0]):
        rings, rest = rest[0], rest[1:]

    plugboard = Permutation(" ".join(rest), machine.alphabet)
    machine.configure(names, positions, rings, plugboard)

    if debug is not None:
        debug.log(
            "config",
            f"{' '.join(names)} at {positions} rings {rings or '-'} "
            f"plugs {machine.plugboard.cycle_text() or '-'}",
        )


def preprocess_message(msg: str, uppercase: bool = False) -> str:
    """Drop whitespace; upper-case too when asked."""
    text = "".join(msg.split())
    return text.upper() if uppercase else text


__all__ = [
    "read_config",
    "read_rotor",
    "apply_settings",
    "is_settings_line",
    "preprocess_message",
]
