# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every fault raised by the machine and its readers."""


# ── alphabet ─────────────────────────────────────────────────────
class BadAlphabet(EnigmaError):
    pass


class UnknownSymbol(EnigmaError):
    pass


class IndexOutOfRange(EnigmaError):
    pass


# ── permutations & rotors ────────────────────────────────────────
class MalformedCycles(EnigmaError):
    pass


class NotADerangement(EnigmaError):
    pass


class IllegalAdvance(EnigmaError):
    """A non-rotating rotor was asked to step."""


class IllegalSetting(EnigmaError):
    pass


# ── arrangement ──────────────────────────────────────────────────
class UnknownRotor(EnigmaError):
    pass


class DuplicateRotor(EnigmaError):
    pass


class NotAReflector(EnigmaError):
    pass


class MisplacedRotor(EnigmaError):
    pass


class TooManyRotatingRotors(EnigmaError):
    pass


class BadSettingLength(EnigmaError):
    pass


class MissingSettings(EnigmaError):
    pass


# ── text readers ─────────────────────────────────────────────────
class ConfigError(EnigmaError):
    pass
