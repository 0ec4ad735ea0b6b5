# suites.py
from __future__ import annotations

from typing import Dict, Tuple

from alphabet import Alphabet
from errors import ConfigError
from permutation import Permutation

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ── historic wheel database ───────────────────────────────────────
# name: (type token, straight wiring over Alpha26)
WHEELS: Dict[str, Tuple[str, str]] = {
    # rotors, turnover symbols after the M
    "I":      ("MQ",  "EKMFLGDQVZNTOWYHXUSPAIBRCJ"),
    "II":     ("ME",  "AJDKSIRUXBLHWTMCQGZNPYFVOE"),
    "III":    ("MV",  "BDFHJLCPRTXVZNYEIWGAKMUSQO"),
    "IV":     ("MJ",  "ESOVPZJAYQUIRHXLNFTGKDCMWB"),
    "V":      ("MZ",  "VZBRGITYUPSDNHLXAWMJQOFECK"),
    "VI":     ("MZM", "JPGVOUMFYQBENHZRDKASXLICTW"),
    "VII":    ("MZM", "NZJHGRCXMYSWBOUFAIVLPEKQDT"),
    "VIII":   ("MZM", "FKQHTLXOCBJSPDZRAMEWNIUYGV"),
    # M4 greek wheels
    "Beta":   ("N",   "LEYJVCNIXWPBQMDRTAKZGFUHOS"),
    "Gamma":  ("N",   "FSOKANUERHMBTIYCWLQPZXVGJD"),
    # reflectors
    "A":      ("R",   "EJMZALYXVBWFCRQUONTSPIKHGD"),
    "B":      ("R",   "YRUHQSLDPXNGOKMIEBFZCWVJAT"),
    "C":      ("R",   "FVPJIAOYEDRZXWGCTKUQSBNMHL"),
    "B_thin": ("R",   "ENKQAUYWJICOPBLMDXZVFTHRGS"),
    "C_thin": ("R",   "RDOBJNTKVEHMLFCWZAXGYIPSUQ"),
}

SUITES: Dict[str, Dict[str, int]] = {
    "M3": {"slots": 4, "pawls": 3},     # reflector + 3 rotors
    "M4": {"slots": 5, "pawls": 3},     # thin reflector + greek wheel + 3 rotors
}


def suite_config_text(name: str) -> str:
    """Render suite `name` as a configuration file the reader accepts."""
    try:
        suite = SUITES[name]
    except KeyError:
        raise ConfigError(f"Unknown suite {name!r}. Expected one of {list(SUITES)}") from None

    alpha = Alphabet(Alpha26)
    lines = [Alpha26, f"{suite['slots']} {suite['pawls']}"]
    width = max(len(n) for n in WHEELS)
    for wheel, (kind, wiring) in WHEELS.items():
        cycles = Permutation.from_wiring(wiring, alpha).cycle_text()
        lines.append(f"{wheel:<{width}} {kind:<3} {cycles}")
    return "\n".join(lines) + "\n"
