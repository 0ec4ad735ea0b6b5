# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, TextIO

from config_reader import apply_settings, is_settings_line, preprocess_message, read_config
from debug import Debug, configure_logging
from errors import EnigmaError, MissingSettings
from machine import Machine
from suites import SUITES, suite_config_text

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class Config:
    """Runtime switches for the message driver."""

    block: int = 5                  # display group size
    line_end: str = "\r\n"          # terminator of every output line
    uppercase: bool = False         # upper-case message lines before converting
    verbose: bool = False           # trace stepping & enciphering on stderr


def format_message(msg: str, block: int = 5) -> str:
    """Split `msg` into groups of `block` symbols joined by single spaces."""
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))


# ────────────────────────────────────────────────────────────────────────
#  1. Message driver
# ────────────────────────────────────────────────────────────────────────


def process(
    machine: Machine,
    lines: Iterable[str],
    out: TextIO,
    cfg: Config,
    debug: Debug | None = None,
) -> None:
    """Run every input line through `machine`, writing results to `out`.

    Lines starting with '*' re-configure the machine; empty lines are
    echoed; anything else is a message.
    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if is_settings_line(line):
            apply_settings(machine, line, debug)
            configured = True
        elif not line.strip():
            out.write(cfg.line_end)
        else:
            if not configured:
                raise MissingSettings("Message found before any settings line")
            text = preprocess_message(line, cfg.uppercase)
            out.write(format_message(machine.convert(text, debug), cfg.block) + cfg.line_end)


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--config", metavar="FILE", help="Machine description file (alphabet, slots, pawls, rotors).")
    src.add_argument("--suite", choices=sorted(SUITES), default="M4", help="Built-in historic machine used when no --config is given. Default: M4")
    p.add_argument("--verbose", action="store_true", help="Trace rotor stepping and every character on stderr.")
    p.add_argument("--log", metavar="FILE", help="Also write the trace to FILE (implies --verbose).")
    p.add_argument("--upper", action="store_true", help="Upper-case message lines before converting.")
    p.add_argument("--block", type=int, default=5, help="Output group size. Default: 5")
    p.add_argument("input", nargs="?", metavar="INPUT", help="Message file. Default: standard input")
    p.add_argument("output", nargs="?", metavar="OUTPUT", help="Result file. Default: standard output")
    args = p.parse_args(argv)
    if args.block < 1:
        p.error("--block must be at least 1")
    return args


def load_machine(args: argparse.Namespace, debug: Debug | None = None) -> Machine:
    if args.config:
        text = Path(args.config).read_text(encoding="utf-8")
    else:
        text = suite_config_text(args.suite)
    return read_config(text, debug)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, uppercase=args.upper, verbose=args.verbose or bool(args.log))
    debug: Debug | None = None

    try:
        if cfg.verbose:
            configure_logging(args.log)
            debug = Debug("config", "stepping", "encipher")
        machine = load_machine(args, debug)
        src = open(args.input, encoding="utf-8") if args.input else sys.stdin
        try:
            if args.output:
                with open(args.output, "w", encoding="utf-8", newline="") as out:
                    process(machine, src, out, cfg, debug)
            else:
                process(machine, src, sys.stdout, cfg, debug)
        finally:
            if src is not sys.stdin:
                src.close()
    except (EnigmaError, OSError) as e:
        sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
