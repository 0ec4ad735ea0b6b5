import unittest as ut

from config_reader import apply_settings, is_settings_line, preprocess_message, read_config
from errors import (
    BadAlphabet,
    BadSettingLength,
    ConfigError,
    DuplicateRotor,
    NotADerangement,
    NotAReflector,
)
from rotor_and_reflector import RotorKind
from suites import WHEELS, Alpha26, suite_config_text

CONFIG = """
ABCD
 3 2
 REF  R    (AB) (CD)
 FIX  N    (AD)
 M1   MB   (AC)(BD)
 M2   MDA  (ABCD)
"""


class ReadConfigTest(ut.TestCase):
    def test_reads_machine(self):
        m = read_config(CONFIG)
        self.assertEqual(m.alphabet.symbols, "ABCD")
        self.assertEqual((m.num_slots, m.max_rotating), (3, 2))
        self.assertEqual(list(m.catalog), ["REF", "FIX", "M1", "M2"])
        self.assertIs(m.catalog["FIX"].kind, RotorKind.FIXED)
        self.assertEqual(m.catalog["M2"].notches, frozenset("DA"))
        self.assertEqual(m.catalog["M1"].permutation.cycles, ("AC", "BD"))

    def test_cycles_may_span_tokens(self):
        m = read_config("ABCD 2 1 REF R (AB)(CD) X MA (AB\n  CD)")
        perm = m.catalog["X"].permutation
        self.assertEqual(perm.permute(0), 1)
        self.assertEqual(perm.permute(3), 0)

    def test_rotor_without_cycles_is_identity(self):
        m = read_config("ABCD 2 1 REF R (AB)(CD) X MA")
        self.assertEqual(m.catalog["X"].permutation.permute(2), 2)

    def test_config_errors(self):
        bad = [
            "",
            "ABCD",
            "ABCD 2",
            "ABCD x 1 REF R (AB)(CD)",
            "ABCD 2 1 REF Q (AB)(CD)",
            "ABCD 2 1 REF RX (AB)(CD)",
            "ABCD 2 1 REF NA (AB)(CD)",
            "ABCD 2 1 (AB)",
            "ABCD 2 1 REF",
            "AB(C 2 1",
            "ABCD 1 0 REF R (AB)(CD)",
        ]
        for text in bad:
            with self.subTest(config=text):
                with self.assertRaises(ConfigError):
                    read_config(text)

    def test_engine_errors_surface(self):
        with self.assertRaises(BadAlphabet):
            read_config("AAB 2 1")
        with self.assertRaises(NotADerangement):
            read_config("ABCD 2 1 REF R (AB)")
        with self.assertRaises(DuplicateRotor):
            read_config("ABCD 2 1 X MA (AB) X MB (CD)")


class SettingsLineTest(ut.TestCase):
    def setUp(self):
        self.m = read_config(CONFIG)

    def test_positions_only(self):
        apply_settings(self.m, "* REF M1 M2 BC")
        self.assertEqual(self.m.window(), "BC")
        self.assertEqual(self.m.rotor(1).ring_setting, 0)
        self.assertEqual(self.m.plugboard.cycles, ())

    def test_rings_and_plugboard(self):
        apply_settings(self.m, "* REF M1 M2 BC DA (AC)")
        self.assertEqual(self.m.rotor(1).ring_setting, 3)
        self.assertEqual(self.m.rotor(2).ring_setting, 0)
        self.assertEqual(self.m.plugboard.permute(0), 2)

    def test_plugboard_without_rings(self):
        apply_settings(self.m, "* REF M1 M2 BC (AC) (BD)")
        self.assertEqual(self.m.rotor(2).ring_setting, 0)
        self.assertEqual(self.m.plugboard.cycles, ("AC", "BD"))

    def test_fixed_rotor_in_arrangement(self):
        apply_settings(self.m, "* REF FIX M2 DA")
        self.m.convert("AAAA")
        self.assertEqual(self.m.window(), "DA")

    def test_star_may_touch_first_name(self):
        for line in ["*REF M1 M2 BC", "   * REF M1 M2 BC", "\t*REF M1 M2 BC (AB)"]:
            with self.subTest(line=line):
                self.assertTrue(is_settings_line(line))
                apply_settings(self.m, line)
                self.assertEqual([r.name for r in self.m.rotors], ["REF", "M1", "M2"])
                self.assertEqual(self.m.window(), "BC")
        self.assertFalse(is_settings_line("REF * M1 M2 BC"))
        self.assertFalse(is_settings_line(""))

    def test_bad_lines(self):
        for line in ["REF M1 M2 BC", "* REF M1", "* REF M1 M2", "* REF M1 M2 (AB)"]:
            with self.subTest(line=line):
                with self.assertRaises(ConfigError):
                    apply_settings(self.m, line)
        with self.assertRaises(BadSettingLength):
            apply_settings(self.m, "* REF M1 M2 B")
        with self.assertRaises(BadSettingLength):
            apply_settings(self.m, "* REF M1 M2 BC D")
        with self.assertRaises(NotAReflector):
            apply_settings(self.m, "* FIX M1 M2 AA")

    def test_preprocess_message(self):
        self.assertEqual(preprocess_message(" ab c\td "), "abcd")
        self.assertEqual(preprocess_message(" ab c\t", uppercase=True), "ABC")


class SuiteTest(ut.TestCase):
    def test_suite_text_round_trips_wiring(self):
        m = read_config(suite_config_text("M4"))
        self.assertEqual((m.num_slots, m.max_rotating), (5, 3))
        self.assertEqual(set(m.catalog), set(WHEELS))
        for name, (kind, wiring) in WHEELS.items():
            rotor = m.catalog[name]
            self.assertEqual(rotor.kind.value, kind[0])
            self.assertEqual(rotor.notches, frozenset(kind[1:]))
            expected = [Alpha26.index(c) for c in wiring]
            self.assertEqual([rotor.permutation.permute(i) for i in range(26)], expected)

    def test_unknown_suite(self):
        with self.assertRaises(ConfigError):
            suite_config_text("M9")


if __name__ == '__main__':
    ut.main()
