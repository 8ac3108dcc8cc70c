#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8core.keypad import Keypad, KeypadError


class TestKeypad(unittest.TestCase):
    def setUp(self):
        self.keypad = Keypad()

    def test_keypad_init(self):
        self.assertEqual([False] * 16, self.keypad.key_down)
        self.assertIsNone(self.keypad.get_keypress())

    def test_keypad_press_release(self):
        self.keypad.press(0xF)
        self.assertTrue(self.keypad.is_key_down(0xF))
        self.keypad.release(0xF)
        self.assertFalse(self.keypad.is_key_down(0xF))

    def test_keypad_key_masked(self):
        self.keypad.press(0x3)
        self.assertTrue(self.keypad.is_key_down(0x13))

    def test_keypad_latch(self):
        self.keypad.press(0x2)
        self.assertEqual(0x2, self.keypad.get_keypress())
        self.keypad.setup_keypress()
        self.assertIsNone(self.keypad.get_keypress())

        # Held keys don't latch again until released
        self.keypad.press(0x2)
        self.assertIsNone(self.keypad.get_keypress())
        self.keypad.release(0x2)
        self.keypad.press(0x2)
        self.assertEqual(0x2, self.keypad.get_keypress())

    def test_keypad_release_all(self):
        for key in range(16):
            self.keypad.press(key)

        self.keypad.release_all()
        self.assertEqual([False] * 16, self.keypad.key_down)

    def test_keypad_out_of_range(self):
        self.assertRaises(KeypadError, self.keypad.press, 0x10)
        self.assertRaises(KeypadError, self.keypad.release, -1)
