#!/usr/bin/env python3

"""
Keypad Emulator

Holds the state of the 16 hexadecimal keys.  Host input plugins write into
this as host key events arrive, and the CPU only ever reads from it.

Besides the 'held' state of each key, the most recent key to go down is
latched, so the CPU can wait for a fresh keypress rather than reacting to a
key that was already being held.  There is a 'reset' switch for the latch,
which has to be called before waiting.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} is out of range".format(key))

    def press(self, key):
        self._check_key(key)

        if not self.key_down[key]:
            self.key_down[key] = True
            self.last_keypress = key

    def release(self, key):
        self._check_key(key)
        self.key_down[key] = False

    def release_all(self):
        for key in range(NUM_KEYS):
            self.key_down[key] = False

    def is_key_down(self, key):
        # Only the low nibble selects a key
        return self.key_down[key & 0xF]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress
