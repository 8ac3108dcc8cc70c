#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from c8core import main
from c8core.constants import DEFAULT_KEYMAP
from c8core.stack import StackUnderflowError


class TestMain(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.temp_dir.name, "ret.ch8")

        # A lone RET, which halts emulation on the first instruction
        with open(self.filename, "wb") as f:
            f.write(b"\x00\xEE")

    def tearDown(self):
        self.temp_dir.cleanup()

    def _make_args(self, debug):
        return {
            "filename": self.filename,
            "clock_speed": 0,
            "renderer": "null",
            "scale": None,
            "mute": None,
            "keymap": DEFAULT_KEYMAP,
            "curses_cursor_mode": 0,
            "seed": 1,
            "halt_on_unsupported": False,
            "debug": debug
        }

    def _run_main(self, debug):
        output = io.StringIO()

        with redirect_stdout(output):
            self.assertRaises(StackUnderflowError, main, self._make_args(debug))

        return output.getvalue()

    def test_main_live_trace(self):
        output = self._run_main(True)
        self.assertIn("PC: 0x200 OP: 0x00ee IN: RET", output)
        self.assertIn("Stack: (Empty)", output)

    def test_main_no_trace(self):
        output = self._run_main(False)
        self.assertNotIn("IN: RET", output)
        self.assertIn("IN: (halted)", output)
