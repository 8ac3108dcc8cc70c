#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import unittest
from contextlib import redirect_stdout
from c8core.cpu import CPU
from c8core.tracer import Tracer


class TestTracer(unittest.TestCase):
    def setUp(self):
        self.tracer = Tracer()
        self.cpu = CPU(tracer=self.tracer, seed=1)

    def test_tracer_live_flag(self):
        self.assertFalse(self.tracer.is_live())
        self.tracer.set_live(True)
        self.assertTrue(self.tracer.is_live())

    def test_tracer_debug(self):
        self.cpu.v[0xF] = 0xAB
        self.cpu.i = 0x123
        self.assertEqual(
            "V: 0xab" + "00" * 15 + " I: 0x0123 DT: 0x00 ST: 0x00 PC: 0x200 OP: 0x0000 IN: CLS",
            self.tracer.debug(self.cpu, "CLS")
        )

    def test_tracer_debug_verbose(self):
        self.cpu.stack.push(0x202)
        lines = self.tracer.debug(self.cpu, "RET", verbose=True).split("\n")
        self.assertEqual(["SP: 1", "Stack: 0x202"], lines[1:])

    def test_tracer_debug_verbose_empty_stack(self):
        self.assertTrue(self.tracer.debug(self.cpu, "RET", verbose=True).endswith("Stack: (Empty)"))

    def test_tracer_live_output(self):
        cpu = CPU(tracer=Tracer(live=True), seed=1)
        cpu.ram.write_block(0x200, bytearray(b"\x6A\x42\x80\x08"))
        output = io.StringIO()

        with redirect_stdout(output):
            cpu.execute_cycle()
            cpu.execute_cycle()

        lines = output.getvalue().splitlines()
        self.assertEqual(2, len(lines))
        self.assertIn("PC: 0x200 OP: 0x6a42 IN: LD Va, 0x42", lines[0])
        self.assertIn("PC: 0x202 OP: 0x8008 IN: ???", lines[1])
