#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The CPU
owns all of the emulated machine state: RAM (with the system font), the V
registers, the index register, the program counter, the call stack, both
timers, the framebuffer and the keypad.

The CPU performs no host I/O of its own.  Something else has to call
execute_cycle() at the desired clock speed, call tick_timers() at 60Hz, draw
the framebuffer, write host key events into the keypad, and sound a buzzer
while the sound timer is running.  See the Runner for the usual way of doing
this.

Waiting for a keypress (Fx0A) never blocks.  The CPU flags itself as awaiting
input, rewinds the program counter onto the same instruction, and skips
fetching until the keypad has latched a new keypress.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from time import time_ns
from .constants import (
    APP_INTRO, MEM_SIZE, MEM_BITMASK, PROGRAM_START, FONT_START, FONT_SET, FONT_GLYPH_SIZE, STACK_DEPTH
)
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAM
from .stack import Stack
from .tracer import Tracer


class CPUError(Exception):
    pass


class RomTooLargeError(CPUError):
    pass


class CPU:
    def __init__(self, tracer=None, seed=None, halt_on_unsupported=False):
        self.tracer = Tracer() if tracer is None else tracer
        self.live_debug = self.tracer.is_live()
        self.halt_on_unsupported = halt_on_unsupported
        self.unsupported_count = 0

        # Random numbers come from a generator owned by this CPU, so separate CPUs never share a sequence
        self.rng = Random(time_ns() if seed is None else seed)

        # Allocate memory and write the system font into the reserved area
        self.ram = RAM(MEM_SIZE)
        self.ram.write_block(FONT_START, FONT_SET)

        self.stack = Stack(STACK_DEPTH)
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn   # Alias for bitmask 0xF0FF
        }

        self.masked_instructions = {
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        # Initialise registers
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.i = 0  # Index register

        # Initialise timers
        self.dt = 0  # Delay timer (byte)
        self.st = 0  # Sound timer (byte)

        # Initialise program counter and current opcode
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0

        # Input-related vars
        self.awaiting_keypress = False

    def load_rom(self, data):
        rom_size = len(data)
        max_size = MEM_SIZE - PROGRAM_START

        if rom_size > max_size:
            raise RomTooLargeError(
                "ROM is {} bytes, but only {} bytes fit between 0x{:03x} and 0x{:03x}".format(
                    rom_size, max_size, PROGRAM_START, MEM_BITMASK
                )
            )

        self.ram.write_block(PROGRAM_START, data)

    def execute_cycle(self):
        # Nothing to do until the keypad has seen a new keypress.  The PC still points at the waiting instruction.
        if self.awaiting_keypress and self.keypad.get_keypress() is None:
            return

        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch (and technically before decode), but before execute
        self.decode_exec()

    def tick_timers(self):
        # Called at 60Hz by whatever is driving the CPU, regardless of the clock speed
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    def sound_active(self):
        return self.st > 0

    def fetch(self):
        pc = self.pc
        return (self.ram.read(pc) << 8) | self.ram.read((pc + 1) & MEM_BITMASK)  # Big-endian

    def decode_exec(self):
        self.instructions[(0xF000 & self.opcode) >> 12]()

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.masked_instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()
        else:
            instruction()

    def inc_pc(self):
        self.pc = (self.pc + 2) & MEM_BITMASK

    def dec_pc(self):
        # Only used to re-run instructions (i.e. keypress wait).
        self.pc = (self.pc - 2) & MEM_BITMASK

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication (ever so slight slowdown).  Don't reference these more than necessary as they are
    # recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        # Malformed or unsupported ROMs contain these, so by default they are skipped like a no-op
        self.unsupported_count += 1

        if self.halt_on_unsupported:
            raise CPUError(
                (
                    "Emulation halted.\n\n" +
                    "{}Debug info:\n" +
                    "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not supported."
                ).format(
                    APP_INTRO, self.tracer.debug(self, "???", verbose=True), self.opcode, self.debug_pc
                )
            )

        if self.live_debug:
            self.debug("???")

    def debug(self, instruction):
        self.tracer.output(self, instruction)

    def _0nnn(self):
        self._call_masked_instruction(self.opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        if self.live_debug:
            self.debug("CLS")

        self.framebuffer.clear()

    def _00EE(self):  # RET
        if self.live_debug:
            self.debug("RET")

        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        if self.live_debug:
            self.debug("JP 0x{:03x}".format(self.addr))

        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        if self.live_debug:
            self.debug("CALL 0x{:03x}".format(self.addr))

        self.stack.push(self.pc)
        self.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.live_debug:
            self.debug("SE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] == self.byte:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.live_debug:
            self.debug("SNE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] != self.byte:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        if self.live_debug:
            self.debug("SE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] == self.v[self.vy]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        if self.live_debug:
            self.debug("LD V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        byte = self.byte

        if self.live_debug:
            self.debug("ADD V{:01x}, 0x{:02x}".format(vx, byte))

        byte += self.v[vx]
        self.v[vx] = byte & 0xFF  # No carry flag

    def _8xy0(self):  # LD Vx, Vy
        if self.live_debug:
            self.debug("LD V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] = self.v[self.vy]

    # Logic operations write straight back into Vx, and leave Vf alone
    def _8xy1(self):  # OR Vx, Vy
        if self.live_debug:
            self.debug("OR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        if self.live_debug:
            self.debug("AND V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        if self.live_debug:
            self.debug("XOR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] ^= self.v[self.vy]

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("ADD V{:01x}, V{:01x}".format(vx, vy))

        val = self.v[vx] + self.v[vy]
        self.v[vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes VF is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        if self.live_debug:
            self.debug("SUB V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx
        vx = self.vx

        if self.live_debug:
            self.debug("SHR V{:01x}".format(vx))

        # Vx is both the source and destination.  Vy is ignored.
        val = self.v[vx]
        self.v[vx] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        if self.live_debug:
            self.debug("SUBN V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx
        vx = self.vx

        if self.live_debug:
            self.debug("SHL V{:01x}".format(vx))

        val = self.v[vx]
        self.v[vx] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.live_debug:
            self.debug("SNE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] != self.v[self.vy]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        if self.live_debug:
            self.debug("LD I, 0x{:03x}".format(self.addr))

        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        if self.live_debug:
            self.debug("JP V0, 0x{:03x}".format(self.addr))

        self.pc = (self.v[0] + self.addr) & MEM_BITMASK

    def _Cxkk(self):  # RND Vx, byte
        if self.live_debug:
            self.debug("RND V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = self.rng.randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        height = self.nibble

        if self.live_debug:
            self.debug("DRW V{:01x}, V{:01x}, 0x{:01x}".format(self.vx, self.vy, height))

        # The sprite's start wraps, and so does every pixel drawn past the right or bottom edge
        framebuffer = self.framebuffer
        vid_width, vid_height = framebuffer.get_vid_size()
        vx_pos = self.v[self.vx] % vid_width
        vy_pos = self.v[self.vy] % vid_height
        collided = False
        i = self.i

        for y in range(height):
            spr_data = self.ram.read((i + y) & MEM_BITMASK)
            scr_y = y + vy_pos

            for x in range(8):
                if spr_data & (0x80 >> x):
                    if framebuffer.xor_pixel(x + vx_pos, scr_y):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        self.v[0xF] = int(collided)

    def _Ex9E(self):  # SKP Vx
        if self.live_debug:
            self.debug("SKP V{:01x}".format(self.vx))

        if self.keypad.is_key_down(self.v[self.vx]):
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if self.live_debug:
            self.debug("SKNP V{:01x}".format(self.vx))

        if not self.keypad.is_key_down(self.v[self.vx]):
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        if self.live_debug:
            self.debug("LD V{:01x}, DT".format(self.vx))

        self.v[self.vx] = self.dt

    def _Fx0A(self):  # LD Vx, K
        if self.live_debug:
            self.debug("LD V{:01x}, K".format(self.vx))

        # This opcode waits for a keypress, but since the timers still need to expire and the display still needs
        # updating, we'll return control and simply decrement the incremented program counter.  execute_cycle()
        # won't fetch again until a key has been latched.

        if self.awaiting_keypress:
            key = self.keypad.get_keypress()
        else:
            self.keypad.setup_keypress()  # Forget any previously pressed key
            self.awaiting_keypress = True
            key = None

        if key is None:
            # We need to come back here on the next cycle, because no key is pressed.
            self.dec_pc()
        else:
            self.v[self.vx] = key
            self.awaiting_keypress = False

    def _Fx15(self):  # LD DT, Vx
        if self.live_debug:
            self.debug("LD DT, V{:01x}".format(self.vx))

        self.dt = self.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        if self.live_debug:
            self.debug("LD ST, V{:01x}".format(self.vx))

        self.st = self.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        if self.live_debug:
            self.debug("ADD I, V{:01x}".format(self.vx))

        # No overflow flag
        self.i = (self.i + self.v[self.vx]) & MEM_BITMASK

    def _Fx29(self):  # LD F, Vx
        if self.live_debug:
            self.debug("LD F, V{:01x}".format(self.vx))

        self.i = (FONT_START + FONT_GLYPH_SIZE * self.v[self.vx]) & MEM_BITMASK

    def _Fx33(self):  # LD B, Vx
        if self.live_debug:
            self.debug("LD B, V{:01x}".format(self.vx))

        val = self.v[self.vx]
        i = self.i
        self.ram.write(i & MEM_BITMASK, val // 100)              # Most-significant digit
        self.ram.write((i + 1) & MEM_BITMASK, (val // 10) % 10)  # Middle digit
        self.ram.write((i + 2) & MEM_BITMASK, val % 10)          # Least-significant digit

    # The index register is left unchanged by both block transfers
    def _Fx55(self):  # LD [I], Vx
        if self.live_debug:
            self.debug("LD [I], V{:01x}".format(self.vx))

        i = self.i

        for reg in range(self.vx + 1):
            self.ram.write((i + reg) & MEM_BITMASK, self.v[reg])

    def _Fx65(self):  # LD Vx, [I]
        if self.live_debug:
            self.debug("LD V{:01x}, [I]".format(self.vx))

        i = self.i

        for reg in range(self.vx + 1):
            self.v[reg] = self.ram.read((i + reg) & MEM_BITMASK)
