#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "Chip8Core Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map.  Everything below PROGRAM_START is reserved, apart from the font which lives in part of it.
MEM_SIZE = 0x1000
MEM_BITMASK = 0xFFF
PROGRAM_START = 0x200
FONT_START = 0x50

# Display, stack and timers
VID_WIDTH = 64
VID_HEIGHT = 32
STACK_DEPTH = 16
NUM_KEYS = 0x10
TIMER_FREQ = 60.0  # Delay and sound timers count down at 60Hz

# Default instructions per second when pacing the CPU
DEFAULT_CLOCK_SPEED = 700

# Built-in hexadecimal font, 0-F, 5 rows of 4 pixels each (the low nibble of every byte is blank)
FONT_GLYPH_SIZE = 5
FONT_SET = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))

# Default mappings for keys 0-F, later populated into a dictionary.  Laid out as the usual 4x4 block:
#
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
#
# Note that the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

SUPPORTED_RENDERERS = ["pygame", "curses", "null"]
