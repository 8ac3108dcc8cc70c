#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, plus
fast zeroing of memory blocks.

The RAM itself does not wrap addresses.  Callers that need addressing modulo
the memory size (the CPU, for anything derived from the index register or
program counter) mask the address before calling in here, so a write past the
top can only come from a block that is too large, which is reported.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        return self.mem[location]

    def read_block(self, location, size=1):
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)

        if not block_size:
            return

        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top:
            raise RAMError("Memory overflow")

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)
        self.mem[offset:block_top] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)
