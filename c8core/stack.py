#!/usr/bin/env python3

"""
Stack Emulator

The call stack is not part of system RAM, as there is no specified location
for it and no program can address it directly.  It is a fixed array of return
addresses with its own stack pointer (SP), which always points at the next
free slot.

Pushing onto a full stack, or popping from an empty one, corrupts state on the
original hardware.  Here both are reported with their own exception, and
neither the array nor SP is touched when that happens.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


class Stack:
    def __init__(self, size):
        self.items = [0] * size
        self.size = size
        self.sp = 0

    def push(self, item):
        sp = self.sp

        if sp >= self.size:
            raise StackOverflowError("Stack overflow: {} return addresses already held".format(sp))

        self.items[sp] = item
        self.sp = sp + 1

    def pop(self):
        sp = self.sp

        if sp <= 0:
            raise StackUnderflowError("Stack underflow: return with no matching call")

        sp -= 1
        self.sp = sp
        return self.items[sp]

    def get_items(self):
        # For tracing.  Only the live part of the array.
        return self.items[:self.sp]
