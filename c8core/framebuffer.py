#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and are only sampled by the host rendering
system when it next refreshes (normally at 60Hz).  Keeping the pixel grid away
from the renderer means the CPU never waits on PyGame or Curses, which can
lower speed substantially when called tens of thousands of times a second.

Programs cannot write directly into video memory.  Instead, sprites are drawn
using an XOR method: every set sprite bit flips the pixel beneath it.  Drawing
wraps around the edges of the screen.

Collisions (where a pixel was set, but was unset by an XOR) are reported back
to the caller for each pixel.

The grid is a single monochrome plane stored row-major, one byte per pixel,
each either 0 or 1.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display dimensions must be positive")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.pixels = RAM(self.vid_size)
        self.changed = True  # Renderers should draw at least once

    def clear(self):
        self.pixels.clear()
        self.changed = True

    def xor_pixel(self, x, y):
        # Flip a single pixel, returning True if it was set beforehand (i.e., it has now been erased)
        vram_loc = (y % self.vid_height) * self.vid_width + (x % self.vid_width)
        pixel = self.pixels.read(vram_loc)
        self.pixels.write(vram_loc, pixel ^ 1)
        self.changed = True
        return pixel != 0

    def get_pixel(self, x, y):
        return self.pixels.read(y * self.vid_width + x)

    def get_row(self, y):
        row_start = y * self.vid_width
        return self.pixels.read_block(row_start, self.vid_width)

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def take_changed(self):
        # Report whether anything was drawn since the last call, and reset the flag
        changed = self.changed
        self.changed = False
        return changed
