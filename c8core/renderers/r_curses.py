#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws graphics in a standard Linux-style TTY Terminal, the Windows Command
Prompt, or PowerShell.

Each pixel is drawn as inverted spaces (stretched horizontally by the scale,
so pixels look roughly square).  The top line of the pad is reserved for the
title, where performance data is shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        self.pixel_char = " " * scale
        self.pad = None
        self.refresh_needed = False
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = curses_cursor_mode
        self.screen = curses.initscr()
        curses.noecho()
        curses.cbreak()

        try:
            curses.curs_set(self.cursor_mode)
        except _curses.error:
            # Not every terminal can change the cursor
            pass

        super().__init__(scale)

    def set_resolution(self, width, height):
        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  One extra line holds the title.
        self.pad = curses.newpad(height + 2, width * self.scale + 1)
        super().set_resolution(width, height)

    def set_pixel(self, x, y, colour):
        self.pad.addstr(y + 1, x * self.scale, self.pixel_char, curses.A_REVERSE if colour else curses.A_NORMAL)

    def refresh_display(self, framebuffer):
        content_changed = super().refresh_display(framebuffer)

        if content_changed:
            self.refresh_needed = True

        screen_height, screen_width = self.screen.getmaxyx()

        if screen_height != self.last_screen_height or screen_width != self.last_screen_width:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width
            self.refresh_needed = True

        if self.refresh_needed:
            self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
            self.refresh_needed = False

        return content_changed

    def set_title(self, title):
        if self.pad:
            line_width = self.width * self.scale
            self.pad.addstr(0, 0, title[:line_width].ljust(line_width), curses.A_REVERSE)
            self.refresh_needed = True

        super().set_title(title)

    def get_curses_screen(self):
        # No superclass for this Curses-specific method
        return self.screen

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                pass

        curses.endwin()
        super().shutdown()
