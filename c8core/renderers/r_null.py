#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

Renderers never have pixels pushed at them.  Instead, refresh_display() samples
the framebuffer, and only if something was drawn since the last refresh, every
pixel is handed to set_pixel().

This module can be used on its own as a Renderer plugin if you only want to see
trace output.  Without a renderer, performance data will also not be shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.frames_drawn = 0
        self.title = ""
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def set_pixel(self, x, y, colour):  # pylint: disable=unused-argument
        pass

    def refresh_display(self, framebuffer):
        # Returns whether the framebuffer had changed, so subclasses know whether to present anything
        if not framebuffer.take_changed():
            return False

        width = self.width
        set_pixel = self.set_pixel

        for y in range(self.height):
            row = framebuffer.get_row(y)

            for x in range(width):
                set_pixel(x, y, row[x])

        self.frames_drawn += 1
        return True

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
