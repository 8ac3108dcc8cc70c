#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws graphics onto an SDL window surface via PyGame.  The pixels are written
into an offscreen RGB buffer at the emulated resolution, and then the contents
are stretched (in the correct aspect ratio using 'Nearest Neighbour'
translation) to fit the window itself.  This means we don't have to draw the
same pixel multiple times.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase
from ..constants import APP_NAME

BACKGROUND_COLOUR = 0x222222
FOREGROUND_COLOUR = 0xDDDDDD


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = 640  # Default window width if not supplied, or set to default

        pygame.display.init()
        self.rgb_buffer = None
        self.render_surface = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)

        # Split compound RGB values for faster byte-based lookup later.  Pixel values index straight into this.
        self.rgb_map = [
            memoryview(bytearray([i >> 16, (i >> 8) & 0xFF, i & 0xFF])) for i in (BACKGROUND_COLOUR, FOREGROUND_COLOUR)
        ]

        super().__init__(scale)
        self.set_title(APP_NAME)

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(total_pixels * 3))  # 24-bit

        # Call superclass method so display size is known on the next refresh
        super().set_resolution(width, height)

        # Fill the offscreen RGB buffer with the background colour
        for y in range(height):
            for x in range(width):
                self.set_pixel(x, y, 0)

    def set_pixel(self, x, y, colour):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[colour]

    def refresh_display(self, framebuffer):
        content_changed = super().refresh_display(framebuffer)

        if content_changed and self.width and self.height:
            # Blit the bytearray straight to the surface, rather than making very frequent PixelArray updates
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        return content_changed

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame can segfault if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
