#!/usr/bin/env python3

"""
Framebuffer Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen by XORing pixels against what is already there.

The framebuffer is kept in the same layout that the host renderer wants: 24-bit
RGB, row by row, with every pixel either fully black or fully white.  This
means a renderer can blit the buffer straight to a texture without converting
it first.

Collisions (where a pixel was set, but was unset by an XOR) are reported back
to the caller, which is responsible for setting the flag register.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DISPLAY_WIDTH, DISPLAY_HEIGHT, PIXEL_SIZE, PIXEL_ON, PIXEL_OFF
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=DISPLAY_WIDTH, vid_height=DISPLAY_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.row_size = vid_width * PIXEL_SIZE
        self.vram = RAM(self.row_size * vid_height)

    def clear(self):
        self.vram.clear()

    def pixel_location(self, x, y):
        if not (0 <= x < self.vid_width and 0 <= y < self.vid_height):
            raise FramebufferError("Pixel ({}, {}) is outside the display".format(x, y))

        return y * self.row_size + x * PIXEL_SIZE

    def is_pixel_set(self, x, y):
        return self.vram.read(self.pixel_location(x, y)) != 0

    def set_pixel(self, x, y, is_on):
        self.vram.write_block(self.pixel_location(x, y), PIXEL_ON if is_on else PIXEL_OFF)

    def xor_pixel(self, x, y):
        # Flip a single pixel, wrapping around the screen edges.  Returns True if the pixel was switched off.
        x %= self.vid_width
        y %= self.vid_height
        collision = self.is_pixel_set(x, y)
        self.set_pixel(x, y, not collision)
        return collision

    def get_pixel(self, x, y):
        location = self.pixel_location(x, y)
        return tuple(self.vram.read_block(location, PIXEL_SIZE))

    def get_buffer(self):
        # Read-only view, so renderers can't alter the emulated display
        return self.vram.mem.toreadonly()

    def get_vid_size(self):
        return self.vid_width, self.vid_height
