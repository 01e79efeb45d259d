#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the VM's framebuffer onto an SDL window surface via PyGame.  The
framebuffer is already in 24-bit RGB, so it is wrapped into a 64x32 surface
without conversion, then stretched (using 'Nearest Neighbour' translation) to
fit the window itself.  This means we don't have to draw the same pixel
multiple times.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

DEFAULT_WINDOW_WIDTH = 640


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = DEFAULT_WINDOW_WIDTH  # Default window width if not supplied

        if scale < 64:
            raise RendererError("The window must be at least 64 pixels wide.")

        super().__init__(scale, **kwargs)
        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)

    def refresh_display(self, buffer):
        # Blit the bytes straight to a surface, rather than setting pixels one at a time
        render_surface = pygame.image.frombuffer(bytes(buffer), (self.width, self.height), "RGB")
        scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
        self.display_surface.blit(scaled_win, (0, 0))
        pygame.display.flip()
        super().refresh_display(buffer)

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
