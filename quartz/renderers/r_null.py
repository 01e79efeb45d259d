#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or want to run a ROM without a window.  Without a renderer,
performance data will also not be shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import DISPLAY_WIDTH, DISPLAY_HEIGHT


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.width = DISPLAY_WIDTH
        self.height = DISPLAY_HEIGHT
        self.frames_drawn = 0

    def refresh_display(self, buffer):  # pylint: disable=unused-argument
        # The buffer is 24-bit RGB, one row after another
        self.frames_drawn += 1

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
