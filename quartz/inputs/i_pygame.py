#!/usr/bin/env python3

"""
PyGame Input Plugin

Scans the keyboard and properly detects key 'press' and 'release' events,
passing each one into the VM.  Note that the check should not be called more
often than 60Hz, as constantly checking the queue is time consuming.

Waiting for a keypress blocks on the PyGame event queue.  If the window is
closed (or Escape is pressed) during the wait, InputsQuit is raised so the host
can shut down even though the VM is in the middle of an instruction.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import InputsQuit, Inputs as InputsBase


class Inputs(InputsBase):
    def __init__(self, keymap, vm):
        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }

        super().__init__(keymap, vm)

    def process_messages(self):
        # Call PyGame method based on fast dictionary lookup of event
        quit_program = False

        for event in pygame.event.get():
            if self._handle_event(event) is True:
                quit_program = True  # Process more events, even if planning to quit

        return quit_program

    def wait_keypress(self):
        while True:
            result = self._handle_event(pygame.event.wait())

            if result is True:
                raise InputsQuit()

            if result is not None:
                return result

    def _handle_event(self, event):
        # Returns True to quit, a key number if a mapped key went down, or None
        pygame_method = self.pygame_methods.get(event.type)
        return pygame_method(event) if pygame_method else None

    def _pygame_quit(self, _):
        return True

    def _pygame_keydown(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.vm.set_key(hex_key, True)

        return hex_key

    def _pygame_keyup(self, event):
        if event.key == pygame.K_ESCAPE:
            return True

        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.vm.set_key(hex_key, False)

        return None
