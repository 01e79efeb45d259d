#!/usr/bin/env python3

"""
PyGame Audio Plugin

The emulated sound hardware is a simple buzzer with an 'on' or 'off' status.
Here it is played as a looping square wave at a fixed tone, built once as an
unsigned 8-bit mono sample, and started or stopped as the sound timer changes.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


def square_wave(playback_frequency, tone_frequency):
    # One full period: high for the first half, low for the second
    period = max(2, int(playback_frequency / tone_frequency))
    half_period = period // 2
    return bytes([0xFF] * half_period + [0x00] * (period - half_period))


class Audio(AudioBase):
    def __init__(self):
        super().__init__()
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        self.sound = pygame.mixer.Sound(buffer=square_wave(PLAYBACK_FREQUENCY, TONE_FREQUENCY))
        self.sound.set_volume(DEFAULT_VOLUME)

    def enable_buzzer(self, enabled):
        # If the sound is already playing, it won't be restarted
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        else:
            if self.buzzer_enabled:
                self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()
