#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer as a looping square wave within PyGame / SDL.

The waveform is built once, at startup, as a single period of unsigned 8-bit
samples.  Enabling the buzzer loops it indefinitely, and disabling it stops
playback.  If the buzzer is already playing, it won't be restarted.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
BUZZER_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # One period of a square wave: high for the first half, low for the second
        period = int(round(PLAYBACK_FREQUENCY / BUZZER_FREQUENCY))
        half_period = period // 2
        self.wave_buffer = memoryview(bytearray(b"\xFF" * half_period + b"\x00" * (period - half_period)))
        self.sound = pygame.mixer.Sound(buffer=self.wave_buffer)
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def enable_buzzer(self, enabled):
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        else:
            if self.buzzer_enabled:
                self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
