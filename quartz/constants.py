#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "Quartz CHIP-8 Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
PROGRAM_MAX_SIZE = MEMORY_SIZE - PROGRAM_START
FONT_LOCATION = 0x000
FONT_GLYPH_SIZE = 5

# CPU
NUM_REGISTERS = 0x10
FLAG_REGISTER = 0xF
STACK_SIZE = 16
CPU_ENDIAN = "big"  # CHIP-8 is big-endian

# Timers are decremented at 60Hz, regardless of the CPU speed
TIMER_FREQ = 60.0
TIMER_INTERVAL = 1.0 / TIMER_FREQ

# Display
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
PIXEL_SIZE = 3  # RGB24
FRAMEBUFFER_SIZE = PIXEL_SIZE * DISPLAY_WIDTH * DISPLAY_HEIGHT
PIXEL_ON = b"\xFF\xFF\xFF"
PIXEL_OFF = b"\x00\x00\x00"

# Input
NUM_KEYS = 0x10

# Default mappings for keys 0-F.  These are the PyGame keycodes for Q W E R T / A S D F G / Z X C V B / Space
DEFAULT_KEYMAP = "113,119,101,114,116,97,115,100,102,103,122,120,99,118,98,32"

# Host defaults
DEFAULT_CLOCK_SPEED = 500  # Instructions per second
DISPLAY_FREQ = 60.0
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
UNCAPPED_OPS_PER_FRAME = 10000

# Built-in hex digit glyphs 0-F, 4x5 pixels each, stored at FONT_LOCATION
FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
