#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from quartz.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer(4, 2)

    def test_framebuffer_default_size(self):
        framebuffer = Framebuffer()
        self.assertEqual((64, 32), framebuffer.get_vid_size())
        self.assertEqual(3 * 64 * 32, len(framebuffer.get_buffer()))

    def test_framebuffer_xor_pixel(self):
        fb = self.framebuffer
        self.assertFalse(fb.xor_pixel(1, 0))
        self.assertEqual("000000ffffff000000000000" + "00" * 12, fb.get_buffer().hex())
        self.assertTrue(fb.is_pixel_set(1, 0))
        self.assertEqual((0xFF, 0xFF, 0xFF), fb.get_pixel(1, 0))

        # Switching it back off is a collision
        self.assertTrue(fb.xor_pixel(1, 0))
        self.assertEqual((0x00, 0x00, 0x00), fb.get_pixel(1, 0))

    def test_framebuffer_wrapping(self):
        fb = self.framebuffer
        fb.xor_pixel(5, 3)  # Wraps to (1, 1)
        self.assertTrue(fb.is_pixel_set(1, 1))
        self.assertEqual("00" * 12 + "000000ffffff000000000000", fb.get_buffer().hex())

    def test_framebuffer_pixel_range(self):
        self.assertRaises(FramebufferError, self.framebuffer.get_pixel, 4, 0)
        self.assertRaises(FramebufferError, self.framebuffer.set_pixel, 0, 2, True)

    def test_framebuffer_clear(self):
        fb = self.framebuffer
        fb.xor_pixel(0, 0)
        fb.xor_pixel(3, 1)
        fb.clear()
        self.assertEqual("00" * 24, fb.get_buffer().hex())

    def test_framebuffer_read_only(self):
        buffer = self.framebuffer.get_buffer()

        with self.assertRaises(TypeError):
            buffer[0] = 0xFF
