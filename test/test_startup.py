#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from unittest import mock
from quartz import main
from quartz.host import HostError
from quartz.hostio import LoaderError
from quartzchip import parse_args


class TestStartup(unittest.TestCase):
    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tempdir.cleanup)

    def _args(self, rom):
        filename = os.path.join(self.tempdir.name, "test.ch8")

        with open(filename, "wb") as f:
            f.write(rom)

        return vars(parse_args([filename, "-r", "null", "-c", "0"]))

    def test_parse_args_defaults(self):
        args = vars(parse_args(["game.ch8"]))
        self.assertEqual("game.ch8", args["filename"])
        self.assertIsNone(args["clock_speed"])
        self.assertIsNone(args["renderer"])
        self.assertIsNone(args["scale"])
        self.assertEqual(0, args["mute"])
        self.assertFalse(args["debug"])

    def test_parse_args_options(self):
        args = vars(parse_args(["game.ch8", "-c", "1000", "-r", "null", "-m", "1", "-d", "-k", "1,2"]))
        self.assertEqual(1000, args["clock_speed"])
        self.assertEqual("null", args["renderer"])
        self.assertEqual(1, args["mute"])
        self.assertTrue(args["debug"])
        self.assertEqual("1,2", args["keymap"])

    def test_main_crash(self):
        with mock.patch("builtins.print"):
            with self.assertRaises(HostError) as context:
                main(self._args(b"\x00\xE0\xFF\xFF"))

        self.assertIn("Opcode 0xffff at address 0x202", str(context.exception))

    def test_main_bad_rom(self):
        with mock.patch("builtins.print"):
            self.assertRaises(LoaderError, main, self._args(b""))
