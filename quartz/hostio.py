#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host, ready to be copied into the VM's
program memory.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import PROGRAM_MAX_SIZE


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_rom(self, filename):
        data = self.load_binary(filename)

        if not data:
            raise LoaderError("ROM '{}' is empty".format(filename))

        if len(data) > PROGRAM_MAX_SIZE:
            raise LoaderError(
                "ROM '{}' is {} bytes, which is larger than the {} bytes of program memory".format(
                    filename, len(data), PROGRAM_MAX_SIZE
                )
            )

        return data
