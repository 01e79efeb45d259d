#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, and fast
zeroing of memory blocks.

Every access is checked against the size of the bank.  A malformed program
that indexes past the end of memory raises RAMError instead of wrapping around
and overwriting the font table or anything else at the bottom of memory.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=0):
        self.resize(mem_size)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        if size > 0:
            self.check_overflow(location)
            self.check_overflow(location + size - 1)

        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size

        if block_size > 0:
            self.check_overflow(location)
            self.check_overflow(block_top - 1)

        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise RAMError("Memory access out of range at 0x{:04x}".format(location))

    def zero_block(self, location, size):
        block_top = location + size

        if size > 0:
            self.check_overflow(location)
            self.check_overflow(block_top - 1)

        self.mem[location:block_top] = bytes(size)

    def clear(self):
        self.zero_block(0, self.mem_size)
