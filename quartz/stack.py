#!/usr/bin/env python3

"""
Stack Emulator

The call stack is not part of system RAM.  It is a fixed array of 16 return
addresses with its own stack pointer (SP), which always points at the next free
slot.  CALL stores the return address and then increments SP, RET decrements SP
and then reads the address back.

Pushing onto a full stack, or popping an empty one, raises StackError.  Nothing
is ever read from or written to outside the array.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = [0] * size
        self.size = size
        self.sp = 0

    def push(self, item):
        if self.sp >= self.size:
            raise StackError("Stack overflow")

        self.items[self.sp] = item
        self.sp += 1

    def pop(self):
        if self.sp <= 0:
            raise StackError("Stack underflow")

        self.sp -= 1
        return self.items[self.sp]

    def get_slot(self, slot):
        if not 0 <= slot < self.size:
            raise StackError("Stack slot {} is out of range".format(slot))

        return self.items[slot]

    def get_items(self):
        # For debugging
        return self.items[:self.sp]
