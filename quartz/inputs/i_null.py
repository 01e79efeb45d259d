#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins pass key transitions straight into the VM with set_key, and
provide the blocking wait_keypress method that the VM uses as its key wait
handler.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import NUM_KEYS


class InputsError(Exception):
    pass


class InputsQuit(Exception):
    # Raised from inside a key wait when the user asks to quit, to unwind out of the VM
    pass


class Inputs:
    def __init__(self, keymap, vm):
        self.keymap_dict = {}
        self.vm = vm
        keymap_split = keymap.split(",")

        if len(keymap_split) != NUM_KEYS:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self):
        return False  # Don't exit the program

    def wait_keypress(self):
        return 0  # Nothing can be pressed, so report key 0 straight away

    def shutdown(self):
        pass
