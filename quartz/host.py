#!/usr/bin/env python3

"""
Host Loop

Drives a VirtualMachine in real time.  The VM has no idea how fast it should
run, so the host splits time into 60Hz frames.  On each frame it processes
input messages, runs enough instructions to match the requested clock speed,
switches the buzzer according to the sound timer, and redraws the display if
the VM reported a change.

Timing is tied to actual time rather than instruction count, so if the host
gets lagged, instructions per second drop but the VM's timers keep counting
down at the right rate.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_INTRO, APP_NAME, DISPLAY_FREQ, DISPLAY_INTERVAL, UNCAPPED_OPS_PER_FRAME
from .inputs.i_null import InputsQuit
from .instructions import DecodeError
from .ram import RAMError
from .stack import StackError
from .vm import VMError


class HostError(Exception):
    pass


class Host:
    def __init__(self, vm, renderer, inputs, audio, debugger, clock_speed):
        self.vm = vm
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.debugger = debugger
        self.display_changed = True

        if clock_speed <= 0:
            # Uncapped: run big batches and never wait for the next frame
            self.ops_per_frame = UNCAPPED_OPS_PER_FRAME
            self.frame_interval = None
        else:
            self.ops_per_frame = max(1, round(clock_speed / DISPLAY_FREQ))
            self.frame_interval = DISPLAY_INTERVAL

        self.vm.set_display_update_handler(self.on_display_update)
        self.vm.set_key_wait_handler(self.inputs.wait_keypress)

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def on_display_update(self):
        # Called from inside the VM, so just note it and draw at the end of the frame
        self.display_changed = True

    def run(self):
        while True:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if self.inputs.process_messages():
                return

            try:
                self.vm.step(self.ops_per_frame)
            except InputsQuit:
                # The user quit while the VM was waiting for a key
                return
            except DecodeError as error:
                raise HostError(self.crash_report(
                    "Opcode 0x{:04x} at address 0x{:03x} is not recognised.".format(error.opcode, self.vm.debug_pc)
                )) from None
            except (RAMError, StackError, VMError) as error:
                # Malformed programs halt the VM the same way as a bad opcode
                raise HostError(self.crash_report(
                    "Instruction at address 0x{:03x} failed: {}".format(self.vm.debug_pc, error)
                )) from None

            self.perf_counter_ops += self.ops_per_frame
            self.audio.enable_buzzer(self.vm.get_st() > 0)
            self.refresh_display()

            if self.frame_interval is not None:
                # Wait for the next frame.  Do this last for maximum precision (takes into account time spent on
                # this frame)
                next_time = this_time + self.frame_interval

                while perf_counter() < next_time:  # Unfortunately we have to do this to get the timing right
                    pass

    def refresh_display(self):
        if self.display_changed:
            self.renderer.refresh_display(self.vm.get_display_buffer())
            self.display_changed = False
            self.perf_counter_fps += 1

    def crash_report(self, reason):
        return "Emulation halted.\n\n{}Debug info:\n{}\n\n{}".format(
            APP_INTRO, self.debugger.debug(self.vm, "???", verbose=True), reason
        )

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
