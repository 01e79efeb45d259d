#!/usr/bin/env python3

"""
CHIP-8 Virtual Machine

Like a real computer, this is where most of the processing happens.  The VM
owns all of the machine state: RAM, registers, the call stack, both timers, the
key matrix and the framebuffer.

The VM doesn't run by itself.  The caller repeatedly calls step(), and each
cycle performs a fetch, a decode and an execute, followed by a timer update if
1/60th of a second has passed on the VM's clock.  How many cycles are run per
real-time frame is entirely up to the caller.

Two callbacks connect the VM to the host:

    * The key wait handler is called by LD Vx, K, and must block until a key
      is pressed, returning its index.  This is the only point where an
      instruction can be suspended.  If the host wants to quit while waiting,
      the handler should raise, and the exception will come out of step().
    * The display update handler is called whenever CLS or DRW changes the
      framebuffer.  It runs before the instruction finishes, so it should
      return quickly.

An unrecognised opcode raises DecodeError out of step().  Malformed programs
that access memory or the stack out of range raise RAMError or StackError
rather than wrapping around.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from random import randint
from . import instructions as ins
from .constants import (
    MEMORY_SIZE, PROGRAM_START, PROGRAM_MAX_SIZE, FONT, FONT_LOCATION, FONT_GLYPH_SIZE, NUM_REGISTERS, FLAG_REGISTER,
    STACK_SIZE, CPU_ENDIAN, TIMER_INTERVAL, NUM_KEYS
)
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack


class VMError(Exception):
    pass


def bcd(value):
    # Hundreds, tens, ones
    return value // 100, (value // 10) % 10, value % 10


class VirtualMachine:
    def __init__(self, clock=perf_counter, debugger=None):
        self.ram = RAM(MEMORY_SIZE)
        self.ram.write_block(FONT_LOCATION, FONT)
        self.stack = Stack(STACK_SIZE)
        self.framebuffer = Framebuffer()
        self.debugger = debugger
        # Read once here, so the debugger must be set live before the VM is built
        self.live_debug = debugger is not None and debugger.is_live()

        # Initialise registers
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Bytearrays are mutable, so register updates are fast
        self.i = 0  # Index register
        self.pc = PROGRAM_START

        # Initialise timers.  The clock is only ever used to measure elapsed time, so any monotonic source will do.
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer
        self.clock = clock
        self.last_tick = clock()

        self.keys = [False] * NUM_KEYS
        self.key_wait_handler = None
        self.display_update_handler = None

        # Current opcode, and where it came from, kept for debugging
        self.opcode = 0
        self.debug_pc = PROGRAM_START
        self.stopped = False

        self.executors = {
            ins.CLS: self._cls,
            ins.RET: self._ret,
            ins.JP: self._jp,
            ins.CALL: self._call,
            ins.SEVXB: self._sevxb,
            ins.SNEVXB: self._snevxb,
            ins.SEVXY: self._sevxy,
            ins.LDVXB: self._ldvxb,
            ins.ADDVXB: self._addvxb,
            ins.LDVXY: self._ldvxy,
            ins.ORVXY: self._orvxy,
            ins.ANDVXY: self._andvxy,
            ins.XORVXY: self._xorvxy,
            ins.ADDVXY: self._addvxy,
            ins.SUBVXY: self._subvxy,
            ins.SHR: self._shr,
            ins.SUBNVXY: self._subnvxy,
            ins.SHL: self._shl,
            ins.SNEVXY: self._snevxy,
            ins.LDI: self._ldi,
            ins.JR: self._jr,
            ins.RND: self._rnd,
            ins.DRAW: self._draw,
            ins.SKP: self._skp,
            ins.SKNP: self._sknp,
            ins.LDVXDT: self._ldvxdt,
            ins.LDVXK: self._ldvxk,
            ins.LDDTVX: self._lddtvx,
            ins.LDSTVX: self._ldstvx,
            ins.ADDIVX: self._addivx,
            ins.LDFVX: self._ldfvx,
            ins.LDB: self._ldb,
            ins.LDIVX: self._ldivx,
            ins.LDVXI: self._ldvxi
        }

    def load_memory(self, data):
        if len(data) > PROGRAM_MAX_SIZE:
            raise VMError(
                "Program is {} bytes, but only {} bytes of program memory are available".format(
                    len(data), PROGRAM_MAX_SIZE
                )
            )

        self.ram.write_block(PROGRAM_START, data)

    def step(self, cycles=1):
        self.stopped = False

        for _ in range(cycles):
            if self.stopped:
                break

            # Keep track of the program counter before fetching, in case there is a crash
            self.debug_pc = self.pc
            self.opcode = self.fetch()
            instruction = ins.decode(self.opcode)

            if self.live_debug:
                self.debugger.output(self, instruction)

            self.execute(instruction)
            self.update_timers()

    def stop(self):
        # Only takes effect between cycles
        self.stopped = True

    def fetch(self):
        opcode = int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)
        self.pc += 2
        return opcode

    def execute(self, instruction):
        self.executors[type(instruction)](instruction)

    def update_timers(self):
        this_time = self.clock()

        if this_time - self.last_tick >= TIMER_INTERVAL:
            self.tick_timers()
            self.last_tick = this_time

    def tick_timers(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    # Host-facing controls

    def set_key(self, key, pressed):
        self._check_key(key)
        self.keys[key] = bool(pressed)

    def set_key_wait_handler(self, handler):
        self.key_wait_handler = handler

    def set_display_update_handler(self, handler):
        self.display_update_handler = handler

    # Inspection

    def get_register(self, reg):
        return self.v[reg]

    def get_pc(self):
        return self.pc

    def get_sp(self):
        return self.stack.sp

    def get_stack(self, slot):
        return self.stack.get_slot(slot)

    def get_i(self):
        return self.i

    def get_dt(self):
        return self.dt

    def get_st(self):
        return self.st

    def is_key_down(self, key):
        self._check_key(key)
        return self.keys[key]

    def get_display_buffer(self):
        return self.framebuffer.get_buffer()

    def get_pixel(self, x, y):
        return self.framebuffer.get_pixel(x, y)

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise VMError("Key 0x{:x} is out of range".format(key))

    def _display_updated(self):
        if self.display_update_handler is not None:
            self.display_update_handler()

    def _skip(self):
        self.pc += 2

    # Instructions

    def _cls(self, _):  # CLS
        self.framebuffer.clear()
        self._display_updated()

    def _ret(self, _):  # RET
        self.pc = self.stack.pop()

    def _jp(self, instruction):  # JP addr
        self.pc = instruction.addr

    def _call(self, instruction):  # CALL addr
        self.stack.push(self.pc)
        self.pc = instruction.addr

    def _sevxb(self, instruction):  # SE Vx, byte
        if self.v[instruction.x] == instruction.byte:
            self._skip()

    def _snevxb(self, instruction):  # SNE Vx, byte
        if self.v[instruction.x] != instruction.byte:
            self._skip()

    def _sevxy(self, instruction):  # SE Vx, Vy
        if self.v[instruction.x] == self.v[instruction.y]:
            self._skip()

    def _ldvxb(self, instruction):  # LD Vx, byte
        self.v[instruction.x] = instruction.byte

    def _addvxb(self, instruction):  # ADD Vx, byte
        # No carry flag for this one
        self.v[instruction.x] = (self.v[instruction.x] + instruction.byte) & 0xFF

    def _ldvxy(self, instruction):  # LD Vx, Vy
        self.v[instruction.x] = self.v[instruction.y]

    def _orvxy(self, instruction):  # OR Vx, Vy
        self.v[instruction.x] |= self.v[instruction.y]

    def _andvxy(self, instruction):  # AND Vx, Vy
        self.v[instruction.x] &= self.v[instruction.y]

    def _xorvxy(self, instruction):  # XOR Vx, Vy
        self.v[instruction.x] ^= self.v[instruction.y]

    def _addvxy(self, instruction):  # ADD Vx, Vy
        val = self.v[instruction.x] + self.v[instruction.y]
        self.v[FLAG_REGISTER] = (val >> 8) & 1  # Carry
        self.v[instruction.x] = val & 0xFF

    def _subvxy(self, instruction):  # SUB Vx, Vy
        vx = self.v[instruction.x]
        vy = self.v[instruction.y]
        self.v[FLAG_REGISTER] = int(vx > vy)  # Strictly greater, so equal operands clear the flag
        self.v[instruction.x] = (vx - vy) & 0xFF

    def _shr(self, instruction):  # SHR Vx
        val = self.v[instruction.x]
        self.v[FLAG_REGISTER] = val & 1
        self.v[instruction.x] = val >> 1

    def _subnvxy(self, instruction):  # SUBN Vx, Vy
        vx = self.v[instruction.x]
        vy = self.v[instruction.y]
        self.v[FLAG_REGISTER] = int(vy > vx)
        self.v[instruction.x] = (vy - vx) & 0xFF

    def _shl(self, instruction):  # SHL Vx
        val = self.v[instruction.x]
        self.v[FLAG_REGISTER] = val >> 7
        self.v[instruction.x] = (val << 1) & 0xFF

    def _snevxy(self, instruction):  # SNE Vx, Vy
        if self.v[instruction.x] != self.v[instruction.y]:
            self._skip()

    def _ldi(self, instruction):  # LD I, addr
        self.i = instruction.addr

    def _jr(self, instruction):  # JP V0, addr
        self.pc = instruction.addr + self.v[0x0]

    def _rnd(self, instruction):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[instruction.x] = randint(0, 0xFF) & instruction.byte

    def _draw(self, instruction):  # DRW Vx, Vy, nibble
        # Each row of the sprite is one byte, most significant bit on the left.  Every pixel wraps around the screen
        # separately, so a sprite straddling an edge reappears on the opposite side.
        sprite = self.ram.read_block(self.i, instruction.nibble)
        vx_pos = self.v[instruction.x]
        vy_pos = self.v[instruction.y]
        collided = False
        changed = False

        for y, spr_data in enumerate(sprite):
            for x in range(8):
                if spr_data & (0x80 >> x):
                    changed = True

                    if self.framebuffer.xor_pixel(vx_pos + x, vy_pos + y):
                        # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                        collided = True

        self.v[FLAG_REGISTER] = int(collided)

        if changed:
            self._display_updated()

    def _skp(self, instruction):  # SKP Vx
        if self.is_key_down(self.v[instruction.x]):
            self._skip()

    def _sknp(self, instruction):  # SKNP Vx
        if not self.is_key_down(self.v[instruction.x]):
            self._skip()

    def _ldvxdt(self, instruction):  # LD Vx, DT
        self.v[instruction.x] = self.dt

    def _ldvxk(self, instruction):  # LD Vx, K
        if self.key_wait_handler is None:
            raise VMError("LD V{:01x}, K executed without a key wait handler".format(instruction.x))

        # Blocks until the host reports a key
        key = self.key_wait_handler()

        self._check_key(key)
        self.v[instruction.x] = key

    def _lddtvx(self, instruction):  # LD DT, Vx
        self.dt = self.v[instruction.x]

    def _ldstvx(self, instruction):  # LD ST, Vx
        self.st = self.v[instruction.x]

    def _addivx(self, instruction):  # ADD I, Vx
        self.i = (self.i + self.v[instruction.x]) & 0xFFFF

    def _ldfvx(self, instruction):  # LD F, Vx
        self.i = FONT_LOCATION + FONT_GLYPH_SIZE * self.v[instruction.x]

    def _ldb(self, instruction):  # LD B, Vx
        self.ram.write_block(self.i, bytes(bcd(self.v[instruction.x])))

    def _ldivx(self, instruction):  # LD [I], Vx
        # Ensure with +1 that the final register is copied
        self.ram.write_block(self.i, self.v[:instruction.x + 1])

    def _ldvxi(self, instruction):  # LD Vx, [I]
        # Ensure with +1 that the final register is copied
        self.v[:instruction.x + 1] = self.ram.read_block(self.i, instruction.x + 1)
