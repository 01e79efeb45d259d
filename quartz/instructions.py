#!/usr/bin/env python3

"""
Instruction Decoder

Turns a raw 16-bit opcode into an instruction value.  Each instruction is its
own small tuple type, carrying only the operands that instruction needs:

    x      = register (nybble 2)
    y      = register (nybble 1)
    byte   = immediate byte (low 8 bits)
    addr   = address (low 12 bits)
    nibble = sprite height (low 4 bits)

Decoding is a two-stage table lookup.  The first nybble selects a bitmask, and
the masked opcode is then looked up in the instruction table.  Families where
the first nybble is enough are masked down to that nybble alone.  Anything
which isn't in the table raises DecodeError, including opcodes that share a
family with a real instruction.

Converting an instruction to a string gives its assembly syntax, which is used
for debug output.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple


class DecodeError(Exception):
    def __init__(self, opcode):
        super().__init__("Unrecognised opcode 0x{:04x}".format(opcode))
        self.opcode = opcode


class Instruction:
    # Shared behaviour for all instruction tuples.  Tuples with identical operands must only be equal if they are the
    # same instruction, otherwise JP 0x200 == CALL 0x200.
    __slots__ = ()
    syntax = ""

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(self))

    def __str__(self):
        return self.syntax.format(**self._asdict())


class CLS(Instruction, namedtuple("CLS", "")):
    __slots__ = ()
    syntax = "CLS"


class RET(Instruction, namedtuple("RET", "")):
    __slots__ = ()
    syntax = "RET"


class JP(Instruction, namedtuple("JP", "addr")):
    __slots__ = ()
    syntax = "JP 0x{addr:03x}"


class CALL(Instruction, namedtuple("CALL", "addr")):
    __slots__ = ()
    syntax = "CALL 0x{addr:03x}"


class SEVXB(Instruction, namedtuple("SEVXB", "x byte")):
    __slots__ = ()
    syntax = "SE V{x:01x}, 0x{byte:02x}"


class SNEVXB(Instruction, namedtuple("SNEVXB", "x byte")):
    __slots__ = ()
    syntax = "SNE V{x:01x}, 0x{byte:02x}"


class SEVXY(Instruction, namedtuple("SEVXY", "x y")):
    __slots__ = ()
    syntax = "SE V{x:01x}, V{y:01x}"


class LDVXB(Instruction, namedtuple("LDVXB", "x byte")):
    __slots__ = ()
    syntax = "LD V{x:01x}, 0x{byte:02x}"


class ADDVXB(Instruction, namedtuple("ADDVXB", "x byte")):
    __slots__ = ()
    syntax = "ADD V{x:01x}, 0x{byte:02x}"


class LDVXY(Instruction, namedtuple("LDVXY", "x y")):
    __slots__ = ()
    syntax = "LD V{x:01x}, V{y:01x}"


class ORVXY(Instruction, namedtuple("ORVXY", "x y")):
    __slots__ = ()
    syntax = "OR V{x:01x}, V{y:01x}"


class ANDVXY(Instruction, namedtuple("ANDVXY", "x y")):
    __slots__ = ()
    syntax = "AND V{x:01x}, V{y:01x}"


class XORVXY(Instruction, namedtuple("XORVXY", "x y")):
    __slots__ = ()
    syntax = "XOR V{x:01x}, V{y:01x}"


class ADDVXY(Instruction, namedtuple("ADDVXY", "x y")):
    __slots__ = ()
    syntax = "ADD V{x:01x}, V{y:01x}"


class SUBVXY(Instruction, namedtuple("SUBVXY", "x y")):
    __slots__ = ()
    syntax = "SUB V{x:01x}, V{y:01x}"


class SHR(Instruction, namedtuple("SHR", "x")):
    __slots__ = ()
    syntax = "SHR V{x:01x}"


class SUBNVXY(Instruction, namedtuple("SUBNVXY", "x y")):
    __slots__ = ()
    syntax = "SUBN V{x:01x}, V{y:01x}"


class SHL(Instruction, namedtuple("SHL", "x")):
    __slots__ = ()
    syntax = "SHL V{x:01x}"


class SNEVXY(Instruction, namedtuple("SNEVXY", "x y")):
    __slots__ = ()
    syntax = "SNE V{x:01x}, V{y:01x}"


class LDI(Instruction, namedtuple("LDI", "addr")):
    __slots__ = ()
    syntax = "LD I, 0x{addr:03x}"


class JR(Instruction, namedtuple("JR", "addr")):
    __slots__ = ()
    syntax = "JP V0, 0x{addr:03x}"


class RND(Instruction, namedtuple("RND", "x byte")):
    __slots__ = ()
    syntax = "RND V{x:01x}, 0x{byte:02x}"


class DRAW(Instruction, namedtuple("DRAW", "x y nibble")):
    __slots__ = ()
    syntax = "DRW V{x:01x}, V{y:01x}, 0x{nibble:01x}"


class SKP(Instruction, namedtuple("SKP", "x")):
    __slots__ = ()
    syntax = "SKP V{x:01x}"


class SKNP(Instruction, namedtuple("SKNP", "x")):
    __slots__ = ()
    syntax = "SKNP V{x:01x}"


class LDVXDT(Instruction, namedtuple("LDVXDT", "x")):
    __slots__ = ()
    syntax = "LD V{x:01x}, DT"


class LDVXK(Instruction, namedtuple("LDVXK", "x")):
    __slots__ = ()
    syntax = "LD V{x:01x}, K"


class LDDTVX(Instruction, namedtuple("LDDTVX", "x")):
    __slots__ = ()
    syntax = "LD DT, V{x:01x}"


class LDSTVX(Instruction, namedtuple("LDSTVX", "x")):
    __slots__ = ()
    syntax = "LD ST, V{x:01x}"


class ADDIVX(Instruction, namedtuple("ADDIVX", "x")):
    __slots__ = ()
    syntax = "ADD I, V{x:01x}"


class LDFVX(Instruction, namedtuple("LDFVX", "x")):
    __slots__ = ()
    syntax = "LD F, V{x:01x}"


class LDB(Instruction, namedtuple("LDB", "x")):
    __slots__ = ()
    syntax = "LD B, V{x:01x}"


class LDIVX(Instruction, namedtuple("LDIVX", "x")):
    __slots__ = ()
    syntax = "LD [I], V{x:01x}"


class LDVXI(Instruction, namedtuple("LDVXI", "x")):
    __slots__ = ()
    syntax = "LD V{x:01x}, [I]"


def nybble(value, n):
    # Nybble 0 is the least significant
    return (value >> (4 * n)) & 0xF


# Operand extraction by field name.  References to x, y, byte, addr and nibble are always in the same opcode position
# throughout all instructions.
OPERANDS = {
    "x": lambda opcode: nybble(opcode, 2),
    "y": lambda opcode: nybble(opcode, 1),
    "byte": lambda opcode: opcode & 0xFF,
    "addr": lambda opcode: opcode & 0xFFF,
    "nibble": lambda opcode: nybble(opcode, 0)
}

# Bitmask to apply before looking up the instruction table, by first nybble.  Families not listed here are identified
# by their first nybble alone.
FAMILY_MASKS = {
    0x0: 0xFFFF,  # Exact match
    0x8: 0xF00F,  # Low nybble
    0xE: 0xF0FF,  # Low byte
    0xF: 0xF0FF   # Low byte
}

FIRST_NYBBLE_MASK = 0xF000

INSTRUCTION_TABLE = {
    # Instructions beginning with nybble 0x0, bitmask 0xFFFF
    0x00E0: CLS,
    0x00EE: RET,
    # Instructions identified by the first nybble only, bitmask 0xF000
    0x1000: JP,
    0x2000: CALL,
    0x3000: SEVXB,
    0x4000: SNEVXB,
    0x5000: SEVXY,
    0x6000: LDVXB,
    0x7000: ADDVXB,
    0x9000: SNEVXY,
    0xA000: LDI,
    0xB000: JR,
    0xC000: RND,
    0xD000: DRAW,
    # Instructions beginning with nybble 0x8, bitmask 0xF00F
    0x8000: LDVXY,
    0x8001: ORVXY,
    0x8002: ANDVXY,
    0x8003: XORVXY,
    0x8004: ADDVXY,
    0x8005: SUBVXY,
    0x8006: SHR,
    0x8007: SUBNVXY,
    0x800E: SHL,
    # Instructions beginning with nybble 0xE/0xF, bitmask 0xF0FF
    0xE09E: SKP,
    0xE0A1: SKNP,
    0xF007: LDVXDT,
    0xF00A: LDVXK,
    0xF015: LDDTVX,
    0xF018: LDSTVX,
    0xF01E: ADDIVX,
    0xF029: LDFVX,
    0xF033: LDB,
    0xF055: LDIVX,
    0xF065: LDVXI
}


def decode(opcode):
    if not 0 <= opcode <= 0xFFFF:
        raise DecodeError(opcode)

    mask = FAMILY_MASKS.get(opcode >> 12, FIRST_NYBBLE_MASK)
    instruction = INSTRUCTION_TABLE.get(opcode & mask)

    if instruction is None:
        raise DecodeError(opcode)

    return instruction(*[OPERANDS[field](opcode) for field in instruction._fields])
