# architecture.py

# Copyright (C) 2025 The golden16 authors. License: GNU GPL Version 3

# This file is part of golden16. golden16 is free software: you can
# redistribute it and/or modify it under the terms of the GNU General
# Public License as published by the Free Software Foundation, either
# version 3 of the License, or (at your option) any later version.
# golden16 is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# General Public License for more details. You should have received
# a copy of the GNU General Public License along with golden16. If
# not, see <https://www.gnu.org/licenses/>.

# --------------------------------------------------------------------
# architecture.py defines global constants and tables specifying
# the instruction format, opcodes, mnemonics, and operand classes
# --------------------------------------------------------------------

# --------------------------------------------------------------------
# Bit indexing
# --------------------------------------------------------------------

# Bits are indexed Little End (LE): in a k-bit word the least
# significant (rightmost) bit has index 0 and the most significant
# (leftmost) bit has index k-1. The instruction fields below are given
# in this notation, so opcode = bits [15:12].

def get_bit_in_word_le(w, i):
    return (w >> i) & 0x0001

# Return the field of width fsize whose rightmost bit is at index i

def get_field_le(w, i, fsize):
    return (w >> i) & ((1 << fsize) - 1)

# --------------------------------------------------------------------
# Architecture constants
# --------------------------------------------------------------------

n_registers = 16
zero_register = 0

# Every instruction is a single 16-bit word with four 4-bit fields
#   op   = bits [15:12]
#   d    = bits [11:8]   destination register
#   a    = bits [7:4]    first source register
#   b    = bits [3:0]    second source register or immediate

field_size = 4

field_op_lsb = 12
field_d_lsb = 8
field_a_lsb = 4
field_b_lsb = 0

# Immediates live in the b field and are 4-bit two's complement

imm_size = field_size

# Shift amounts are limited to 0..15 regardless of the operand value

shift_mask = 0x000F

# --------------------------------------------------------------------
# Operand classes
# --------------------------------------------------------------------

# How the b field is interpreted by an instruction

iRR = "RR"     # mov    R1,R2         b is ignored
iRRR = "RRR"   # add    R1,R2,R3      b is a register number
iRRI = "RRI"   # addi   R1,R2,-3      b is a sign extended immediate

# --------------------------------------------------------------------
# Opcodes
# --------------------------------------------------------------------

MOV = 0x0
ADD = 0x1
SUB = 0x2
AND = 0x3
OR = 0x4
XOR = 0x5
SLL = 0x6
SRL = 0x7
SRA = 0x8
ADDI = 0x9
ANDI = 0xa
ORI = 0xb
XORI = 0xc
SLLI = 0xd
SRLI = 0xe
SRAI = 0xf

# --------------------------------------------------------------------
# Instruction mnemonics
# --------------------------------------------------------------------

# These arrays are indexed by an opcode to give the corresponding
# mnemonic and operand class

mnemonic = [
    "mov", "add", "sub", "and",    # 0-3
    "or", "xor", "sll", "srl",     # 4-7
    "sra", "addi", "andi", "ori",  # 8-b
    "xori", "slli", "srli", "srai" # c-f
]

operand_class = [
    iRR, iRRR, iRRR, iRRR,         # 0-3
    iRRR, iRRR, iRRR, iRRR,        # 4-7
    iRRR, iRRI, iRRI, iRRI,        # 8-b
    iRRI, iRRI, iRRI, iRRI         # c-f
]

shift_opcodes = [SLL, SRL, SRA, SLLI, SRLI, SRAI]

opcode_of_mnemonic = {m: i for i, m in enumerate(mnemonic)}

def is_shift(op):
    return op in shift_opcodes
