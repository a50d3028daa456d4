# arithmetic.py

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

# ------------------------------------------------------------------------
# arithmetic.py defines arithmetic for the architecture using
# Python arithmetic. This includes word representation, data
# conversions, bit manipulation, operations on fields, and the
# arithmetic, logic and shift operations required by the instruction
# set architecture.
# ------------------------------------------------------------------------

import common
import architecture as arch

word16mask = 0x0000FFFF

# ------------------------------------------------------------------------
# Ensuring and asserting validity of words
# ------------------------------------------------------------------------

# All operations that produce a word should produce a valid word,
# which is represented as a nonnegative integer x with
# 0 <= x < 2^16. A negative value in the two's complement range is a
# different representation of the same word, and limit16 converts it.
# Results that overflow wrap around; there is no overflow trap.

def limit16(x):
    return x & word16mask

def assert16(x):
    if 0 <= x < 2**16:
        return x
    else:
        common.indicate_error(f"assert16 fail: {x}")
        return x & 0x0000FFFF

def truncate_word(x):
    r = x & 0xFFFF
    common.mode.devlog(f"truncate_word x={x} r={word_to_hex4(r)}")
    return r

# ------------------------------------------------------------------------
# Words, binary numbers, and two's complement integers
# ------------------------------------------------------------------------

const8000 = 32768  # 2^15
const10000 = 65536  # 2^16

def word_to_int(w):
    x = assert16(w)
    return x if x < const8000 else x - const10000

def int_to_word(x):
    result = x % const10000
    common.mode.devlog(f"int_to_word {x} returning {result}")
    return result

# ------------------------------------------------------------------------
# Sign extension
# ------------------------------------------------------------------------

# Extend a field of fsize bits to a full word. If the sign bit of the
# field is set the upper bits of the word are all 1.

def sign_extend(x, fsize):
    fmask = (1 << fsize) - 1
    y = x & fmask
    if arch.get_bit_in_word_le(y, fsize - 1):
        return limit16(y | (word16mask & ~fmask))
    return y

def sign_extend4(x):
    return sign_extend(x, arch.imm_size)

# ------------------------------------------------------------------------
# Operating on fields of a word
# ------------------------------------------------------------------------

def split_word(x):
    y = assert16(x)
    s = y & 0x000F
    y = y >> 4
    r = y & 0x000F
    y = y >> 4
    q = y & 0x000F
    y = y >> 4
    p = y & 0x000F
    return [p, q, r, s]

# ------------------------------------------------------------------------
# Hexadecimal notation
# ------------------------------------------------------------------------

# Hex digits are written in lower case, matching the trace format
# produced by the hardware simulation

hex_digit = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', 'a', 'b', 'c', 'd', 'e', 'f']

def word_to_hex4(x):
    p, q, r, s = split_word(limit16(x))
    return hex_digit[p] + hex_digit[q] + hex_digit[r] + hex_digit[s]

def word_to_hex1(x):
    return hex_digit[x & 0x000F]

# Return None if h is not exactly four hex digits

def hex4_to_word(h):
    if len(h) != 4:
        return None
    ds = [hex_char_to_int(c) for c in h]
    if None in ds:
        return None
    return 16**3 * ds[0] + 16**2 * ds[1] + 16 * ds[2] + ds[3]

def hex_char_to_int(cx):
    c = ord(cx)
    if ord('0') <= c <= ord('9'):
        return c - ord('0')
    elif ord('a') <= c <= ord('f'):
        return 10 + c - ord('a')
    elif ord('A') <= c <= ord('F'):
        return 10 + c - ord('A')
    else:
        return None

# ------------------------------------------------------------------------
# Bitwise logic on words
# ------------------------------------------------------------------------

def word_invert(x):
    return x ^ 0x0000FFFF

# ------------------------------------------------------------------------
# Operations for the instructions
# ------------------------------------------------------------------------

# Each operation takes its operands as valid words and returns a valid
# word. Register-register and register-immediate instructions share an
# operation; they differ only in where the second operand comes from.

def shift_amount(k):
    return k & arch.shift_mask

def op_mov(a):
    return a

def op_add(a, b):
    return truncate_word(a + b)

def op_sub(a, b):
    return truncate_word(a + word_invert(b) + 1)

def op_and(a, b):
    return a & b

def op_or(a, b):
    return a | b

def op_xor(a, b):
    return a ^ b

# Logical shift left, zero fill from the right

def op_sll(a, k):
    return truncate_word(a << shift_amount(k))

# Logical shift right, the word is treated as unsigned so zeros fill
# from the left

def op_srl(a, k):
    return truncate_word(a >> shift_amount(k))

# Arithmetic shift right, the sign bit is replicated

def op_sra(a, k):
    return int_to_word(word_to_int(a) >> shift_amount(k))
