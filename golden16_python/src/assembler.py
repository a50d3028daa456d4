# assembler.py

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

# ---------------------------------------------------------------------
# assembler.py translates assembly language into test case files of
# instruction words, and instruction words back into assembly language
# ---------------------------------------------------------------------

# A statement is one line:   mnemonic  operands   ; comment
#
#   mov   R1,R2
#   add   R3,R1,R2
#   addi  R4,R0,-3
#   slli  R5,R4,12
#   xori  R6,R5,$f

import re
import common
import architecture as arch
import arithmetic as arith
import emulator as em

# ----------------------------------------------------------------------
# Parsers
# ----------------------------------------------------------------------

reg_parser = re.compile(r"^[rR]([0-9]|1[0-5])$")
int_parser = re.compile(r"^-?[0-9]+$")
hex_parser = re.compile(r"^\$[0-9a-fA-F]+$")
stmt_parser = re.compile(r"^\s*([A-Za-z]+)\s*(.*?)\s*$")

# Immediate ranges: two's complement for arithmetic and logic, an
# unsigned shift amount for the shifts

imm_min = -8
imm_max = 7
shift_min = 0
shift_max = 15

# ----------------------------------------------------------------------
# Assembly state
# ----------------------------------------------------------------------

class AsmInfo:
    def __init__(self, src_text):
        self.src_text = src_text
        self.src_lines = src_text.split("\n")
        self.words = []
        self.listing = []
        self.errors = []
        self.n_asm_errors = 0

    def object_text(self):
        return "".join(arith.word_to_hex4(w) + "\n" for w in self.words)

# ----------------------------------------------------------------------
# Error messages
# ----------------------------------------------------------------------

def mk_err_msg(ma, line_number, err):
    msg = f"Error: line {line_number}: {err}"
    common.mode.devlog(msg)
    ma.errors.append(msg)
    ma.n_asm_errors += 1

def remove_comment(xs):
    i = xs.find(";")
    return xs if i == -1 else xs[:i]

# ----------------------------------------------------------------------
# Operands
# ----------------------------------------------------------------------

def parse_reg(ma, line_number, x):
    m = reg_parser.match(x)
    if not m:
        mk_err_msg(ma, line_number, f"expected register, found {x!r}")
        return 0
    return int(m.group(1))

def parse_imm(ma, line_number, op, x):
    if int_parser.match(x):
        k = int(x)
    elif hex_parser.match(x):
        k = int(x[1:], 16)
    else:
        mk_err_msg(ma, line_number, f"immediate {x!r} has invalid syntax")
        return 0
    lo, hi = (shift_min, shift_max) if arch.is_shift(op) else (imm_min, imm_max)
    # a hex nibble is a bit pattern, so $8..$f are the negative immediates
    if hex_parser.match(x) and not arch.is_shift(op) and 0 <= k <= 15:
        k = arith.word_to_int(arith.sign_extend4(k))
    if not lo <= k <= hi:
        mk_err_msg(ma, line_number, f"immediate {x} out of range {lo}..{hi}")
        return 0
    return k & 0x000F

# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------

def encode(op, d, a, b):
    return ((op << arch.field_op_lsb) | (d << arch.field_d_lsb) |
            (a << arch.field_a_lsb) | (b << arch.field_b_lsb))

def assemble_stmt(ma, line_number, src_line):
    txt = remove_comment(src_line).strip()
    if not txt:
        return None
    m = stmt_parser.match(txt)
    if not m:
        mk_err_msg(ma, line_number, f"invalid statement {txt!r}")
        return None
    name = m.group(1).lower()
    if name not in arch.opcode_of_mnemonic:
        mk_err_msg(ma, line_number, f"unknown mnemonic {name!r}")
        return None
    op = arch.opcode_of_mnemonic[name]
    operands = [x.strip() for x in m.group(2).split(",")] if m.group(2) else []
    ifmt = arch.operand_class[op]
    n_expected = 2 if ifmt == arch.iRR else 3
    if len(operands) != n_expected:
        mk_err_msg(ma, line_number, f"{name} expects {n_expected} operands, found {len(operands)}")
        return None

    n_errors = ma.n_asm_errors
    d = parse_reg(ma, line_number, operands[0])
    a = parse_reg(ma, line_number, operands[1])
    b = 0
    if ifmt == arch.iRRR:
        b = parse_reg(ma, line_number, operands[2])
    elif ifmt == arch.iRRI:
        b = parse_imm(ma, line_number, op, operands[2])
    if ma.n_asm_errors > n_errors:
        return None
    return encode(op, d, a, b)

def assembler(src_text):
    ma = AsmInfo(src_text)
    for i, src_line in enumerate(ma.src_lines, 1):
        w = assemble_stmt(ma, i, src_line)
        if w is None:
            continue
        ma.words.append(w)
        ma.listing.append(f"{i:4d}  {arith.word_to_hex4(w)}  {src_line.strip()}")
    common.mode.devlog(f"assembler: {len(ma.words)} words, {ma.n_asm_errors} errors")
    return ma

# ----------------------------------------------------------------------
# Disassembler
# ----------------------------------------------------------------------

def disassemble(w):
    return em.show_instr(em.decode_instruction(w))
