# emulator.py

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

# -------------------------------------------------------------------------
# emulator.py defines the machine language semantics: the register
# file, instruction decode, opcode dispatch, and write-back. There is
# no pipeline, memory or timing; each instruction is evaluated on its
# own against the register file left by the previous one.
# -------------------------------------------------------------------------

import common
import architecture as arch
import arithmetic as arith

# ------------------------------------------------------------------------
# Register file
# ------------------------------------------------------------------------

# The register file holds 16 words. R0 always contains 0: a write to it
# is discarded. Registers hold valid words (0 <= x < 2^16); use get_int
# for the two's complement view.

# The caller owns the register file and passes the same instance to
# every execute_instruction call of a run.

class RegisterFile:
    def __init__(self):
        self.regs = [0] * arch.n_registers
        self.reg_fetched = []
        self.reg_stored = []
        self.modified = set()

    def get(self, i):
        x = self.regs[i]
        self.reg_fetched.append((i, x))
        return x

    def get_int(self, i):
        return arith.word_to_int(self.regs[i])

    def put(self, i, x):
        if i == arch.zero_register:
            common.mode.devlog(f"put R0 {arith.word_to_hex4(x)} discarded")
            return
        x = arith.limit16(x)
        self.reg_stored.append((i, x))
        self.modified.add(i)
        self.regs[i] = x

    def clear_logging(self):
        self.reg_fetched = []
        self.reg_stored = []

    def reset(self):
        common.mode.devlog("Resetting registers")
        self.regs = [0] * arch.n_registers
        self.modified = set()
        self.clear_logging()

    def snapshot(self):
        return list(self.regs)

    def __len__(self):
        return len(self.regs)

    def __repr__(self):
        return "RegisterFile(" + " ".join(arith.word_to_hex4(x) for x in self.regs) + ")"

# -------------------------------------------------------------------------
# Decode instruction
# -------------------------------------------------------------------------

class DecodedInstruction:
    def __init__(self, instr):
        self.instr = instr
        self.opcode = arch.get_field_le(instr, arch.field_op_lsb, arch.field_size)
        self.dest_reg = arch.get_field_le(instr, arch.field_d_lsb, arch.field_size)
        self.src1_reg = arch.get_field_le(instr, arch.field_a_lsb, arch.field_size)
        self.src2_reg = arch.get_field_le(instr, arch.field_b_lsb, arch.field_size)
        self.src2_imm = arith.sign_extend4(self.src2_reg)

    @property
    def mnemonic(self):
        return arch.mnemonic[self.opcode] if self.opcode < len(arch.mnemonic) else "?"

    @property
    def operand_class(self):
        return arch.operand_class[self.opcode] if self.opcode < len(arch.operand_class) else None

    def __repr__(self):
        return (f"DecodedInstruction(instr={arith.word_to_hex4(self.instr)} op={self.opcode:x}"
                f" d={self.dest_reg:x} a={self.src1_reg:x} b={self.src2_reg:x}"
                f" imm={arith.word_to_hex4(self.src2_imm)})")

def decode_instruction(instr):
    d = DecodedInstruction(arith.limit16(instr))
    common.mode.devlog(f"decode {d}")
    return d

# Text of an instruction in assembly language notation. Shift amounts
# are shown unsigned, other immediates as two's complement integers.

def show_instr(d):
    op = d.mnemonic
    if d.operand_class == arch.iRR:
        return f"{op} R{d.dest_reg},R{d.src1_reg}"
    elif d.operand_class == arch.iRRR:
        return f"{op} R{d.dest_reg},R{d.src1_reg},R{d.src2_reg}"
    elif d.operand_class == arch.iRRI:
        k = arith.shift_amount(d.src2_imm) if arch.is_shift(d.opcode) \
            else arith.word_to_int(d.src2_imm)
        return f"{op} R{d.dest_reg},R{d.src1_reg},{k}"
    return f"? {arith.word_to_hex4(d.instr)}"

# -------------------------------------------------------------------------
# Execution result
# -------------------------------------------------------------------------

# The result of one instruction, handed to the trace driver. The written
# value is 0 whenever the destination is R0, even though the computed
# dest_value may be something else.

class ExecResult:
    def __init__(self, decoded, dest_value, written_value):
        self.decoded = decoded
        self.instr = decoded.instr
        self.dest_reg = decoded.dest_reg
        self.dest_value = dest_value
        self.written_value = written_value

    def to_record(self):
        return (arith.word_to_hex4(self.instr) +
                arith.word_to_hex1(self.dest_reg) +
                arith.word_to_hex4(self.written_value))

    def __eq__(self, other):
        if not isinstance(other, ExecResult):
            return NotImplemented
        return (self.instr, self.dest_reg, self.written_value) == \
               (other.instr, other.dest_reg, other.written_value)

    def __hash__(self):
        return hash((self.instr, self.dest_reg, self.written_value))

    def __repr__(self):
        return f"ExecResult({self.to_record()} {show_instr(self.decoded)})"

# -------------------------------------------------------------------------
# Instruction pattern functions
# -------------------------------------------------------------------------

# Each pattern fetches the operands an instruction class needs and
# applies the operation, returning the computed destination value.

def rd(f):
    def inner(rf, d):
        a = rf.get(d.src1_reg)
        return f(a)
    return inner

def rrd(f):
    def inner(rf, d):
        a = rf.get(d.src1_reg)
        b = rf.get(d.src2_reg)
        return f(a, b)
    return inner

def rid(f):
    def inner(rf, d):
        a = rf.get(d.src1_reg)
        return f(a, d.src2_imm)
    return inner

dispatch_primary_opcode = [
    rd(arith.op_mov),    # 0 mov
    rrd(arith.op_add),   # 1 add
    rrd(arith.op_sub),   # 2 sub
    rrd(arith.op_and),   # 3 and
    rrd(arith.op_or),    # 4 or
    rrd(arith.op_xor),   # 5 xor
    rrd(arith.op_sll),   # 6 sll
    rrd(arith.op_srl),   # 7 srl
    rrd(arith.op_sra),   # 8 sra
    rid(arith.op_add),   # 9 addi
    rid(arith.op_and),   # a andi
    rid(arith.op_or),    # b ori
    rid(arith.op_xor),   # c xori
    rid(arith.op_sll),   # d slli
    rid(arith.op_srl),   # e srli
    rid(arith.op_sra)    # f srai
]

# -------------------------------------------------------------------------
# Machine language semantics
# -------------------------------------------------------------------------

def write_back(rf, dest_reg, dest_value):
    if dest_reg == arch.zero_register:
        return 0
    rf.put(dest_reg, dest_value)
    return dest_value

def execute_instruction(instr, rf):
    rf.clear_logging()
    d = decode_instruction(instr)
    handler = None
    if d.opcode < len(dispatch_primary_opcode):
        handler = dispatch_primary_opcode[d.opcode]
    if handler is None:
        raise common.UnknownOpcode(d.opcode, d.instr)
    common.mode.devlog(f"ExInstr dispatch primary opcode {d.opcode} {d.mnemonic}")
    dest_value = arith.assert16(handler(rf, d))
    written_value = write_back(rf, d.dest_reg, dest_value)
    result = ExecResult(d, dest_value, written_value)
    common.mode.devlog(f"ExInstr {show_instr(d)} -> {result.to_record()}")
    return result

# -------------------------------------------------------------------------
# Debugging/Output functions
# -------------------------------------------------------------------------

def dump_registers(rf):
    print("\n--- Registers ---")
    for i in range(len(rf)):
        x = rf.regs[i]
        print(f"R{i}: {arith.word_to_hex4(x)} ({arith.word_to_int(x)})")
    print("-----------------")

def dump_modified_registers_summary(rf):
    if not rf.modified:
        print("\n--- No Registers Modified ---")
        return

    print("\n--- Modified Registers Summary ---")
    for i in sorted(rf.modified):
        x = rf.regs[i]
        print(f"R{i}: {arith.word_to_hex4(x)} ({arith.word_to_int(x)})")
    print("--------------------------------")
