# tracer.py

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
# tracer.py drives the emulator over a test case file and produces the
# golden trace: one output record per instruction, in input order, for
# line by line comparison with the output of a hardware simulation.
# -------------------------------------------------------------------------

import os
import random
import time

import common
import architecture as arch
import arithmetic as arith
import emulator as em

# -------------------------------------------------------------------------
# Default parameters
# -------------------------------------------------------------------------

default_output_dir = "outputs"
default_output_file = "golden_output.txt"

def default_output_path():
    return os.path.join(default_output_dir, default_output_file)

# -------------------------------------------------------------------------
# Input records
# -------------------------------------------------------------------------

# Each input line is exactly four hex digits and a newline. A carriage
# return before the newline is tolerated. Any other line, including a
# last line without a newline, is malformed and aborts the run.

def parse_instruction_line(line, line_number):
    if not line.endswith("\n"):
        raise common.MalformedInput(line_number, line)
    body = line[:-1]
    if body.endswith("\r"):
        body = body[:-1]
    w = arith.hex4_to_word(body)
    if w is None:
        raise common.MalformedInput(line_number, line)
    return w

def read_instructions(lines):
    for i, line in enumerate(lines, 1):
        w = parse_instruction_line(line, i)
        common.mode.devlog(f"read line {i} instr={arith.word_to_hex4(w)}")
        yield i, w

# -------------------------------------------------------------------------
# Output records
# -------------------------------------------------------------------------

# instruction (4 hex digits), destination register (1 hex digit),
# written value (4 hex digits), no separators

def format_record(result):
    return result.to_record() + "\n"

# -------------------------------------------------------------------------
# Running a trace
# -------------------------------------------------------------------------

class TraceRun:
    def __init__(self, regfile, output_path=None):
        self.regfile = regfile
        self.output_path = output_path
        self.results = []
        self.start_time = None
        self.end_time = None

    @property
    def n_instructions(self):
        return len(self.results)

    @property
    def elapsed_ns(self):
        if self.start_time is None or self.end_time is None:
            return 0
        return self.end_time - self.start_time

    @property
    def elapsed_ms(self):
        return self.elapsed_ns // 1000000

    def records(self):
        return [r.to_record() for r in self.results]

def run_words(words, regfile=None):
    rf = regfile if regfile is not None else em.RegisterFile()
    return [em.execute_instruction(w, rf) for w in words]

def run_lines(lines, output_fp, regfile=None):
    run = TraceRun(regfile if regfile is not None else em.RegisterFile())
    for line_number, w in read_instructions(lines):
        result = em.execute_instruction(w, run.regfile)
        output_fp.write(format_record(result))
        run.results.append(result)
    return run

# Input files are read as ASCII. A byte outside ASCII decodes to a
# character that is not a hex digit, so it is reported as a malformed
# line instead of a decoding failure.

input_encoding = "ascii"

def open_input(input_path, errors="surrogateescape"):
    return open(input_path, "r", newline="", encoding=input_encoding, errors=errors)

def open_output(output_path):
    parent = os.path.dirname(output_path)
    if parent and not os.path.isdir(parent):
        common.mode.devlog(f"creating output directory {parent}")
        os.makedirs(parent, exist_ok=True)
    return open(output_path, "w", newline="\n")

def run_trace(input_path, output_path=None, regfile=None):
    if output_path is None:
        output_path = default_output_path()
    start_time = time.perf_counter_ns()
    with open_input(input_path) as input_fp, open_output(output_path) as output_fp:
        run = run_lines(input_fp, output_fp, regfile)
    run.start_time = start_time
    run.end_time = time.perf_counter_ns()
    run.output_path = output_path
    common.mode.devlog(f"run_trace {run.n_instructions} instructions in {run.elapsed_ns} ns")
    return run

# -------------------------------------------------------------------------
# Comparing a golden trace with a hardware trace
# -------------------------------------------------------------------------

class Mismatch:
    def __init__(self, line_number, expected, actual):
        self.line_number = line_number
        self.expected = expected
        self.actual = actual

    def __repr__(self):
        return f"Mismatch(line={self.line_number}, expected={self.expected!r}, actual={self.actual!r})"

    def show(self):
        exp = self.expected if self.expected is not None else "(missing)"
        act = self.actual if self.actual is not None else "(missing)"
        return f"line {self.line_number}: expected {exp} got {act}"

def normalize_record(line):
    return line.rstrip().lower()

# A missing line on either side is reported with None in its place

def compare_traces(golden_lines, hardware_lines):
    golden = [normalize_record(x) for x in golden_lines]
    hardware = [normalize_record(x) for x in hardware_lines]
    mismatches = []
    for i in range(max(len(golden), len(hardware))):
        expected = golden[i] if i < len(golden) else None
        actual = hardware[i] if i < len(hardware) else None
        if expected != actual:
            mismatches.append(Mismatch(i + 1, expected, actual))
    common.mode.devlog(f"compare_traces {len(golden)} golden {len(hardware)} hardware"
                       f" {len(mismatches)} mismatches")
    return mismatches

def compare_trace_files(golden_path, hardware_path):
    with open_input(golden_path) as f:
        golden_lines = f.read().splitlines()
    with open_input(hardware_path) as f:
        hardware_lines = f.read().splitlines()
    return compare_traces(golden_lines, hardware_lines)

# -------------------------------------------------------------------------
# Generating test cases
# -------------------------------------------------------------------------

# Random instruction words for stimulus. If opcodes is given only those
# opcodes are generated; the register and b fields are always random.

def generate_test_case(n, seed=None, opcodes=None):
    rng = random.Random(seed)
    ops = list(opcodes) if opcodes is not None else list(range(len(arch.mnemonic)))
    words = []
    for _ in range(n):
        op = rng.choice(ops)
        w = (op << arch.field_op_lsb) | rng.randint(0, 0x0FFF)
        words.append(w)
    return words

def write_test_case(path, words):
    with open_output(path) as f:
        for w in words:
            f.write(arith.word_to_hex4(w) + "\n")
