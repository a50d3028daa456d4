# common.py

# Copyright (c) 2025 The golden16 authors. License: GNU GPL Version 3

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

# ----------------------------------------------------------------------
# common.py
# ----------------------------------------------------------------------

import sys

def stacktrace():
    import traceback
    traceback.print_stack()

class Mode:
    def __init__(self):
        self.trace = False
        self.show_err = True

    def set_trace(self):
        self.trace = True

    def clear_trace(self):
        self.trace = False

    def devlog(self, xs):
        if self.trace:
            print(xs)

    def errlog(self, xs):
        if self.show_err:
            print(xs, file=sys.stderr)

mode = Mode()

# ----------------------------------------------------------------------
# Logging error message
# ----------------------------------------------------------------------

def indicate_error(xs):
    print(f"\033[91m\033[1m{xs}\033[0m", file=sys.stderr) # red and bold
    if mode.trace:
        stacktrace()

# ----------------------------------------------------------------------
# Fatal errors
# ----------------------------------------------------------------------

# Both error kinds abort the whole run. The core and the trace driver
# raise them; only the command line tool catches and reports.

class GoldenModelError(Exception):
    pass

class MalformedInput(GoldenModelError):
    def __init__(self, line_number, line):
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"line {line_number}: encountered {len(line)}-character line {line!r}"
            f" when each line should be 4 hex digits and a newline")

class UnknownOpcode(GoldenModelError):
    def __init__(self, opcode, instr):
        self.opcode = opcode
        self.instr = instr
        super().__init__(f"encountered unknown opcode {opcode:x} in instruction {instr:04x}")
