# main.py

import sys
import os
import argparse
from pathlib import Path

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).resolve().parent))

import common
import arithmetic as arith
import assembler
import emulator as em
import tracer


def run_file(file_path, output_path=None, dump_regs=False, verbose=False):
    if verbose:
        common.mode.set_trace()
    run = tracer.run_trace(file_path, output_path)

    print(f"Golden model finished. Output in {run.output_path}")
    print(f"Ran for {run.elapsed_ms} ms")

    if verbose:
        em.dump_modified_registers_summary(run.regfile)
    if dump_regs:
        em.dump_registers(run.regfile)
    return 0

def compare_files(golden_path, hardware_path):
    mismatches = tracer.compare_trace_files(golden_path, hardware_path)
    if not mismatches:
        print("Traces match.")
        return 0
    print(f"{len(mismatches)} mismatching line(s):")
    for m in mismatches:
        print(f"  {m.show()}")
    return 1

def generate_file(output_path, n, seed):
    words = tracer.generate_test_case(n, seed)
    tracer.write_test_case(output_path, words)
    print(f"Wrote {len(words)} instructions to {output_path}")
    return 0

def assemble_file(file_path, output_path=None):
    with tracer.open_input(file_path, errors="replace") as f:
        src_text = f.read()

    asm_info = assembler.assembler(src_text)
    if asm_info.n_asm_errors > 0:
        print(f"Assembly completed with {asm_info.n_asm_errors} errors.")
        print("--- Assembly Errors ---")
        for line in asm_info.errors:
            print(line)
        print("-----------------------")
        return 1

    if output_path is None:
        base_name = os.path.basename(file_path).split('.')[0]
        output_path = os.path.join(os.path.dirname(file_path), base_name + ".hex.txt")
    with tracer.open_output(output_path) as f:
        f.write(asm_info.object_text())
    print("Assembly successful!")
    for line in asm_info.listing:
        print(line)
    print(f"Output in {output_path}")
    return 0

def disassemble_file(file_path):
    with tracer.open_input(file_path) as f:
        for i, w in tracer.read_instructions(f):
            print(f"{i:4d}  {arith.word_to_hex4(w)}  {assembler.disassemble(w)}")
    return 0

def main(argv=None):
    parser = argparse.ArgumentParser(description="golden16 reference model: produces the golden execution trace of a test case")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Execute a test case file and write the golden trace")
    run_parser.add_argument("file", help="Path to the test case file (one 4-digit hex instruction per line)")
    run_parser.add_argument("-o", "--output", default=None,
                            help=f"Output trace file (default {tracer.default_output_path()})")
    run_parser.add_argument("--reg-dump", action="store_true", help="Dump registers after execution")
    run_parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare a golden trace with a hardware trace")
    compare_parser.add_argument("golden", help="Path to the golden trace")
    compare_parser.add_argument("hardware", help="Path to the hardware simulation trace")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Write a random test case file")
    generate_parser.add_argument("output", help="Path to the test case file to write")
    generate_parser.add_argument("-n", type=int, default=1000, help="Number of instructions")
    generate_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Assemble command
    assemble_parser = subparsers.add_parser("assemble", help="Assemble a source file into a test case file")
    assemble_parser.add_argument("file", help="Path to the assembly file")
    assemble_parser.add_argument("-o", "--output", default=None, help="Test case file to write")

    # Disassemble command
    disassemble_parser = subparsers.add_parser("disassemble", help="List a test case file in assembly language")
    disassemble_parser.add_argument("file", help="Path to the test case file")

    # GUI command
    gui_parser = subparsers.add_parser("gui", help="Step through a test case in the GUI")
    gui_parser.add_argument("file", nargs="?", default=None, help="Test case file to load")

    args = parser.parse_args(argv)

    try:
        if args.command == "run":
            status = run_file(args.file, args.output, args.reg_dump, args.verbose)
        elif args.command == "compare":
            status = compare_files(args.golden, args.hardware)
        elif args.command == "generate":
            status = generate_file(args.output, args.n, args.seed)
        elif args.command == "assemble":
            status = assemble_file(args.file, args.output)
        elif args.command == "disassemble":
            status = disassemble_file(args.file)
        elif args.command == "gui":
            import gui
            status = gui.start_gui(args.file)
        else:
            parser.print_help()
            status = 0
    except common.GoldenModelError as e:
        common.indicate_error(f"Error: {e}")
        status = 1
    except OSError as e:
        common.mode.errlog(f"Error: {e}")
        status = 1
    finally:
        common.mode.clear_trace()
    return status

if __name__ == "__main__":
    sys.exit(main())
