import pytest
import common
import architecture as arch
import arithmetic as arith
import emulator as em

def run(words, rf=None):
    rf = rf if rf is not None else em.RegisterFile()
    return [em.execute_instruction(w, rf) for w in words], rf

def test_register_file_init():
    rf = em.RegisterFile()
    assert rf is not None
    assert len(rf) == 16
    assert rf.snapshot() == [0] * 16

def test_r0_is_read_only():
    rf = em.RegisterFile()
    rf.put(0, 0x1234)
    assert rf.get(0) == 0
    assert rf.reg_stored == []

def test_put_truncates_and_accepts_negative():
    rf = em.RegisterFile()
    rf.put(1, -1)
    rf.put(2, 0x12345)
    assert rf.get(1) == 0xFFFF
    assert rf.get_int(1) == -1
    assert rf.get(2) == 0x2345

def test_decode_fields():
    d = em.decode_instruction(0x1234)
    assert (d.opcode, d.dest_reg, d.src1_reg, d.src2_reg) == (1, 2, 3, 4)
    assert d.src2_imm == 4
    assert d.mnemonic == "add"
    assert d.operand_class == arch.iRRR

def test_decode_sign_extends_immediate():
    d = em.decode_instruction(0x912f)
    assert d.src2_reg == 0xf
    assert d.src2_imm == 0xFFFF
    assert em.decode_instruction(0x9128).src2_imm == 0xFFF8
    assert em.decode_instruction(0x9127).src2_imm == 0x0007

def test_add_example_record():
    rf = em.RegisterFile()
    rf.put(3, 5)
    rf.put(4, 3)
    r = em.execute_instruction(0x1234, rf)
    assert r.to_record() == "123420008"
    assert rf.get(2) == 8

def test_addi_examples():
    results, rf = run([0x9100, 0x9110])
    assert [r.to_record() for r in results] == ["910010000", "911010000"]
    results, rf = run([0x9F01])
    assert results[0].to_record() == "9f01f0001"
    assert rf.get(15) == 1

def test_every_opcode():
    rf = em.RegisterFile()
    rf.put(2, 0x00F0)
    rf.put(3, 0x0F13)
    cases = [
        (0x0120, 0x00F0),   # mov  R1,R2
        (0x1123, 0x1003),   # add  R1,R2,R3
        (0x2123, 0xF1DD),   # sub  R1,R2,R3
        (0x3123, 0x0010),   # and  R1,R2,R3
        (0x4123, 0x0FF3),   # or   R1,R2,R3
        (0x5123, 0x0FE3),   # xor  R1,R2,R3
        (0x6123, 0x0780),   # sll  R1,R2,R3  shift 3
        (0x7123, 0x001E),   # srl  R1,R2,R3  shift 3
        (0x8123, 0x001E),   # sra  R1,R2,R3  shift 3
        (0x912f, 0x00EF),   # addi R1,R2,-1
        (0xa12c, 0x00F0),   # andi R1,R2,-4
        (0xb125, 0x00F5),   # ori  R1,R2,5
        (0xc12f, 0xFF0F),   # xori R1,R2,-1
        (0xd124, 0x0F00),   # slli R1,R2,4
        (0xe124, 0x000F),   # srli R1,R2,4
        (0xf124, 0x000F),   # srai R1,R2,4
    ]
    for instr, expect in cases:
        r = em.execute_instruction(instr, rf)
        assert r.dest_value == expect, em.show_instr(r.decoded)
        assert rf.get(1) == expect

def test_shift_amount_masked_to_low_four_bits():
    rf = em.RegisterFile()
    rf.put(2, 0x8001)
    for high in [0x0000, 0x0010, 0xFFF0, 0x1230]:
        rf.put(3, high | 0x0001)
        assert em.execute_instruction(0x6123, rf).dest_value == 0x0002
        assert em.execute_instruction(0x7123, rf).dest_value == 0x4000
        assert em.execute_instruction(0x8123, rf).dest_value == 0xC000

def test_logical_and_arithmetic_right_shift_differ():
    rf = em.RegisterFile()
    rf.put(2, 0x8000)
    assert em.execute_instruction(0xe12f, rf).dest_value == 0x0001
    assert em.execute_instruction(0xf12f, rf).dest_value == 0xFFFF
    rf.put(2, 0x4000)
    assert em.execute_instruction(0xf12f, rf).dest_value == 0x0000

def test_immediate_shift_uses_field_as_amount():
    rf = em.RegisterFile()
    rf.put(2, 1)
    # field 8 sign extends to fff8, masked back to 8
    assert em.execute_instruction(0xd128, rf).dest_value == 0x0100

def test_add_overflow_wraps():
    rf = em.RegisterFile()
    rf.put(2, 0x7FFF)
    rf.put(3, 0x0001)
    r = em.execute_instruction(0x1123, rf)
    assert r.dest_value == 0x8000
    assert rf.get_int(1) == -32768

def test_sub_underflow_wraps():
    rf = em.RegisterFile()
    rf.put(3, 1)
    assert em.execute_instruction(0x2103, rf).dest_value == 0xFFFF

def test_dest_r0_reports_zero_and_leaves_registers():
    rf = em.RegisterFile()
    rf.put(2, 7)
    rf.put(3, 9)
    before = rf.snapshot()
    r = em.execute_instruction(0x1023, rf)
    assert r.dest_value == 16
    assert r.written_value == 0
    assert r.to_record() == "102300000"
    assert rf.snapshot() == before

@pytest.mark.parametrize("op", range(16))
def test_every_opcode_to_r0_is_discarded(op):
    rf = em.RegisterFile()
    rf.put(2, 0x8007)
    rf.put(3, 0x0003)
    before = rf.snapshot()
    w = (op << arch.field_op_lsb) | 0x023
    r = em.execute_instruction(w, rf)
    assert r.dest_reg == 0
    assert r.written_value == 0
    assert r.to_record() == arith.word_to_hex4(w) + "00000"
    assert rf.snapshot() == before
    assert rf.reg_stored == []
    assert 0 not in rf.modified

def test_exec_results_hash_like_their_records():
    a = em.execute_instruction(0x9F01, em.RegisterFile())
    b = em.execute_instruction(0x9F01, em.RegisterFile())
    c = em.execute_instruction(0x9F02, em.RegisterFile())
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b, c}) == 2
    assert {a: "first"}[b] == "first"

def test_sequential_dependency():
    results, rf = run([0x9103, 0x1211, 0x0320])
    assert rf.get(1) == 3
    assert rf.get(2) == 6
    assert rf.get(3) == 6
    assert results[2].to_record() == "032030006"

def test_mov_idempotent():
    rf = em.RegisterFile()
    rf.put(2, 0xBEEF)
    first = em.execute_instruction(0x0120, rf)
    second = em.execute_instruction(0x0120, rf)
    assert first == second
    assert rf.get(1) == 0xBEEF

def test_unknown_opcode_is_fatal(monkeypatch):
    table = list(em.dispatch_primary_opcode)
    table[3] = None
    monkeypatch.setattr(em, "dispatch_primary_opcode", table)
    rf = em.RegisterFile()
    rf.put(2, 1)
    before = rf.snapshot()
    with pytest.raises(common.UnknownOpcode) as e:
        em.execute_instruction(0x3122, rf)
    assert e.value.opcode == 3
    assert e.value.instr == 0x3122
    assert rf.snapshot() == before

def test_show_instr():
    assert em.show_instr(em.decode_instruction(0x0120)) == "mov R1,R2"
    assert em.show_instr(em.decode_instruction(0x1234)) == "add R2,R3,R4"
    assert em.show_instr(em.decode_instruction(0x910d)) == "addi R1,R0,-3"
    assert em.show_instr(em.decode_instruction(0xd12f)) == "slli R1,R2,15"

def test_register_access_logging():
    rf = em.RegisterFile()
    em.execute_instruction(0x9F01, rf)
    assert rf.reg_fetched == [(0, 0)]
    assert rf.reg_stored == [(15, 1)]
    em.execute_instruction(0x0000, rf)
    assert rf.reg_stored == []
    assert rf.modified == {15}

def test_dump_registers(capsys):
    rf = em.RegisterFile()
    rf.put(4, 0xFFFE)
    em.dump_registers(rf)
    em.dump_modified_registers_summary(rf)
    out = capsys.readouterr().out
    assert "R4: fffe (-2)" in out
    assert "Modified Registers Summary" in out

def test_devlog_when_tracing(capsys):
    common.mode.set_trace()
    try:
        em.execute_instruction(0x9F01, em.RegisterFile())
    finally:
        common.mode.clear_trace()
    assert "addi R15,R0,1" in capsys.readouterr().out
