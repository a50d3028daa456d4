import pytest
import arithmetic as arith

@pytest.mark.parametrize("v", range(16))
def test_sign_extend4(v):
    w = arith.sign_extend4(v)
    if v < 8:
        assert w == v
    else:
        assert w == v | 0xFFF0
        assert arith.word_to_int(w) == v - 16

def test_sign_extend4_ignores_upper_bits():
    assert arith.sign_extend4(0x1237) == 0x0007
    assert arith.sign_extend4(0xFFF9) == 0xFFF9

def test_word_int_conversion():
    assert arith.word_to_int(0x7FFF) == 32767
    assert arith.word_to_int(0x8000) == -32768
    assert arith.word_to_int(0xFFFF) == -1
    assert arith.int_to_word(-1) == 0xFFFF
    assert arith.int_to_word(-32768) == 0x8000
    assert arith.int_to_word(65536 + 5) == 5

def test_hex_notation():
    assert arith.word_to_hex4(0xBEEF) == "beef"
    assert arith.word_to_hex4(0x0001) == "0001"
    assert arith.word_to_hex1(0xA) == "a"
    assert arith.hex4_to_word("9F01") == 0x9F01
    assert arith.hex4_to_word("9f01") == 0x9F01
    assert arith.hex4_to_word("9f0") is None
    assert arith.hex4_to_word("9f0g") is None
    assert arith.hex4_to_word("0x12") is None

def test_split_word():
    assert arith.split_word(0x1234) == [1, 2, 3, 4]

def test_add_sub_wrap():
    assert arith.op_add(0x7FFF, 0x0001) == 0x8000
    assert arith.op_add(0xFFFF, 0x0001) == 0x0000
    assert arith.op_sub(0x0000, 0x0001) == 0xFFFF
    assert arith.op_sub(0x8000, 0x0001) == 0x7FFF

def test_logic():
    assert arith.op_and(0xF0F0, 0xFF00) == 0xF000
    assert arith.op_or(0xF0F0, 0x0F00) == 0xFFF0
    assert arith.op_xor(0xF0F0, 0xFFFF) == 0x0F0F
    assert arith.op_mov(0x1234) == 0x1234

@pytest.mark.parametrize("k", [0x0000, 0x0010, 0x00F0, 0xFFF0, 0x8000])
def test_shift_amount_masked(k):
    for low in range(16):
        assert arith.op_sll(0x0001, k | low) == (1 << low) & 0xFFFF
        assert arith.op_srl(0x8000, k | low) == 0x8000 >> low
        assert arith.op_sra(0x8000, k | low) == (-32768 >> low) & 0xFFFF

def test_shift_by_zero_is_identity():
    assert arith.op_sll(0xABCD, 0) == 0xABCD
    assert arith.op_srl(0xABCD, 0) == 0xABCD
    assert arith.op_sra(0xABCD, 0) == 0xABCD

def test_shift_left_drops_high_bits():
    assert arith.op_sll(0xFFFF, 15) == 0x8000
    assert arith.op_sll(0x00FF, 12) == 0xF000
