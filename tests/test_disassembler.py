from catchip8.disassembler import disassemble, iter_instructions
from catchip8.instruction import Op


def test_listing_is_address_ordered_from_origin():
    rom = bytes([0x00, 0xE0, 0x12, 0x00, 0x6A, 0x2B])
    assert disassemble(rom) == [
        "0x0200: CLS  ",
        "0x0202: JMP   0x200",
        "0x0204: LDB   VA, 0x2B",
    ]


def test_trailing_odd_byte_is_padded():
    addr, instr = list(iter_instructions(bytes([0x00, 0xEE, 0xAB])))[-1]
    assert addr == 0x202
    assert instr.opcode == 0xAB00
    assert instr.op is Op.LDI


def test_unrecognized_words_are_listed():
    assert disassemble(bytes([0x51, 0x21])) == ["0x0200: ERR   0x5121"]


def test_custom_origin():
    assert disassemble(bytes([0x00, 0xE0]), origin=0x300) == ["0x0300: CLS  "]
