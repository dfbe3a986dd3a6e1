"""Decoder: totality, field extraction and mnemonic rendering."""

import pytest

from catchip8.instruction import Instruction, Op, decode


class TestDecodeTotality:
    def test_every_word_decodes(self):
        for opcode in range(0x10000):
            instr = decode(opcode)
            assert isinstance(instr, Instruction)
            assert isinstance(instr.op, Op)
            assert instr.opcode == opcode

    def test_every_variant_reachable(self):
        seen = {decode(opcode).op for opcode in range(0x10000)}
        assert seen == set(Op)

    @pytest.mark.parametrize("opcode", [-1, 0x10000])
    def test_out_of_range_rejected(self, opcode):
        with pytest.raises(ValueError):
            decode(opcode)


class TestDecodeVariants:
    @pytest.mark.parametrize("opcode, op", [
        (0x0123, Op.SYS), (0x00E0, Op.CLS), (0x00EE, Op.RET),
        (0x1ABC, Op.JMP), (0x2ABC, Op.CALL), (0x3A12, Op.SKEB),
        (0x4A12, Op.SKNEB), (0x5AB0, Op.SKE), (0x6A12, Op.LDB),
        (0x7A12, Op.ADDB), (0x8AB0, Op.LD), (0x8AB1, Op.OR),
        (0x8AB2, Op.AND), (0x8AB3, Op.XOR), (0x8AB4, Op.ADD),
        (0x8AB5, Op.SUB), (0x8AB6, Op.SHR), (0x8AB7, Op.SUBR),
        (0x8ABE, Op.SHL), (0x9AB0, Op.SKNE), (0xAABC, Op.LDI),
        (0xBABC, Op.JMPZ), (0xCA12, Op.RND), (0xDAB5, Op.DRAW),
        (0xEA9E, Op.SKP), (0xEAA1, Op.SKNP), (0xFA07, Op.LDFT),
        (0xFA0A, Op.LDK), (0xFA15, Op.LDDT), (0xFA18, Op.LDST),
        (0xFA1E, Op.ADDI), (0xFA29, Op.FONT), (0xFA33, Op.BCD),
        (0xFA55, Op.SREG), (0xFA65, Op.LREG),
    ])
    def test_known_opcodes(self, opcode, op):
        assert decode(opcode).op is op

    @pytest.mark.parametrize("opcode", [
        0x5121, 0x512F, 0x9AB1, 0x8AB8, 0x8ABF, 0xE000, 0xEA9F, 0xF000, 0xF0FF,
    ])
    def test_malformed_sub_opcodes_are_unrecognized(self, opcode):
        assert decode(opcode).op is Op.ERR


class TestFields:
    def test_register_and_nibble_fields(self):
        instr = decode(0xD123)
        assert (instr.x, instr.y, instr.n) == (1, 2, 3)

    def test_byte_and_address_fields(self):
        instr = decode(0xA2F0)
        assert instr.nnn == 0x2F0
        assert instr.nn == 0xF0


class TestFormatting:
    @pytest.mark.parametrize("opcode, text", [
        (0x00E0, "CLS  "),
        (0x00EE, "RET  "),
        (0x0123, "SYS   0x123"),
        (0x1228, "JMP   0x228"),
        (0x6A2B, "LDB   VA, 0x2B"),
        (0x8124, "ADD   V1, V2"),
        (0xD015, "DRAW  V0, V1, 0x5"),
        (0xFE29, "FONT  VE"),
        (0x5121, "ERR   0x5121"),
    ])
    def test_str(self, opcode, text):
        assert str(decode(opcode)) == text
