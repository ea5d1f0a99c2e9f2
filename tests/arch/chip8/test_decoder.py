# tests/arch/chip8/test_decoder.py
"""
retro_chip8.arch.chip8.decoderモジュールの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.decoder import decode, fetch_word, selector_of
from retro_chip8.core.instruction import InstructionForm
from retro_chip8.transport.memory import MemoryBank

class TestFieldExtraction:
    def test_addr_form(self):
        ins = decode(0x1ABC)
        assert ins.form == InstructionForm.ADDR
        assert ins.family == 0x1
        assert ins.nnn == 0xABC

    def test_reg_imm_form(self):
        ins = decode(0x6A02)
        assert ins.form == InstructionForm.REG_IMM
        assert ins.x == 0xA
        assert ins.nn == 0x02

    def test_reg_reg_imm_form(self):
        ins = decode(0xD12F)
        assert ins.form == InstructionForm.REG_REG_IMM
        assert (ins.x, ins.y, ins.n) == (0x1, 0x2, 0xF)

    def test_fetch_word_is_big_endian(self):
        memory = MemoryBank()
        memory.load(0x200, b"\x6A\x02")
        assert fetch_word(memory, 0x200) == 0x6A02

    @pytest.mark.parametrize("word, selector", [
        (0x00E0, 0x0E0), (0x8124, 0x4), (0x5120, 0x0), (0xE19E, 0x9E), (0xF255, 0x55), (0x1234, None),
    ])
    def test_selector(self, word, selector):
        assert selector_of(word) == selector

class TestMnemonics:
    @pytest.mark.parametrize("word, text", [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x1200, "JP $200"),
        (0x2ABC, "CALL $ABC"),
        (0x6A02, "LD VA, #$02"),
        (0x8124, "ADD V1, V2"),
        (0x812E, "SHL V1, V2"),
        (0xA050, "LD I, $050"),
        (0xB300, "JP V0, $300"),
        (0xD015, "DRW V0, V1, #5"),
        (0xE3A1, "SKNP V3"),
        (0xF00A, "LD V0, K"),
        (0xF555, "LD [I], V5"),
        (0xF565, "LD V5, [I]"),
    ])
    def test_known(self, word, text):
        ins = decode(word)
        assert ins.implemented
        assert str(ins) == text

    @pytest.mark.parametrize("word", [0x0000, 0x0123, 0x5121, 0x8128, 0x9AB1, 0xE100, 0xF0FF])
    def test_unknown(self, word):
        ins = decode(word)
        assert not ins.implemented
        assert ins.mnemonic == "UNKNOWN"

    # @intent:test_case_total デコーダが全65536ワードで例外を送出しないことを検証します。
    def test_total_over_all_words(self):
        implemented = sum(1 for word in range(0x10000) if decode(word).implemented)
        assert implemented > 0
