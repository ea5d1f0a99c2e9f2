# src/retro_chip8/arch/chip8/decoder.py
"""
CHIP-8 命令デコーダ。

16bit命令ワードから構造化フィールドを抽出する純粋関数を提供します。
全65536ワードに対して全域的であり、未定義の組み合わせはUNKNOWNとしてデコードされます。
"""
from typing import Dict, Optional, Tuple

from retro_chip8.common.errors import MemoryAccessError
from retro_chip8.core.instruction import DispatchKey, Instruction, InstructionForm
from retro_chip8.transport.memory import MemoryBank

ADDR = InstructionForm.ADDR
REG_IMM = InstructionForm.REG_IMM
REG_REG_IMM = InstructionForm.REG_REG_IMM

# @intent:constant 各ファミリー（最上位ニブル）の命令形式。
FAMILY_FORMS: Dict[int, InstructionForm] = {
    0x0: ADDR, 0x1: ADDR, 0x2: ADDR, 0xA: ADDR, 0xB: ADDR,
    0x3: REG_IMM, 0x4: REG_IMM, 0x6: REG_IMM, 0x7: REG_IMM, 0xC: REG_IMM,
    0xE: REG_IMM, 0xF: REG_IMM,
    0x5: REG_REG_IMM, 0x8: REG_REG_IMM, 0x9: REG_REG_IMM, 0xD: REG_REG_IMM,
}

# @intent:map ディスパッチキーから (ニーモニック, オペランド書式) へのマッピングテーブル。
# オペランド書式は x, y, n, nn, nnn をキーワードとして format されます。
MNEMONIC_MAP: Dict[DispatchKey, Tuple[str, str]] = {
    (0x0, 0x0E0): ("CLS", ""),
    (0x0, 0x0EE): ("RET", ""),
    (0x1, None): ("JP", "${nnn:03X}"),
    (0x2, None): ("CALL", "${nnn:03X}"),
    (0x3, None): ("SE", "V{x:X}, #${nn:02X}"),
    (0x4, None): ("SNE", "V{x:X}, #${nn:02X}"),
    (0x5, 0x0): ("SE", "V{x:X}, V{y:X}"),
    (0x6, None): ("LD", "V{x:X}, #${nn:02X}"),
    (0x7, None): ("ADD", "V{x:X}, #${nn:02X}"),
    (0x8, 0x0): ("LD", "V{x:X}, V{y:X}"),
    (0x8, 0x1): ("OR", "V{x:X}, V{y:X}"),
    (0x8, 0x2): ("AND", "V{x:X}, V{y:X}"),
    (0x8, 0x3): ("XOR", "V{x:X}, V{y:X}"),
    (0x8, 0x4): ("ADD", "V{x:X}, V{y:X}"),
    (0x8, 0x5): ("SUB", "V{x:X}, V{y:X}"),
    (0x8, 0x6): ("SHR", "V{x:X}, V{y:X}"),
    (0x8, 0x7): ("SUBN", "V{x:X}, V{y:X}"),
    (0x8, 0xE): ("SHL", "V{x:X}, V{y:X}"),
    (0x9, 0x0): ("SNE", "V{x:X}, V{y:X}"),
    (0xA, None): ("LD", "I, ${nnn:03X}"),
    (0xB, None): ("JP", "V0, ${nnn:03X}"),
    (0xC, None): ("RND", "V{x:X}, #${nn:02X}"),
    (0xD, None): ("DRW", "V{x:X}, V{y:X}, #{n:X}"),
    (0xE, 0x9E): ("SKP", "V{x:X}"),
    (0xE, 0xA1): ("SKNP", "V{x:X}"),
    (0xF, 0x07): ("LD", "V{x:X}, DT"),
    (0xF, 0x0A): ("LD", "V{x:X}, K"),
    (0xF, 0x15): ("LD", "DT, V{x:X}"),
    (0xF, 0x18): ("LD", "ST, V{x:X}"),
    (0xF, 0x1E): ("ADD", "I, V{x:X}"),
    (0xF, 0x29): ("LD", "F, V{x:X}"),
    (0xF, 0x33): ("LD", "B, V{x:X}"),
    (0xF, 0x55): ("LD", "[I], V{x:X}"),
    (0xF, 0x65): ("LD", "V{x:X}, [I]"),
}

# @intent:utility_function ファミリーごとのサブオペコード（セレクタ）を抽出します。
def selector_of(word: int) -> Optional[int]:
    """
    0x0ファミリーは下位12bit、0x5/0x8/0x9は最下位ニブル、0xE/0xFは下位バイトで命令を区別します。
    それ以外のファミリーはセレクタを持ちません。
    """
    family = (word >> 12) & 0xF
    if family == 0x0:
        return word & 0x0FFF
    if family in (0x5, 0x8, 0x9):
        return word & 0x000F
    if family in (0xE, 0xF):
        return word & 0x00FF
    return None

# @intent:responsibility メモリの2バイトからビッグエンディアンの命令ワードを組み立てます。
# @intent:pre-condition pcとpc+1がメモリ範囲外の場合、メモリを読まずにMemoryAccessErrorを送出します。
def fetch_word(memory: MemoryBank, pc: int) -> int:
    if not 0 <= pc < memory.get_size() - 1:
        raise MemoryAccessError(pc, None, pc, 2, memory.get_size())
    return (memory.read(pc) << 8) | memory.read(pc + 1)

# @intent:responsibility 命令ワードをデコードし、Instructionオブジェクトを返します。
def decode(word: int) -> Instruction:
    """
    16bit命令ワードをデコードします。副作用はありません。
    """
    word &= 0xFFFF
    family = (word >> 12) & 0xF
    key = (family, selector_of(word))
    form = FAMILY_FORMS[family]

    entry = MNEMONIC_MAP.get(key)
    if entry is None:
        return Instruction(word, form, key, "UNKNOWN", [f"${word:04X}"], implemented=False)

    mnemonic, template = entry
    if not template:
        return Instruction(word, form, key, mnemonic)
    text = template.format(
        x=(word >> 8) & 0xF, y=(word >> 4) & 0xF, n=word & 0xF,
        nn=word & 0xFF, nnn=word & 0xFFF,
    )
    return Instruction(word, form, key, mnemonic, text.split(", "))
