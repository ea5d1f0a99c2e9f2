# retro_chip8/core/instruction.py
"""
デコード済み命令の不変データ構造。

16bit命令ワードを3つの構造化ビュー（addr形式、reg-imm形式、reg-reg-imm形式）として
扱うためのフィールド抽出を、算術的なマスク/シフトで提供します。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

# @intent:responsibility 命令ワードの構造化ビューの種別を定義します。
class InstructionForm(Enum):
    ADDR = "ADDR"                # family(4) + nnn(12)
    REG_IMM = "REG_IMM"          # family(4) + x(4) + nn(8)
    REG_REG_IMM = "REG_REG_IMM"  # family(4) + x(4) + y(4) + n(4)

# @intent:data_structure 命令ディスパッチテーブルのキー。(family, selector)。
DispatchKey = Tuple[int, Optional[int]]

# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Instruction:
    """
    デコードされた命令（命令ワード、形式、ニーモニック、オペランド）を記録するデータクラス。
    各フィールドはワードから都度算出されるため、ホストのバイト順やメモリレイアウトに依存しません。
    """
    word: int # 例: 0x6A02
    form: InstructionForm
    key: DispatchKey
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "#$02"]
    implemented: bool = True
    length: int = 2 # 命令のバイト長（CHIP-8では常に2）

    @property
    def opcode_hex(self) -> str:
        return f"{self.word:04X}"

    @property
    def family(self) -> int:
        return (self.word >> 12) & 0xF

    @property
    def nnn(self) -> int:
        return self.word & 0x0FFF

    @property
    def nn(self) -> int:
        return self.word & 0x00FF

    @property
    def x(self) -> int:
        return (self.word >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.word >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.word & 0x000F

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic
