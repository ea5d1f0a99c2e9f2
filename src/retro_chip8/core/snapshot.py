# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のマシン状態とメモリアクセスを記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.common.errors import ExecutionError
from retro_chip8.core.instruction import Instruction
from retro_chip8.core.state import CpuState
from retro_chip8.transport.memory import MemoryAccess

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計命令数、命令アドレス、トレース文字列など）を記録するデータクラス。
    """
    cycle_count: int
    pc: int = 0 # 命令のフェッチ元アドレス
    symbol_info: Optional[str] = None # 例: "0x200: LD VA, #$02"

# @intent:responsibility ある一時点におけるマシンとメモリの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、マシン状態とメモリアクセスを記録した不変のデータ構造。
    instructionがNoneの場合、そのステップでは命令をフェッチしていません（キー入力待ちなど）。
    """
    state: CpuState
    instruction: Optional[Instruction]
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)
    diagnostics: List[ExecutionError] = field(default_factory=list)

    # @intent:rationale stateは生成時にコピーを受け取るため、後続の実行で変化しない。
