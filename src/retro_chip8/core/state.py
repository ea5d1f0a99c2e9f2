# retro_chip8/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CPUの基本的な状態（PC、SP、実行状態）を保持するデータ構造を定義します。
"""
import copy
from dataclasses import dataclass
from enum import Enum

# @intent:responsibility エミュレータの実行状態を定義します。QUITは終端状態です。
class RunState(Enum):
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    QUIT = "QUIT"

# @intent:responsibility CPUのレジスタ状態を保持します。アーキテクチャ固有のレジスタはこれを拡張します。
@dataclass
class CpuState:
    """
    CPUのレジスタ状態を保持するデータクラス。
    これは抽象的な基底状態であり、CHIP-8固有の状態はChip8CpuStateで拡張されます。
    """
    pc: int = 0x0000  # Program Counter
    sp: int = 0x0000  # Stack Pointer
    run_state: RunState = RunState.QUIT
    # @intent:rationale ロード完了前は実行不可とするため、初期の実行状態はQUITとする。
    #                  ローダーがROM配置に成功した時点でRUNNINGへ遷移する。

    # @intent:responsibility Snapshot用に状態の独立したコピーを生成します。
    def copy(self) -> "CpuState":
        return copy.deepcopy(self)
