# retro_chip8/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を1命令ずつ仲介し、ユーザーが指定した条件（ブレークポイント）に
一致したかどうかを判定する責務を負います。実行の中断そのものはフレームドライバが行います。
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.core.state import CpuState
from retro_chip8.transport.memory import MemoryAccessType

logger = logging.getLogger(__name__)

# @intent:constant 表示名から状態フィールド名への別名。
_REGISTER_ALIASES = {"DT": "delay_timer", "ST": "sound_timer"}

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_name は "V0"-"VF", "I", "PC", "SP", "DT", "ST" を受け付けます。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True

# @intent:utility_function 状態オブジェクトからレジスタ名で値を取得します。存在しない名前はNone。
def read_register(state: CpuState, name: str) -> Optional[int]:
    key = name.upper()
    if len(key) == 2 and key[0] == "V" and key[1] in "0123456789ABCDEF" and hasattr(state, "v"):
        return state.v[int(key[1], 16)]
    attr = _REGISTER_ALIASES.get(key, key.lower())
    return getattr(state, attr, None)

# @intent:responsibility 実行制御とブレークポイント管理、実行履歴の保持を行います。
class Debugger:
    """
    CPUの実行を仲介し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, cpu: AbstractCpu, history_limit: int = 256):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        # REGISTER_CHANGE判定用に、直前の命令実行前のレジスタ値のみを保持する
        self._previous_registers: Dict[str, int] = cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        # @intent:responsibility 直近の実行履歴を上限付きで保持します。
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        """
        保持している実行履歴を古い順に返します。
        """
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility 現在のPCにPC_MATCHブレークポイントが設定されているかを返します。
    def is_pc_breakpoint(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    def step_instruction(self) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshotを返します。
        """
        self._previous_registers = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot
        self._history.append(snapshot)
        return snapshot

    # @intent:responsibility Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
    # @intent:return ヒットした条件。ヒットしなければNone。
    def check_breakpoints(self, snapshot: Snapshot) -> Optional[BreakpointCondition]:
        current_state = snapshot.state

        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.memory_activity:
                    if access.access_type == MemoryAccessType.READ and access.address == bp.address:
                        return bp
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.memory_activity:
                    if access.access_type == MemoryAccessType.WRITE and access.address == bp.address:
                        return bp
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name and read_register(current_state, bp.register_name) == bp.value:
                    return bp
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                if bp.register_name:
                    before = self._previous_registers.get(bp.register_name.upper())
                    after = read_register(current_state, bp.register_name)
                    if before is not None and before != after:
                        return bp
        return None
