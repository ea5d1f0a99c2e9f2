# retro_chip8/emulator/system.py
"""
フレームドライバと実行状態コントローラ。

1フレーム(60Hz)ごとに「命令バッチの実行 → タイマー減算」の順序を保証し、
外部入力イベント（一時停止、終了、キー押下）による実行状態の遷移を管理します。
描画・音声・入力の収集はこのモジュールの外側（UI層）が担当します。
"""
import logging
from typing import List, Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.common.errors import ExecutionError
from retro_chip8.common.types import Framebuffer
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.core.state import RunState
from retro_chip8.debugger.debugger import Debugger

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8マシン1台分の実行ループと実行状態を管理します。
class Chip8System:
    """
    CPUをフレーム単位で駆動するドライバ。
    実行状態は RUNNING ⇄ PAUSED、いずれからも QUIT（終端）へ遷移します。
    """
    def __init__(self, cpu: Chip8Cpu, debugger: Optional[Debugger] = None):
        self._cpu = cpu
        self._debugger = debugger or Debugger(cpu)
        self._resume_from_breakpoint = False
        self._last_error: Optional[ExecutionError] = None

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def debugger(self) -> Debugger:
        return self._debugger

    @property
    def state(self) -> Chip8CpuState:
        return self._cpu.get_state()

    @property
    def run_state(self) -> RunState:
        return self.state.run_state

    @property
    def is_running(self) -> bool:
        return self.state.run_state == RunState.RUNNING

    @property
    def last_error(self) -> Optional[ExecutionError]:
        return self._last_error

    # --- 外部出力 ---

    # @intent:responsibility 描画側へ渡すフレームバッファのコピーを返します。
    def framebuffer(self) -> Framebuffer:
        return [list(row) for row in self.state.framebuffer]

    @property
    def sound_active(self) -> bool:
        return self.state.sound_active

    # --- 外部入力 ---

    def set_key(self, index: int, pressed: bool) -> None:
        self._cpu.set_key(index, pressed)

    # @intent:responsibility RUNNINGとPAUSEDを切り替えます。QUIT後は何もしません。
    def toggle_pause(self) -> RunState:
        state = self.state
        if state.run_state == RunState.RUNNING:
            logger.info("=== PAUSED ===")
            state.run_state = RunState.PAUSED
        elif state.run_state == RunState.PAUSED:
            logger.info("=== RESUMED ===")
            state.run_state = RunState.RUNNING
            self._resume_from_breakpoint = True
        return state.run_state

    def pause(self) -> None:
        if self.state.run_state == RunState.RUNNING:
            self.toggle_pause()

    def resume(self) -> None:
        if self.state.run_state == RunState.PAUSED:
            self.toggle_pause()

    # @intent:responsibility 終端状態QUITへ遷移します。以降、命令実行とタイマー減算は行われません。
    def quit(self) -> None:
        if self.state.run_state != RunState.QUIT:
            logger.info("Quit requested.")
        self.state.run_state = RunState.QUIT

    # --- 実行 ---

    # @intent:responsibility 一時停止中に1命令だけ実行します（デバッグ用）。
    def step(self) -> Optional[Snapshot]:
        if self.state.run_state == RunState.QUIT:
            return None
        return self._step_guarded()

    # @intent:responsibility 1フレーム分（instructions_per_frame命令 + タイマー1回）を実行します。
    # @intent:return このフレームで生成されたSnapshotのリスト。
    def run_frame(self) -> List[Snapshot]:
        snapshots: List[Snapshot] = []
        if not self.is_running:
            return snapshots

        for _ in range(self._cpu.config.instructions_per_frame):
            # 実行状態は命令ごとに確認する（キー待ち中の終了要求もここで反映される）
            if not self.is_running:
                break

            pc = self.state.pc
            if self._debugger.is_pc_breakpoint(pc) and not self._resume_from_breakpoint:
                logger.info("Breakpoint hit at PC: %#05x", pc)
                self.pause()
                break
            self._resume_from_breakpoint = False

            snapshot = self._step_guarded()
            if snapshot is None:
                break
            snapshots.append(snapshot)

            hit = self._debugger.check_breakpoints(snapshot)
            if hit is not None:
                logger.info("Breakpoint %s hit at PC: %#05x", hit.condition_type.value, snapshot.metadata.pc)
                self.pause()
                break

        if self.state.run_state != RunState.QUIT:
            self._cpu.tick_timers()
        return snapshots

    def _step_guarded(self) -> Optional[Snapshot]:
        try:
            return self._debugger.step_instruction()
        except ExecutionError as e:
            # STRICTポリシー: CPUは既にQUITへ遷移している
            logger.error("Execution halted: %s", e)
            self._last_error = e
            return None
