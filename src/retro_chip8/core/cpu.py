# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from retro_chip8.common.errors import ExecutionError
from retro_chip8.common.types import RegisterLayoutInfo
from retro_chip8.core.instruction import Instruction
from retro_chip8.core.snapshot import Metadata, Snapshot
from retro_chip8.core.state import CpuState, RunState
from retro_chip8.transport.memory import MemoryBank

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    メモリバンクとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:responsibility CPUの状態とメモリバンクへの参照を初期化します。
    def __init__(self, memory: MemoryBank):
        self._memory = memory
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    def get_memory(self) -> MemoryBank:
        return self._memory

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility メモリから次の命令ワードをフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Instruction:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    # @intent:return このステップで報告された診断（非致命的エラー）のリスト。
    @abstractmethod
    def _execute(self, instruction: Instruction) -> List[ExecutionError]:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（ログクリア→待機判定→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点での状態を含むSnapshotオブジェクトを返します。
        実行時エラーが例外として送出された場合（STRICTポリシー、または範囲外フェッチ）、
        実行状態はQUITへ遷移します。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._memory.get_and_clear_activity_log()
        initial_pc = self._state.pc

        # 2. 待機判定 (Hook)
        wait_snapshot = self._handle_wait(initial_pc)
        if wait_snapshot:
            return wait_snapshot

        try:
            # 3. フェッチ & デコード: フェッチ失敗は続行する命令が無いためポリシーによらず致命的
            opcode = self._fetch()
            instruction = self._decode(opcode)

            # 4. PC更新 (Hook): 分岐命令はこの値を上書きする
            self._update_pc(instruction)

            # 5. 実行
            diagnostics = self._execute(instruction)
        except ExecutionError:
            self._state.run_state = RunState.QUIT
            raise

        # 6. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, instruction, diagnostics)

    # @intent:responsibility 命令をフェッチせずに待機すべき場合の処理を行います。
    # @intent:return 待機中であればその状態のSnapshot、そうでなければNone。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        return None

    # @intent:responsibility 命令実行前にPCを命令長分進めます。
    def _update_pc(self, instruction: Instruction) -> None:
        self._state.pc = (self._state.pc + instruction.length) & 0xFFFF

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, instruction: Optional[Instruction],
                         diagnostics: Optional[List[ExecutionError]] = None) -> Snapshot:
        memory_activity = self._memory.get_and_clear_activity_log()

        if instruction is not None:
            self._cycle_count += 1
            symbol_info = f"{initial_pc:#05x}: {instruction}"
        else:
            symbol_info = f"{initial_pc:#05x}: (waiting)"

        return Snapshot(
            state=self._state.copy(),
            instruction=instruction,
            metadata=Metadata(cycle_count=self._cycle_count, pc=initial_pc, symbol_info=symbol_info),
            memory_activity=memory_activity,
            diagnostics=list(diagnostics or []),
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_bytes, mnemonic) のタプルリストを返す。
        """
        pass
