"""
例外定義モジュール。

ロード時の致命的なエラーと、実行時の診断用エラーを一つの階層にまとめます。
実行時エラーを例外として送出するか診断として記録するかは ErrorPolicy が決定します。
"""
from typing import Optional


# @intent:responsibility 本パッケージが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass


# @intent:responsibility ROMロード失敗を表します。ロードエラーは常に起動処理に対して致命的です。
class LoadError(Chip8Error):
    pass


class SourceUnreadableError(LoadError):
    """ROMファイルを開けない、または読み込めない場合に送出されます。"""

    def __init__(self, source: str, reason: Optional[BaseException] = None):
        self.source = source
        self.reason = reason
        message = f"Could not open ROM file {source}"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class RomTooLargeError(LoadError):
    """ROMがエントリオフセット以降のメモリに収まらない場合に送出されます。"""

    def __init__(self, source: str, size: int, max_size: int):
        self.source = source
        self.size = size
        self.max_size = max_size
        super().__init__(f"ROM file {source} is too large! Size: {size}. Max size: {max_size}")


# @intent:responsibility 命令実行中に検出される非致命的な異常の基底クラスです。
# @intent:rationale LENIENTポリシーでは例外として送出されず、Snapshotの診断情報として記録されます。
class ExecutionError(Chip8Error):
    def __init__(self, message: str, pc: int, opcode: Optional[int]):
        self.pc = pc
        self.opcode = opcode
        if opcode is None:
            super().__init__(f"{message} (at {pc:#05x})")
        else:
            super().__init__(f"{message} (opcode {opcode:04X} at {pc:#05x})")


class StackOverflowError(ExecutionError):
    def __init__(self, pc: int, opcode: int, capacity: int):
        self.capacity = capacity
        super().__init__(f"Stack overflow: capacity {capacity} exceeded", pc, opcode)


class StackUnderflowError(ExecutionError):
    def __init__(self, pc: int, opcode: int):
        super().__init__("Stack underflow: return with empty stack", pc, opcode)


class UnimplementedOpcodeError(ExecutionError):
    def __init__(self, pc: int, opcode: int):
        super().__init__("Unimplemented opcode", pc, opcode)


class MemoryAccessError(ExecutionError):
    """
    命令フェッチまたはメモリ転送がメモリ範囲外に及ぶ場合に報告されます。
    フェッチ時はデコードすべき命令が無いため、opcodeはNoneとなります。
    """

    def __init__(self, pc: int, opcode: Optional[int], address: int, length: int, memory_size: int):
        self.address = address
        self.length = length
        self.memory_size = memory_size
        super().__init__(
            f"Memory access {address:#05x}+{length} outside {memory_size} bytes", pc, opcode)
