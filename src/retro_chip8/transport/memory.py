# retro_chip8/transport/memory.py
"""
Transport Layer (メモリバンク)

このモジュールは、CHIP-8の4KBアドレス空間を抽象化し、
実行エンジンからの読み書きアクセスを記録する責務を負います。
"""
from typing import List, Optional, Iterable
from dataclasses import dataclass
from enum import Enum

# @intent:constant CHIP-8の標準アドレス空間サイズ。
DEFAULT_MEMORY_SIZE = 4096

# @intent:responsibility メモリアクセスを記録するためのタイプを定義します。
class MemoryAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class MemoryAccess:
    """
    メモリ上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: MemoryAccessType
    previous_data: Optional[int] = None # WRITE時のみ、書き込み前の値

# @intent:responsibility フォントテーブルとROMイメージを保持するメモリバンクを提供します。
# @intent:rationale 全てのアクセスを記録し、Snapshotに含めることでシステムの観測可能性を高めます。
class MemoryBank:
    """
    CHIP-8のメモリアドレス空間を表すメモリバンク。
    実行時の読み書きをアクティビティログに記録する機能を提供します。
    """
    # @intent:responsibility 指定されたサイズのメモリ領域と空のアクティビティログを初期化します。
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int = DEFAULT_MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size
        self._activity_log: List[MemoryAccess] = []

    def _check_address(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address:#05x} out of bounds for memory of size {self._size}.")

    # @intent:responsibility メモリアクセスをログに記録します。
    def _log_access(self, address: int, data: int, access_type: MemoryAccessType,
                    previous_data: Optional[int] = None) -> None:
        self._activity_log.append(MemoryAccess(address, data, access_type, previous_data))

    # @intent:responsibility 記録されたアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        """
        現在のアクティビティログを返し、内部ログをクリアします。
        """
        log = self._activity_log
        self._activity_log = []
        return log

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    # @intent:pre-condition アドレスはメモリの有効範囲内である必要があります。
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アクセスはログに記録されます。
        """
        self._check_address(address)
        data = self._memory[address]
        self._log_access(address, data, MemoryAccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します（ログ記録なし）。
        UIや逆アセンブラなどのインスペクタ用。
        """
        self._check_address(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition アドレスは有効範囲内であり、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        previous = self._memory[address]
        self._memory[address] = data
        self._log_access(address, data, MemoryAccessType.WRITE, previous)

    # @intent:responsibility フォントやROMなどのバイト列を一括で配置します（ログ記録なし）。
    # @intent:pre-condition 配置範囲全体がメモリ内に収まる必要があります。部分的な書き込みは行いません。
    def load(self, address: int, data: Iterable[int]) -> None:
        """
        指定アドレスからバイト列を書き込みます。ローダー専用の初期化APIです。
        """
        block = bytes(data)
        if not block:
            return
        self._check_address(address)
        self._check_address(address + len(block) - 1)
        self._memory[address:address + len(block)] = block

    # @intent:utility_function 2バイトをビッグエンディアン形式で組み立てて読み込みます（ログ記録なし）。
    def read_word(self, address: int) -> int:
        """Big-endian 16-bit peek."""
        return (self.peek(address) << 8) | self.peek(address + 1)

    # @intent:responsibility 指定範囲のメモリ内容をコピーして返します。
    def dump(self, start: int = 0, length: Optional[int] = None) -> bytes:
        end = self._size if length is None else min(self._size, start + length)
        return bytes(self._memory[start:end])

    # @intent:responsibility メモリのサイズを返します。
    def get_size(self) -> int:
        return self._size
