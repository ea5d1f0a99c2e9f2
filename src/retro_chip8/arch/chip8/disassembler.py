# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
デコーダのロジックを再利用し、メモリのアクティビティログを汚さないようにpeekで読み込みます。
"""
from typing import List, Tuple

from retro_chip8.arch.chip8.decoder import decode
from retro_chip8.transport.memory import MemoryBank

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: MemoryBank, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    end_addr = min(start_addr + length, memory.get_size())
    current_addr = start_addr

    while current_addr < end_addr:
        # 奇数長の末尾1バイトはデータとして扱う
        if current_addr + 1 >= memory.get_size() or current_addr + 1 >= end_addr:
            byte = memory.peek(current_addr)
            result.append((current_addr, f"{byte:02X}", f"DB ${byte:02X}"))
            break

        word = memory.read_word(current_addr)
        instruction = decode(word)
        hex_bytes = f"{word >> 8:02X} {word & 0xFF:02X}"
        result.append((current_addr, hex_bytes, str(instruction)))
        current_addr += instruction.length

    return result

# @intent:responsibility 逆アセンブル結果をテキストのリスティングに整形します。
def format_listing(lines: List[Tuple[int, str, str]]) -> str:
    return "\n".join(f"{addr:03X}: {hex_bytes:<6} {text}" for addr, hex_bytes, text in lines)
