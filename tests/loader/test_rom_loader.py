# tests/loader/test_rom_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
フォントの配置、ROMのロード、ロードエラーを検証します。
"""
import pytest

from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.common.errors import LoadError, RomTooLargeError, SourceUnreadableError
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.state import RunState
from retro_chip8.loader.font import FONT_SET
from retro_chip8.loader.loader import RomLoader
from retro_chip8.transport.memory import MemoryBank

class TestRomLoader:
    @pytest.fixture
    def setup_loader(self, tmp_path):
        config = MachineConfig()
        return RomLoader(config), MemoryBank(), Chip8CpuState(), tmp_path

    def test_load_rom_file(self, setup_loader):
        loader, memory, state, tmp_path = setup_loader
        rom = tmp_path / "test.ch8"
        rom.write_bytes(bytes([0x6A, 0x02, 0x6B, 0x03]))

        size = loader.load_rom(str(rom), memory, state)

        assert size == 4
        assert memory.dump(0x200, 4) == bytes([0x6A, 0x02, 0x6B, 0x03])
        assert memory.dump(0x50, len(FONT_SET)) == FONT_SET
        assert state.pc == 0x200
        assert state.run_state == RunState.RUNNING

    def test_missing_file(self, setup_loader):
        loader, memory, state, tmp_path = setup_loader
        with pytest.raises(SourceUnreadableError) as excinfo:
            loader.load_rom(str(tmp_path / "missing.ch8"), memory, state)
        assert isinstance(excinfo.value, LoadError)
        assert state.run_state == RunState.QUIT

    def test_directory_is_unreadable(self, setup_loader):
        loader, memory, state, tmp_path = setup_loader
        with pytest.raises(SourceUnreadableError):
            loader.load_rom(str(tmp_path), memory, state)

    def test_max_size_fits(self, setup_loader):
        loader, memory, state, _ = setup_loader
        data = bytes([0xAA]) * (4096 - 0x200)
        assert loader.load_rom_bytes(data, memory, state) == len(data)
        assert memory.peek(0xFFF) == 0xAA

    # @intent:test_case_too_large 容量超過のROMはエラーとなり、メモリへ一切書き込まれないことを検証します。
    def test_too_large_writes_nothing(self, setup_loader):
        loader, memory, state, _ = setup_loader
        data = bytes([0xAA]) * (4096 - 0x200 + 1)
        with pytest.raises(RomTooLargeError) as excinfo:
            loader.load_rom_bytes(data, memory, state)
        assert excinfo.value.max_size == 4096 - 0x200
        assert memory.dump() == bytes(4096)
        assert state.run_state == RunState.QUIT

    def test_custom_offsets(self):
        config = MachineConfig(font_offset=0x000, entry_offset=0x600)
        memory, state = MemoryBank(), Chip8CpuState()
        RomLoader(config).load_rom_bytes(b"\x12\x34", memory, state)
        assert memory.dump(0, 5) == FONT_SET[:5]
        assert memory.read_word(0x600) == 0x1234
        assert state.pc == 0x600
