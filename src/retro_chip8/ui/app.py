# src/retro_chip8/ui/app.py
"""
アプリケーションのエントリポイント。
コマンドライン引数を解釈し、システムを構築してメインウィンドウを起動します。
"""
import argparse
import dataclasses
import logging
import os
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.arch.chip8.disassembler import format_listing
from retro_chip8.common.errors import LoadError
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import ErrorPolicy, SystemConfig
from retro_chip8.emulator.system import Chip8System
from .main_window import MainWindow

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="path to a raw CHIP-8 ROM image")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--scale", type=int, help="window scale factor")
    parser.add_argument("--clock", type=int, help="instructions per second")
    parser.add_argument("--shift-uses-vy", action="store_true", default=None,
                        help="8XY6/8XYE copy VY into VX before shifting")
    parser.add_argument("--jump-uses-vx", action="store_true", default=None,
                        help="BNNN jumps to NNN + VX instead of NNN + V0")
    parser.add_argument("--strict", action="store_true", help="halt on stack errors and unknown opcodes")
    parser.add_argument("--seed", type=int, help="random seed for CXNN")
    parser.add_argument("--disassemble", action="store_true", help="print a listing of the ROM and exit")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging verbosity")
    return parser

# @intent:responsibility 設定ファイルとコマンドライン指定を合成した構成を返します。コマンドラインが優先されます。
def resolve_config(args: argparse.Namespace) -> SystemConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()

    machine_overrides = {}
    if args.clock is not None:
        machine_overrides["clock_hz"] = args.clock
    if args.shift_uses_vy:
        machine_overrides["shift_uses_vy"] = True
    if args.jump_uses_vx:
        machine_overrides["jump_offset_uses_vx"] = True
    if args.strict:
        machine_overrides["error_policy"] = ErrorPolicy.STRICT

    machine = dataclasses.replace(config.machine, **machine_overrides)
    display = config.display
    if args.scale is not None:
        display = dataclasses.replace(display, scale_factor=args.scale)
    return dataclasses.replace(config, machine=machine, display=display)

# @intent:responsibility アプリケーションを起動します。
# @intent:return プロセスの終了コード。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="[%(levelname)s] %(name)s: %(message)s")

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        cpu, memory = SystemBuilder().build_system(config, args.rom, seed=args.seed)
    except LoadError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.disassemble:
        rom_size = os.path.getsize(args.rom)
        print(format_listing(cpu.disassemble(config.machine.entry_offset, rom_size)))
        return 0

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(Chip8System(cpu), config, title=f"Retro CHIP-8 - {os.path.basename(args.rom)}")
    main_win.resize(main_win.sizeHint())
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
