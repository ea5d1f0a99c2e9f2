"""
ディスパッチキーと命令実装のマッピング定義。
"""
from . import alu
from . import control
from . import display
from . import keypad
from . import load

# @intent:map ディスパッチキー (family, selector) から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Display
    (0x0, 0x0E0): display.execute_cls,
    (0xD, None): display.execute_drw,

    # Control
    (0x0, 0x0EE): control.execute_ret,
    (0x1, None): control.execute_jp,
    (0x2, None): control.execute_call,
    (0x3, None): control.execute_se_imm,
    (0x4, None): control.execute_sne_imm,
    (0x5, 0x0): control.execute_se_reg,
    (0x9, 0x0): control.execute_sne_reg,
    (0xB, None): control.execute_jp_offset,

    # Load/Store
    (0x6, None): load.execute_ld_imm,
    (0x8, 0x0): load.execute_ld_reg,
    (0xA, None): load.execute_ld_i,
    (0xF, 0x07): load.execute_ld_vx_dt,
    (0xF, 0x15): load.execute_ld_dt_vx,
    (0xF, 0x18): load.execute_ld_st_vx,
    (0xF, 0x1E): load.execute_add_i,
    (0xF, 0x29): load.execute_ld_font,
    (0xF, 0x33): load.execute_ld_bcd,
    (0xF, 0x55): load.execute_store_registers,
    (0xF, 0x65): load.execute_load_registers,

    # ALU
    (0x7, None): alu.execute_add_imm,
    (0x8, 0x1): alu.execute_or,
    (0x8, 0x2): alu.execute_and,
    (0x8, 0x3): alu.execute_xor,
    (0x8, 0x4): alu.execute_add_reg,
    (0x8, 0x5): alu.execute_sub,
    (0x8, 0x6): alu.execute_shr,
    (0x8, 0x7): alu.execute_subn,
    (0x8, 0xE): alu.execute_shl,
    (0xC, None): alu.execute_rnd,

    # Keypad
    (0xE, 0x9E): keypad.execute_skp,
    (0xE, 0xA1): keypad.execute_sknp,
    (0xF, 0x0A): keypad.execute_wait_key,
}
