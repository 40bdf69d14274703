# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令ワードと命令実装のマッピング定義。
"""
from . import control
from . import alu
from . import load
from . import display
from . import extended

# @intent:map 先頭ニブルだけで決まるファミリー（1〜7, 9〜C）のバリアント。
FAMILY_MAP = {
    0x1: control.Jp,
    0x2: control.Call,
    0x3: control.SeVxByte,
    0x4: control.SneVxByte,
    0x5: control.SeVxVy,
    0x6: load.LdVxByte,
    0x7: alu.AddVxByte,
    0x9: control.SneVxVy,
    0xA: load.LdI,
    0xB: control.JpV0,
    0xC: alu.Rnd,
}

# @intent:map ファミリー0x0: 命令ワード全体で判別する。該当しないものは SYS nnn。
SYSTEM_MAP = {
    0x00E0: display.Cls,
    0x00EE: control.Ret,
    0x00FB: extended.Scr,
    0x00FC: extended.Scl,
    0x00FD: extended.Exit,
    0x00FE: extended.Low,
    0x00FF: extended.High,
}

# @intent:map ファミリー0x8: 下位ニブルで判別する算術論理演算。
ALU_MAP = {
    0x0: load.LdVxVy,
    0x1: alu.OrVxVy,
    0x2: alu.AndVxVy,
    0x3: alu.XorVxVy,
    0x4: alu.AddVxVy,
    0x5: alu.SubVxVy,
    0x6: alu.ShrVxVy,
    0x7: alu.SubnVxVy,
    0xE: alu.ShlVxVy,
}

# @intent:map ファミリー0xE: 下位バイトで判別するキー判定スキップ。
KEY_MAP = {
    0x9E: control.Skp,
    0xA1: control.Sknp,
}

# @intent:map ファミリー0xF: 下位バイトで判別するその他の命令。
MISC_MAP = {
    0x07: load.LdVxDt,
    0x0A: control.LdVxK,
    0x15: load.LdDtVx,
    0x18: load.LdStVx,
    0x1E: load.AddIVx,
    0x29: load.LdFVx,
    0x30: extended.LdHfVx,
    0x33: load.LdBVx,
    0x55: load.LdIVx,
    0x65: load.LdVxI,
    0x75: extended.LdRVx,
    0x85: extended.LdVxR,
}

# @intent:map バリアント型から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    control.Ret: control.execute_ret,
    control.Sys: control.execute_sys,
    control.Jp: control.execute_jp,
    control.Call: control.execute_call,
    control.JpV0: control.execute_jp_v0,
    control.SeVxByte: control.execute_se_vx_byte,
    control.SneVxByte: control.execute_sne_vx_byte,
    control.SeVxVy: control.execute_se_vx_vy,
    control.SneVxVy: control.execute_sne_vx_vy,
    control.Skp: control.execute_skp,
    control.Sknp: control.execute_sknp,
    control.LdVxK: control.execute_ld_vx_k,

    # ALU
    alu.AddVxByte: alu.execute_add_vx_byte,
    alu.OrVxVy: alu.execute_or_vx_vy,
    alu.AndVxVy: alu.execute_and_vx_vy,
    alu.XorVxVy: alu.execute_xor_vx_vy,
    alu.AddVxVy: alu.execute_add_vx_vy,
    alu.SubVxVy: alu.execute_sub_vx_vy,
    alu.SubnVxVy: alu.execute_subn_vx_vy,
    alu.ShrVxVy: alu.execute_shr,
    alu.ShlVxVy: alu.execute_shl,
    alu.Rnd: alu.execute_rnd,

    # Load/Store
    load.LdVxByte: load.execute_ld_vx_byte,
    load.LdVxVy: load.execute_ld_vx_vy,
    load.LdI: load.execute_ld_i,
    load.AddIVx: load.execute_add_i_vx,
    load.LdFVx: load.execute_ld_f_vx,
    load.LdVxDt: load.execute_ld_vx_dt,
    load.LdDtVx: load.execute_ld_dt_vx,
    load.LdStVx: load.execute_ld_st_vx,
    load.LdBVx: load.execute_ld_b_vx,
    load.LdIVx: load.execute_ld_i_vx,
    load.LdVxI: load.execute_ld_vx_i,

    # Display
    display.Cls: display.execute_cls,
    display.Drw: display.execute_drw,

    # SUPER-CHIP (unimplemented)
    extended.Scd: extended.execute_unimplemented,
    extended.Scr: extended.execute_unimplemented,
    extended.Scl: extended.execute_unimplemented,
    extended.Exit: extended.execute_unimplemented,
    extended.Low: extended.execute_unimplemented,
    extended.High: extended.execute_unimplemented,
    extended.DrwVxVy0: extended.execute_unimplemented,
    extended.LdHfVx: extended.execute_unimplemented,
    extended.LdRVx: extended.execute_unimplemented,
    extended.LdVxR: extended.execute_unimplemented,
}
