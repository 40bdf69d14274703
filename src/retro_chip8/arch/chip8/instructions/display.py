# src/retro_chip8/arch/chip8/instructions/display.py
"""
表示命令（画面クリア、スプライト描画）の実装。
"""
from retro_chip8.arch.chip8.state import Chip8State, DISPLAY_WIDTH, DISPLAY_HEIGHT
from .base import ExecutionContext, NoOperand, SpriteOperand, wrap_address

# --- バリアント定義 ---

class Cls(NoOperand):
    mnemonic = "CLS"

class Drw(SpriteOperand):
    mnemonic = "DRW"


def execute_cls(state: Chip8State, op: Cls, ctx: ExecutionContext) -> None:
    state.display[:] = bytes(len(state.display))
    state.draw_flag = True


# @intent:responsibility I から n バイトのスプライトを (Vx, Vy) にXOR描画し、衝突をVFに記録します。
# @intent:rationale 折り返しはスプライト全体ではなくピクセル単位で行います。
#                  原点座標はVFをクリアする前に読み出します（Vx/VyがVFの場合に備える）。
def execute_drw(state: Chip8State, op: Drw, ctx: ExecutionContext) -> None:
    """
    各バイトが横8ピクセルを表します。セットされたビットのみをXORし、
    既に点灯していたピクセルを消した場合は VF=1 になります（スプライト全体で累積）。
    """
    state.draw_flag = True
    origin_x = state.v[op.x]
    origin_y = state.v[op.y]

    state.vf = 0

    for row in range(op.n):
        sprite_byte = state.memory[wrap_address(state.i + row)]
        y = (origin_y + row) % DISPLAY_HEIGHT
        for col in range(8):
            if sprite_byte & (0x80 >> col):
                x = (origin_x + col) % DISPLAY_WIDTH
                index = y * DISPLAY_WIDTH + x
                if state.display[index] == 1:
                    state.vf = 1
                state.display[index] ^= 1
