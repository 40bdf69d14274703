from dataclasses import dataclass, field
from typing import Optional

DEFAULT_KEYS = "x123qweasdzc4rfv"  # キー0〜Fに対応する文字

@dataclass
class MachineConfig:
    clock_speed: int = 500  # 1秒あたりの命令数
    shift_quirk: bool = False
    rom_path: Optional[str] = None

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class KeymapConfig:
    keys: str = DEFAULT_KEYS
    exit_key: str = "o"
    reset_key: str = "l"
    pause_key: str = "p"
    key_hold_ms: int = 100  # 押下後にキーを押されたままとみなす時間

@dataclass
class SystemConfig:
    machine: MachineConfig = field(default_factory=MachineConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: KeymapConfig = field(default_factory=KeymapConfig)
