import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
from .models import SystemConfig, MachineConfig, DisplayConfig, KeymapConfig

class ConfigLoader:
    def load_from_file(self, path: Union[str, Path]) -> SystemConfig:
        with open(path, 'r', encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Malformed YAML in {path}: {e}") from e
        return self.parse_config(data or {})

    def parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        machine_data = self._section(data, "machine")
        machine = MachineConfig(
            clock_speed=self._parse_int(machine_data.get("clock_speed", 500)),
            shift_quirk=self._parse_bool(machine_data.get("shift_quirk", False)),
            rom_path=self._parse_path(machine_data.get("rom")),
        )
        if machine.clock_speed <= 0:
            raise ValueError(f"clock_speed must be positive: {machine.clock_speed}")

        display_data = self._section(data, "display")
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", 10)),
            foreground=str(display_data.get("foreground", "#FFFFFF")),
            background=str(display_data.get("background", "#000000")),
        )
        if display.scale <= 0:
            raise ValueError(f"display scale must be positive: {display.scale}")

        keymap_data = self._section(data, "keymap")
        defaults = KeymapConfig()
        keymap = KeymapConfig(
            keys=str(keymap_data.get("keys", defaults.keys)).lower(),
            exit_key=str(keymap_data.get("exit", defaults.exit_key)).lower(),
            reset_key=str(keymap_data.get("reset", defaults.reset_key)).lower(),
            pause_key=str(keymap_data.get("pause", defaults.pause_key)).lower(),
            key_hold_ms=self._parse_int(keymap_data.get("key_hold_ms", defaults.key_hold_ms)),
        )
        self._validate_keymap(keymap)

        return SystemConfig(machine=machine, display=display, keymap=keymap)

    # @intent:utility_function 設定のセクションを取り出します。省略時は空、マッピング以外は ValueError です。
    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
        return section

    def _parse_path(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(f"Invalid path format: {value!r}")
        return value

    def _validate_keymap(self, keymap: KeymapConfig) -> None:
        if len(keymap.keys) != 16 or len(set(keymap.keys)) != 16:
            raise ValueError(f"keymap.keys must be 16 distinct characters: {keymap.keys!r}")
        controls = {keymap.exit_key, keymap.reset_key, keymap.pause_key}
        if len(controls) != 3 or controls & set(keymap.keys):
            raise ValueError("exit/reset/pause keys must be distinct and not overlap the keypad")

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")

    def _parse_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false", "yes", "no", "on", "off"):
            return value.lower() in ("true", "yes", "on")
        raise ValueError(f"Invalid boolean format: {value}")
