# src/retro_chip8/ui/app.py
"""
アプリケーションのエントリポイント。
コマンドライン引数と設定ファイルからシステムを組み立て、Qtウィンドウまたはヘッドレスで実行します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from retro_chip8.core.errors import Chip8Error, InvalidOpcodeError
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import SystemConfig
from retro_chip8.transport.device import frame_to_text
from retro_chip8.transport.headless import HeadlessDevice

logger = logging.getLogger(__name__)

# @intent:constant --headless で --max-ticks を省略した場合のティック数。
DEFAULT_HEADLESS_TICKS = 10_000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 virtual machine")
    parser.add_argument("rom", nargs="?", help="path to a raw CHIP-8 program")
    parser.add_argument("-c", "--clock-speed", type=int, help="instructions per second (default 500)")
    parser.add_argument("-s", "--shift-quirk", action="store_true", default=None,
                        help="SHR/SHL shift Vx in place and ignore Vy")
    parser.add_argument("--config", help="YAML system configuration file")
    parser.add_argument("--headless", action="store_true",
                        help="run without a window and print the final frame")
    parser.add_argument("--max-ticks", type=int, help="stop after this many engine ticks")
    parser.add_argument("--debug", action="store_true", help="log every executed instruction")
    return parser


# @intent:responsibility 設定ファイルを読み込み、コマンドライン引数で上書きします。
def load_config(args: argparse.Namespace) -> SystemConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    if args.rom:
        config.machine.rom_path = args.rom
    if args.clock_speed is not None:
        if args.clock_speed <= 0:
            raise ValueError(f"clock speed must be positive: {args.clock_speed}")
        config.machine.clock_speed = args.clock_speed
    if args.shift_quirk:
        config.machine.shift_quirk = True
    return config


def run_headless(config: SystemConfig, max_ticks: Optional[int]) -> int:
    device = HeadlessDevice(max_ticks=max_ticks or DEFAULT_HEADLESS_TICKS)
    _, engine = SystemBuilder().build_system(config, device)
    engine.run()
    frame = device.last_frame
    if frame is not None:
        print(frame_to_text(frame))
    return 0


def run_window(config: SystemConfig, max_ticks: Optional[int]) -> int:
    from PySide6.QtWidgets import QApplication
    from .main_window import MainWindow
    from .qt_device import QtDevice

    app = QApplication(sys.argv[:1])
    device = QtDevice(config.keymap)
    _, engine = SystemBuilder().build_system(config, device)
    main_win = MainWindow(engine, device, config.display, max_ticks=max_ticks)
    main_win.show()
    main_win.start()
    status = app.exec()
    if main_win.error is not None:
        return 1
    return status


# @intent:responsibility アプリケーションを起動します。戻り値はプロセスの終了コードです。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    不正な命令ワードでの停止や設定エラーは終了コード1で報告します。
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    if not config.machine.rom_path:
        parser.error("a ROM path is required (positional argument or machine.rom in --config)")

    try:
        if args.headless:
            return run_headless(config, args.max_ticks)
        return run_window(config, args.max_ticks)
    except InvalidOpcodeError as e:
        logger.error("Execution stopped: %s", e)
        return 1
    except (Chip8Error, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
