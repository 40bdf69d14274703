import logging
import random
from typing import Optional, Tuple
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.engine.engine import CycleEngine
from retro_chip8.loader.loader import RomLoader
from retro_chip8.transport.device import DeviceAdapter
from .models import SystemConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、CPU、エンジン、デバイスを生成・接続し、ROMをロードします。
class SystemBuilder:
    def build_system(self, config: SystemConfig, device: DeviceAdapter, rom: Optional[bytes] = None,
                     rng: Optional[random.Random] = None, **engine_options) -> Tuple[Chip8Cpu, CycleEngine]:
        """
        rom が省略された場合は config.machine.rom_path から読み込みます。
        engine_options は CycleEngine にそのまま渡します（テストでの clock 差し替え用）。
        """
        machine = config.machine
        cpu = Chip8Cpu(shift_quirk=machine.shift_quirk, rng=rng)

        if rom is None and machine.rom_path:
            rom = RomLoader().read_file(machine.rom_path)
        if rom is not None:
            loaded = cpu.load_rom(rom)
            logger.info("Loaded %d program bytes at 0x200", loaded)

        engine = CycleEngine(cpu, device, clock_speed=machine.clock_speed, **engine_options)
        return cpu, engine
