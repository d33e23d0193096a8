import logging
from random import Random
from typing import Optional

from retro_chip8.transport.bus import Bus, RAM, ROM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.memory import MEMORY_SIZE, build_memory_bus
from .models import SystemConfig

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、BusとDeviceを生成し、CPUに接続します。
class SystemBuilder:
    def build_system(self, config: SystemConfig, rng: Optional[Random] = None) -> Chip8Cpu:
        bus = self.build_bus(config)
        return Chip8Cpu(bus, strict=config.host.strict, rng=rng)

    # @intent:responsibility メモリマップからバスを構築します。未指定なら標準のマップを使用します。
    # @intent:pre-condition 領域は 0x000-0xFFF を隙間なく、重複なく覆っている必要があります。
    def build_bus(self, config: SystemConfig) -> Bus:
        if not config.memory_map:
            return build_memory_bus()

        regions = sorted(config.memory_map, key=lambda r: r.start)
        expected_start = 0x000
        for region in regions:
            if region.start != expected_start or region.end < region.start:
                raise ValueError(
                    f"Memory map must cover 0x000-{MEMORY_SIZE - 1:#05x} contiguously; "
                    f"unexpected region {region.start:#05x}-{region.end:#05x}"
                )
            expected_start = region.end + 1
        if expected_start != MEMORY_SIZE:
            raise ValueError(f"Memory map ends at {expected_start - 1:#05x}, expected {MEMORY_SIZE - 1:#05x}")

        bus = Bus()
        for region in regions:
            size = region.end - region.start + 1
            if region.type == "RAM":
                device = RAM(size)
            elif region.type == "ROM":
                device = ROM(size)
            else:
                logger.warning("Unknown device type '%s' for range %03X-%03X, defaulting to RAM",
                               region.type, region.start, region.end)
                device = RAM(size)
            bus.register_device(region.start, region.end, device)
        return bus
