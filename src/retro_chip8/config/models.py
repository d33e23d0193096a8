from dataclasses import dataclass, field
from typing import Dict, List

# @intent:constant 一般的なCHIP-8エミュレータと同じキー配置（1234 / QWER / ASDF / ZXCV）を16進キーパッドに割り当てます。
DEFAULT_KEY_BINDINGS: Dict[str, int] = {
    "X": 0x0, "1": 0x1, "2": 0x2, "3": 0x3,
    "Q": 0x4, "W": 0x5, "E": 0x6, "A": 0x7,
    "S": 0x8, "D": 0x9, "Z": 0xA, "C": 0xB,
    "4": 0xC, "R": 0xD, "F": 0xE, "V": 0xF,
}

@dataclass
class MemoryRegion:
    start: int
    end: int
    type: str  # "RAM", "ROM"
    label: str = ""

@dataclass
class HostConfig:
    cycle_delay_ms: int = 3   # step() の呼び出し間隔
    scale: int = 10           # 1ピクセルあたりの表示倍率
    strict: bool = False      # 未定義命令を致命的エラーとして扱う
    trace: bool = False       # 各サイクルのSnapshotをDEBUGログに出力する
    key_bindings: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_BINDINGS))

@dataclass
class SystemConfig:
    memory_map: List[MemoryRegion] = field(default_factory=list)
    host: HostConfig = field(default_factory=HostConfig)
