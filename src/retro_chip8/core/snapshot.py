# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1サイクル実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
トレースフックへの情報提供と、UIへの状態通知に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "6A05"
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["VA", "#05"]
    operand_bytes: List[int] = field(default_factory=list) # 生の命令バイト
    cycle_count: int = 1 # 命令実行に必要なサイクル数
    length: int = 2 # 命令のバイト長
    decoded: Any = None # アーキテクチャ固有のデコード結果

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、表示用の命令文字列など）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "LD V0, #05"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録した不変のデータ構造。
    stateは生成時にコピーされたものであり、以降のサイクルで変化しません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
