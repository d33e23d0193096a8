# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.core.errors import Chip8Error
from retro_chip8.core.snapshot import Snapshot, Operation, Metadata
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import RegisterLayoutInfo

# @intent:data_structure サイクル毎に呼び出されるトレースフックの型。
TraceHook = Callable[[Snapshot], None]

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:responsibility CPUの状態とバスへの参照を初期化します。
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        self._trace_hook: Optional[TraceHook] = None
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        """
        CPUの全レジスタを初期値に戻し、累計サイクル数をクリアします。
        """
        self._state = self._create_initial_state()
        self._cycle_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    def get_bus(self) -> Bus:
        return self._bus

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility サイクル毎に呼び出されるトレースフックを設定します。Noneで解除します。
    def set_trace_hook(self, hook: Optional[TraceHook]) -> None:
        """
        各サイクル完了後に、そのサイクルのSnapshotを受け取るコールバックを設定します。
        実行に失敗したサイクルではフックは呼び出されません。
        """
        self._trace_hook = hook

    # @intent:responsibility メモリから次の命令ワードをフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCから次の命令ワードを読み出して返します。PCの更新は_update_pcが行います。
        """
        pass

    # @intent:responsibility フェッチした命令ワードを解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ログクリア→フェッチ→デコード→PC更新→実行→サイクル終端処理→Snapshot生成）を定義します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUとバスの状態を含むSnapshotオブジェクトを返します。
        Chip8Errorが発生した場合はPCを元に戻し、サイクル終端処理を行わずに例外を再送出します。
        """
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        try:
            opcode = self._fetch()
            operation = self._decode(opcode)
            self._update_pc(operation)
            self._execute(operation)
        except Chip8Error:
            # 各命令は状態変更前に範囲検証を行うため、PCさえ戻せばサイクル開始前の状態になる
            self._state.pc = initial_pc
            self._bus.get_and_clear_activity_log()
            raise

        self._end_cycle(operation)
        snapshot = self._create_snapshot(initial_pc, operation)
        if self._trace_hook is not None:
            self._trace_hook(snapshot)
        return snapshot

    # @intent:responsibility 命令実行前にPCを更新します。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    # @intent:responsibility 命令の種類に関わらず、サイクルの最後に必ず行う処理（タイマ更新など）。
    def _end_cycle(self, operation: Operation) -> None:
        pass

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._cycle_count += operation.cycle_count

        symbol_info = operation.mnemonic
        if operation.operands:
            symbol_info += " " + ", ".join(operation.operands)

        return Snapshot(
            state=self._state.copy(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=symbol_info),
            bus_activity=bus_activity
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        pass
