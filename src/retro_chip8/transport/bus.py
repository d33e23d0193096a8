# retro_chip8/transport/bus.py
"""
Transport Layer (共通バス)

このモジュールは、システム全体のメモリアドレス空間を抽象化し、
読み書きアクセスを適切なデバイスに委譲する責務を負います。
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Tuple
from dataclasses import dataclass
from enum import Enum
import logging

from retro_chip8.core.errors import OutOfBoundsError

logger = logging.getLogger(__name__)

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class BusAccess:
    """
    バス上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: BusAccessType

# @intent:responsibility バスの抽象デバイスインターフェースを定義します。
class Device(ABC):
    """
    バスに接続されるデバイスの抽象基底クラス。
    全てのデバイスはreadとwriteのインターフェースを実装する必要があります。
    """
    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出す責務を負います。
    # @intent:pre-condition アドレスはデバイスの有効範囲内である必要があります。
    @abstractmethod
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アドレスはデバイス内でのオフセットとして扱われます。
        """
        pass

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    @abstractmethod
    def write(self, address: int, data: int) -> None:
        pass

    # @intent:responsibility デバイスの内容を初期状態に戻します。状態を持たないデバイスは何もしません。
    def clear(self) -> None:
        pass

# @intent:responsibility 基本的なRAMデバイスの機能を提供します。
class RAM(Device):
    """
    テストおよび基本的なメモリ操作のためのRAMデバイス。
    """
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def read(self, address: int) -> int:
        if not 0 <= address < self._size:
            raise OutOfBoundsError(address, f"Address {address} out of bounds for {type(self).__name__} of size {self._size}.")
        return self._memory[address]

    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise OutOfBoundsError(address, f"Address {address} out of bounds for {type(self).__name__} of size {self._size}.")
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    def clear(self) -> None:
        self._memory[:] = bytes(self._size)

    def get_size(self) -> int:
        return self._size

# @intent:responsibility 読み込み専用メモリ(ROM)の機能を提供します。
class ROM(RAM):
    """
    読み込み専用メモリデバイス。
    通常の書き込み操作は無視されますが、初期化用の load_data メソッド経由では書き込み可能です。
    """
    # @intent:rationale 実機のROMと同様に、実行中の書き込みは例外ではなく無視として扱います。
    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise OutOfBoundsError(address, f"Address {address} out of bounds for ROM of size {self._size}.")
        logger.debug("Ignored write of %02X to ROM offset %#05x", data, address)

    # @intent:responsibility ROMの内容を初期化するためのバックドアメソッドです。
    def load_data(self, address: int, data: int) -> None:
        super().write(address, data)

# @intent:responsibility メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
# @intent:rationale バスの全てのアクセスを記録し、Snapshotに含めることでシステムの観測可能性を高めます。
class Bus:
    """
    メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチする共通バス。
    バス上で行われた全てのメモリアクセスを記録する機能を提供します。
    """
    def __init__(self):
        # メモリマップ: (start_address, end_address, device) のタプルリスト
        self._memory_map: List[Tuple[int, int, Device]] = []
        self._bus_activity_log: List[BusAccess] = []

    def _log_access(self, address: int, data: int, access_type: BusAccessType) -> None:
        self._bus_activity_log.append(BusAccess(address=address, data=data, access_type=access_type))

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    # @intent:responsibility 指定されたアドレス範囲にデバイスを登録します。
    # @intent:pre-condition start_address <= end_addressかつ非負であり、deviceはDeviceのインスタンスである必要があります。
    # @intent:rationale アドレス範囲の重複チェックは行いません。これはBusの責務ではなく、システム構築側で管理します。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")

        if isinstance(device, RAM):
            expected_size = end_address - start_address + 1
            if device.get_size() != expected_size:
                raise ValueError(
                    f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                    f"the specified address range size ({expected_size} bytes)."
                )

        self._memory_map.append((start_address, end_address, device))

    # @intent:responsibility 登録済みのメモリマップを返します。
    def get_memory_map(self) -> List[Tuple[int, int, Device]]:
        return sorted(self._memory_map, key=lambda entry: entry[0])

    # @intent:responsibility 指定されたアドレスに対応するデバイスとオフセットを検索します。
    # @intent:post-condition デバイスが見つからなかった場合、OutOfBoundsErrorを発生させます。
    def _find_device(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise OutOfBoundsError(address, f"Address {address:#06x} not mapped to any device.")

    # @intent:responsibility 連続したアドレス範囲が全てマップされているかを検証します。
    # @intent:pre-condition 命令は状態を変更する前にこれを呼び出します。
    def check_range(self, address: int, length: int) -> None:
        """
        address から length バイトの範囲が全てマップ済みであることを確認します。
        範囲外のアドレスが含まれる場合は OutOfBoundsError を送出します。
        """
        for addr in range(address, address + length):
            self._find_device(addr)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。アクセスはログに記録されます。
    def read(self, address: int) -> int:
        device, offset = self._find_device(address)
        data = device.read(offset)
        self._log_access(address, data, BusAccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        UIなどのインスペクタ用。
        """
        device, offset = self._find_device(address)
        return device.read(offset)

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレスに8bitのデータを書き込みます。
        ROM領域への書き込みはROMデバイスにより無視されます（アクセス自体はログに記録されます）。
        """
        device, offset = self._find_device(address)
        device.write(offset, data)
        self._log_access(address, data, BusAccessType.WRITE)

    # @intent:responsibility ローダー用の書き込み口。ROMであっても内容を書き換え、ログには記録しません。
    def load(self, address: int, data: Iterable[int]) -> None:
        for i, value in enumerate(data):
            device, offset = self._find_device(address + i)
            if isinstance(device, ROM):
                device.load_data(offset, value)
            else:
                device.write(offset, value)

    # @intent:responsibility 全てのデバイスの内容をクリアします。
    def clear(self) -> None:
        for _, _, device in self._memory_map:
            device.clear()
        self._bus_activity_log = []
