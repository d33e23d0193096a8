# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
ヘッダやチェックサムを持たない生のバイナリファイルを読み込み、CPUにロードします。
"""
import logging
import os

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.memory import MAX_PROGRAM_SIZE
from retro_chip8.core.errors import ProgramTooLargeError

logger = logging.getLogger(__name__)

class RomLoader:
    """
    生バイナリ形式のROMファイルをCHIP-8のプログラム領域にロードするローダー。
    """
    # @intent:responsibility ROMファイルの内容をバイト列として返します。
    # @intent:rationale 巨大なファイルを全て読み込まないよう、上限+1バイトまでで読み込みを打ち切ります。
    def read_rom(self, file_path: str) -> bytes:
        with open(file_path, 'rb') as f:
            data = f.read(MAX_PROGRAM_SIZE + 1)
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(os.path.getsize(file_path), MAX_PROGRAM_SIZE)
        return data

    # @intent:responsibility ROMファイルをCPUにロードし、ロードしたバイト数を返します。
    # @intent:pre-condition reset=True の場合、ファイルの読み込みに成功してから cpu.reset() を呼びます。
    #                       読み込みに失敗した場合、CPUの状態は変化しません。
    def load_rom(self, file_path: str, cpu: Chip8Cpu, reset: bool = False) -> int:
        data = self.read_rom(file_path)
        if reset:
            cpu.reset()
        cpu.load_program(data, file_path)
        logger.info("Loaded ROM '%s' (%d bytes)", cpu.program_name, len(data))
        return len(data)
