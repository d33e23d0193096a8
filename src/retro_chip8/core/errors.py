# retro_chip8/core/errors.py
"""
エラー定義

インタプリタ実行中に発生しうる致命的な状態を例外として定義します。
step() はこれらを送出した時点でサイクルを中断し、ホスト側に判断を委ねます。
"""

# @intent:responsibility 本パッケージが送出する全ての例外の基底クラス。
class Chip8Error(Exception):
    pass

# @intent:responsibility アドレス空間外へのアクセスを表します。
# @intent:note IndexError としても捕捉できます。
class OutOfBoundsError(Chip8Error, IndexError):
    def __init__(self, address: int, message: str = ""):
        self.address = address
        super().__init__(message or f"Address {address:#05x} is out of bounds.")

# @intent:responsibility 16段を超えるサブルーチン呼び出しを表します。
class StackOverflowError(Chip8Error):
    pass

# @intent:responsibility 空のスタックからの復帰を表します。
class StackUnderflowError(Chip8Error):
    pass

# @intent:responsibility プログラム領域に収まらないROMのロードを表します。
class ProgramTooLargeError(Chip8Error, ValueError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Program of {size} bytes exceeds the {limit} bytes available.")

# @intent:responsibility 未定義のサブオペコードを表します。strictモード時のみ送出されます。
class UnknownEncodingError(Chip8Error):
    def __init__(self, word: int, address: int):
        self.word = word
        self.address = address
        super().__init__(f"Unknown instruction {word:04X} at {address:#05x}.")
