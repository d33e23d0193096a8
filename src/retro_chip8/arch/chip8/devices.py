# src/retro_chip8/arch/chip8/devices.py
"""
CHIP-8 の周辺デバイス（フレームバッファと16キーのキーパッド）。

どちらもホスト側と共有される唯一の資源です。ホストは step() の合間に
キーパッドへ書き込み、フレームバッファを読み出します。
"""
from array import array
from typing import Optional, Sequence, Set, Tuple

from retro_chip8.core.errors import OutOfBoundsError

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
PIXEL_ON = 0xFFFFFFFF
PIXEL_OFF = 0x00000000

KEY_COUNT = 16

# @intent:responsibility 64x32のモノクロフレームバッファを、1ピクセル32bitの連続領域として保持します。
# @intent:rationale ストリーミングテクスチャ等にそのまま転送できるよう、点灯ピクセルは全ビット1で表現します。
class Display:
    """
    64x32 のフレームバッファ。
    pixels は行優先の連続した32bit値の配列で、pitch は1行あたりのバイト数です。
    """
    def __init__(self):
        self._pixels = array('I', [PIXEL_OFF]) * (SCREEN_WIDTH * SCREEN_HEIGHT)

    @property
    def width(self) -> int:
        return SCREEN_WIDTH

    @property
    def height(self) -> int:
        return SCREEN_HEIGHT

    @property
    def pixels(self) -> array:
        return self._pixels

    @property
    def pitch(self) -> int:
        return self._pixels.itemsize * SCREEN_WIDTH

    def clear(self) -> None:
        self._pixels[:] = array('I', [PIXEL_OFF]) * len(self._pixels)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT):
            raise OutOfBoundsError(y * SCREEN_WIDTH + x, f"Pixel ({x}, {y}) is outside the {SCREEN_WIDTH}x{SCREEN_HEIGHT} screen.")
        return y * SCREEN_WIDTH + x

    def is_on(self, x: int, y: int) -> bool:
        return self._pixels[self._index(x, y)] == PIXEL_ON

    # @intent:responsibility 指定ピクセルの点灯状態をXORで反転し、反転前に点灯していたかを返します。
    def toggle(self, x: int, y: int) -> bool:
        idx = self._index(x, y)
        collided = self._pixels[idx] == PIXEL_ON
        self._pixels[idx] ^= PIXEL_ON
        return collided

    # @intent:responsibility 点灯しているピクセル座標の集合を返します。
    def lit_pixels(self) -> Set[Tuple[int, int]]:
        return {
            (idx % SCREEN_WIDTH, idx // SCREEN_WIDTH)
            for idx, value in enumerate(self._pixels) if value == PIXEL_ON
        }

    # @intent:responsibility テクスチャ転送用に、フレームバッファの生バイト列を返します。
    def as_bytes(self) -> bytes:
        return self._pixels.tobytes()

# @intent:responsibility 16個の16進キー（0x0-0xF）の押下状態を保持します。
class Keypad:
    def __init__(self):
        self._keys = [False] * KEY_COUNT

    def _check(self, key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise OutOfBoundsError(key, f"Key {key:#x} is not on the 16-key keypad.")

    def press(self, key: int) -> None:
        self._check(key)
        self._keys[key] = True

    def release(self, key: int) -> None:
        self._check(key)
        self._keys[key] = False

    # @intent:responsibility ホストから16要素の押下状態ベクタを一括で書き込みます。
    def set_keys(self, states: Sequence) -> None:
        if len(states) != KEY_COUNT:
            raise ValueError(f"Expected {KEY_COUNT} key states, got {len(states)}.")
        self._keys = [bool(state) for state in states]

    def is_pressed(self, key: int) -> bool:
        self._check(key)
        return self._keys[key]

    # @intent:responsibility 押下されているキーのうち最小のインデックスを返します。無ければNone。
    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def clear(self) -> None:
        self._keys = [False] * KEY_COUNT

    @property
    def states(self) -> Tuple[bool, ...]:
        return tuple(self._keys)
