"""
UIフォント管理モジュール。

レジスタ表示などで使用する等幅フォントを、実行環境に応じて選択します。
"""
from functools import lru_cache

from PySide6.QtGui import QFontDatabase

PREFERRED_MONOSPACE_FONTS = ("Consolas", "Menlo", "Monaco", "DejaVu Sans Mono", "Courier New")

# @intent:responsibility 利用可能な最適な等幅フォントファミリー名を返します。
# @intent:rationale フォントDBの問い合わせはQApplication生成後に一度だけ行えば十分なため、結果をキャッシュします。
@lru_cache(maxsize=1)
def get_monospace_font_family() -> str:
    available_families = set(QFontDatabase.families())
    for font in PREFERRED_MONOSPACE_FONTS:
        if font in available_families:
            return font
    return QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
