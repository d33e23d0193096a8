import os

# Qtのウィジェットテストを表示環境のないCIでも実行できるようにする
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
