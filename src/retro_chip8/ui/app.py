# src/retro_chip8/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
設定とROMを読み込み、CPUを構築してメインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import SystemConfig
from retro_chip8.core.snapshot import Snapshot
from .main_window import MainWindow

trace_logger = logging.getLogger("retro_chip8.trace")

# @intent:responsibility 1サイクル分のSnapshotを1行のDEBUGログとして出力するトレースフック。
def log_snapshot(snapshot: Snapshot) -> None:
    state = snapshot.state
    registers = " ".join(f"V{idx:X}:{value:02X}" for idx, value in enumerate(state.v))
    trace_logger.debug(
        "%s %-18s %s I:%03X SP:%X DT:%02X ST:%02X",
        snapshot.operation.opcode_hex, snapshot.metadata.symbol_info, registers,
        state.i, state.sp, state.delay_timer, state.sound_timer,
    )

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="path to the ROM file to run")
    parser.add_argument("--config", help="YAML system/host configuration file")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="stop on unknown instructions instead of ignoring them")
    parser.add_argument("--trace", action="store_true", default=None,
                        help="log every executed instruction at DEBUG level")
    parser.add_argument("--scale", type=int, help="window pixels per CHIP-8 pixel")
    return parser

# @intent:responsibility コマンドライン引数で設定ファイルの値を上書きします。
def apply_overrides(config: SystemConfig, args: argparse.Namespace) -> SystemConfig:
    if args.strict is not None:
        config.host.strict = args.strict
    if args.trace is not None:
        config.host.trace = args.trace
    if args.scale is not None:
        config.host.scale = args.scale
    return config

# @intent:responsibility アプリケーションを起動し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    apply_overrides(config, args)

    logging.basicConfig(
        level=logging.DEBUG if config.host.trace else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cpu = SystemBuilder().build_system(config)
    if config.host.trace:
        cpu.set_trace_hook(log_snapshot)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(cpu, config.host)
    if not main_win.load_rom(args.rom):
        return 1
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
