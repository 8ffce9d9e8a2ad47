"""Desktop entrypoint for the simulation viewer."""

from __future__ import annotations

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from configs.loader import DEFAULT_CONFIG_PATH, ConfigLoader
from core.errors import RenderTargetUnavailable
from gui.main_window import MainWindow
from main import build_context

LOGGER = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="forager-gui")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="YAML or JSON simulation config")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    config = ConfigLoader.load(args.config)
    app = QApplication.instance() or QApplication(sys.argv)
    context = build_context(config)

    window = MainWindow(context)
    window.show()
    try:
        window.start()
    except RenderTargetUnavailable:
        LOGGER.error("Cannot obtain a drawing surface for the simulation")
        window.close()
        return 1
    return int(app.exec())


if __name__ == "__main__":
    raise SystemExit(main())
