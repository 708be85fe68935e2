#!/usr/bin/env python3

import logging
import sys

from PyQt6.QtWidgets import QApplication

from core.args import parse_args
from core.folder_setup import folder_setup
from gui.main_window import EditorWindow
from gui.theme import GLOBAL_STYLESHEET

log = logging.getLogger()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
    )

    folder_setup.create_required_folders()

    app = QApplication(sys.argv[:1])
    font = app.font()
    font.setPointSize(10)
    app.setFont(font)
    app.setStyleSheet(GLOBAL_STYLESHEET)

    window = EditorWindow(args.dictionary)
    if args.paths:
        window.load_paths(args.paths)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
