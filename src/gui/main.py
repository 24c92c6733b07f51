"""
Main entry point for the contact form GUI application.
"""

import sys

from PySide6.QtWidgets import QApplication

from core.config import setup_qsettings
from core.error_handler import init_logging, setup_error_handling
from core.errors import ConfigError
from core.settings import FormConfig, load_form_config
from gui.main_window import MainWindow


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)
    setup_qsettings()

    error_handler = setup_error_handling()
    try:
        config = load_form_config()
    except ConfigError as e:
        error_handler.handle(e)
        config = FormConfig()
    init_logging(config.log_level)

    window = MainWindow(config)
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
