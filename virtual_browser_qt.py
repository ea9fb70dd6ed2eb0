import faulthandler
import logging
import sys

faulthandler.enable()  # Dump traceback on segfault/crash to stderr

try:
    from PySide6.QtWidgets import QApplication
except ImportError:
    print("PySide6 is required. Install with: pip install PySide6")
    raise

from vbrowser.constants import APP_NAME
from vbrowser.infra.config_store import Config
from vbrowser_qt.window import BrowserWindow


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    config = Config()
    window = BrowserWindow(config=config, initial_urls=app.arguments()[1:])
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
