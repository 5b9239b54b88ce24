"""
Application Initialization
==========================
This module wires the Model-View-Controller pieces together and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Instantiates the composition Store (controller state).
3. Instantiates the Main Window (view), passing the store in.
"""
import logging
import sys

from soiltexture.application import create_app
from soiltexture.config import LOG_FILE, LOG_LEVEL
from soiltexture.controller.store import Store
from soiltexture.logging_config import install_qt_message_handler, setup_logging
from soiltexture.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # Set SOILTEXTURE_LOG_LEVEL=DEBUG to trace every state change
    setup_logging(level=LOG_LEVEL, log_file=LOG_FILE)
    install_qt_message_handler()

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the controller state
    store = Store()
    logger.info("Starting at %s (%s).", store.composition, store.texture_class)

    # 4. Initialize the Main Window, passing the store
    window = MainWindow(store)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
