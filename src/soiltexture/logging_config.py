"""
Logging Configuration
Sets up the package logger and routes Qt's own diagnostics into it.
"""
import logging
import sys
from typing import Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'soiltexture' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("soiltexture")
    logger.setLevel(level)

    # Re-running setup (e.g. from tests) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized (level=%s).", logging.getLevelName(level))


def install_qt_message_handler() -> None:
    """Forward qDebug/qWarning output of Qt into the 'soiltexture.qt' logger."""
    qt_logger = logging.getLogger("soiltexture.qt")

    def _handler(msg_type: QtMsgType, context, message: str) -> None:
        qt_logger.log(_QT_LEVELS.get(msg_type, logging.INFO), message)

    qInstallMessageHandler(_handler)
