#!/usr/bin/env python
import logging


class Logger:
    """Thin wrapper around a `logging.Logger` below the ``pyargscan`` namespace.

    Remembers the last message, so callers can ask what went wrong without
    installing their own handler.
    """

    LOGGER_BASE_NAME = "pyargscan"
    FORMAT = "[%(levelname)s (%(name)s)]: %(message)s"

    LEVEL_MAP = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARN,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    def __init__(self, name, level=None):
        self.logger = logging.getLogger(f"{self.LOGGER_BASE_NAME}.{name}")
        # Loggers are shared by name.
        if level is not None:
            self.setLevel(level)
        if not any(getattr(h, "_pyargscan_handler", False) for h in self.logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(self.FORMAT))
            handler._pyargscan_handler = True
            self.logger.addHandler(handler)
        self.lastMessage = None
        self.lastSeverity = None

    @property
    def name(self):
        return self.logger.name

    def getLastError(self):
        result = (self.lastSeverity, self.lastMessage)
        self.lastSeverity = self.lastMessage = None
        return result

    def log(self, message, level):
        self.lastSeverity = level
        self.lastMessage = message
        self.logger.log(level, "{0}".format(message))

    def info(self, message):
        self.log(message, logging.INFO)

    def warn(self, message):
        self.log(message, logging.WARN)

    def debug(self, message):
        self.log(message, logging.DEBUG)

    def error(self, message):
        self.log(message, logging.ERROR)

    def critical(self, message):
        self.log(message, logging.CRITICAL)

    def isEnabledFor(self, level):
        return self.logger.isEnabledFor(level)

    def verbose(self):
        self.logger.setLevel(logging.DEBUG)

    def silent(self):
        self.logger.setLevel(logging.CRITICAL)

    def setLevel(self, level):
        if isinstance(level, str):
            level = self.LEVEL_MAP.get(level.upper(), logging.WARN)
        self.logger.setLevel(level)
