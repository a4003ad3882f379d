# game_query/logger.py

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from game_query.config import Config
from game_query.singleton import Singleton

APP_LOGGER_NAME = "app"

# ANSI цвета
COLORS = {
    'DEBUG': '\033[36m',  # Cyan
    'INFO': '\033[32m',  # Green
    'WARNING': '\033[33m',  # Yellow
    'ERROR': '\033[31m',  # Red
    'CRITICAL': '\033[1;31m',  # Bold red
    'RESET': '\033[0m'
}

LOG_FORMAT = "[%(asctime)s][%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):

    def format(self, record):
        color = COLORS.get(record.levelname, COLORS['RESET'])
        # Подменяем формат только на время форматирования одной записи
        orig_fmt = self._style._fmt
        try:
            self._style._fmt = f"{color}{orig_fmt}{COLORS['RESET']}"
            return super().format(record)
        finally:
            self._style._fmt = orig_fmt


class Logger(Singleton):
    """
    Единый логгер приложения. Использование:
      logger = Logger(config)
      logger.info("Hello")

    Дочерние логгеры библиотеки ("app.ServerQuery", "app.UdpTransport")
    пишут в те же обработчики.
    """

    def __init__(self, config=None):
        # Защита от повторной инициализации
        if hasattr(self, '_initialized'):
            return

        config = config or Config()
        log_file = config.get("LOG.LOG_FILE", "./logs/app.log")
        level_file = config.get("LOG.LEVEL_FILE_LOG", "INFO")
        level_console = config.get("LOG.LEVEL_CONSOLE_LOG", "INFO")
        main_level = config.get("LOG.MAIN_LEVEL_LOG", "INFO")

        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        self._logger = logging.getLogger(APP_LOGGER_NAME)
        self._logger.setLevel(getattr(logging, main_level))
        self._logger.propagate = False

        file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        console_formatter = ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        file_handler = TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=14,  # 2 недели
            encoding="utf-8"
        )
        file_handler.setLevel(getattr(logging, level_file))
        file_handler.setFormatter(file_formatter)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, level_console))
        console_handler.setFormatter(console_formatter)

        # Добавляем только если ещё не добавлены
        if not self._logger.handlers:
            self._logger.addHandler(file_handler)
            self._logger.addHandler(console_handler)

        self._initialized = True

    def info(self, msg, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)


class LoggerMixin:
    """
    Даёт классу атрибут self.logger - дочерний логгер "app.<ИмяКласса>".
    Если логгер передан явно, используется он.
    """

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger(f"{APP_LOGGER_NAME}.{type(self).__name__}")
