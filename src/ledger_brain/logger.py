import logging
import logging.config
import os


class ColourizedFormatter(logging.Formatter):
    """
    Formatter that colours the level name with ANSI codes.

    Colours are skipped when NO_COLOR is set.
    """
    GREY = "\x1b[90m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colour = not os.getenv("NO_COLOR")

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colour or record.levelno not in self.LEVEL_COLORS:
            return super().format(record)

        orig_levelname = record.levelname
        record.levelname = f"{self.LEVEL_COLORS[record.levelno]}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = orig_levelname


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "ledger_brain.log"


def get_logging_config() -> dict:
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = os.getenv("LOG_DIR")
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "default",
        },
    }
    root_handlers = ["console"]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": os.path.join(log_dir, LOG_FILENAME),
            "encoding": "utf-8",
            "formatter": "plain",
        }
        root_handlers.append("file")

    uvicorn_logger = {"handlers": root_handlers, "level": "INFO", "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "ledger_brain.logger.ColourizedFormatter",
                "fmt": LOG_FORMAT,
            },
            "plain": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": root_handlers,
                "level": log_level_name,
            },
            "uvicorn": uvicorn_logger,
            "uvicorn.error": uvicorn_logger,
            "uvicorn.access": uvicorn_logger,
            "httpx": {"level": "WARNING"},
            "openai": {"level": "WARNING"},
        },
    }


def setup_logging() -> None:
    logging.config.dictConfig(get_logging_config())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
