import logging
from logging.handlers import RotatingFileHandler
from typing import Optional, Union


DEFAULT_FORMAT = "%(asctime)s  [%(levelname)s]  %(name)s › %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"

# Libraries that get loud at DEBUG
NOISY_LOGGERS: tuple[str, ...] = (
    "asyncio",
)


class TruncateLongMsgs(logging.Filter):
    """Truncates very long log messages (echoed user input) to keep the console readable."""

    def __init__(self, max_len: int = 300):
        super().__init__()
        self.max_len = max_len

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except (TypeError, ValueError):
            # Bad %-args: let the handler report it as usual.
            return True
        if self.max_len and len(msg) > self.max_len:
            record.msg = msg[: self.max_len] + " …(truncated)"
            record.args = ()
        return True


_configured = False  # guard against double-initialisation


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(
    *,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    console_truncate_len: int = 300,
) -> None:
    """
    Configure root logging once. Only entry points (the CLI) call this;
    library modules just use `logging.getLogger(__name__)`.

    `level` accepts a logging constant or a name such as "DEBUG". The console
    shows truncated messages; `log_file` adds a rotating file with full ones.
    """
    global _configured
    if _configured:
        return

    level = _as_level(level)
    root = logging.getLogger()
    # The entry point owns logging: drop whatever handlers are already attached.
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level)
    formatter = logging.Formatter(fmt=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    if console_truncate_len > 0:
        ch.addFilter(TruncateLongMsgs(console_truncate_len))
    root.addHandler(ch)

    if log_file:
        fh = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
        fh.setFormatter(formatter)
        root.addHandler(fh)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).debug("🚀 Logging initialised (level=%s)", logging.getLevelName(level))
