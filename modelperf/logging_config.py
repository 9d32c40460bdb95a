import datetime
import logging
from pathlib import Path
from typing import TextIO
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .settings import settings


LOGGER_NAME = "modelperf"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

_LOGGING_CONFIGURED = False


class LocalTimezoneFormatter(logging.Formatter):
    """
    Formatter that renders timestamps in LOG_TIMEZONE, falling back to the
    host's local zone when it is unset or unknown.
    """

    def __init__(self, *args, timezone_name: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._tzinfo = _resolve_tzinfo(timezone_name)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.datetime.fromtimestamp(record.created, tz=self._tzinfo)
        return stamp.strftime(datefmt) if datefmt else stamp.isoformat(timespec="milliseconds")


def _resolve_tzinfo(timezone_name: str | None) -> datetime.tzinfo:
    if timezone_name:
        try:
            return ZoneInfo(timezone_name)
        except ZoneInfoNotFoundError:
            pass
    return datetime.datetime.now().astimezone().tzinfo or datetime.timezone.utc


class DailyFileHandler(logging.Handler):
    """
    Writes <log_dir>/modelperf-YYYY-MM-DD.log, switching files at midnight
    and pruning all but the newest `backup_count` files.
    """

    def __init__(self, log_dir: Path, backup_count: int = 7) -> None:
        super().__init__()
        self.log_dir = log_dir
        self.backup_count = backup_count
        self._day: datetime.date | None = None
        self._stream: TextIO | None = None
        self._open_for(datetime.date.today())

    def _open_for(self, day: datetime.date) -> None:
        self._close_stream()
        self.log_dir.mkdir(parents=True, exist_ok=True)
        path = self.log_dir / f"{LOGGER_NAME}-{day.isoformat()}.log"
        self._stream = path.open("a", encoding="utf-8")
        self._day = day
        self._prune()

    def _prune(self) -> None:
        if self.backup_count <= 0:
            return
        files = sorted(self.log_dir.glob(f"{LOGGER_NAME}-*.log"))
        for stale in files[: max(len(files) - self.backup_count, 0)]:
            stale.unlink(missing_ok=True)

    def _close_stream(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            today = datetime.date.today()
            if today != self._day:
                self._open_for(today)
            self._stream.write(self.format(record) + "\n")
            self._stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            self._close_stream()
        finally:
            self.release()
        super().close()


def setup_logging(log_dir: Path | None = None) -> None:
    """
    Configure application logging.

    Records from the "modelperf" logger go to the daily file under LOG_DIR;
    a console handler on the root logger keeps uvicorn output visible.
    Repeated calls are no-ops.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    formatter = LocalTimezoneFormatter(LOG_FORMAT, timezone_name=settings.log_timezone)

    file_handler = DailyFileHandler(log_dir or Path(settings.log_dir))
    file_handler.setFormatter(formatter)
    file_handler.addFilter(lambda record: record.name.startswith(LOGGER_NAME))

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)
    app_logger.addHandler(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not any(type(h) is logging.StreamHandler for h in root_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    _LOGGING_CONFIGURED = True


logger = logging.getLogger(LOGGER_NAME)
