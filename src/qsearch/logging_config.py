"""
Logging for the qsearch CLI.

Each run writes its own log file next to QSEARCH_LOG_FILE, named
<stem>_<YYYYmmdd_HHMMSS>.log; only the newest SESSION_LOGS_KEPT survive.
The console gets warnings and progress on stderr, stdout is left to
query results.
"""
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

SESSION_LOGS_KEPT = 5
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 3

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'


def prune_session_logs(log_path: Path, keep: int = SESSION_LOGS_KEPT) -> List[Path]:
    """
    Delete all but the newest keep-1 session logs for log_path.

    Leaves room for the log file the current run is about to create.

    Returns:
        Session log files that were removed
    """
    session_logs = sorted(log_path.parent.glob(f"{log_path.stem}_*.log"), reverse=True)
    removed = []
    for old_log in session_logs[max(keep - 1, 0):]:
        try:
            old_log.unlink()
        except FileNotFoundError:
            continue
        removed.append(old_log)
    return removed


def setup_logging(log_file: str = "logs/qsearch.log", console_level: int = logging.INFO, file_level: int = logging.DEBUG) -> Path:
    """
    Route qsearch logging to the console and to a per-run log file.

    Args:
        log_file: Base log path; the session file is derived from it
        console_level: Threshold for stderr output
        file_level: Threshold for the session file

    Returns:
        Path of the session log file
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    prune_session_logs(log_path)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_log = log_path.parent / f"{log_path.stem}_{timestamp}.log"

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = RotatingFileHandler(
        session_log,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding='utf-8',
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

    root_logger = logging.getLogger()
    root_logger.setLevel(min(console_level, file_level))
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug(f"Session log: {session_log}")
    return session_log
