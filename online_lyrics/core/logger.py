"""
Logging configuration for online-lyrics.

This module sets up the logging system with multiple outputs:
    - Console: Colored, tqdm-compatible output (INFO, or DEBUG with --verbose)
    - log_full_{timestamp}.log: Complete log of all events (DEBUG and above)
    - log_errors_{timestamp}.log: Only ERROR and CRITICAL level messages
    - lyrics_failures_{timestamp}.log: Tracks for which no lyrics were found

File outputs are only created when a log directory is given. Library use
(no setup_logging() call) produces no output beyond Python's defaults.

Usage:
    from online_lyrics.core.logger import setup_logging, get_logger

    setup_logging(Path("logs"))      # Call once at startup
    logger = get_logger(__name__)    # Get logger for each module

    logger.info("Looking up lyrics")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that prefixes the level name with an ANSI color.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Console handler that writes through tqdm.write().

    Batch lookups show a tqdm progress bar on stderr; plain stream writes
    would tear it. tqdm.write() prints above any active bar instead.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream or sys.stderr)
        except Exception:
            self.handleError(record)


class LyricsFailedTrackHandler(logging.Handler):
    """
    Handler that collects lookup misses into a human-readable report.

    Only records carrying the 'lyrics_failed_title' extra field are written;
    everything else is ignored. Output format:

        Song Title - Artist Name [Album Name]
        reason: no candidate above similarity threshold

    Use log_lyrics_failure() to emit records with the right fields.

    Attributes:
        report_path: Path to the lyrics_failures log file.
        report_file: Open file handle (None until open() is called).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "lyrics_failed_title"):
            return

        if self.report_file is None:
            return

        try:
            title = getattr(record, "lyrics_failed_title", "Unknown")
            artist = getattr(record, "lyrics_failed_artist", "") or "Unknown"
            album = getattr(record, "lyrics_failed_album", "")
            reason = getattr(record, "lyrics_failed_reason", "")

            line = f"{title} - {artist}"
            if album:
                line += f" [{album}]"

            self.report_file.write(f"{line}\n")
            self.report_file.write(f"reason: {reason}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path | None = None, verbose: bool = False) -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, from the
    main thread, before any lookups run.

    Args:
        log_dir: Directory where log files will be created.
                 If None, only the console handler is installed.
        verbose: If True, the console shows DEBUG records (per-candidate
                 similarity ratios, request URLs).

    Behavior:
        1. Configure root logger level to DEBUG and drop existing handlers
        2. Add colored console handler (TqdmLoggingHandler)
        3. If log_dir is given:
           a. Create the directory
           b. Add full DEBUG file log
           c. Add ERROR-only file log
           d. Add lyrics failure report
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    full_handler = logging.FileHandler(
        log_dir / f"log_full_{timestamp}.log", mode="w", encoding="utf-8"
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_handler = logging.FileHandler(
        log_dir / f"log_errors_{timestamp}.log", mode="w", encoding="utf-8"
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    lyrics_handler = LyricsFailedTrackHandler(log_dir / f"lyrics_failures_{timestamp}.log")
    lyrics_handler.open()
    root_logger.addHandler(lyrics_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'online_lyrics.matching.ranker'.

    Returns:
        logging.Logger configured by setup_logging().
    """
    return logging.getLogger(name)


def log_lyrics_failure(
    logger: logging.Logger,
    title: str,
    artist: str,
    album: str = "",
    reason: str = "no lyrics found"
) -> None:
    """
    Log a lookup miss so it lands in the lyrics failure report.

    Args:
        logger: Logger to emit on (usually the caller's module logger).
        title: Track title that was looked up.
        artist: Artist string as given by the caller.
        album: Album name, may be empty.
        reason: Short explanation shown in the report.
    """
    logger.warning(
        f"No lyrics found for: {artist} - {title} ({reason})",
        extra={
            "lyrics_failed_title": title,
            "lyrics_failed_artist": artist,
            "lyrics_failed_album": album,
            "lyrics_failed_reason": reason,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove all root handlers.

    Typically called in a finally block at CLI exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        root_logger.removeHandler(handler)
