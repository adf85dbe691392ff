"""
Logging for srtkit.

Library modules log through get_logger(), which carries only a NullHandler
and so never touches the console or the filesystem. Applications (the CLI)
call setup_logging() to attach Rich console output and a rotating log file.
"""
import os
import logging
import shutil
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "srtkit";
MAX_LOG_BYTES = 5 * 1024 * 1024;  # 5MB

logging.getLogger( LOGGER_NAME ).addHandler( logging.NullHandler() );


def get_logger() -> logging.Logger:
    """Get the srtkit logger; silent until setup_logging() runs."""
    return logging.getLogger( LOGGER_NAME );


def _rotate_oversized_log( log_file: Path ):
    """Move a log file over 5MB aside with a timestamped name."""
    if log_file.exists() and log_file.stat().st_size > MAX_LOG_BYTES:
        timestamp = datetime.now().isoformat().replace( ":", "-" );
        shutil.move( str( log_file ), str( log_file.with_name( f"{log_file.stem}.{timestamp}.log" ) ) );


def setup_logging( debug: bool = False, log_dir: Optional[Path] = None ) -> logging.Logger:
    """
    Attach console and file handlers to the srtkit logger.

    Args:
        debug: Show DEBUG records (and source paths) on the console
        log_dir: Directory for srtkit.log (default: $SRTKIT_LOG_DIR or ./logs)

    Returns:
        The configured logger
    """
    logs_dir = Path( log_dir or os.getenv( "SRTKIT_LOG_DIR", "logs" ) );
    logs_dir.mkdir( parents=True, exist_ok=True );
    log_file = logs_dir / f"{LOGGER_NAME}.log";
    _rotate_oversized_log( log_file );

    logger = get_logger();
    logger.setLevel( logging.DEBUG );
    logger.propagate = False;

    # Reconfiguration replaces handlers rather than stacking them
    for handler in list( logger.handlers ):
        handler.close();
    logger.handlers.clear();

    # Console on stderr, so SRT written to stdout stays clean
    console_handler = RichHandler(
        console=Console( stderr=True ),
        rich_tracebacks=True,
        show_time=True,
        show_path=debug
    );
    console_handler.setLevel( logging.DEBUG if debug else logging.INFO );
    console_handler.setFormatter( logging.Formatter( "%(message)s" ) );
    logger.addHandler( console_handler );

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=5,
        encoding="utf-8"
    );
    file_handler.setLevel( logging.DEBUG );
    file_handler.setFormatter( logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ) );
    logger.addHandler( file_handler );

    return logger;
