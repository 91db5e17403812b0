"""
Run logging setup.

One call per CLI run. The console sink writes to stderr because stdout
carries the payload JSON; a DEBUG file sink is added when a log directory
is given. Each run opens with a short header naming the package version,
the command line and whatever run context the caller passes in.

Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger

from menumine import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors for the levels the pipeline emits
LEVEL_COLORS = {
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def setup_run_logger(
    run_name: str,
    log_dir: Optional[Path] = None,
    run_context: Optional[Mapping[str, object]] = None,
    console_level: str = "INFO",
) -> Optional[Path]:
    """
    Replace any existing sinks with this run's console and file sinks.

    Args:
        run_name: Log file stem and header label (e.g., "pipeline")
        log_dir: Directory for the log file; None logs to the console only
        run_context: Settings worth recording in the header (keyword, budget, ...)
        console_level: Minimum level shown on stderr

    Returns:
        Path to the log file, or None when no directory was given

    Example:
        from menumine.utils.logger import setup_run_logger

        log_file = setup_run_logger(
            "pipeline",
            Path("outs/logs/run_20260210_070000"),
            run_context={"Keyword": "\\blunch\\b", "Budget": 1900},
        )
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(exist_ok=True, parents=True)
        log_file = log_dir / f"{run_name}.log"
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")

    log_run_header(run_name, run_context)

    return log_file


def log_run_header(run_name: str, run_context: Optional[Mapping[str, object]] = None) -> None:
    """Log the version and command line, then one line per run_context entry."""
    logger.info(f"menumine {__version__} | {run_name} run")
    logger.info(f"Command: {' '.join(sys.argv)}")

    for key, value in (run_context or {}).items():
        logger.info(f"{key}: {value}")
