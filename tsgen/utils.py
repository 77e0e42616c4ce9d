"""Utility functions for generated file handling.

Backups of previous output and writing of freshly generated files.
"""

import shutil
from datetime import datetime
from pathlib import Path

from .logging_config import get_logger

logger = get_logger(__name__)


def backup_timestamp(now: datetime | None = None) -> str:
    """Format a timestamp for backup file names.

    Args:
        now: Moment to format, defaults to the current local time.

    Returns:
        Timestamp like ``2024-05-01T13_45_07.25`` (hundredths, trailing zeros dropped).
    """
    now = now or datetime.now()
    stamp = now.strftime("%Y-%m-%dT%H_%M_%S")
    hundredths = f"{now.microsecond // 10000:02d}".rstrip("0")
    if hundredths:
        stamp += f".{hundredths}"
    return stamp


def backup_file(
    file_path: str | Path, backup_dir: str | Path, now: datetime | None = None
) -> Path | None:
    """Copy an existing file into ``backup_dir`` under a timestamped name.

    Args:
        file_path: File to back up.
        backup_dir: Directory receiving the copy.
        now: Moment used in the backup name.

    Returns:
        Path of the backup, or None if there was nothing to back up.

    Raises:
        OSError: If the file exists but cannot be copied.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        logger.debug(f"Nothing to back up at {file_path}")
        return None

    backup_path = Path(backup_dir) / f"{file_path.name}-{backup_timestamp(now)}.backup"
    try:
        shutil.copyfile(file_path, backup_path)
    except OSError as e:
        logger.error(f"Error backing up {file_path} to {backup_path}: {e}")
        raise

    logger.info(f"Backed up {file_path} to {backup_path}")
    return backup_path


def write_generated_file(file_path: str | Path, header: str, content: str) -> Path:
    """Write generated content preceded by a header comment.

    Raises:
        OSError: If the file cannot be written.
    """
    file_path = Path(file_path)
    try:
        file_path.write_text(f"{header}\n\n{content}", encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing {file_path}: {e}")
        raise

    logger.info(f"Wrote generated code to {file_path}")
    return file_path
