# senate_sync/utils.py
"""Common utilities used across the Senate committee sync."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd


# --- Logging Setup ---
def setup_logging(log_file_name: str, log_dir: Path, level=logging.INFO, mode: str = 'a',
                  logger_name: str = 'senate_sync') -> logging.Logger:
    """Configure the package logger with a file handler in ``log_dir`` and a stdout handler."""
    log_file_path = Path(log_dir) / log_file_name
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    # Avoid duplicate output when called more than once
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file_path, mode=mode, encoding='utf-8')
    stream_handler = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(formatter)
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    logger.propagate = False

    logger.info(f"Logging initialized for '{logger.name}'. Level: {logging.getLevelName(logger.level)}. Log file: {log_file_path}")
    return logger


# --- File Operations ---
def save_json(data: Any, path: Path, indent: int = 4) -> bool:
    """Save data as JSON file, creating parent directories if needed."""
    logger = logging.getLogger(__name__)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8') as f:
            json.dump(data, f, indent=indent, ensure_ascii=False, default=str)
        logger.debug(f"Saved JSON to {path}")
        return True
    except (OSError, TypeError) as e:
        logger.error(f"Error saving JSON to {path}: {e}")
        return False


def convert_to_csv(data: List[Dict[str, Any]], csv_path: Path, columns: Optional[List[str]] = None) -> int:
    """Write a list of dicts to CSV, restricted to ``columns`` when given. Returns rows written."""
    logger = logging.getLogger(__name__)
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    if not data:
        logger.info(f"No data provided to save at {csv_path}. Creating empty file with headers.")
        df = pd.DataFrame(columns=columns or [])
    else:
        df = pd.DataFrame(data)
        if columns:
            for col in columns:
                if col not in df.columns:
                    df[col] = pd.NA
            df = df[columns]

    try:
        df.to_csv(csv_path, index=False, encoding='utf-8')
    except OSError as e:
        logger.error(f"Error saving CSV {csv_path}: {e}")
        return 0
    logger.info(f"Saved {len(df)} rows to CSV: {csv_path}")
    return len(df)


# --- Path Management ---
def setup_project_paths(base_dir_override: Optional[Union[str, Path]] = None) -> Dict[str, Path]:
    """Create and return the run's directory layout (logs and reports)."""
    from .config import DEFAULT_BASE_DATA_DIR

    base_dir = Path(base_dir_override).resolve() if base_dir_override else DEFAULT_BASE_DATA_DIR.resolve()

    paths = {
        'base': base_dir,
        'log': base_dir / 'logs',
        'reports': base_dir / 'reports',
    }
    for dir_path in paths.values():
        dir_path.mkdir(parents=True, exist_ok=True)
    return paths
