"""Shared utility functions for the financial report sentiment project.

This module provides common helpers used throughout the project:

- Logging configuration
- File handling utilities (save/load serialized models)
- Data fingerprinting for tracking which corpus a model was trained on
"""

import hashlib
import logging
import os
import sys
from typing import Any, Optional

import joblib
import pandas as pd

logger = logging.getLogger('utils')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(name: Optional[str] = None, log_file: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """Set up logging configuration for a module.

    Configures a logger with consistent formatting and optional file output.
    A console handler is added only once, so repeated calls do not duplicate
    messages.

    Args:
        name (str, optional): Logger name to identify the module in log
            messages. None configures the root logger, which every module
            logger propagates to. Defaults to None.
        log_file (str, optional): Path to the log file. If None, logging is
            only sent to the console. Defaults to None.
        level (int, optional): Logging level threshold. Defaults to logging.INFO.

    Returns:
        logging.Logger: Configured logger instance ready for use.

    Example:
        >>> logger = setup_logging('report_pipeline', 'logs/scoring.log')
        >>> logger.info('Scoring started')
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    has_console_handler = any(
        isinstance(handler, logging.StreamHandler) and getattr(handler, 'stream', None) is sys.stdout
        for handler in logger.handlers
    )
    if not has_console_handler:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    has_file_handler = log_file and any(
        isinstance(handler, logging.FileHandler)
        and handler.baseFilename == os.path.abspath(log_file)
        for handler in logger.handlers
    )
    if log_file and not has_file_handler:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def save_joblib(obj: Any, file_path: str) -> None:
    """Serialize an object to a joblib file, creating parent directories.

    Args:
        obj (Any): The Python object to serialize.
        file_path (str): Destination path.
    """
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    joblib.dump(obj, file_path)
    logger.info(f"Object saved to {file_path}")


def load_joblib(file_path: str) -> Any:
    """Load an object from a joblib file.

    Raises:
        FileNotFoundError: If the specified file does not exist.
    """
    obj = joblib.load(file_path)
    logger.info(f"Object loaded from {file_path}")
    return obj


def compute_data_hash(df: pd.DataFrame) -> str:
    """Generate a short content fingerprint for a DataFrame.

    The hash depends only on the frame's values and index, not on its
    memory location, so the same corpus always gets the same fingerprint.

    Returns:
        str: First 10 characters of the MD5 hash.
    """
    data_str = pd.util.hash_pandas_object(df, index=True).sum()
    return hashlib.md5(str(data_str).encode()).hexdigest()[:10]
