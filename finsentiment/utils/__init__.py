"""
Utility functions for the financial report sentiment project.
Contains general-purpose helpers used across the system.
"""

from .utils import (
    setup_logging,
    save_joblib,
    load_joblib,
    compute_data_hash
)

__all__ = [
    'setup_logging',
    'save_joblib',
    'load_joblib',
    'compute_data_hash'
]
