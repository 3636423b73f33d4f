from pathlib import Path

from cookwise.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
STORE_FILE: Path = DATA_DIR / 'kitchen.json'

__all__ = ['DATA_DIR', 'STORE_FILE']
