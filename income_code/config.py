__ALL__ = [
    "DATA_DIR",
    "RAW_DATA_FILE",
    "LOG_DIR",
    "PLOTS_DIR",
]

import os
from pathlib import Path


# 1. Get the directory of the current file (config.py)
CONFIG_FILE_DIR = Path(__file__).resolve()

# 2. The project root is one level above the package directory
PROJECT_ROOT = CONFIG_FILE_DIR.parent.parent

LOG_DIR = Path(os.environ.get("INCOME_EDA_LOG_DIR", PROJECT_ROOT / "logs"))
PLOTS_DIR = PROJECT_ROOT / "plots"

# 3. Define all data paths relative to the Project Root
DATA_DIR = Path(os.environ.get("INCOME_EDA_DATA_DIR", PROJECT_ROOT / "data"))
RAW_DATA_DIR = DATA_DIR / "raw"

RAW_DATA_FILE = RAW_DATA_DIR / "adult_sal.csv"
