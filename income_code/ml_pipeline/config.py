from notebooks.logging_config import MyLogger
from income_code.config import LOG_DIR

DEF_LOG_FILE = LOG_DIR / "logs_default.log"
DEF_NOTEBOOK_LOGGER = MyLogger(label="DEF LOGGER", section_name="DEFAULT LOGGER", file_log_path=DEF_LOG_FILE)
