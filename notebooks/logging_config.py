import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
import random

import ipynbname

LOG_PATH = Path(os.environ.get("INCOME_EDA_LOG_DIR", Path(os.getcwd()) / "logs")) / "notebooks.log"


def get_notebook_name(default: str = "UNKNOWN_NOTEBOOK") -> str:
    # ipynbname only resolves inside a running Jupyter kernel
    try:
        return ipynbname.name()
    except Exception:
        return default


class MyLogger:
    DEF_NOTEBOOK_NAME = "UNKNOWN_NOTEBOOK"

    def __init__(
        self,
        label: str = None,
        section_name: str = None,
        file_log_path: Path = LOG_PATH,
    ):
        self.notebook_name = get_notebook_name(self.DEF_NOTEBOOK_NAME)
        self.section_name = section_name or self.notebook_name
        self.session_id = random.randint(100, 999)
        self.label = label

        self.logger = logging.getLogger(f"{self.section_name}-S{self.session_id}")
        self.logger.setLevel(logging.INFO)

        if not self.logger.handlers:
            file_log_path = Path(file_log_path)
            file_log_path.parent.mkdir(parents=True, exist_ok=True)

            handler = RotatingFileHandler(
                file_log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
            )
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _format(self, kind: str, text) -> str:
        return f"[{self.label if self.label else 'UNSPECIFIED'} {kind}] {text}"

    def log_check(self, text, print_to_console: bool = True):
        msg = self._format("CHECK", text)
        self.logger.info(msg)

        if print_to_console:
            print(msg)

    def log_result(self, text, print_to_console: bool = True):
        msg = self._format("RESULT", text)
        self.logger.info(msg)

        if print_to_console:
            print(msg)

    def start_session(self, print_to_console: bool = True):
        msg = f"================== Starting: {self.section_name} (Session {self.session_id}) =================="
        self.logger.info(msg)

        if print_to_console:
            print(msg)
