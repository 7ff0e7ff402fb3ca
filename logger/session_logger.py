import json
import logging
import os
from datetime import datetime
from typing import Optional

from loguru import logger as loguru_logger


class SessionLogger:
    """Per-session log file.

    Direct ``log()`` calls go through a stdlib file handler; while the
    session is open a loguru sink mirrors application logs into the same
    file. One instance per assessment session.
    """

    def __init__(self, log_dir: str, session_id: str, auto_start: bool = True):
        """Initialize session logger.

        Args:
            log_dir: Directory for session logs
            session_id: Identifier used in the file name
            auto_start: Whether to log session start automatically
        """
        self.log_dir = log_dir
        os.makedirs(self.log_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_path = os.path.join(self.log_dir, f"assessment_{timestamp}_{session_id}.log")

        self._py_logger = logging.getLogger(f"AssessmentSessionLogger_{session_id}")
        self._py_logger.setLevel(logging.INFO)
        self._py_logger.propagate = False
        self._file_handler = logging.FileHandler(self.log_path, encoding="utf-8")
        formatter = logging.Formatter('[%(asctime)s] %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
        self._file_handler.setFormatter(formatter)
        self._py_logger.handlers = []
        self._py_logger.addHandler(self._file_handler)

        self._sink_id: Optional[int] = None
        self.attach_loguru_sink()

        self._ended: bool = False

        if auto_start:
            self.log("=== SESSION START ===")

    # ---------- Wiring ----------
    def attach_loguru_sink(self) -> None:
        """Attach a loguru sink to mirror all loguru logs to the session file."""
        if self._sink_id is None:
            self._sink_id = loguru_logger.add(
                self.log_path,
                format="[{time:YYYY-MM-DD HH:mm:ss}] {level}: {message}",
                level="INFO",
            )

    def detach_loguru_sink(self) -> None:
        if self._sink_id is not None:
            try:
                loguru_logger.remove(self._sink_id)
            except ValueError:
                # Already removed by a global logger.remove()
                pass
            finally:
                self._sink_id = None

    # ---------- Public API ----------
    def log(self, message: str) -> None:
        """Log a message to the session file."""
        self._py_logger.info(message)

    def log_kv(self, key: str, value) -> None:
        """Log a key-value pair (e.g., configuration or a report)."""
        if isinstance(value, (dict, list)):
            value = json.dumps(value, indent=2, ensure_ascii=False, default=str)
        self.log(f"{key}: {value}")

    def log_end(self) -> None:
        """Mark session end (idempotent)."""
        if not self._ended:
            self._ended = True
            self.log("=== SESSION END ===")
            self.detach_loguru_sink()
            self._py_logger.removeHandler(self._file_handler)
            self._file_handler.close()
