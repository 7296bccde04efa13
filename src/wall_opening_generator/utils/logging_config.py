# File: src/wall_opening_generator/utils/logging_config.py
"""
Logging setup for host scripts.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
Grasshopper script calls ``OpeningGeneratorLogger.configure`` once per run
to route them to a timestamped log file and the component console.

The crossing finder logs every raw ray hit at TRACE (below DEBUG). Enable
it with ``configure(trace=True)`` to see why a duct got more or fewer
openings than expected.
"""

import logging
import os
import sys
from datetime import datetime

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
HOST_CONSOLE_FORMAT = '%(levelname)s: %(message)s'
CONSOLE_FORMAT = '%(name)s - %(levelname)s: %(message)s'


class OpeningGeneratorLogger:
    """Configures the root logger for one opening generation run."""

    @staticmethod
    def run_level(debug_mode: bool = False, trace: bool = False) -> int:
        """Return the root level for the requested verbosity."""
        if trace:
            return TRACE_LEVEL
        return logging.DEBUG if debug_mode else logging.INFO

    @staticmethod
    def configure(
        debug_mode: bool = False,
        log_dir: str = "logs",
        host_mode: bool = True,
        trace: bool = False
    ) -> str:
        """
        Replace root handlers with a run log file and a console stream.

        Args:
            debug_mode: Log DEBUG records to the file
            log_dir: Directory for the log file (created if missing)
            host_mode: Short console format for Grasshopper/Revit panels
            trace: Also log TRACE records (every raw ray hit) to the file

        Returns:
            Path to the created log file
        """
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(log_dir, f"wall_openings_{timestamp}.log")

        level = OpeningGeneratorLogger.run_level(debug_mode, trace)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

        # Console stays at INFO so TRACE/DEBUG output does not flood the panel
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter(HOST_CONSOLE_FORMAT if host_mode else CONSOLE_FORMAT)
        )
        console_handler.setLevel(logging.INFO)
        root_logger.addHandler(console_handler)

        return log_file
