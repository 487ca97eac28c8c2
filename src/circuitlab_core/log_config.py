# --- src/circuitlab_core/log_config.py ---
import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER_NAME = "circuitlab_core"


def setup_logging(level=logging.INFO, solver_level: Optional[int] = None, stream: Optional[TextIO] = None):
    """
    Configures console logging for the workbench.

    The solver runs on every board edit, so its per-pass DEBUG chatter can be
    tuned separately through `solver_level` without touching the root level.
    """
    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    root_logger = logging.getLogger()

    # Clear existing handlers so repeated calls do not duplicate output.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if solver_level is not None:
        for name in ("analysis", "simulation"):
            logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}").setLevel(solver_level)

    logging.getLogger(PACKAGE_LOGGER_NAME).debug("Logging configured.")
