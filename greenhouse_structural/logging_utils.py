# greenhouse_structural/logging_utils.py
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    """Replace loguru's default sink with a console sink and an optional rotating file sink."""
    logger.remove()
    logger.add(lambda msg: print(msg, end=""), level=level)  # console
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(str(log_file), level="DEBUG", rotation="5 MB", retention=10, enqueue=True, backtrace=False, diagnose=False)


def get_run_logger(analysis_id: str, model_id: str = "") -> Any:
    """Logger bound to one analysis run, so every record carries its ids."""
    return logger.bind(analysis_id=analysis_id, model_id=model_id)
