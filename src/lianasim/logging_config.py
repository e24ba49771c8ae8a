"""
Logging configuration for LianaSim.

All package loggers live under the ``lianasim`` namespace so a single
call to :func:`setup_logging` controls the whole pipeline.
"""
import logging
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .scaling import SequestrationSummary

ROOT_LOGGER_NAME = 'lianasim'
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None,
                  fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level (name or numeric value)
        log_file: Optional file to receive a copy of the log output
        fmt: Log record format string

    Returns:
        The configured package root logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers so repeated calls do not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_simulation_summary(logger: logging.Logger,
                           summary: 'SequestrationSummary') -> None:
    """Log the scalar roll-ups of a finished simulation."""
    logger.info(
        f"Additional sequestration: {summary.per_hectare:.3f} Mg CO2e/ha, "
        f"global {summary.global_pg:.4f} Pg CO2e "
        f"({summary.annual_pg:.5f} Pg CO2e/yr), "
        f"cost {summary.cost_per_mg_co2e:.4f} USD/Mg CO2e"
    )
