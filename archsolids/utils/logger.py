"""
Logging utilities for archsolids.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = 'archsolids',
                 level: Union[int, str] = logging.INFO,
                 log_file: Optional[str] = None,
                 format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger for command line runs.

    Records go to stderr so that results printed on stdout stay machine
    readable. Calling this again replaces the handlers it installed before.

    Args:
        name: Logger name, normally the package root so every module logger inherits it
        level: Level as a number or a name such as ``"DEBUG"``
        log_file: Optional log file path
        format_string: Optional custom format string

    Returns:
        Configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def log_config(config: Dict[str, Any], logger: logging.Logger):
    """Log the pipeline configuration, one line per setting and per build."""
    logger.info("Configuration:")
    for section, value in config.items():
        if section == 'builds':
            logger.info(f"  builds: {len(value)}")
            for index, request in enumerate(value):
                logger.info(f"    [{index}] {request.get('name', '-')}: {request.get('builder')}")
        elif isinstance(value, dict):
            logger.info(f"  {section}:")
            for key, setting in value.items():
                logger.info(f"    {key}: {setting}")
        else:
            logger.info(f"  {section}: {value}")
