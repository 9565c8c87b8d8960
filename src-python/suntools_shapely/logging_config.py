"""
Copyright 2026 suntools-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

===============================================================================
Logging setup
===============================================================================
Every module logs to a child of the 'suntools_shapely' logger. The package
itself never attaches handlers; a demo, notebook or batch script calls
setup_logging() once to see the messages:

    INFO     one summary line per batch
    WARNING  skipped sources, unreconciled mesh splits
    DEBUG    each classification, tie-break and discarded split
===============================================================================
"""

import logging
import sys
from typing import List, Optional

PACKAGE_LOGGER = "suntools_shapely"

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Send package log records to stdout and, optionally, to a file.

    Calling it again replaces the handlers it attached before.

    Args:
        level: Threshold for the package logger and its handlers.
        log_file: Path of a log file, rewritten on every call.

    Returns:
        The 'suntools_shapely' logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)

    logger.info("Logging to %s at %s", log_file or "stdout", logging.getLevelName(level))
    return logger
