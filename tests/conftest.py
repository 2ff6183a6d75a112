import sys

from loguru import logger

import pyliteral

logger.remove()
logger.add(sys.stderr, format="{level} {message}", level="DEBUG")
logger.enable(pyliteral.__name__)
