import logging
from typing import Optional

# silent unless a caller hands in its own logger
null_logger = logging.getLogger('blockc.null')
null_logger.addHandler(logging.NullHandler())
null_logger.propagate = False


def resolve_logger(logger: Optional[logging.Logger]) -> logging.Logger:
    return logger if logger is not None else null_logger
