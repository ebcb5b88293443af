"""reporter

Reporter
    Collects errors reported by the scanner, parser and resolver, and
    forwards each one to a handler as it arrives.
"""

import logging
from typing import Callable as function, List, Optional

from . import builtin

logger = logging.getLogger(__name__)



class Reporter:
    """
    report errors
    """
    def __init__(self, handler: Optional[function] = None) -> None:
        self.errors: List[builtin.LoxError] = []
        self.handler = handler

    def __bool__(self) -> bool:
        return len(self.errors) != 0

    def __len__(self) -> int:
        return len(self.errors)

    def __repr__(self) -> str:
        return '\n'.join(err.report() for err in self.errors)

    def report(self, error: builtin.LoxError) -> None:
        logger.debug("%s: %s", type(error).__name__, error.report())
        self.errors.append(error)
        if self.handler:
            self.handler(error)
