from __future__ import annotations
import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


def max_nesting_ceiling() -> int:
    # the recursive algorithms spend a few interpreter frames per nesting level
    return sys.getrecursionlimit() // 8


@dataclass
class CalcConfig:
    """Settings for the line calculator.

    ``max_nesting`` bounds how deeply bracketed coefficients may nest in one
    input line; deeper input is rejected as a wrong polynomial instead of
    exhausting the interpreter stack in the recursive algorithms. Values
    above ``max_nesting_ceiling()`` are lowered to it.
    """

    comment_char: str = "#"
    true_string: str = "1"
    false_string: str = "0"
    max_nesting: int = 100
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        ceiling = max_nesting_ceiling()
        if self.max_nesting > ceiling:
            logger.warning("max_nesting %d lowered to %d", self.max_nesting, ceiling)
            self.max_nesting = ceiling

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "CalcConfig":
        env = os.environ if env is None else env
        cfg = cls()
        if env.get("POLYCALC_LOG_LEVEL"):
            cfg = replace(cfg, log_level=env["POLYCALC_LOG_LEVEL"].upper())
        raw = env.get("POLYCALC_MAX_NESTING")
        if raw:
            try:
                nesting = int(raw)
            except ValueError:
                logger.warning("ignoring POLYCALC_MAX_NESTING=%r: not an integer", raw)
            else:
                cfg = replace(cfg, max_nesting=nesting)
        return cfg
