#!/usr/bin/env python3
"""
Polynomial stack calculator.

Usage:
    polycalc                    # read commands from stdin
    polycalc script.txt         # read commands from a file
    polycalc --log-level DEBUG  # trace every command on stderr
"""
from __future__ import annotations
import argparse
import io
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from calc import Calculator
from config import CalcConfig

logger = logging.getLogger(__name__)

# every byte maps to one character, so input is read byte-for-byte
INPUT_ENCODING = "latin-1"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="polycalc", description="Stack calculator for sparse multivariable polynomials.")
    ap.add_argument("file", nargs="?", help="input file (default: stdin)")
    ap.add_argument("--log-level", help="logging level (default: WARNING or $POLYCALC_LOG_LEVEL)")
    ap.add_argument("--max-nesting", type=int, help="deepest bracket nesting accepted in one polynomial")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = CalcConfig.from_env()
    if args.log_level:
        cfg = replace(cfg, log_level=args.log_level.upper())
    if args.max_nesting is not None:
        cfg = replace(cfg, max_nesting=args.max_nesting)
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("starting with %s", cfg)
    calc = Calculator(cfg)
    if args.file:
        with open(args.file, encoding=INPUT_ENCODING, newline="\n") as fh:
            calc.run(fh)
    else:
        calc.run(io.TextIOWrapper(sys.stdin.buffer, encoding=INPUT_ENCODING, newline="\n"))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
