"""`apisteps` command: run feature files through behave.

Loads `.env`, applies a few defaults (progress formatter, feature directory)
and hands over to `python -m behave`. The exit status is behave's: zero only
when every executed scenario passed.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from typing import List, Optional, Sequence

from dotenv import find_dotenv, load_dotenv

from apisteps.config import ENV_DEBUG, ENV_JSON_SCHEMA_DIR, ENV_MY_APP_URL

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "progress"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apisteps",
        description="Run API feature files with the apisteps step library.",
        epilog=(
            f"Environment: {ENV_MY_APP_URL} (base URL), {ENV_JSON_SCHEMA_DIR} (schema dir), "
            f"{ENV_DEBUG}=true (debug mode). Unknown options are passed to behave."
        ),
    )
    parser.add_argument("paths", nargs="*", help="feature files or directories (default: behave.ini paths, else ./features)")
    parser.add_argument("-f", "--format", default=DEFAULT_FORMAT, help=f"behave formatter (default: {DEFAULT_FORMAT})")
    parser.add_argument("-t", "--tags", action="append", default=[], help="tag expression, may be repeated")
    parser.add_argument("--stop", action="store_true", help="stop at the first failing scenario")
    return parser


def behave_command(args: argparse.Namespace, passthrough: Sequence[str]) -> List[str]:
    cmd = [sys.executable, "-m", "behave", "--format", args.format]
    for tag in args.tags:
        cmd.extend(["--tags", tag])
    if args.stop:
        cmd.append("--stop")
    cmd.extend(passthrough)
    cmd.extend(args.paths)
    return cmd


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True), override=False)
    args, passthrough = build_parser().parse_known_args(argv)
    cmd = behave_command(args, passthrough)
    logger.debug("running %s", " ".join(cmd))
    result = subprocess.run(cmd, check=False)
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
