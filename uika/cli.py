import argparse
import logging
import sys
from datetime import datetime
from typing import Optional

from . import __version__, store
from .config import get_countdowns_path, get_log_level, get_log_path, get_poll_interval_ms, load_config, LOG_LEVELS
from .countdown import CountdownList
from .errors import ParseError, StoreError
from .logs import setup_logging
from .timecalc import format_remaining, now_local

logger = logging.getLogger(__name__)


def _headless_snapshot(countdowns: CountdownList, now: Optional[datetime] = None) -> str:
    if now is None:
        now = now_local()
    if countdowns.is_empty:
        return "no countdowns"
    lines = [f"now: {now.strftime('%Y-%m-%d %H:%M:%S')}"]
    for idx, countdown in enumerate(countdowns):
        marker = "*" if idx == countdowns.selected_index else " "
        remaining = countdown.remaining_seconds(now)
        status = "DONE" if remaining <= 0 else format_remaining(remaining)
        lines.append(f"{marker} {countdown.name}: {remaining} seconds ({status})")
    return "\n".join(lines)


def parse_args(argv=None):
    epilog = (
        "Controls (interactive): Left/Right switch countdown, n new countdown, "
        "Enter confirm field, Esc cancel, q or Ctrl-D quit."
    )
    parser = argparse.ArgumentParser(
        prog="uika",
        description="Tabbed terminal countdowns to named moments",
        epilog=epilog,
    )
    parser.add_argument("--file", help="countdown file (default: countdowns.csv in the working directory)")
    parser.add_argument("--headless", action="store_true", help="print the countdowns once and exit")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper, help="log verbosity")
    parser.add_argument("--version", action="version", version=f"uika {__version__}")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config()
    setup_logging(get_log_path(config), args.log_level or get_log_level(config))

    path = args.file or get_countdowns_path(config)
    try:
        countdowns = store.load(path)
    except ParseError as exc:
        logger.error("cannot load %s: %s", path, exc)
        print(f"uika: {path}: {exc}", file=sys.stderr)
        return 1
    except StoreError as exc:
        logger.error("cannot load %s", exc)
        print(f"uika: {exc}", file=sys.stderr)
        return 1

    if args.headless:
        print(_headless_snapshot(countdowns))
        return 0

    try:
        from .app import Application
        from .ui import run

        run(Application(countdowns, path=path), get_poll_interval_ms(config))
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
