"""Entry point kept minimal by delegating to Engine.

    python main.py [dice|orbit] [--fog] [--log-level DEBUG] [--log-file PATH]
"""

import argparse
import logging

from logging_config import setup_logging


def main(argv=None):  # small wrapper for clarity / debuggers
    parser = argparse.ArgumentParser(description="Scene coordination demo")
    parser.add_argument("scene", nargs="?", default="dice", choices=("dice", "orbit"))
    parser.add_argument("--fog", action="store_true", help="add linear fog (dice scene)")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO), args.log_file)

    # GL and the display come up only after logging is configured
    from core.engine import Engine

    Engine(args.scene, fog=args.fog).run()


if __name__ == "__main__":
    main()
