"""Script to emit sample entries through the registry configured from the environment."""

import argparse
import sys

from config.settings import settings
from velox_logger.models import ConfigurationError
from velox_logger.registry import default_registry, load_configuration, logger


def emit(name: str, message: str) -> None:
    log = logger(name)
    log.debug("%s (debug)", message)
    log.info("%s (info)", message)
    log.warning("%s (warn)", message)
    log.error("%s (error)", message)


def main() -> None:
    parser = argparse.ArgumentParser(description="Emit one entry per level through a named logger.")
    parser.add_argument("--name", default=None, help="Logger name; defaults to the main logger.")
    parser.add_argument("--level", default=None, help="Level for --name (debug, info, warn, error).")
    parser.add_argument("--log-dir", default=None, help="Directory for --filename.")
    parser.add_argument("--filename", default=None, help="Log to this file instead of the console.")
    parser.add_argument("--message", default="velox logger test entry", help="Message to emit.")
    args = parser.parse_args()

    try:
        default_registry.configure_from_settings(settings)
        if args.level:
            load_configuration(
                args.name,
                {"level": args.level, "log_dir": args.log_dir, "filename": args.filename},
            )
    except ConfigurationError as exc:
        print(f"Invalid logger configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    emit(args.name, args.message)
    default_registry.close()


if __name__ == "__main__":
    main()
