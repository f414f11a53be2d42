"""Command-line interface for the rss_aggregator application."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pprint
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, parse_app_config
from .runner import RunConfig, execute

logger = logging.getLogger(__name__)

FEEDS_PROMPT = "Enter the file name of a list of urls for RSS 2.0 news feeds: "
OUTPUT_PROMPT = "Enter the name of the output file"


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Convert the RSS 2.0 feeds named in a feed list into HTML pages."
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional path to a configuration XML file.",
    )
    parser.add_argument(
        "--feeds",
        default=None,
        help="Location (path or URL) of the feed-list document. Prompted if omitted.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Destination path of the index page. Prompted if omitted.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Network fetch timeout in seconds. Overrides config.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def prompt_line(message: str) -> str:
    """Print ``message`` and read one line of input."""
    print(message)
    return input().strip()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config) if args.config else AppConfig()

        log_level = args.log_level or app_config.logging.level
        log_file = args.log_file or app_config.logging.file
        configure_logging(log_level, log_file)

        timeout = args.timeout if args.timeout is not None else app_config.timeout
        if timeout <= 0:
            raise ValueError("--timeout must be positive.")

        feeds_source = (
            args.feeds or app_config.feeds_source or prompt_line(FEEDS_PROMPT)
        )
        index_file = args.output or app_config.index_file or prompt_line(OUTPUT_PROMPT)
        if not feeds_source or not index_file:
            raise ValueError("A feed list and an output file are both required.")

        config = RunConfig(
            feeds_source=feeds_source, index_file=index_file, timeout=timeout
        )
        logger.info(
            "Active Configuration:\n%s", pprint.pformat(dataclasses.asdict(config))
        )

        result = execute(config)
    except ValueError as exc:
        parser.error(str(exc))
    except (RuntimeError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    print(f"Wrote {result.index_file} and {len(result.pages)} feed pages")
    return 0
