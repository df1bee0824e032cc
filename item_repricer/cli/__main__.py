from __future__ import annotations

import argparse
import sys
from pathlib import Path

from item_repricer.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    RepricerConfig,
    apply_env_overrides,
    default_config,
    load_config,
)
from item_repricer.excel.reader import DecodeError, InputTypeError, read_table
from item_repricer.excel.writer import ExportError, export_items
from item_repricer.logging.error_log import ErrorLogBuffer
from item_repricer.logging.init import log_summary, set_debug, setup_logging
from item_repricer.services.editing import InvalidPriceError, ItemIndexError, PriceEditor
from item_repricer.services.formatting import format_price
from item_repricer.services.pipeline import ProcessingError, process_file
from item_repricer.services.summary import render_summary_line

try:  # pragma: no cover - import guard
    from dotenv import load_dotenv  # type: ignore
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore

"""CLI entrypoint.

Flow:
- Load .env and config (config/repricer.yml when present, defaults otherwise)
- Read the input table and run the pipeline
- Apply manual price overrides (--set-price)
- Print SUMMARY, optionally the item table, optionally export
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_EDIT_REJECTED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a failure only produces a warning."""
    try:
        if path.exists() and load_dotenv is not None:
            load_dotenv(dotenv_path=path, override=override)  # type: ignore[misc]
    except Exception as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_set_price(value: str) -> tuple[int, str]:
    index, sep, price = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected INDEX=PRICE, got {value!r}")
    try:
        return int(index), price
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid index in {value!r}") from e


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="item-repricer",
        description="Filter, deduplicate and re-price a spreadsheet item list",
    )
    p.add_argument("input", type=Path, help="Input table (.xlsx, .xlsm, .xls, .csv)")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--export", action="store_true", help="Write the processed items to a timestamped .xlsx file")
    p.add_argument("--output-dir", type=Path, default=None, help="Export directory (overrides config)")
    p.add_argument(
        "--set-price",
        action="append",
        type=_parse_set_price,
        default=[],
        metavar="INDEX=PRICE",
        help="Manually override the price of the item at INDEX (repeatable)",
    )
    p.add_argument("--show", action="store_true", help="Print the processed item table")
    p.add_argument("--inspect-data", action="store_true", help="Print the first input rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config(config_path: Path | None) -> RepricerConfig:
    if config_path is not None:
        return load_config(config_path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _inspect_data(path: Path) -> int:
    try:
        rows = read_table(path)
    except (InputTypeError, DecodeError) as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name} rows={len(rows)}")
    for number, row in enumerate(rows[:5], start=1):
        print(f"  {number}: {row}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list must not pull in sys.argv (pytest arguments)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = apply_env_overrides(_resolve_config(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.input)

    logger.info(f"Processing: {args.input}")
    error_log = ErrorLogBuffer()
    try:
        result = process_file(args.input, cfg, error_log=error_log)
    except InputTypeError as e:
        logger.error(f"input type: {e}")
        return EXIT_FATAL
    except DecodeError as e:
        logger.error(f"decode: {e}")
        return EXIT_FATAL
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    finally:
        log_path = error_log.flush()

    if result.failed_rows:
        logger.warning(f"{result.failed_rows} row(s) could not be read (details: {log_path})")

    exit_code = EXIT_SUCCESS
    editor = PriceEditor(result.items)
    for index, raw_price in args.set_price:
        try:
            display = editor.set_item_price(index, raw_price)
        except (InvalidPriceError, ItemIndexError) as e:
            logger.error(f"set-price: {e}")
            exit_code = EXIT_EDIT_REJECTED
            continue
        logger.info(f"price updated: index={index} code={result.items[index].item_code} price={display}")

    if args.show:
        for item in result.items:
            print(f"{item.output_index}\t{item.item_code}\t{item.item_name}\t{format_price(item.new_price)}")

    summary_line = render_summary_line(result.stats)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    if args.export:
        directory = args.output_dir or Path(cfg.output_directory)
        try:
            path = export_items(
                result.items,
                directory,
                prefix=cfg.export_prefix,
                sheet_name=cfg.export_sheet_name,
            )
        except ExportError as e:
            logger.error(f"export: {e}")
            return EXIT_FATAL
        logger.info(f"exported {len(result.items)} item(s) to {path}")

    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
