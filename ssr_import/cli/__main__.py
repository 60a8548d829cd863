from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ssr_import.config.loader import ConfigError, load_config, load_config_or_default
from ssr_import.logging.init import log_summary, set_debug, setup_logging
from ssr_import.models.config_models import ImportConfig
from ssr_import.services.orchestrator import ProcessingError, inspect_file, process_file, resolve_family
from ssr_import.services.queries import render_sample_queries
from ssr_import.services.summary import render_summary_line

"""CLI entrypoint.

    ssr-import run <input-path> [output-path-or-db-config] [--db] [--config PATH]
    ssr-import inspect <input-path> [--limit N]

The optional second positional of ``run`` is either a ``.json`` output path
(file mode) or a ``.yml``/``.yaml`` config whose ``database`` section is used
for a PostgreSQL import.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

DB_CONFIG_SUFFIXES = {".yml", ".yaml"}


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--debug", action="store_true", help="Enable debug logging")
    common.add_argument("--config", type=Path, default=None, help="YAML config (default: config/import.yml if present)")
    common.add_argument("--family", default=None, help="Document family (overrides config)")

    p = argparse.ArgumentParser(prog="ssr-import", description="Schedule of Standard Rates spreadsheet importer")
    sub = p.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", parents=[common], help="Parse a spreadsheet into JSON or PostgreSQL")
    run.add_argument("input", nargs="?", type=Path, default=None, help="Input spreadsheet")
    run.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=None,
        help="Output .json path, or a .yml/.yaml config for a database import",
    )
    run.add_argument("--db", action="store_true", help="Store into PostgreSQL instead of writing JSON")
    run.add_argument("--print-queries", action="store_true", help="Print sample SQL after a database import")

    insp = sub.add_parser("inspect", parents=[common], help="Print the role assigned to every row, then exit")
    insp.add_argument("input", nargs="?", type=Path, default=None, help="Input spreadsheet")
    insp.add_argument("--limit", type=int, default=None, help="Show at most N rows")
    return p.parse_args(argv)


def _with_family(cfg: ImportConfig, family: str | None) -> ImportConfig:
    if family is None:
        return cfg
    return replace(cfg, family=family)


def _inspect(cfg: ImportConfig, input_path: Path, limit: int | None) -> int:
    family = resolve_family(cfg)
    rows = inspect_file(input_path, family, cfg.sheet)
    print(f"FILE: {input_path.name} family={family.name} rows={len(rows)}")
    for row, role in rows[:limit] if limit is not None else rows:
        print(
            f"  row={row.row_number:<5} {role.value:<18} item_no={row.item_no!r} "
            f"desc={(row.description or '')[:50]!r} unit={row.unit!r} rate={row.rate!r}"
        )
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # 空リスト [] が渡された場合に sys.argv[1:] を混入させない (None のときのみ読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)

    output: Path | None = getattr(args, "output", None)
    persist = bool(getattr(args, "db", False))
    try:
        if output is not None and output.suffix.lower() in DB_CONFIG_SUFFIXES:
            # second positional names the database config
            cfg = load_config(output)
            output = None
            persist = True
        else:
            cfg = load_config_or_default(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    cfg = _with_family(cfg, args.family)

    input_path: Path = args.input or Path(cfg.input_file)
    if not input_path.exists():
        logger.error(f"input file not found: {input_path}")
        return EXIT_FATAL

    try:
        if args.command == "inspect":
            return _inspect(cfg, input_path, args.limit)
        result = process_file(cfg, input_path, output_path=output, persist=persist)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if result.import_id is not None:
        logger.info(f"import_id={result.import_id}")
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if persist and args.print_queries:
        print(render_sample_queries())
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
