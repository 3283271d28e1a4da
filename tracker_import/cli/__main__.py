from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, ImportConfig, load_config
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.field_spec import FieldKind, ResourceSchema
from ..models.import_result import ImportStatus
from ..schemas.resources import resource_names
from ..services.importer import ProcessingError, resolve_schema, run_import
from ..services.normalizer import looks_like_url, normalize_row
from ..services.summary import render_summary_line
from ..store.base import PersistenceError, ResourceStore
from ..store.memory import MemoryResourceStore
from ..store.rest import RestResourceStore
from ..upload.reader import DecodeError, read_upload

"""CLI entrypoint.

Flow:
- Load .env (overrides the process environment) and the YAML config
- Resolve the target resource schema
- Decode the file, import rows sequentially, refresh the resource list
- Print the SUMMARY line and exit with 0 (all created), 2 (partial) or 1 (fatal)
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

PREVIEW_ROWS = 5


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; its values take precedence over the environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tracker-import",
        description="Spreadsheet / CSV -> tracker API bulk importer",
    )
    p.add_argument("resource", help=f"target resource ({', '.join(resource_names())})")
    p.add_argument("file", type=Path, help="uploaded .csv / .xlsx / .xls file")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--dry-run", action="store_true", help="Import into an in-memory store instead of the API")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers & first normalized rows then exit")
    return p.parse_args(argv)


def _build_store(cfg: ImportConfig, schema: ResourceSchema, dry_run: bool) -> tuple[ResourceStore, str]:
    # DISABLE_STORE=1 forces the in-memory store (tests / offline use)
    if dry_run or os.getenv("DISABLE_STORE") == "1":
        return MemoryResourceStore(), "dry-run"
    store = RestResourceStore(
        cfg.store.base_url,
        cfg.endpoint_for(schema.name, schema.endpoint),
        token=cfg.store.token,
        timeout=cfg.store.timeout_seconds,
    )
    return store, "live"


def _inspect_data(path: Path, schema: ResourceSchema, cfg: ImportConfig) -> int:
    try:
        upload = read_upload(path, sheet=cfg.upload.sheet, delimiter=cfg.upload.delimiter)
    except DecodeError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    image_fields = [f.name for f in schema.fields if f.kind is FieldKind.EMOJI_OR_URL]
    print(f"FILE: {upload.source} resource={schema.name}")
    if upload.sheet_name is not None:
        print(f"  SHEET: {upload.sheet_name}")
    print(f"  headers={upload.headers} total_rows={upload.total_rows}")
    for index, raw in enumerate(upload.rows[:PREVIEW_ROWS], start=1):
        record = normalize_row(raw, schema)
        kinds = {name: ("url" if looks_like_url(record[name]) else "glyph") for name in image_fields}
        suffix = f" image_kind={kinds}" if kinds else ""
        print(f"  row {index}: {record}{suffix}")
    return 0


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    try:
        schema = resolve_schema(args.resource)
    except ProcessingError as e:
        logger.error(f"resource: {e}")
        return EXIT_FATAL

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.file, schema, cfg)

    store, mode = _build_store(cfg, schema, args.dry_run)
    error_log = ErrorLogBuffer()
    logger.info(f"Importing {args.file} into {schema.name} (mode={mode})")

    try:
        with store:
            result = run_import(
                args.file,
                schema,
                store,
                sheet=cfg.upload.sheet,
                delimiter=cfg.upload.delimiter,
                error_log=error_log,
            )
    except DecodeError as e:
        logger.error(f"decode: {e}")
        return EXIT_FATAL
    except PersistenceError as e:
        logger.error(f"refresh: {e}")
        return EXIT_FATAL
    finally:
        counts = error_log.counts()
        log_path = error_log.flush()
        if log_path is not None:
            detail = " ".join(f"{k}={v}" for k, v in sorted(counts.items()))
            logger.info(f"error log written: {log_path} ({detail})")

    if result.error:
        logger.error(f"import stopped: {result.error}")
    refreshed = len(result.refreshed) if result.refreshed is not None else 0
    logger.info(f"mode={mode} created={result.created} listed={refreshed}")

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.status is ImportStatus.SUCCESS:
        return EXIT_SUCCESS_ALL
    return EXIT_PARTIAL_FAILURE


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
