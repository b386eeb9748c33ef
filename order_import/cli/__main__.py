from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from order_import.config.gazetteer import load_gazetteer
from order_import.config.loader import DEFAULT_CONFIG_PATH, ConfigError, ImportConfig, load_config
from order_import.logging.init import log_summary, setup_logging
from order_import.models.location import City, Governorate
from order_import.services.editing import collect_error_reasons, partition_rows
from order_import.services.orchestrator import ProcessingError, process_files, run_import
from order_import.services.payload import build_order_requests
from order_import.services.summary import render_summary_line
from order_import.services.template import generate_template
from order_import.tabular.reader import ImportFileError

"""CLI entrypoint.

Flow:
- load .env, then the YAML config (ORDER_IMPORT_CONFIG or config/import.yml)
- load the gazetteer named in the config (optional; relative to the config file)
- import every given file independently, log per-file counts and a SUMMARY line
- optionally write the create-order payload for the valid rows

Exit codes: 0 all files parsed and all rows valid, 2 some file failed or some
rows invalid, 1 fatal (config / gazetteer / usage).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "ORDER_IMPORT_CONFIG"

# English fallback for the error-code translation lookup
DEFAULT_MESSAGES = {
    "required": "required field is empty",
    "invalidName": "customer name contains only digits",
    "invalidMobile": "mobile must be 11 digits starting with 01",
    "min1": "quantity must be at least 1",
    "minZero": "unit price must not be negative",
}


def translate(code: str) -> str:
    return DEFAULT_MESSAGES.get(code, code)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Bulk order import (CSV / Excel / Shopify exports)")
    p.add_argument("files", nargs="*", type=Path, help="CSV / XLSX / XLS files to import")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, mapping & first rows then exit")
    p.add_argument("--payload-out", type=Path, help="Write create-order payload (valid rows) as JSON")
    p.add_argument("--template", choices=("csv", "xlsx"), help="Write a blank import template and exit")
    return p.parse_args(argv)


def _config_path() -> Path:
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def _gazetteer_path(value: str, config_path: Path) -> Path:
    """Relative gazetteer paths are resolved against the config file directory."""
    path = Path(value)
    return path if path.is_absolute() else config_path.parent / path


def _write_template(fmt: str) -> int:
    template = generate_template(fmt)
    out = Path(template.filename)
    out.write_bytes(template.content)
    print(f"template written: {out}")
    return EXIT_SUCCESS_ALL


def _inspect_data(paths: list[Path], cfg: ImportConfig, governorates: list[Governorate], cities: list[City]) -> int:
    for path in paths:
        print(f"FILE: {path.name}")
        try:
            result = run_import(
                path.read_bytes(),
                path.name,
                governorates,
                cities,
                extra_synonyms=cfg.header_synonyms,
                max_file_size=cfg.max_file_size_bytes,
            )
        except (ImportFileError, OSError) as e:
            print(f"  read_error: {e}")
            continue
        mapping = {h: (f.value if f is not None else None) for h, f in result.mapping.items()}
        print(f"  encoding={result.encoding} shopify={result.is_shopify}")
        print(f"  mapping={mapping}")
        for row in result.rows[:3]:
            print("    row=", json.dumps(row.to_dict(), ensure_ascii=False))
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで [] を渡すケース)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    if args.template:
        return _write_template(args.template)

    if not args.files:
        logger.error("no input files given")
        return EXIT_FATAL

    load_dotenv(dotenv_path=Path(".env"), override=False)
    config_path = _config_path()
    try:
        cfg = load_config(config_path)
        governorates: list[Governorate] = []
        cities: list[City] = []
        if cfg.gazetteer:
            governorates, cities = load_gazetteer(_gazetteer_path(cfg.gazetteer, config_path))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.files, cfg, governorates, cities)

    try:
        result, imports = process_files(args.files, cfg, governorates, cities)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    order_requests = []
    for imported in imports:
        valid, invalid = partition_rows(imported.rows)
        if invalid:
            reasons = ", ".join(collect_error_reasons(invalid, translate))
            logger.warning(f"{imported.file_name}: {len(invalid)} rows skipped ({reasons})")
        # 注文グルーピングはファイル単位 (order_ref はファイル間で衝突し得る)
        order_requests.extend(build_order_requests(valid))

    if args.payload_out is not None:
        payload = [req.to_dict() for req in order_requests]
        args.payload_out.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"payload written: {args.payload_out} orders={len(payload)}")

    summary_line = render_summary_line(result.success_files + result.failed_files, result)
    log_summary(summary_line[len("SUMMARY "):])

    return EXIT_PARTIAL_FAILURE if result.has_problems else EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
