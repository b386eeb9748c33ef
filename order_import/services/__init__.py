"""Pipeline stages and orchestration."""

from .column_mapper import auto_map_columns
from .editing import collect_error_reasons, describe_errors, partition_rows, update_row_field
from .locations import resolve_location_ids
from .materializer import map_rows_to_orders
from .orchestrator import ProcessingError, process_files, run_import
from .payload import build_order_requests
from .shopify import is_shopify_export, preprocess_shopify_rows
from .template import generate_template
from .validator import validate_all_rows, validate_order_row

__all__ = [
    "auto_map_columns",
    "is_shopify_export",
    "preprocess_shopify_rows",
    "map_rows_to_orders",
    "resolve_location_ids",
    "validate_order_row",
    "validate_all_rows",
    "update_row_field",
    "describe_errors",
    "collect_error_reasons",
    "partition_rows",
    "build_order_requests",
    "generate_template",
    "run_import",
    "process_files",
    "ProcessingError",
]
