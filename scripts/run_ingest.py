"""
Demo script: turn timestamp files into time windows via the public API.

Usage:
    uv run python scripts/run_ingest.py inputs/timestamps.csv
    uv run python scripts/run_ingest.py inputs/timestamps.csv --window 30
    uv run python scripts/run_ingest.py inputs/*.csv --config timewindow.yaml

Each input file is cleaned, its layout detected, and every row parsed.
The per-file summary and the first few row errors are logged; files that
cannot be processed as a whole (unknown layout, no valid rows) are logged
and skipped.
"""

from __future__ import annotations

import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_ingest")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _pop_option(args: list[str], name: str) -> str | None:
    """Remove ``name VALUE`` from ``args`` and return VALUE (or None)."""
    if name not in args:
        return None
    idx = args.index(name)
    if idx + 1 >= len(args):
        raise SystemExit(f"{name} requires a value")
    value = args[idx + 1]
    del args[idx:idx + 2]
    return value


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    from pydantic import ValidationError

    import timewindow_ingest
    from timewindow_ingest.exceptions import NoValidRowsError, TimeWindowError

    args = sys.argv[1:]
    config_path = _pop_option(args, "--config")
    window = _pop_option(args, "--window")

    if not args:
        raise SystemExit(__doc__)

    config = (
        timewindow_ingest.load_config(config_path)
        if config_path
        else timewindow_ingest.IngestConfig()
    )
    if window is not None:
        try:
            config = config.with_overrides(window_seconds=window)
        except ValidationError as e:
            raise SystemExit(f"Invalid --window {window!r}:\n{e}")

    for input_path in args:
        log.info("=" * 70)
        log.info("Processing: %s", input_path)
        log.info("=" * 70)

        try:
            result = timewindow_ingest.ingest_file(input_path, config)
        except FileNotFoundError:
            log.warning("SKIP  %s  (file not found)", input_path)
            continue
        except NoValidRowsError as e:
            log.error("FAIL  %s: %s", input_path, e)
            for message in e.result.error_report(config.max_errors_shown):
                log.error("  %s", message)
            continue
        except TimeWindowError as e:
            log.error("FAIL  %s: %s", input_path, e)
            continue

        summary = result.summary
        log.info("  layout   : %s", result.layout.value)
        log.info("  rows     : %d (%d valid, %d errors)",
                 summary.total_rows, summary.valid_entries, summary.error_count)
        for entry in result.entries:
            log.info("  Row %d: %s", entry.row.row_number, entry.description)

    log.info("All files processed.")


if __name__ == "__main__":
    main()
