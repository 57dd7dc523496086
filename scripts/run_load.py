"""
Demo script: load delimiter-separated files via the public API.

Usage:
    uv run python scripts/run_load.py data/iris.csv data/mixed.tsv
    uv run python scripts/run_load.py --normal data/iris.csv      # lines are rows
    uv run python scripts/run_load.py --categorical data/mixed.csv
    uv run python scripts/run_load.py --save outputs/ data/iris.csv

Each file is loaded, summarised and (with --save DIR) written back out
as parquet together with its mapping table.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_load")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str]) -> tuple[list[str], bool, bool, Path | None]:
    """Split argv into (files, transpose, categorical, save_dir)."""
    files: list[str] = []
    transpose = True
    categorical = False
    save_dir: Path | None = None

    args = iter(argv)
    for arg in args:
        if arg == "--normal":
            transpose = False
        elif arg == "--categorical":
            categorical = True
        elif arg == "--save":
            save_dir = Path(next(args, "outputs"))
        else:
            files.append(arg)
    return files, transpose, categorical, save_dir


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    import dsv_matrix
    from dsv_matrix.exceptions import DsvMatrixError

    files, transpose, categorical, save_dir = _parse_args(sys.argv[1:])
    if not files:
        log.error("No input files given")
        return 2

    failures = 0
    for input_path in files:
        mapper = dsv_matrix.DatasetMapper(
            dsv_matrix.IncrementPolicy() if categorical else dsv_matrix.NumericPolicy()
        )
        log.info("=" * 70)
        log.info("Loading: %s", input_path)
        try:
            result = dsv_matrix.load(input_path, mapper, transpose=transpose)
        except DsvMatrixError as exc:
            log.error("FAILED  %s: %s", input_path, exc)
            failures += 1
            continue

        info = result.describe()
        log.info("  shape       : %d x %d", *info.shape)
        log.info("  delimiter   : %r", info.delimiter)
        log.info("  policy      : %s", info.policy)
        for dim, n in info.categorical.items():
            log.info("  dimension %d : categorical, %d distinct token(s)", dim, n)

        if save_dir is not None:
            out = save_dir / f"{Path(input_path).stem}.parquet"
            for written in result.save(out, with_mappings=categorical):
                log.info("  wrote       : %s", written)

    log.info("Done: %d file(s), %d failure(s)", len(files), failures)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
