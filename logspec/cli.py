# logspec/cli.py
# -----------------------------------------------------------------------------
# CLI filter: delivery workbook + logspec matrix -> logspec lines
#
# Usage (from repo root):
#   python -m logspec.cli --data deliveries.xlsx
#   python -m logspec.cli --data deliveries.xlsx --matrix my_matrix.txt \
#       --columns "Delivery,Ship Method,Country" --out logspec.csv
#   python -m logspec.cli --data deliveries.xlsx --show-matrix -v
# -----------------------------------------------------------------------------
import argparse
import logging
import sys
from pathlib import Path

from .filter import run_filter
from .ingest import IngestError, parse_excel_file
from .similarity import NoInference
from .store import MatrixLoadError, MatrixStore


def split_columns(s):
    if not s:
        return []
    return [c.strip() for c in s.split(",") if c.strip()]


def parse_args(argv=None):
    p = argparse.ArgumentParser("Filter delivery lines subject to a logspec")
    p.add_argument("--data", required=True, help="Excel (.xlsx/.xls) or CSV data file")
    p.add_argument("--matrix", help="Custom matrix .txt (default matrix otherwise)")
    p.add_argument("--columns", help="Comma-separated output columns, in order")
    p.add_argument("--out", help="Write the logspec lines to this CSV")
    p.add_argument("--show-matrix", action="store_true", help="Print the configured ship methods")
    p.add_argument("--no-inference", action="store_true",
                   help="Do not fill empty rules from similar ship methods")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = MatrixStore(strategy=NoInference() if args.no_inference else None)
    try:
        if args.matrix:
            store.load_file(args.matrix)
        lookup = store.current
        rows = parse_excel_file(Path(args.data))
    except (MatrixLoadError, IngestError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(store.summary())
    if args.show_matrix:
        for line in lookup.describe():
            print(f"  {line}")

    result = run_filter(rows, lookup)
    print(f"\n{result.summary()}")
    if not result.rows:
        return 0

    df = result.to_frame(split_columns(args.columns))
    if args.out:
        df.to_csv(args.out, index=False)
        print(f"\nSaved: {args.out}")
    else:
        print()
        print(df.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
