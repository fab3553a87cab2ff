#!/usr/bin/env python3
"""
Reference Table Export Tool
Write the built-in drug, interaction and side-effect tables as CSV files
that can be edited and loaded back through REFERENCE_DATA_DIR
"""

import sys
import argparse
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from drug_insight.reference_data import BUILTIN_TABLES, load_reference_tables, save_reference_tables


def main():
    parser = argparse.ArgumentParser(description="Export built-in reference tables to CSV")
    parser.add_argument("output_dir", nargs="?", default="data/reference", help="Directory to write CSV files into")
    parser.add_argument("--check", action="store_true", help="Reload the written files to verify them")
    args = parser.parse_args()

    written = save_reference_tables(BUILTIN_TABLES, args.output_dir)
    for path in written:
        print(f"✅ Wrote {path}")

    if args.check:
        reloaded = load_reference_tables(args.output_dir)
        if reloaded == BUILTIN_TABLES:
            print("✅ Reloaded tables match the built-in tables")
        else:
            print("❌ Reloaded tables differ from the built-in tables")
            sys.exit(1)


if __name__ == "__main__":
    main()
