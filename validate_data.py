#!/usr/bin/env python3
"""Validate logbook files (JSON or YAML) against the export schema."""
import argparse
import sys
from pathlib import Path

from carlog.exceptions import ImportFormatError
from carlog.loader import document_to_snapshot, load_schema, read_document, validate_document


def validate_logbook_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single logbook file. Returns list of errors."""
    errors = []
    try:
        data = read_document(filepath)
        validate_document(data, schema)
        document_to_snapshot(data)
    except ImportFormatError as e:
        errors.append(e.message)
        if e.path:
            errors.append(f"  at path: {e.path}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given logbook files, or every file in logbooks/."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("files", nargs="*", type=Path, help="Logbook files")
    args = parser.parse_args(argv)

    files = args.files
    if not files:
        logbooks_dir = Path(__file__).parent / "logbooks"
        if not logbooks_dir.exists():
            print(f"Error: logbooks directory not found: {logbooks_dir}")
            return 1
        files = sorted(
            p
            for pattern in ("*.json", "*.yaml", "*.yml")
            for p in logbooks_dir.glob(pattern)
        )
        if not files:
            print(f"Warning: No logbook files found in {logbooks_dir}")
            return 0

    schema = load_schema()
    all_valid = True
    for filepath in files:
        errors = validate_logbook_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
