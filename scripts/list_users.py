#!/usr/bin/env python3
"""
Listar los usuarios guardados, uno por linea.

Uso:
  python scripts/list_users.py [--data-file ruta/data.json]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from minicrud.services.user_service import UserService


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Listar usuarios del store JSON")
    ap.add_argument("--data-file", help="Archivo JSON (default: MINICRUD_DATA_FILE)")
    args = ap.parse_args(argv)

    records = UserService(Path(args.data_file) if args.data_file else None).list_users()
    if not records:
        print("(sin usuarios)")
        return
    for position, record in enumerate(records):
        if isinstance(record, dict):
            print(f"{position}\t{record.get('nombre', '')}\t{record.get('email', '')}")
        else:
            print(f"{position}\t{record!r}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
