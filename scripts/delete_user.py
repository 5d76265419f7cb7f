#!/usr/bin/env python3
"""
Eliminar un usuario por posicion (base cero) del archivo JSON.

Uso:
  python scripts/delete_user.py --index 0 [--data-file ruta/data.json]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from minicrud.services.user_service import UserError, UserService


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Eliminar usuario del store JSON")
    ap.add_argument("--index", required=True, help="Posicion del usuario (0, 1, ...)")
    ap.add_argument("--data-file", help="Archivo JSON (default: MINICRUD_DATA_FILE)")
    args = ap.parse_args(argv)

    svc = UserService(Path(args.data_file) if args.data_file else None)
    try:
        records = svc.delete_user(args.index)
    except UserError as exc:
        raise SystemExit(exc.message)

    print("OK: usuario eliminado")
    print(f"  Restantes: {len(records)}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
