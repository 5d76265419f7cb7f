#!/usr/bin/env python3
"""
Cadastrar un usuario directamente en el archivo JSON.

Uso:
  python scripts/add_user.py --nombre "Ana" --email ana@example.com [--data-file ruta/data.json]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from minicrud.services.user_service import UserError, UserService


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Agregar usuario al store JSON")
    ap.add_argument("--nombre", required=True, help="Nombre (1-60 caracteres)")
    ap.add_argument("--email", required=True, help="Email (se guarda en minusculas)")
    ap.add_argument("--data-file", help="Archivo JSON (default: MINICRUD_DATA_FILE)")
    args = ap.parse_args(argv)

    svc = UserService(Path(args.data_file) if args.data_file else None)
    try:
        records = svc.create_user(args.nombre, args.email)
    except UserError as exc:
        raise SystemExit(exc.message)

    created = records[-1]
    print("OK: usuario agregado")
    print(f"  Posicion: {len(records) - 1}")
    print(f"  Nombre: {created['nombre']}")
    print(f"  Email: {created['email']}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
