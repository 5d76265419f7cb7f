"""
User record use cases: list, create, delete by position.

Every call reads the full store, applies at most one mutation and rewrites the
whole file. The first failing check raises; nothing is persisted in that case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import logging

from minicrud.domain.users import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    clean_text,
    email_in_use,
    is_valid_email,
    normalize_email,
    parse_index,
)
from minicrud.repositories import json_storage

logger = logging.getLogger(__name__)


class UserError(Exception):
    """Base class for user workflow errors; carries the HTTP status to answer with."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(UserError):
    """Missing, malformed or oversized field."""

    status_code = 422


class ConflictError(UserError):
    """Another record already owns the normalized email."""

    status_code = 409


class NotFoundError(UserError):
    """No record at the requested position."""

    status_code = 404


class InvalidActionError(UserError):
    status_code = 405

    def __init__(self, action: str):
        super().__init__(f"Acción '{action}' no implementada.")
        self.action = action


class MethodNotAllowedError(UserError):
    status_code = 405

    def __init__(self, method: str, action: str):
        super().__init__(f"Método HTTP '{method}' no permitido para la acción '{action}'.")
        self.method = method
        self.action = action


@dataclass
class UserService:
    """Validates input and applies create/delete against the JSON store."""

    path: Optional[Path] = None
    _store_path: Path = field(init=False, repr=False)

    def __post_init__(self):
        self._store_path = self.path or json_storage.data_file()

    # -------------------------------------- helpers --------------------------------------
    def _load(self) -> list:
        json_storage.ensure_store(self._store_path)
        return json_storage.load(self._store_path)

    def _save(self, records: list) -> None:
        json_storage.persist(records, self._store_path)

    # -------------------------------------- use cases --------------------------------------
    def list_users(self) -> list:
        return self._load()

    def create_user(self, nombre: Any, email: Any) -> list:
        name_value = clean_text(nombre)
        email_value = clean_text(email)
        if not name_value or not email_value:
            logger.warning("Rejected create: missing nombre or email")
            raise ValidationError('Los campos "nombre" y "email" son obligatorios.')
        if not is_valid_email(email_value):
            logger.warning("Rejected create: malformed email")
            raise ValidationError('El campo "email" no tiene un formato válido.')
        if len(name_value) > NAME_MAX_LENGTH:
            raise ValidationError(f'El campo "nombre" excede los {NAME_MAX_LENGTH} caracteres.')
        if len(email_value) > EMAIL_MAX_LENGTH:
            raise ValidationError(f'El campo "email" excede los {EMAIL_MAX_LENGTH} caracteres.')

        normalized = normalize_email(email_value)
        records = self._load()
        if email_in_use(records, normalized):
            logger.warning("Rejected create: duplicate email")
            raise ConflictError("Ya existe un usuario con ese email.")

        records.append({"nombre": name_value, "email": normalized})
        self._save(records)
        logger.info("Created user at position=%d", len(records) - 1)
        return records

    def delete_user(self, index: Any) -> list:
        position = parse_index(index)
        if position is None:
            logger.warning("Rejected delete: invalid index=%r", index)
            raise ValidationError("El índice de usuario a eliminar no es válido.")
        records = self._load()
        if position >= len(records):
            raise NotFoundError(f"El usuario en la posición {position} no existe.")
        records.pop(position)
        self._save(records)
        logger.info("Deleted user at position=%d", position)
        return records
