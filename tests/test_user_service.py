from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Garante que o pacote minicrud seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from minicrud.domain.users import clean_text, is_valid_email, parse_index  # noqa: E402
from minicrud.repositories import json_storage  # noqa: E402
from minicrud.services.user_service import (  # noqa: E402
    ConflictError,
    NotFoundError,
    UserService,
    ValidationError,
)


@pytest.fixture()
def store(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture()
def svc(store):
    return UserService(store)


def _email_of_length(length: int) -> str:
    local = "a" * 64
    return local + "@" + "d" * (length - len(local) - len("@.com")) + ".com"


def test_list_on_missing_store_initializes_file(svc, store):
    assert svc.list_users() == []
    assert store.read_text(encoding="utf-8") == "[]\n"


def test_create_trims_and_lowercases(svc, store):
    records = svc.create_user("  Ana  ", "  ANA@X.COM ")
    assert records == [{"nombre": "Ana", "email": "ana@x.com"}]
    assert json_storage.load(store) == records


def test_duplicate_email_differing_by_case_conflicts(svc, store):
    svc.create_user("Ana", "ana@x.com")
    with pytest.raises(ConflictError) as exc:
        svc.create_user("Otra Ana", "Ana@X.com")
    assert exc.value.status_code == 409
    assert len(json_storage.load(store)) == 1


@pytest.mark.parametrize(
    "nombre,email",
    [("", "ana@x.com"), ("Ana", ""), ("   ", "ana@x.com"), (None, None)],
)
def test_required_fields(svc, nombre, email):
    with pytest.raises(ValidationError) as exc:
        svc.create_user(nombre, email)
    assert exc.value.status_code == 422
    assert "obligatorios" in exc.value.message


@pytest.mark.parametrize("email", ["ana", "ana@", "@x.com", "ana@x", "a b@x.com", "ana@@x.com", "ana.@x.com"])
def test_malformed_email_rejected(svc, email):
    with pytest.raises(ValidationError) as exc:
        svc.create_user("Ana", email)
    assert "formato" in exc.value.message


def test_name_length_boundary(svc):
    svc.create_user("n" * 60, "sixty@x.com")
    with pytest.raises(ValidationError) as exc:
        svc.create_user("n" * 61, "sixtyone@x.com")
    assert exc.value.message == 'El campo "nombre" excede los 60 caracteres.'


def test_email_length_boundary(svc):
    ok = _email_of_length(120)
    assert len(ok) == 120
    svc.create_user("Ana", ok)
    with pytest.raises(ValidationError) as exc:
        svc.create_user("Bruno", _email_of_length(121))
    assert exc.value.message == 'El campo "email" excede los 120 caracteres.'


def test_create_failure_leaves_store_unchanged(svc, store):
    svc.create_user("Ana", "ana@x.com")
    before = store.read_text(encoding="utf-8")
    with pytest.raises(ValidationError):
        svc.create_user("n" * 61, "otro@x.com")
    assert store.read_text(encoding="utf-8") == before


def test_delete_shifts_later_positions(svc):
    for name in ("Ana", "Bruno", "Carla"):
        svc.create_user(name, f"{name.lower()}@x.com")
    records = svc.delete_user(1)
    assert [r["nombre"] for r in records] == ["Ana", "Carla"]
    assert svc.list_users() == records


def test_delete_only_record_leaves_empty_store(svc):
    svc.create_user("Ana", "ana@x.com")
    assert svc.delete_user(0) == []
    assert svc.list_users() == []


@pytest.mark.parametrize(
    "index",
    [-1, "-1", "abc", None, True, 1.5, "", [0], {"i": 0}, "1_0", "\u0663", "0x1", "1 0"],
)
def test_delete_invalid_index(svc, store, index):
    svc.create_user("Ana", "ana@x.com")
    before = store.read_text(encoding="utf-8")
    with pytest.raises(ValidationError) as exc:
        svc.delete_user(index)
    assert exc.value.status_code == 422
    assert store.read_text(encoding="utf-8") == before


@pytest.mark.parametrize("index", [1, 5, "1"])
def test_delete_out_of_range(svc, store, index):
    svc.create_user("Ana", "ana@x.com")
    before = store.read_text(encoding="utf-8")
    with pytest.raises(NotFoundError) as exc:
        svc.delete_user(index)
    assert exc.value.status_code == 404
    assert exc.value.message == f"El usuario en la posición {int(index)} no existe."
    assert store.read_text(encoding="utf-8") == before


def test_opaque_entries_do_not_break_duplicate_scan(svc, store):
    store.write_text('["raw", {"email": 7}, {"nombre": "Ana", "email": "ana@x.com"}]', encoding="utf-8")
    records = svc.create_user("Bruno", "bruno@x.com")
    assert records[:3] == ["raw", {"email": 7}, {"nombre": "Ana", "email": "ana@x.com"}]
    with pytest.raises(ConflictError):
        svc.create_user("Ana", "ANA@x.com")


def test_parse_index_accepts_integral_values():
    assert parse_index(0) == 0
    assert parse_index(3.0) == 3
    assert parse_index(" 2 ") == 2
    assert parse_index("4.0") == 4
    assert parse_index(float("nan")) is None


def test_is_valid_email_examples():
    assert is_valid_email("ANA@X.COM")
    assert is_valid_email("first.last+tag@sub.example.org")
    assert not is_valid_email("first..last@example.org")
    assert not is_valid_email("ana@-x.com")


def test_local_part_longer_than_64_is_malformed(svc, store):
    svc.create_user("Ana", "a" * 64 + "@x.com")
    with pytest.raises(ValidationError) as exc:
        svc.create_user("Bruno", "b" * 65 + "@x.com")
    assert exc.value.status_code == 422
    assert "formato" in exc.value.message
    assert len(json_storage.load(store)) == 1


def test_clean_text_trims_only_ascii_blanks():
    assert clean_text(" \t\nAna\r\x0b\0") == "Ana"
    assert clean_text("\u00a0Ana\u3000") == "\u00a0Ana\u3000"
    assert clean_text(7) == "7"


def test_signed_and_exponent_numeric_strings():
    assert parse_index("+2") == 2
    assert parse_index("1e1") == 10
    assert parse_index(".5") is None


def test_logs_do_not_carry_email_addresses(svc, caplog):
    caplog.set_level(logging.INFO, logger="minicrud.services.user_service")
    svc.create_user("Ana", "secret.ana@x.com")
    with pytest.raises(ConflictError):
        svc.create_user("Ana", "SECRET.ANA@x.com")
    with pytest.raises(ValidationError):
        svc.create_user("Ana", "secret.bruno@")
    svc.delete_user(0)
    assert caplog.records
    assert "secret" not in caplog.text
