from __future__ import annotations

import pytest

from docshop.core.codes import (
    CODE_ALPHABET,
    account_code,
    activation_code,
    normalize_code,
    unique_code,
)
from docshop.core.security import hash_password, verify_password
from docshop.services.session_service import decode_token, issue_token


def test_alphabet_excludes_ambiguous_symbols():
    assert len(CODE_ALPHABET) == 32
    assert not set("01IO") & set(CODE_ALPHABET)


def test_code_shapes():
    assert len(activation_code()) == 12
    code = account_code()
    assert code.startswith("AC-") and len(code) == 11
    assert normalize_code(" abc ") == "ABC"


def test_unique_code_gives_up_eventually():
    with pytest.raises(RuntimeError):
        unique_code(lambda: "SAME", {"SAME"})


def test_password_hash_roundtrip():
    stored = hash_password("s3cret")
    assert stored.startswith("argon2$")
    assert verify_password("s3cret", stored)
    assert not verify_password("other", stored)
    assert not verify_password("s3cret", "plain-text")
    assert not verify_password("s3cret", None)


def test_token_roundtrip_and_tampering():
    token = issue_token({"id": "u1", "role": "admin", "name": "Root"})
    principal = decode_token(token)
    assert principal.id == "u1" and principal.is_admin

    assert decode_token(token + "x") is None
    assert decode_token("") is None
