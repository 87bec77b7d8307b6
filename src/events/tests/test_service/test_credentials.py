import hashlib

from events.service.registration_manager import hash_cancel_token, issue_cancel_credential, verify_cancel_token


def test_issue_returns_token_and_its_digest() -> None:
    credential = issue_cancel_credential()

    assert len(credential.token) >= 32
    assert credential.token_hash == hashlib.sha256(credential.token.encode()).hexdigest()
    assert len(credential.token_hash) == 64


def test_issued_tokens_are_unique() -> None:
    tokens = {issue_cancel_credential().token for _ in range(50)}

    assert len(tokens) == 50


def test_verify_accepts_matching_token() -> None:
    credential = issue_cancel_credential()

    assert verify_cancel_token(credential.token, credential.token_hash)


def test_verify_rejects_other_token() -> None:
    credential = issue_cancel_credential()
    other = issue_cancel_credential()

    assert not verify_cancel_token(other.token, credential.token_hash)


def test_verify_rejects_empty_values() -> None:
    credential = issue_cancel_credential()

    assert not verify_cancel_token("", credential.token_hash)
    assert not verify_cancel_token(credential.token, "")


def test_hash_is_deterministic() -> None:
    assert hash_cancel_token("abc") == hash_cancel_token("abc")
    assert hash_cancel_token("abc") != hash_cancel_token("abd")
