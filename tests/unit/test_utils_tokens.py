from datetime import timedelta
import jwt
import pytest

from storefront.utils import tokens
from storefront.utils.tokens import issue_token, decode_token

def test_issue_and_decode_roundtrip():
    claims = decode_token(issue_token("user-1"))
    assert claims["_id"] == "user-1"
    assert claims["exp"] > claims["iat"]

def test_expired_token_is_rejected():
    token = issue_token("user-1", expires_in=timedelta(seconds=-1))
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_token(token)

def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode({"_id": "user-1"}, "other-secret", algorithm="HS256")
    with pytest.raises(jwt.InvalidSignatureError):
        decode_token(forged)

def test_missing_secret(monkeypatch):
    monkeypatch.setattr(tokens, "JWT_SECRET", "")
    with pytest.raises(RuntimeError):
        issue_token("user-1")
