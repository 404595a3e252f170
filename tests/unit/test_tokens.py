"""Token issuance tests."""

import base64
import hashlib
import hmac

import cbor2
import pytest

from catprobe.constants import DEFAULT_KEY, TOKEN_NAME
from catprobe.contracts import TokenTransport
from catprobe.errors import KeyDecodeError, SigningError
from catprobe.security import (
    TokenBuilder,
    build_token,
    decode_key,
    encode_token,
    tokens,
)

NOW = 1_700_000_000


@pytest.fixture
def frozen_clock(monkeypatch):
    monkeypatch.setattr(tokens, "current_timestamp", lambda: NOW)
    return NOW


def _unwrap(token: bytes):
    outer = cbor2.loads(token)
    assert outer.tag == 61
    mac0 = outer.value
    assert mac0.tag == 17
    protected, unprotected, payload, tag = mac0.value
    return protected, unprotected, payload, tag


def test_decode_key():
    assert decode_key("00ff10") == b"\x00\xff\x10"
    assert len(decode_key(DEFAULT_KEY)) == 32


@pytest.mark.parametrize("bad", ["xyz", "abc", "0g", "40 36", " 4036", "40 36 97", "4036\n"])
def test_decode_key_rejects_malformed_hex(bad):
    with pytest.raises(KeyDecodeError):
        decode_key(bad)


def test_header_token_claims(frozen_clock):
    token = build_token(DEFAULT_KEY, 20, TokenTransport.HEADER, None, "eyevinn")
    protected, unprotected, payload, _ = _unwrap(token)

    assert cbor2.loads(protected) == {1: 5}
    assert unprotected == {4: "Symmetric256"}

    claims = cbor2.loads(payload)
    assert claims[1] == "eyevinn"
    assert claims[2] == "user_id:asset_id:session_id"
    assert claims[4] == NOW + 40
    assert claims[6] == NOW
    assert claims[7] == b"\x01\x02\x03\x04"
    assert claims[323] == {0: 2, 1: 20, 2: NOW + 10, 4: TOKEN_NAME, 6: []}


def test_cookie_token_claims(frozen_clock):
    token = build_token(DEFAULT_KEY, 21, TokenTransport.COOKIE, ".example.com", "issuer")
    _, _, payload, _ = _unwrap(token)

    catr = cbor2.loads(payload)[323]
    assert catr[0] == 1
    assert catr[1] == 21
    assert catr[2] == NOW + 10
    assert catr[3] == TOKEN_NAME
    assert catr[5] == [
        "Secure",
        "HttpOnly",
        "Domain=.example.com",
        "path=/",
        "SameSite=None",
    ]
    assert 4 not in catr


def test_cookie_as_query_uses_cookie_renewal(frozen_clock):
    token = build_token(DEFAULT_KEY, 20, TokenTransport.COOKIE_AS_QUERY, "10.0.0.1", "i")
    _, _, payload, _ = _unwrap(token)
    assert cbor2.loads(payload)[323][5][2] == "Domain=10.0.0.1"


def test_mac_covers_protected_header_and_payload(frozen_clock):
    key = decode_key(DEFAULT_KEY)
    token = build_token(DEFAULT_KEY, 20, TokenTransport.HEADER, None, "eyevinn")
    protected, _, payload, tag = _unwrap(token)

    mac_input = cbor2.dumps(["MAC0", protected, b"", payload])
    assert tag == hmac.new(key, mac_input, hashlib.sha256).digest()


def test_tokens_are_deterministic_for_fixed_clock(frozen_clock):
    first = build_token(DEFAULT_KEY, 20, TokenTransport.COOKIE, ".example.com", "issuer")
    second = build_token(DEFAULT_KEY, 20, TokenTransport.COOKIE, ".example.com", "issuer")
    assert first == second


def test_tokens_differ_only_in_time_claims(monkeypatch):
    monkeypatch.setattr(tokens, "current_timestamp", lambda: NOW)
    first = cbor2.loads(_unwrap(build_token(DEFAULT_KEY, 20, "header", None, "i"))[2])
    monkeypatch.setattr(tokens, "current_timestamp", lambda: NOW + 7)
    second = cbor2.loads(_unwrap(build_token(DEFAULT_KEY, 20, "header", None, "i"))[2])

    assert second[6] - first[6] == 7
    assert second[4] - first[4] == 7
    assert second[323][2] - first[323][2] == 7
    for claim in (1, 2, 7):
        assert first[claim] == second[claim]


def test_builder_overrides(frozen_clock):
    builder = TokenBuilder(subject="user:asset:s1", token_id=b"\xaa\xbb", key_id=b"k1")
    token = builder.build(b"secret", 10, TokenTransport.HEADER, None, "iss")
    _, unprotected, payload, _ = _unwrap(token)

    claims = cbor2.loads(payload)
    assert unprotected == {4: b"k1"}
    assert claims[2] == "user:asset:s1"
    assert claims[7] == b"\xaa\xbb"


def test_default_key_id_is_text_string(frozen_clock):
    token = build_token(DEFAULT_KEY, 20, TokenTransport.COOKIE, ".example.com", "issuer")
    _, unprotected, _, _ = _unwrap(token)

    kid = unprotected[4]
    assert isinstance(kid, str)
    assert kid == "Symmetric256"
    # Major type 3 (text string) of length 12
    assert cbor2.dumps(unprotected)[2:3] == b"\x6c"


def test_empty_key_fails_signing():
    with pytest.raises(SigningError):
        build_token("", 20, TokenTransport.HEADER, None, "issuer")


def test_cookie_token_requires_domain():
    with pytest.raises(SigningError):
        build_token(DEFAULT_KEY, 20, TokenTransport.COOKIE, None, "issuer")


def test_malformed_key_fails_before_signing():
    with pytest.raises(KeyDecodeError):
        build_token("not-hex", 20, TokenTransport.HEADER, None, "issuer")


def test_encode_token_is_unpadded_urlsafe():
    encoded = encode_token(b"\xfb\xff\xfe\x00")
    assert "=" not in encoded
    assert "+" not in encoded and "/" not in encoded
    assert base64.urlsafe_b64decode(encoded + "==") == b"\xfb\xff\xfe\x00"
