"""
Unit tests for JWTEngine.decode() and detect_algorithm().
"""

import pytest

from jwtlab import Algorithm, InvalidEncoding, InvalidJSON, JWTError, MalformedToken
from jwtlab.encoding import b64url_encode

DEPTH = 100_000


def deeply_nested() -> str:
    """Base64url JSON object whose value nests arrays DEPTH levels deep."""
    return b64url_encode('{"a":' + "[" * DEPTH + "]" * DEPTH + "}")


class TestDecode:
    """Tests for decoding tokens without verification."""

    def test_decode_jwt_io_token(self, engine, jwt_io_token):
        """Header, payload and raw signature are all returned."""
        decoded = engine.decode(jwt_io_token)

        assert decoded.header == {"alg": "HS256", "typ": "JWT"}
        assert decoded.payload == {"sub": "1234567890", "name": "John Doe", "iat": 1516239022}
        assert decoded.signature == "SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"

    def test_decode_does_not_verify(self, engine):
        """A bogus signature segment does not stop decoding."""
        decoded = engine.decode("eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiIxMjM0NTY3ODkwIn0.sig")

        assert decoded.header == {"alg": "HS256"}
        assert decoded.payload == {"sub": "1234567890"}
        assert decoded.signature == "sig"

    def test_decode_pretty_json(self, engine, jwt_io_token):
        decoded = engine.decode(jwt_io_token)

        assert decoded.header_json == '{\n  "alg": "HS256",\n  "typ": "JWT"\n}'
        assert '"name": "John Doe"' in decoded.payload_json

    def test_decode_algorithm_hint(self, engine, jwt_io_token):
        assert engine.decode(jwt_io_token).algorithm is Algorithm.HS256

    def test_decode_strips_whitespace(self, engine, jwt_io_token):
        decoded = engine.decode(f"  {jwt_io_token}\n")
        assert decoded.payload["sub"] == "1234567890"

    def test_decode_padded_segments(self, engine):
        """Segments that keep their '=' padding are accepted."""
        decoded = engine.decode("eyJhIjoxfQ==.eyJhIjoxfQ==.c2ln")
        assert decoded.header == {"a": 1}
        assert decoded.payload == {"a": 1}

    def test_decode_nested_and_unicode(self, engine):
        header = b64url_encode('{"alg":"HS256"}')
        payload = b64url_encode('{"user":{"roles":["admin"]},"msg":"Hello, World! 🌍"}')
        decoded = engine.decode(f"{header}.{payload}.c2ln")

        assert decoded.payload["user"]["roles"] == ["admin"]
        assert decoded.payload["msg"] == "Hello, World! 🌍"


class TestDecodeErrors:
    """Tests for decode() failures."""

    @pytest.mark.parametrize("token", [
        "",
        "a.b",
        "a.b.c.d",
        "only.two.segments.here.four",
        "a..c",
        ".b.c",
        "a.b.",
    ])
    def test_malformed(self, engine, token):
        """Anything but three non-empty segments is malformed."""
        with pytest.raises(MalformedToken):
            engine.decode(token)

    def test_non_string(self, engine):
        with pytest.raises(MalformedToken):
            engine.decode(None)

    def test_invalid_base64(self, engine):
        with pytest.raises(InvalidEncoding):
            engine.decode("not!valid!base64.not!valid!base64.not!valid!base64")

    def test_invalid_json(self, engine):
        """Valid base64 that is not JSON."""
        with pytest.raises(InvalidJSON):
            engine.decode("YWJjZGVm.Z2hpamts.bW5vcHFyc3R1dnd4eXo")

    def test_header_not_an_object(self, engine):
        header = b64url_encode("[1, 2]")
        with pytest.raises(InvalidJSON):
            engine.decode(f"{header}.eyJhIjoxfQ.c2ln")

    def test_payload_not_an_object(self, engine):
        payload = b64url_encode('"just a string"')
        with pytest.raises(InvalidJSON):
            engine.decode(f"eyJhIjoxfQ.{payload}.c2ln")

    def test_not_a_jwt(self, engine):
        """Right shape, wrong content: a decode error, not malformed."""
        with pytest.raises(JWTError) as exc_info:
            engine.decode("not.a.jwt")
        assert not isinstance(exc_info.value, MalformedToken)

    def test_error_messages(self, engine):
        with pytest.raises(MalformedToken, match="3 segments"):
            engine.decode("a.b")

    def test_deeply_nested_payload(self, engine):
        with pytest.raises(InvalidJSON, match="nested too deeply"):
            engine.decode(f"eyJhbGciOiJIUzI1NiJ9.{deeply_nested()}.c2ln")

    def test_deeply_nested_header(self, engine):
        with pytest.raises(InvalidJSON):
            engine.decode(f"{deeply_nested()}.eyJhIjoxfQ.c2ln")


class TestDetectAlgorithm:
    """Tests for detect_algorithm()."""

    def test_detects_hs256(self, engine, jwt_io_token):
        assert engine.detect_algorithm(jwt_io_token) is Algorithm.HS256

    def test_case_insensitive(self, engine):
        header = b64url_encode('{"alg":"es384"}')
        assert engine.detect_algorithm(f"{header}.x.y") is Algorithm.ES384

    def test_tolerates_corrupt_payload(self, engine):
        """Only the header segment matters."""
        header = b64url_encode('{"alg":"PS512"}')
        assert engine.detect_algorithm(f"{header}.!!!") is Algorithm.PS512
        assert engine.detect_algorithm(header) is Algorithm.PS512

    @pytest.mark.parametrize("header_json", [
        '{"typ":"JWT"}',
        '{"alg":"none"}',
        '{"alg":"EdDSA"}',
        '{"alg":256}',
    ])
    def test_unknown_or_missing(self, engine, header_json):
        header = b64url_encode(header_json)
        assert engine.detect_algorithm(f"{header}.e30.c2ln") is None

    @pytest.mark.parametrize("token", ["", "   ", "!!!.e30.c2ln", "YWJjZGVm.e30.c2ln", None])
    def test_garbage_returns_none(self, engine, token):
        assert engine.detect_algorithm(token) is None

    def test_deeply_nested_header_returns_none(self, engine):
        assert engine.detect_algorithm(f"{deeply_nested()}.e30.c2ln") is None

    def test_padded_alg_name(self, engine):
        header = b64url_encode('{"alg":" HS256 "}')
        assert engine.detect_algorithm(f"{header}.e30.c2ln") is Algorithm.HS256
