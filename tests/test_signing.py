"""
Tests of X-Client-Hash signing and header composition.
"""

import datetime
import hashlib
import re

import pytest

from pxvapi import ClientCredentials, InvalidState, OutgoingRequest, Session
from pxvapi.signing import compose_headers, format_client_time, sign

from conftest import FIXED_NOW


CLIENT_TIME_PAT = re.compile(r"^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d[+-]\d\d:\d\d$")


class TestSign:

    def test_matches_md5_of_time_and_secret(self):
        expected = hashlib.md5(b"2024-01-01T00:00:00+00:00z").hexdigest()
        assert sign("2024-01-01T00:00:00+00:00", "z") == expected

    def test_deterministic_lowercase_hex(self):
        first = sign("2019-05-02T10:11:12+09:00", "secret")
        second = sign("2019-05-02T10:11:12+09:00", "secret")

        assert first == second
        assert len(first) == 32
        assert re.fullmatch(r"[0-9a-f]{32}", first)

    def test_utf8_encoding(self):
        expected = hashlib.md5("t秘密".encode("utf-8")).hexdigest()
        assert sign("t", "秘密") == expected


class TestFormatClientTime:

    def test_aware_utc(self):
        assert format_client_time(FIXED_NOW) == "2024-01-01T00:00:00+00:00"

    def test_microseconds_dropped(self):
        now = FIXED_NOW.replace(microsecond=123456)
        assert format_client_time(now) == "2024-01-01T00:00:00+00:00"

    def test_timezone_conversion(self):
        assert format_client_time(FIXED_NOW, "Asia/Tokyo") == \
            "2024-01-01T09:00:00+09:00"

    def test_naive_gets_local_offset(self):
        stamp = format_client_time(datetime.datetime(2024, 1, 1, 12, 0, 0))
        assert CLIENT_TIME_PAT.match(stamp)
        assert stamp.startswith("2024-01-01T12:00:00")


class TestComposeHeaders:

    @pytest.fixture
    def credentials(self):
        return ClientCredentials("x", "y", "z")

    @pytest.fixture
    def request_(self):
        return OutgoingRequest("https://app-api.pixiv.net/v1/x", "GET", [], False)

    def test_signature_headers(self, credentials, request_):
        headers = compose_headers(request_, Session(), credentials, FIXED_NOW)

        assert headers["X-Client-Time"] == "2024-01-01T00:00:00+00:00"
        assert headers["X-Client-Hash"] == \
            hashlib.md5(b"2024-01-01T00:00:00+00:00z").hexdigest()
        assert "Authorization" not in headers

    @pytest.mark.parametrize("client_hash", ["", "   "])
    def test_blank_hash_disables_signing(self, request_, client_hash):
        creds = ClientCredentials("x", "y", client_hash)
        headers = compose_headers(request_, Session(), creds, FIXED_NOW)

        assert "X-Client-Time" not in headers
        assert "X-Client-Hash" not in headers

    def test_auth_required_without_token(self, credentials):
        req = OutgoingRequest("https://app-api.pixiv.net/v1/x", "GET", [], True)

        with pytest.raises(InvalidState):
            compose_headers(req, Session(), credentials, FIXED_NOW)

    def test_bearer_on_required_auth(self, credentials):
        req = OutgoingRequest("https://app-api.pixiv.net/v1/x", "GET", [], True)
        session = Session("token", "refresh")

        headers = compose_headers(req, session, credentials, FIXED_NOW)

        assert headers["Authorization"] == "Bearer token"

    def test_bearer_on_optional_auth(self, credentials, request_):
        headers = compose_headers(
            request_, Session("token"), credentials, FIXED_NOW
        )
        assert headers["Authorization"] == "Bearer token"

    def test_fresh_time_per_call(self, credentials, request_):
        later = FIXED_NOW + datetime.timedelta(seconds=1)
        first = compose_headers(request_, Session(), credentials, FIXED_NOW)
        second = compose_headers(request_, Session(), credentials, later)

        assert first["X-Client-Time"] != second["X-Client-Time"]
        assert first["X-Client-Hash"] != second["X-Client-Hash"]
