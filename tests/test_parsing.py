"""
Tests for request parsing helpers.

Verifies that:
1. Login form bodies decode '+' and percent escapes
2. Malformed escapes fall back to the raw text
3. Duplicate form fields keep the last value
4. Cookies are found by exact name in the Cookie header
"""

import sys
from pathlib import Path

import pytest

# Add project src to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from auth.cookies import get_cookie  # noqa: E402
from auth.form import parse_form, percent_unescape  # noqa: E402


def test_form_decodes_percent_escapes():
    assert parse_form(b"username=a&password=b%20c") == {"username": "a", "password": "b c"}


def test_form_plus_is_space():
    assert parse_form(b"q=hello+world%21") == {"q": "hello world!"}


def test_form_encoded_plus_stays_plus():
    assert parse_form(b"password=a%2Bb") == {"password": "a+b"}


def test_form_last_duplicate_wins():
    assert parse_form(b"x=1&x=2") == {"x": "2"}
    assert parse_form(b"x=1&y=5&x=3&x=2") == {"x": "2", "y": "5"}


def test_form_segments_without_equals_are_ignored():
    assert parse_form(b"flag&username=admin&&") == {"username": "admin"}


def test_form_splits_on_first_equals():
    assert parse_form(b"password=a=b") == {"password": "a=b"}


def test_form_empty_value_and_empty_body():
    assert parse_form(b"username=&password=") == {"username": "", "password": ""}
    assert parse_form(b"") == {}


@pytest.mark.parametrize(
    "body, expected",
    [
        (b"password=100%", "100%"),
        (b"password=50%zz+off", "50%zz off"),
        (b"password=%E2%28", "%E2%28"),  # not UTF-8
    ],
)
def test_form_malformed_escape_uses_raw_text(body, expected):
    assert parse_form(body) == {"password": expected}


def test_form_utf8_values():
    assert parse_form("username=j%C3%BCrgen".encode()) == {"username": "jürgen"}
    assert parse_form("username=jürgen") == {"username": "jürgen"}


def test_percent_unescape():
    assert percent_unescape(b"a%41") == "aA"
    assert percent_unescape(b"bad%4") is None


def test_cookie_found_among_others():
    header = "theme=dark; authgate_session=YWRtaW46; lang=en"
    assert get_cookie(header, "authgate_session") == "YWRtaW46"
    assert get_cookie(header, "lang") == "en"
    assert get_cookie(header, "theme") == "dark"


def test_cookie_value_keeps_equals_padding():
    assert get_cookie("authgate_session=YWRtaW46Y29ycmVjdA==", "authgate_session") == "YWRtaW46Y29ycmVjdA=="


def test_cookie_skips_extra_spaces_and_missing_space():
    assert get_cookie("a=1;   b=2", "b") == "2"
    assert get_cookie("a=1;b=2", "b") == "2"


def test_cookie_name_is_exact_and_case_sensitive():
    header = "xauthgate_session=1; Authgate_session=2"
    assert get_cookie(header, "authgate_session") is None
    assert get_cookie("session_extra=1; session=2", "session") == "2"


def test_cookie_first_match_wins():
    assert get_cookie("s=first; s=second", "s") == "first"


def test_cookie_absent_header():
    assert get_cookie(None, "s") is None
    assert get_cookie("", "s") is None


def test_cookie_empty_value():
    assert get_cookie("s=; t=1", "s") == ""
