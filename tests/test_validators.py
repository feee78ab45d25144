import pytest

from casper_mcp.config import MAX_PAGE_SIZE
from casper_mcp.tools.validators import (
    InvalidParameterError,
    clamp_page_size,
    normalize_page,
    optional_identifier,
    parse_deploy_json,
    require_identifier,
)


def test_clamp_page_size_bounds():
    assert clamp_page_size(None) == 10
    assert clamp_page_size(0) == 10
    assert clamp_page_size(-3) == 10
    assert clamp_page_size(1) == 1
    assert clamp_page_size(500) == MAX_PAGE_SIZE
    assert clamp_page_size("25") == 25
    assert clamp_page_size("lots") == 10
    assert clamp_page_size(True) == 10


def test_clamp_page_size_idempotent():
    for value in (None, 0, 1, 10, 250, 251, 10_000):
        once = clamp_page_size(value)
        assert clamp_page_size(once) == once


def test_normalize_page():
    assert normalize_page(None) == 1
    assert normalize_page(0) == 1
    assert normalize_page(-2) == 1
    assert normalize_page(3) == 3
    assert normalize_page("4") == 4
    assert normalize_page("x") == 1


def test_require_identifier():
    assert require_identifier("  01ab  ", "Public key") == "01ab"
    with pytest.raises(InvalidParameterError, match="Public key is required."):
        require_identifier("   ", "Public key")
    with pytest.raises(InvalidParameterError):
        require_identifier(None, "Block hash")


def test_optional_identifier():
    assert optional_identifier(None) is None
    assert optional_identifier("  ") is None
    assert optional_identifier(1) == "1"
    assert optional_identifier(" usd ") == "usd"


def test_parse_deploy_json():
    assert parse_deploy_json('{"hash": "ab"}') == {"hash": "ab"}
    assert parse_deploy_json({"hash": "ab"}) == {"hash": "ab"}


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("", "Deploy JSON is required."),
        (None, "Deploy JSON is required."),
        ("[1, 2]", "Deploy JSON must be an object."),
        ("{not json", "Invalid deploy JSON: "),
    ],
)
def test_parse_deploy_json_rejects(raw, message):
    with pytest.raises(InvalidParameterError) as excinfo:
        parse_deploy_json(raw)
    assert str(excinfo.value).startswith(message)
