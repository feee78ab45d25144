import pytest

from casper_mcp.cspr_cloud.client import CsprCloudNotFoundError
from casper_mcp.tools.currency import get_currencies, get_current_currency_rate, get_historical_currency_rates
from casper_mcp.tools.ft_rates import (
    get_ft_daily_dex_rate_latest,
    get_ft_dex_rates,
    get_ft_rate_latest,
    get_ft_rates,
)


@pytest.mark.asyncio
async def test_ft_rate_latest_passes_currency_filter(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "ft.get_rate_latest": {
                "data": {
                    "token_contract_package_hash": "ph",
                    "currency_id": 1,
                    "amount": "0.02500",
                    "timestamp": "2024-01-01T00:00:00Z",
                }
            }
        }
    )
    result = await get_ft_rate_latest("ph", "1", endpoint=endpoint)
    assert result.startswith("## Latest FT Rate\n- **Token:** ph\n- **Currency ID:** 1\n- **Amount:** 0.025\n")
    assert "- **Timestamp:** 2024-01-01T00:00:00Z\n" in result
    assert endpoint.calls == [("ft.get_rate_latest", ("ph",), {"currency_id": "1"})]


@pytest.mark.asyncio
async def test_ft_rate_latest_blank_filter_is_omitted(stub_endpoint):
    endpoint = stub_endpoint({"ft.get_rate_latest": CsprCloudNotFoundError("no")})
    result = await get_ft_rate_latest("ph", "  ", endpoint=endpoint)
    assert result == "No rate data found for token: ph"
    assert endpoint.calls == [("ft.get_rate_latest", ("ph",), {"currency_id": None})]


@pytest.mark.asyncio
async def test_ft_rates_history(stub_endpoint):
    endpoint = stub_endpoint(
        {"ft.get_rates": {"data": [{"amount": 1.5, "currency_id": 1, "dex_id": 2}], "item_count": 1, "page_count": 1}}
    )
    result = await get_ft_rates("ph", endpoint=endpoint)
    assert "- **Amount:** 1.5 | Currency: 1\n  Volume: N/A | DEX: 2\n  Timestamp: N/A\n" in result


@pytest.mark.asyncio
async def test_ft_dex_rates_history(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "ft.get_dex_rates": {
                "data": [{"amount": "3", "target_token_contract_package_hash": "tph", "timestamp": "t1"}],
                "item_count": 1,
                "page_count": 1,
            }
        }
    )
    result = await get_ft_dex_rates("ph", endpoint=endpoint)
    assert result.startswith("## FT DEX Rate History (Page 1, 1 total)\n")
    assert "- **Amount:** 3\n  Target: tph\n  Volume: N/A | DEX: N/A\n  Timestamp: t1\n" in result


@pytest.mark.asyncio
async def test_daily_dex_rate_latest_shows_date(stub_endpoint):
    endpoint = stub_endpoint({"ft.get_daily_dex_rate_latest": {"data": {"amount": "2", "date": "2024-01-01"}}})
    result = await get_ft_daily_dex_rate_latest("ph", target_contract_package_hash="tph", endpoint=endpoint)
    assert result.startswith("## Latest Daily FT DEX Rate\n")
    assert "- **Date:** 2024-01-01\n" in result
    assert "Transaction" not in result
    assert endpoint.calls[0][2] == {"target_contract_package_hash": "tph"}


@pytest.mark.asyncio
async def test_current_currency_rate(stub_endpoint):
    endpoint = stub_endpoint(
        {"rate.get_current_currency_rate": {"data": {"currency_id": 1, "amount": 0.0123, "created": "2024-01-01T10:00:00Z"}}}
    )
    result = await get_current_currency_rate("1", endpoint=endpoint)
    assert result == (
        "## Current Currency Rate\n"
        "- **Currency ID:** 1\n"
        "- **Rate:** 0.0123\n"
        "- **Timestamp:** 2024-01-01 10:00:00 UTC\n"
    )


@pytest.mark.asyncio
async def test_current_currency_rate_not_found(stub_endpoint):
    endpoint = stub_endpoint({"rate.get_current_currency_rate": {"data": None}})
    assert await get_current_currency_rate("99", endpoint=endpoint) == "Currency rate not found for currency ID: 99"


@pytest.mark.asyncio
async def test_historical_currency_rates(stub_endpoint):
    endpoint = stub_endpoint(
        {"rate.get_historical_currency_rates": {"data": [{"amount": 0.02, "created": None}], "item_count": 1, "page_count": 1}}
    )
    result = await get_historical_currency_rates("1", endpoint=endpoint)
    assert "---\n- **Rate:** 0.02 | **Timestamp:** N/A\n" in result


@pytest.mark.asyncio
async def test_currencies_without_dividers(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "rate.get_currencies": {
                "data": [{"id": 1, "code": "USD", "type_id": 1}, {"id": 2, "code": "EUR", "type_id": 1}],
                "item_count": 2,
                "page_count": 1,
            }
        }
    )
    result = await get_currencies(endpoint=endpoint)
    assert result == (
        "## Supported Currencies (Page 1, 2 total)\n"
        "- **ID:** 1 | **Code:** USD | **Type ID:** 1\n"
        "- **ID:** 2 | **Code:** EUR | **Type ID:** 1\n"
        "---\n"
        "Page 1 of 1\n"
    )
