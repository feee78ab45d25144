"""CSPR fiat exchange rate tools."""

from __future__ import annotations

from casper_mcp.formatting import format_timestamp, text
from casper_mcp.tools.base import field, lookup_page, lookup_record, paging
from casper_mcp.tools.validators import require_identifier


async def get_current_currency_rate(currency_id: str, *, endpoint) -> str:
    return await lookup_record(
        action="retrieving currency rate",
        fetch=lambda: endpoint.rate.get_current_currency_rate(require_identifier(currency_id, "Currency ID")),
        title="Current Currency Rate",
        lines=lambda rate: [
            field("Currency ID", text(rate.get("currency_id"))),
            field("Rate", text(rate.get("amount"))),
            field("Timestamp", format_timestamp(rate.get("created"))),
        ],
        not_found=f"Currency rate not found for currency ID: {currency_id}",
    )


async def get_historical_currency_rates(
    currency_id: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving historical currency rates",
        fetch=lambda: endpoint.rate.get_historical_currency_rates(
            require_identifier(currency_id, "Currency ID"), page=page, page_size=page_size
        ),
        title="Historical Currency Rates",
        page=page,
        row=lambda rate: [
            f"- **Rate:** {text(rate.get('amount'))} | **Timestamp:** {format_timestamp(rate.get('created'))}"
        ],
        empty=f"No historical rates found for currency ID: {currency_id}",
    )


async def get_currencies(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving currencies",
        fetch=lambda: endpoint.rate.get_currencies(page=page, page_size=page_size),
        title="Supported Currencies",
        page=page,
        divider=False,
        row=lambda currency: [
            f"- **ID:** {text(currency.get('id'))} | **Code:** {text(currency.get('code'))}"
            f" | **Type ID:** {text(currency.get('type_id'))}"
        ],
        empty="No currencies found.",
    )
