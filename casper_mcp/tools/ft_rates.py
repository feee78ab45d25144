"""
Fungible token price tools.

Two families of rates are exposed: fiat-currency rates (``ft/.../rates``) and
token-to-token DEX rates (``ft/.../dex-rates``), each as latest and history and
each at trade and daily resolution. Upstream timestamps and dates are already
strings and are shown as received.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from casper_mcp.formatting import format_decimal, format_hash, text
from casper_mcp.tools.base import field, lookup_page, lookup_record, paging
from casper_mcp.tools.validators import optional_identifier, require_identifier


def _latest_rate_lines(rate: Dict[str, Any]) -> List[str]:
    return [
        field("Token", format_hash(rate.get("token_contract_package_hash"))),
        field("Currency ID", text(rate.get("currency_id"))),
        field("Amount", format_decimal(rate.get("amount"))),
        field("Volume", text(rate.get("volume"))),
        field("DEX ID", text(rate.get("dex_id"))),
        field("Transaction", format_hash(rate.get("transaction_hash"))),
        field("Timestamp", text(rate.get("timestamp"))),
    ]


def _latest_daily_rate_lines(rate: Dict[str, Any]) -> List[str]:
    return [
        field("Token", format_hash(rate.get("token_contract_package_hash"))),
        field("Currency ID", text(rate.get("currency_id"))),
        field("Amount", format_decimal(rate.get("amount"))),
        field("Volume", text(rate.get("volume"))),
        field("Date", text(rate.get("date"))),
    ]


def _latest_dex_rate_lines(*, closing: str):
    def lines(rate: Dict[str, Any]) -> List[str]:
        result = [
            field("Token", format_hash(rate.get("token_contract_package_hash"))),
            field("Target Token", format_hash(rate.get("target_token_contract_package_hash"))),
            field("Amount", format_decimal(rate.get("amount"))),
            field("Volume", text(rate.get("volume"))),
            field("DEX ID", text(rate.get("dex_id"))),
        ]
        if closing == "timestamp":
            result.append(field("Transaction", format_hash(rate.get("transaction_hash"))))
            result.append(field("Timestamp", text(rate.get("timestamp"))))
        else:
            result.append(field("Date", text(rate.get("date"))))
        return result

    return lines


def _dex_history_row(closing: str):
    label = closing.capitalize()

    def row(rate: Dict[str, Any]) -> List[str]:
        return [
            field("Amount", format_decimal(rate.get("amount"))),
            f"  Target: {format_hash(rate.get('target_token_contract_package_hash'))}",
            f"  Volume: {text(rate.get('volume'))} | DEX: {text(rate.get('dex_id'))}",
            f"  {label}: {text(rate.get(closing))}",
        ]

    return row


async def get_ft_rate_latest(
    contract_package_hash: str, currency_id: Optional[str] = None, *, endpoint
) -> str:
    return await lookup_record(
        action="retrieving FT rate",
        fetch=lambda: endpoint.ft.get_rate_latest(
            require_identifier(contract_package_hash, "Contract package hash"),
            currency_id=optional_identifier(currency_id),
        ),
        title="Latest FT Rate",
        lines=_latest_rate_lines,
        not_found=f"No rate data found for token: {contract_package_hash}",
    )


async def get_ft_rates(contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving FT rates",
        fetch=lambda: endpoint.ft.get_rates(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="FT Rate History",
        page=page,
        row=lambda rate: [
            f"- **Amount:** {format_decimal(rate.get('amount'))} | Currency: {text(rate.get('currency_id'))}",
            f"  Volume: {text(rate.get('volume'))} | DEX: {text(rate.get('dex_id'))}",
            f"  Timestamp: {text(rate.get('timestamp'))}",
        ],
        empty=f"No rate history found for token: {contract_package_hash}",
    )


async def get_ft_daily_rate_latest(
    contract_package_hash: str, currency_id: Optional[str] = None, *, endpoint
) -> str:
    return await lookup_record(
        action="retrieving daily FT rate",
        fetch=lambda: endpoint.ft.get_daily_rate_latest(
            require_identifier(contract_package_hash, "Contract package hash"),
            currency_id=optional_identifier(currency_id),
        ),
        title="Latest Daily FT Rate",
        lines=_latest_daily_rate_lines,
        not_found=f"No daily rate data found for token: {contract_package_hash}",
    )


async def get_ft_daily_rates(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving daily FT rates",
        fetch=lambda: endpoint.ft.get_daily_rates(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="Daily FT Rate History",
        page=page,
        row=lambda rate: [
            f"- **Amount:** {format_decimal(rate.get('amount'))} | Currency: {text(rate.get('currency_id'))}",
            f"  Volume: {text(rate.get('volume'))} | Date: {text(rate.get('date'))}",
        ],
        empty=f"No daily rate history found for token: {contract_package_hash}",
    )


async def get_ft_dex_rate_latest(
    contract_package_hash: str, target_contract_package_hash: Optional[str] = None, *, endpoint
) -> str:
    return await lookup_record(
        action="retrieving FT DEX rate",
        fetch=lambda: endpoint.ft.get_dex_rate_latest(
            require_identifier(contract_package_hash, "Contract package hash"),
            target_contract_package_hash=optional_identifier(target_contract_package_hash),
        ),
        title="Latest FT DEX Rate",
        lines=_latest_dex_rate_lines(closing="timestamp"),
        not_found=f"No DEX rate data found for token: {contract_package_hash}",
    )


async def get_ft_dex_rates(contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving FT DEX rates",
        fetch=lambda: endpoint.ft.get_dex_rates(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="FT DEX Rate History",
        page=page,
        row=_dex_history_row("timestamp"),
        empty=f"No DEX rate history found for token: {contract_package_hash}",
    )


async def get_ft_daily_dex_rate_latest(
    contract_package_hash: str, target_contract_package_hash: Optional[str] = None, *, endpoint
) -> str:
    return await lookup_record(
        action="retrieving daily FT DEX rate",
        fetch=lambda: endpoint.ft.get_daily_dex_rate_latest(
            require_identifier(contract_package_hash, "Contract package hash"),
            target_contract_package_hash=optional_identifier(target_contract_package_hash),
        ),
        title="Latest Daily FT DEX Rate",
        lines=_latest_dex_rate_lines(closing="date"),
        not_found=f"No daily DEX rate data found for token: {contract_package_hash}",
    )


async def get_ft_daily_dex_rates(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving daily FT DEX rates",
        fetch=lambda: endpoint.ft.get_daily_dex_rates(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="Daily FT DEX Rate History",
        page=page,
        row=_dex_history_row("date"),
        empty=f"No daily DEX rate history found for token: {contract_package_hash}",
    )
