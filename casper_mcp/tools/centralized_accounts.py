"""Exchange and custodian account labels (centralized account info)."""

from __future__ import annotations

from casper_mcp.formatting import format_hash, text
from casper_mcp.tools.base import field, lookup_page, lookup_record, paging
from casper_mcp.tools.validators import require_identifier


async def get_centralized_account_info(account_hash: str, *, endpoint) -> str:
    return await lookup_record(
        action="retrieving centralized account info",
        fetch=lambda: endpoint.centralized_account.get_centralized_account_info(
            require_identifier(account_hash, "Account hash")
        ),
        title="Centralized Account Information",
        lines=lambda info: [
            field("Account Hash", format_hash(info.get("account_hash"))),
            field("Name", text(info.get("name"))),
            field("URL", text(info.get("url"))),
            field("Avatar URL", text(info.get("avatar_url"))),
        ],
        not_found=f"Centralized account info not found: {account_hash}",
    )


async def get_centralized_accounts(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving centralized accounts",
        fetch=lambda: endpoint.centralized_account.get_centralized_accounts(page=page, page_size=page_size),
        title="Centralized Accounts",
        page=page,
        row=lambda info: [
            field("Name", text(info.get("name"))),
            f"  Account Hash: {format_hash(info.get('account_hash'))}",
            f"  URL: {text(info.get('url'))}",
        ],
        empty="No centralized accounts found.",
    )
