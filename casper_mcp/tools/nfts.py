"""NFT tools: collections, tokens, actions, ownership and reference lists."""

from __future__ import annotations

from typing import Any, Dict, List

from casper_mcp.formatting import format_bool, format_hash, format_number, format_timestamp, text
from casper_mcp.tools.base import field, first_present, lookup_catalog, lookup_page, lookup_record, nested, paging
from casper_mcp.tools.validators import require_identifier


def _owner(row: Dict[str, Any]) -> str:
    return format_hash(first_present(row.get("owner_public_key"), row.get("owner_hash")))


def _action_tail(action: Dict[str, Any]) -> List[str]:
    sender = first_present(action.get("from_public_key"), action.get("from_hash"))
    recipient = first_present(action.get("to_public_key"), action.get("to_hash"))
    return [
        f"  From: {format_hash(sender)}",
        f"  To: {format_hash(recipient)}",
        f"  Action ID: {text(action.get('nft_action_id'))} | {format_timestamp(action.get('timestamp'))}",
    ]


def _package_name(row: Dict[str, Any]) -> List[str]:
    package = nested(row, "contract_package")
    return [f"  Name: {text(package.get('name'))}"] if package else []


async def get_nft_collection(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving NFT collection",
        fetch=lambda: endpoint.nft.get_contract_package_nfts(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="NFT Collection",
        page=page,
        preamble=[f"Contract Package: {contract_package_hash}"],
        row=lambda nft: [
            field("Token ID", text(nft.get("token_id"))),
            f"  Owner: {_owner(nft)}",
            f"  Burned: {format_bool(nft.get('is_burned'))} | Minted at Block: {text(nft.get('block_height'))}",
            f"  Created: {format_timestamp(nft.get('timestamp'))}",
        ],
        empty=f"No NFTs found in collection: {contract_package_hash}",
    )


async def get_account_nfts(account_identifier: str, *, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account NFTs",
        fetch=lambda: endpoint.nft.get_account_nfts(
            require_identifier(account_identifier, "Account identifier"), page=page, page_size=page_size
        ),
        title="Account NFTs",
        page=page,
        row=lambda nft: [
            field("Token ID", text(nft.get("token_id"))),
            f"  Collection: {format_hash(nft.get('contract_package_hash'))}",
            *_package_name(nft),
            f"  Burned: {format_bool(nft.get('is_burned'))}",
            f"  Created: {format_timestamp(nft.get('timestamp'))}",
        ],
        empty=f"No NFTs found for account: {account_identifier}",
    )


async def get_nft(contract_package_hash: str, token_id: str, *, endpoint) -> str:
    async def fetch():
        return await endpoint.nft.get_nft(
            require_identifier(contract_package_hash, "Contract package hash"),
            require_identifier(token_id, "Token ID"),
        )

    return await lookup_record(
        action="retrieving NFT",
        fetch=fetch,
        title="NFT Details",
        lines=lambda nft: [
            field("Contract Package", format_hash(nft.get("contract_package_hash"))),
            field("Token ID", text(nft.get("token_id"))),
            field("Owner", _owner(nft)),
            field("Burned", format_bool(nft.get("is_burned"))),
            field("Block Height", text(nft.get("block_height"))),
            field("Timestamp", format_timestamp(nft.get("timestamp"))),
            field("Token Standard ID", text(nft.get("token_standard_id"))),
        ],
        not_found=f"NFT not found: {contract_package_hash} / {token_id}",
    )


async def get_nft_standards(*, endpoint) -> str:
    return await lookup_catalog(
        action="retrieving NFT standards",
        fetch=endpoint.nft.get_nft_standards,
        title="NFT Standards",
        empty="No NFT standards found.",
    )


async def get_nft_metadata_statuses(*, endpoint) -> str:
    return await lookup_catalog(
        action="retrieving NFT metadata statuses",
        fetch=endpoint.nft.get_nft_metadata_statuses,
        title="NFT Metadata Statuses",
        empty="No NFT metadata statuses found.",
    )


async def get_nft_action_types(*, endpoint) -> str:
    return await lookup_catalog(
        action="retrieving NFT action types",
        fetch=endpoint.nft.get_nft_action_types,
        title="NFT Action Types",
        empty="No NFT action types found.",
    )


async def get_nft_actions_for_token(
    contract_package_hash: str, token_id: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)

    async def fetch():
        return await endpoint.nft.get_nft_actions_for_token(
            require_identifier(contract_package_hash, "Contract package hash"),
            require_identifier(token_id, "Token ID"),
            page=page,
            page_size=page_size,
        )

    return await lookup_page(
        action="retrieving NFT token actions",
        fetch=fetch,
        title="NFT Token Actions",
        page=page,
        preamble=[f"Collection: {contract_package_hash} | Token: {token_id}"],
        row=lambda action: [field("Deploy", format_hash(action.get("deploy_hash"))), *_action_tail(action)],
        empty=f"No actions found for token {token_id} in collection: {contract_package_hash}",
    )


async def get_account_nft_actions(
    account_identifier: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account NFT actions",
        fetch=lambda: endpoint.nft.get_account_nft_actions(
            require_identifier(account_identifier, "Account identifier"), page=page, page_size=page_size
        ),
        title="Account NFT Actions",
        page=page,
        row=lambda action: [
            field("Deploy", format_hash(action.get("deploy_hash"))),
            f"  Token: {text(action.get('token_id'))}"
            f" | Collection: {format_hash(action.get('contract_package_hash'))}",
            *_action_tail(action),
        ],
        empty=f"No NFT actions found for account: {account_identifier}",
    )


async def get_contract_package_nft_actions(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving contract package NFT actions",
        fetch=lambda: endpoint.nft.get_contract_package_nft_actions(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="Contract Package NFT Actions",
        page=page,
        row=lambda action: [
            field("Deploy", format_hash(action.get("deploy_hash"))),
            f"  Token: {text(action.get('token_id'))}",
            *_action_tail(action),
        ],
        empty=f"No NFT actions found for contract package: {contract_package_hash}",
    )


async def get_contract_package_nft_ownership(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving NFT ownership",
        fetch=lambda: endpoint.nft.get_contract_package_nft_ownership(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="NFT Ownership by Contract Package",
        page=page,
        row=lambda owner: [
            field("Owner", _owner(owner)),
            f"  Tokens Owned: {format_number(owner.get('tokens_number'))}",
        ],
        empty=f"No NFT ownership data found for contract package: {contract_package_hash}",
    )


async def get_account_nft_ownership(
    account_identifier: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving account NFT ownership",
        fetch=lambda: endpoint.nft.get_account_nft_ownership(
            require_identifier(account_identifier, "Account identifier"), page=page, page_size=page_size
        ),
        title="Account NFT Ownership",
        page=page,
        row=lambda ownership: [
            field("Collection", format_hash(ownership.get("contract_package_hash"))),
            *_package_name(ownership),
            f"  Tokens Owned: {format_number(ownership.get('tokens_number'))}",
        ],
        empty=f"No NFT ownership data found for account: {account_identifier}",
    )
