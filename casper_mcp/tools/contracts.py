"""Smart contract and contract package tools."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from casper_mcp.formatting import format_bool, format_decimal, format_hash, format_timestamp, text
from casper_mcp.tools.base import (
    field,
    join_lines,
    lookup_catalog,
    lookup_page,
    lookup_record,
    nested,
    paging,
    resolve,
    rows_of,
)
from casper_mcp.tools.validators import require_identifier


def _contract_lines(contract: Dict[str, Any]) -> List[str]:
    lines = [
        field("Contract Hash", format_hash(contract.get("contract_hash"))),
        field("Package Hash", format_hash(contract.get("contract_package_hash"))),
        field("Deploy Hash", format_hash(contract.get("deploy_hash"))),
        field("Block Height", text(contract.get("block_height"))),
        field("Contract Type ID", text(contract.get("contract_type_id"))),
        field("Version", text(contract.get("contract_version"))),
        field("Disabled", format_bool(contract.get("is_disabled"))),
        field("Timestamp", format_timestamp(contract.get("timestamp"))),
    ]
    package = nested(contract, "contract_package")
    if package:
        lines.extend(
            [
                "",
                "### Contract Package",
                field("Name", text(package.get("name"))),
                field("Description", text(package.get("description"))),
                field("Owner", format_hash(package.get("owner_public_key"))),
            ]
        )
    return lines


async def get_contract(contract_hash: str, *, endpoint) -> str:
    return await lookup_record(
        action="retrieving contract",
        fetch=lambda: endpoint.contract.get_contract(require_identifier(contract_hash, "Contract hash")),
        title="Contract Information",
        lines=_contract_lines,
        not_found=f"Contract not found: {contract_hash}",
    )


async def get_contract_entry_points(contract_hash: str, *, endpoint) -> str:
    def render(payload: Any) -> Optional[str]:
        entry_points = rows_of(payload)
        if not entry_points:
            return None
        lines = [
            f"## Contract Entry Points ({text(payload.get('item_count'))} total)",
            f"Contract: {contract_hash}",
            "",
        ]
        lines.extend(
            f"- **{entry_point.get('name') or 'unnamed'}** (ID: {text(entry_point.get('id'))})"
            for entry_point in entry_points
        )
        return join_lines(lines)

    return await resolve(
        action="retrieving contract entry points",
        fetch=lambda: endpoint.contract.get_contract_entry_points(require_identifier(contract_hash, "Contract hash")),
        render=render,
        not_found=f"No entry points found for contract: {contract_hash}",
    )


async def get_contracts(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving contracts",
        fetch=lambda: endpoint.contract.get_contracts(page=page, page_size=page_size),
        title="Contracts",
        page=page,
        row=lambda contract: [
            field("Contract Hash", format_hash(contract.get("contract_hash"))),
            f"  Package: {format_hash(contract.get('contract_package_hash'))}",
            f"  Version: {text(contract.get('contract_version'))} | Disabled: {format_bool(contract.get('is_disabled'))}",
            f"  Timestamp: {format_timestamp(contract.get('timestamp'))}",
        ],
        empty="No contracts found.",
    )


async def get_contract_types(*, endpoint) -> str:
    return await lookup_catalog(
        action="retrieving contract types",
        fetch=endpoint.contract.get_contract_types,
        title="Contract Types",
        empty="No contract types found.",
    )


async def get_contract_entry_point_costs(contract_hash: str, entry_point_name: str, *, endpoint) -> str:
    """Cost and payment statistics for one entry point of a contract."""

    async def fetch():
        return await endpoint.contract.get_contract_entry_point_costs(
            require_identifier(contract_hash, "Contract hash"),
            require_identifier(entry_point_name, "Entry point name"),
        )

    return await lookup_record(
        action="retrieving entry point costs",
        fetch=fetch,
        title="Entry Point Cost Statistics",
        lines=lambda cost: [
            field("Contract", contract_hash),
            field("Entry Point", entry_point_name),
            field("Deploys", text(cost.get("deploys_num"))),
            field("Since", format_timestamp(cost.get("since"))),
            field("Average Cost", format_decimal(cost.get("avg_cost"))),
            field("Min Cost", format_decimal(cost.get("min_cost"))),
            field("Max Cost", format_decimal(cost.get("max_cost"))),
            field("Average Payment", format_decimal(cost.get("avg_payment_amount"))),
            field("Min Payment", format_decimal(cost.get("min_payment_amount"))),
            field("Max Payment", format_decimal(cost.get("max_payment_amount"))),
        ],
        not_found=f"No cost data found for entry point '{entry_point_name}' on contract: {contract_hash}",
    )


async def get_contract_packages(*, page: int = 1, page_size: int = 10, endpoint) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving contract packages",
        fetch=lambda: endpoint.contract.get_contract_packages(page=page, page_size=page_size),
        title="Contract Packages",
        page=page,
        row=lambda package: [
            field("Package Hash", format_hash(package.get("contract_package_hash"))),
            f"  Name: {text(package.get('name'))} | Owner: {format_hash(package.get('owner_public_key'))}",
            f"  Created: {format_timestamp(package.get('timestamp'))}",
        ],
        empty="No contract packages found.",
    )


async def get_contracts_by_contract_package(
    contract_package_hash: str, *, page: int = 1, page_size: int = 10, endpoint
) -> str:
    page, page_size = paging(page, page_size)
    return await lookup_page(
        action="retrieving contracts by package",
        fetch=lambda: endpoint.contract.get_contracts_by_contract_package(
            require_identifier(contract_package_hash, "Contract package hash"), page=page, page_size=page_size
        ),
        title="Contracts by Package",
        page=page,
        preamble=[f"Package: {contract_package_hash}"],
        row=lambda contract: [
            field("Contract Hash", format_hash(contract.get("contract_hash"))),
            f"  Version: {text(contract.get('contract_version'))} | Disabled: {format_bool(contract.get('is_disabled'))}",
            f"  Block Height: {text(contract.get('block_height'))}"
            f" | Timestamp: {format_timestamp(contract.get('timestamp'))}",
        ],
        empty=f"No contracts found for package: {contract_package_hash}",
    )
