"""
Generic lookup-and-render adapter shared by every Casper MCP tool.

A tool supplies three things: a zero-argument coroutine factory issuing exactly
one upstream call, a renderer turning the decoded payload into Markdown (or
``None`` when the payload holds nothing), and the sentences to use for the empty
and failure cases. ``settle`` classifies the outcome; ``resolve`` converts it to
the report string. No exception crosses this boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Union

from casper_mcp.cspr_cloud.client import CsprCloudError, CsprCloudNotFoundError
from casper_mcp.formatting import text
from casper_mcp.tools.validators import InvalidParameterError, clamp_page_size, normalize_page

logger = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[Any]]
Render = Callable[[Any], Optional[str]]
RowRenderer = Callable[[Dict[str, Any]], List[str]]


class MissingPrecondition(Exception):
    """Raised by a fetch when a required pre-fetched value is unavailable."""


@dataclass(frozen=True, slots=True)
class Report:
    body: str

    @property
    def text(self) -> str:
        return self.body


@dataclass(frozen=True, slots=True)
class NotFound:
    message: str

    @property
    def text(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class Unavailable:
    message: str

    @property
    def text(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class UpstreamFailure:
    action: str
    message: str

    @property
    def text(self) -> str:
        return f"Error {self.action}: {self.message}"


ToolOutcome = Union[Report, NotFound, Unavailable, UpstreamFailure]


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


async def settle(*, action: str, fetch: Fetch, render: Render, not_found: Optional[str]) -> ToolOutcome:
    """
    Run ``fetch`` and classify the result.

    ``not_found=None`` marks a write: an upstream 404 is then reported as a
    failure like any other error status, and ``render`` must always return text.
    """
    try:
        payload = await fetch()
    except InvalidParameterError as exc:
        return UpstreamFailure(action, str(exc))
    except MissingPrecondition as exc:
        logger.warning("tool action=%s outcome=precondition_failed", action)
        return Unavailable(str(exc))
    except CsprCloudError as exc:
        if isinstance(exc, CsprCloudNotFoundError) and not_found is not None:
            logger.debug("tool action=%s outcome=not_found", action)
            return NotFound(not_found)
        logger.warning(
            "tool action=%s outcome=error status=%s error=%s",
            action,
            exc.status_code,
            exc.message,
            extra={"error": exc.message},
        )
        return UpstreamFailure(action, exc.message)
    except Exception as exc:
        logger.exception("Unexpected error while %s", action)
        return UpstreamFailure(action, _describe(exc))

    try:
        body = render(payload)
    except Exception as exc:
        logger.exception("Unexpected error rendering report while %s", action)
        return UpstreamFailure(action, _describe(exc))
    if body is None:
        logger.debug("tool action=%s outcome=empty", action)
        if not_found is None:
            return UpstreamFailure(action, "Empty response from CSPR.cloud")
        return NotFound(not_found)
    return Report(body)


async def resolve(*, action: str, fetch: Fetch, render: Render, not_found: Optional[str]) -> str:
    outcome = await settle(action=action, fetch=fetch, render=render, not_found=not_found)
    return outcome.text


# Payload access


def data_of(payload: Any) -> Any:
    if isinstance(payload, dict):
        return payload.get("data")
    return None


def record_of(payload: Any) -> Optional[Dict[str, Any]]:
    data = data_of(payload)
    return data if isinstance(data, dict) and data else None


def rows_of(payload: Any) -> List[Dict[str, Any]]:
    # Reference lists may arrive as a bare JSON array.
    data = payload if isinstance(payload, list) else data_of(payload)
    if not isinstance(data, list):
        return []
    return [row for row in data if isinstance(row, dict)]


def nested(row: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = row.get(key)
    return value if isinstance(value, dict) else {}


def or_zero(value: Any) -> str:
    return "0" if value is None else str(value)


def first_present(*values: Any) -> Any:
    """First value that is neither None nor empty, else None."""
    for value in values:
        if value is not None and value != "":
            return value
    return None


# Markdown building


def field(label: str, value: Any) -> str:
    return f"- **{label}:** {value}"


def join_lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def paging(page: Optional[int], page_size: Optional[int]) -> tuple[int, int]:
    """Normalize a caller's page number and clamp the page size."""
    return normalize_page(page), clamp_page_size(page_size)


def render_page(
    payload: Any,
    *,
    title: str,
    page: int,
    row: RowRenderer,
    preamble: Sequence[str] = (),
    divider: bool = True,
) -> Optional[str]:
    rows = rows_of(payload)
    if not rows:
        return None
    lines = [f"## {title} (Page {page}, {text(payload.get('item_count'))} total)", *preamble]
    for item in rows:
        if divider:
            lines.append("---")
        lines.extend(row(item))
    lines.append("---")
    lines.append(f"Page {page} of {text(payload.get('page_count'))}")
    return join_lines(lines)


def render_record(
    payload: Any,
    *,
    title: str,
    lines: Callable[[Dict[str, Any]], List[str]],
) -> Optional[str]:
    record = record_of(payload)
    if record is None:
        return None
    return join_lines([f"## {title}", *lines(record)])


def render_catalog(payload: Any, *, title: str) -> Optional[str]:
    """Unpaged ``id``/``name`` reference lists (types, standards, statuses)."""
    rows = rows_of(payload)
    if not rows:
        return None
    lines = [f"## {title} ({len(rows)} total)"]
    lines.extend(f"- **ID:** {text(item.get('id'))} | **Name:** {text(item.get('name'))}" for item in rows)
    return join_lines(lines)


async def lookup_page(
    *,
    action: str,
    fetch: Fetch,
    title: str,
    page: int,
    row: RowRenderer,
    empty: str,
    preamble: Sequence[str] = (),
    divider: bool = True,
) -> str:
    return await resolve(
        action=action,
        fetch=fetch,
        not_found=empty,
        render=lambda payload: render_page(
            payload, title=title, page=page, row=row, preamble=preamble, divider=divider
        ),
    )


async def lookup_record(
    *,
    action: str,
    fetch: Fetch,
    title: str,
    lines: Callable[[Dict[str, Any]], List[str]],
    not_found: str,
) -> str:
    return await resolve(
        action=action,
        fetch=fetch,
        not_found=not_found,
        render=lambda payload: render_record(payload, title=title, lines=lines),
    )


async def lookup_catalog(*, action: str, fetch: Fetch, title: str, empty: str) -> str:
    return await resolve(
        action=action,
        fetch=fetch,
        not_found=empty,
        render=lambda payload: render_catalog(payload, title=title),
    )
