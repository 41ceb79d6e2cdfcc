from __future__ import annotations

"""
Fetching the two CSV sources.

A source location is either an ``http://`` / ``https://`` URL, fetched
with ``httpx`` under the timeouts and size cap from
:mod:`csvrag.config`, or a local file path, read in a worker thread so
the event loop stays free while the other source downloads.

Unlike a best-effort page scraper, a failed source is fatal here: every
problem is raised as :class:`~csvrag.errors.LoadError` so that
:func:`csvrag.engine.init` can fail as a unit.
"""

import asyncio
from pathlib import Path
from typing import Optional

import httpx
from loguru import logger

from .config import (
    HTTP_CONNECT_TIMEOUT,
    HTTP_MAX_BYTES,
    HTTP_MAX_REDIRECTS,
    HTTP_READ_TIMEOUT,
    HTTP_USER_AGENT,
)
from .errors import LoadError, ParseError
from .tabular import Table, parse_table


def is_remote(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def _new_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT),
        max_redirects=HTTP_MAX_REDIRECTS,
        headers={"User-Agent": HTTP_USER_AGENT},
    )


async def _fetch_remote(url: str, client: httpx.AsyncClient) -> bytes:
    try:
        r = await client.get(url)
    except httpx.HTTPError as e:
        raise LoadError(f"Fetch failed for {url}: {e}", location=url) from e

    if r.status_code >= 400:
        raise LoadError(f"HTTP {r.status_code} for {url}", location=url)
    if len(r.content) > HTTP_MAX_BYTES:
        raise LoadError(
            f"Source {url} is {len(r.content)} bytes, over the {HTTP_MAX_BYTES} limit",
            location=url,
        )
    return r.content


async def _read_local(path: str) -> bytes:
    try:
        return await asyncio.to_thread(Path(path).read_bytes)
    except OSError as e:
        raise LoadError(f"Cannot read {path}: {e}", location=path) from e


async def fetch_source(
    location: str,
    client: Optional[httpx.AsyncClient] = None,
) -> bytes:
    """
    Return the raw bytes of one source.

    Parameters
    ----------
    location : str
        Local path or http(s) URL.
    client : httpx.AsyncClient, optional
        Client to use for remote sources.  When omitted a short-lived
        client is created for the single request.
    """
    if not is_remote(location):
        payload = await _read_local(location)
    elif client is not None:
        payload = await _fetch_remote(location, client)
    else:
        async with _new_client() as own:
            payload = await _fetch_remote(location, own)

    logger.info("Fetched source {} ({} bytes)", location, len(payload))
    return payload


async def load_table(
    location: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Table:
    """Fetch and parse one source; a payload without a header is an error."""
    payload = await fetch_source(location, client)
    try:
        table = parse_table(payload)
    except ParseError as e:
        raise LoadError(f"Cannot parse {location}: {e}", location=location) from e

    if not any(table.header):
        raise LoadError(f"Source {location} has no header row", location=location)

    logger.info("Parsed {} records from {}", len(table.records), location)
    return table
