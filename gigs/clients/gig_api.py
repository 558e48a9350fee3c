from __future__ import annotations

from typing import Optional, Tuple

import httpx


JSON_HEADERS = {"Content-Type": "application/json"}


def bearer_headers(token: str, with_json: bool = False) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {token}"}
    if with_json:
        headers.update(JSON_HEADERS)
    return headers


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    body: bytes,
    timeout_sec: float,
    headers: Optional[dict[str, str]] = None,
) -> Tuple[int, bytes]:
    r = await client.post(url, content=body, headers=headers or JSON_HEADERS, timeout=timeout_sec)
    return r.status_code, r.content


async def get_authorized(
    client: httpx.AsyncClient,
    url: str,
    token: str,
    timeout_sec: float,
) -> Tuple[int, bytes]:
    r = await client.get(url, headers=bearer_headers(token), timeout=timeout_sec)
    return r.status_code, r.content


async def post_authorized(
    client: httpx.AsyncClient,
    url: str,
    token: str,
    body: bytes,
    timeout_sec: float,
) -> Tuple[int, bytes]:
    return await post_json(
        client,
        url,
        body,
        timeout_sec,
        headers=bearer_headers(token, with_json=True),
    )
