import asyncio
import json
import logging

import aiohttp

from .errors import ApiError
from .utils import build_url, is_error_payload, parse_json_response

logger = logging.getLogger(__name__)

async def _get(session, base_url, *segments, expect_json=False):
    """Issues a GET against the control surface and returns the decoded body."""
    url = build_url(base_url, *segments)
    logger.debug(f"GET {url}")
    try:
        async with session.get(url) as response:
            text = await response.text()
            if response.status >= 400:
                raise ApiError("GET", url, f"HTTP {response.status}: {text[:200]}")
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise ApiError("GET", url, e) from e
    except UnicodeDecodeError as e:
        raise ApiError("GET", url, f"undecodable body: {e}") from e

    try:
        payload = parse_json_response(text)
    except json.JSONDecodeError as e:
        if expect_json:
            raise ApiError("GET", url, f"invalid JSON: {e}") from e
        payload = None

    if is_error_payload(payload):
        raise ApiError("GET", url, payload.get("error", "unknown error"))
    return payload

async def get_zones(session, base_url):
    """Gets the raw zone list from the control surface."""
    payload = await _get(session, base_url, "zones", expect_json=True)
    if not isinstance(payload, list):
        raise ApiError("GET", build_url(base_url, "zones"), f"expected a list, got {type(payload).__name__}")
    return payload

async def ungroup(session, base_url, room):
    """Detaches a room from whatever zone it belongs to."""
    await _get(session, base_url, room, "ungroup")
    logger.info(f"{room} ungrouped")

async def join(session, base_url, room, coordinator):
    """Joins a room to the zone of the given coordinator."""
    await _get(session, base_url, room, "join", coordinator)
    logger.info(f"{room} grouped with {coordinator}")

async def play(session, base_url, room):
    """Starts playback on a room."""
    await _get(session, base_url, room, "play")
    logger.info(f"Playback started on {room}")

async def clear_queue(session, base_url, room):
    """Empties the play queue of a room."""
    await _get(session, base_url, room, "clearqueue")

async def queue_uri(session, base_url, room, uri):
    """Adds a track URI to the play queue of a room."""
    await _get(session, base_url, room, "queue", uri)
