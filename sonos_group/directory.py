import asyncio
import logging
import time

from .control import get_zones
from .errors import ApiError, BackendUnavailable
from .models import TopologySnapshot, Zone

logger = logging.getLogger(__name__)

async def list_zones(session, base_url):
    """Queries the control surface for the current zones.

    Every call hits the backend. Never reuse the returned snapshot after a
    mutating call.
    """
    try:
        payload = await get_zones(session, base_url)
    except ApiError as e:
        raise BackendUnavailable(f"Could not list zones: {e}") from e

    try:
        zones = tuple(Zone.from_json(item) for item in payload)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise BackendUnavailable(f"Malformed zone payload: {e!r}") from e

    seen = set()
    for zone in zones:
        for speaker in zone.speakers:
            if speaker in seen:
                raise BackendUnavailable(f"{speaker} is listed in more than one zone")
            seen.add(speaker)

    logger.info(f"Available zones: {', '.join(str(zone.coordinator) for zone in zones) or 'none'}")
    return TopologySnapshot(zones)

async def wait_for_topology(session, base_url, desired, timeout, interval=0.5):
    """Polls the directory until the desired group shows up or the timeout elapses."""
    deadline = time.monotonic() + timeout
    while True:
        try:
            snapshot = await list_zones(session, base_url)
            if desired.matches(snapshot):
                logger.info(f"Topology converged: {desired}")
                return True
        except BackendUnavailable as e:
            logger.warning(f"Polling zones failed: {e}")

        if time.monotonic() + interval > deadline:
            logger.warning(f"Topology {desired} not observed within {timeout}s")
            return False
        await asyncio.sleep(interval)
