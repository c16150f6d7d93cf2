"""Applies a desired topology: dissolve every zone, then form one group.

The backend answers before the speakers have actually regrouped, so each
phase ends with a fixed settle delay. Formation waits longer than
dissolution because joining takes longer to converge.

There is no rollback and no retry. When a join fails halfway, the members
joined so far stay joined and the error says which speaker failed.
"""

import asyncio
import logging

from .control import join, ungroup
from .directory import list_zones, wait_for_topology
from .errors import ApiError, ConvergenceTimeout, MutationError

logger = logging.getLogger(__name__)

DISSOLVE_SETTLE = 1.0
JOIN_SETTLE = 2.0


async def dissolve(session, base_url, settle=DISSOLVE_SETTLE):
    """Ungroups every zone coordinator in the current snapshot.

    Ungroup calls are independent and issued concurrently. A failing
    coordinator does not stop the others; the first failure is raised once
    all calls have returned and the settle delay has elapsed.
    """
    snapshot = await list_zones(session, base_url)
    coordinators = snapshot.coordinators

    results = await asyncio.gather(
        *(ungroup(session, base_url, speaker.room_name) for speaker in coordinators),
        return_exceptions=True,
    )

    failures = []
    for speaker, result in zip(coordinators, results):
        if isinstance(result, ApiError):
            logger.error(f"Failed to ungroup {speaker}: {result.cause}")
            failures.append((speaker, result))
        elif isinstance(result, BaseException):
            raise result

    await asyncio.sleep(settle)

    if failures:
        speaker, error = failures[0]
        raise MutationError(speaker, error)
    return snapshot


async def form(session, base_url, desired, settle=JOIN_SETTLE):
    """Joins each member to the coordinator, one at a time, in member order."""
    if not desired.members:
        logger.info(f"{desired.coordinator} stays on its own, nothing to join")
        return

    logger.info(f"Grouping speakers: {desired}")
    for member in desired.members:
        # Concurrent joins to one coordinator can silently drop members
        try:
            await join(session, base_url, member.room_name, desired.coordinator.room_name)
        except ApiError as e:
            logger.error(f"Failed to join {member} to {desired.coordinator}: {e.cause}")
            raise MutationError(member, e) from e

    await asyncio.sleep(settle)


async def apply_topology(session, base_url, desired, timing=None):
    """Dissolves all zones and forms the desired group.

    With ``timing.verify_timeout`` set, the directory is polled afterwards
    and ConvergenceTimeout is raised if the group never shows up.
    """
    dissolve_settle = timing.dissolve_settle if timing else DISSOLVE_SETTLE
    join_settle = timing.join_settle if timing else JOIN_SETTLE

    await dissolve(session, base_url, dissolve_settle)
    await form(session, base_url, desired, join_settle)

    if timing is not None and timing.verify_timeout:
        converged = await wait_for_topology(
            session, base_url, desired, timing.verify_timeout, timing.poll_interval
        )
        if not converged:
            raise ConvergenceTimeout(
                desired.coordinator, f"group not observed within {timing.verify_timeout}s"
            )

    logger.info(f"Topology applied: {desired}")
