import asyncio
import logging

from .control import clear_queue, play, queue_uri
from .errors import ApiError, PlaybackError, ResumeWarning

logger = logging.getLogger(__name__)

RESUME_SETTLE = 3.0
QUEUE_SETTLE = 1.0

async def resume(session, base_url, coordinator, settle=RESUME_SETTLE):
    """Resumes playback on a coordinator once its group has settled.

    Returns None on success and a ResumeWarning on failure. Never raises for
    a backend failure.
    """
    await asyncio.sleep(settle)
    try:
        await play(session, base_url, coordinator.room_name)
    except ApiError as e:
        warning = ResumeWarning(coordinator, e.cause)
        logger.warning(str(warning))
        return warning
    return None

async def play_uri(session, base_url, speaker, uri, settle=QUEUE_SETTLE):
    """Replaces the queue of a speaker with a single URI and plays it."""
    logger.info(f"Attempting to play on {speaker}...")
    try:
        await clear_queue(session, base_url, speaker.room_name)
        await asyncio.sleep(settle)
        await queue_uri(session, base_url, speaker.room_name, uri)
        await asyncio.sleep(settle)
        await play(session, base_url, speaker.room_name)
    except ApiError as e:
        logger.error(f"Playback error on {speaker}: {e}")
        raise PlaybackError(f"Could not play {uri} on {speaker}: {e.cause}") from e
    logger.info(f"Successfully queued {uri} on {speaker}")
