"""
Tests for playback resume and direct play.
"""

import pytest

from sonos_group.errors import PlaybackError, ResumeWarning
from sonos_group.models import Speaker
from sonos_group.playback import play_uri, resume

TRACK = "spotify:track:1wFFFzJ5EsKbBWZriAcubN"


class TestResume:
    """Tests for resume()."""

    @pytest.mark.asyncio
    async def test_waits_then_plays(self, fake_api, session, sleeps) -> None:
        warning = await resume(session, fake_api.base_url, Speaker("Vardagsrum"))
        assert warning is None
        assert sleeps == [3.0]
        assert fake_api.calls == [("play", "Vardagsrum")]

    @pytest.mark.asyncio
    async def test_failure_is_a_warning(self, fake_api, session, sleeps) -> None:
        """A failing play call is returned, not raised."""
        fake_api.fail("Vardagsrum", "play")
        warning = await resume(session, fake_api.base_url, Speaker("Vardagsrum"), settle=0)
        assert isinstance(warning, ResumeWarning)
        assert warning.speaker == Speaker("Vardagsrum")
        assert "manually" in str(warning)

    @pytest.mark.asyncio
    async def test_unreachable_is_a_warning(self, session, sleeps) -> None:
        warning = await resume(session, "http://127.0.0.1:1", Speaker("Hall"), settle=0)
        assert isinstance(warning, ResumeWarning)


class TestPlayUri:
    """Tests for play_uri()."""

    @pytest.mark.asyncio
    async def test_clear_queue_play(self, fake_api, session, sleeps) -> None:
        await play_uri(session, fake_api.base_url, Speaker("Kök"), TRACK)
        assert fake_api.calls == [
            ("clearqueue", "Kök"),
            ("queue", "Kök", TRACK),
            ("play", "Kök"),
        ]
        assert sleeps == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_failure_raises(self, fake_api, session, sleeps) -> None:
        fake_api.fail("Kök", "queue")
        with pytest.raises(PlaybackError):
            await play_uri(session, fake_api.base_url, Speaker("Kök"), TRACK)
        assert fake_api.calls_for("play") == []


class TestResumeBadReplies:
    @pytest.mark.asyncio
    async def test_non_utf8_reply_is_a_warning(self, fake_api, session, sleeps) -> None:
        """An undecodable play reply is still only a warning."""
        fake_api.raw_replies[("Vardagsrum", "play")] = b"\xff"
        warning = await resume(session, fake_api.base_url, Speaker("Vardagsrum"), settle=0)
        assert isinstance(warning, ResumeWarning)
