"""Drives one grouping flow from operator choice to a settled topology."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from .combinations import generate
from .directory import list_zones
from .errors import InvalidSelection, ResumeWarning
from .models import Combination, DesiredTopology, Speaker
from .playback import play_uri, resume
from .settings import Settings
from .topology import apply_topology, dissolve

logger = logging.getLogger(__name__)

Chooser = Callable[[Sequence], Awaitable[int]]
Confirm = Callable[[DesiredTopology], Awaitable[bool]]


@dataclass
class GroupResult:
    desired: DesiredTopology
    resume_warning: Optional[ResumeWarning] = None


def select(options: Sequence, index) -> object:
    """Return the option at a 1-based index, or raise InvalidSelection."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidSelection(f"Selection must be a number, got {index!r}")
    if not 1 <= index <= len(options):
        raise InvalidSelection(f"Selection {index} is outside 1..{len(options)}")
    return options[index - 1]


async def _never(desired: DesiredTopology) -> bool:
    return False


class SessionController:
    """One operator, one flow at a time. Holds no topology state."""

    def __init__(self, session, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    async def ungroup_all(self) -> None:
        logger.info("Ungrouping all speakers")
        await dissolve(self._session, self.base_url, self._settings.timing.dissolve_settle)

    async def candidates(self) -> list[Combination]:
        """Combinations over the speakers currently present in the fleet."""
        snapshot = await list_zones(self._session, self.base_url)
        return generate(snapshot.speakers)

    async def create_group(self, choose: Chooser, confirm_resume: Confirm = _never) -> GroupResult:
        """Dissolve, offer combinations, apply the chosen one."""
        await self.ungroup_all()
        options = await self.candidates()
        index = await choose(options)
        desired = DesiredTopology.from_combination(select(options, index))
        return await self._apply(desired, confirm_resume)

    async def preset_group(self, choose: Chooser, confirm_resume: Confirm = _never) -> GroupResult:
        """Dissolve, offer the configured presets, apply the chosen one."""
        await self.ungroup_all()
        options = list(self._settings.presets)
        if not options:
            raise InvalidSelection("No presets configured")
        index = await choose(options)
        desired = select(options, index)
        return await self._apply(desired, confirm_resume)

    async def apply(self, desired: DesiredTopology, confirm_resume: Confirm = _never) -> GroupResult:
        return await self._apply(desired, confirm_resume)

    async def _apply(self, desired: DesiredTopology, confirm_resume: Confirm) -> GroupResult:
        timing = self._settings.timing
        await apply_topology(self._session, self.base_url, desired, timing)
        result = GroupResult(desired)
        if await confirm_resume(desired):
            result.resume_warning = await resume(
                self._session, self.base_url, desired.coordinator, timing.resume_settle
            )
        return result

    async def play(self, speaker: Speaker, uri: str) -> None:
        await play_uri(self._session, self.base_url, speaker, uri, self._settings.timing.queue_settle)
