"""Speakers, zones and topologies as seen by the grouping engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Speaker:
    """A speaker, addressed by its room name."""

    room_name: str

    def __str__(self) -> str:
        return self.room_name


Combination = Tuple[Speaker, ...]


@dataclass(frozen=True)
class Zone:
    """A coordinator plus the speakers joined to it."""

    coordinator: Speaker
    members: Tuple[Speaker, ...] = ()

    @property
    def speakers(self) -> Tuple[Speaker, ...]:
        return (self.coordinator,) + self.members

    @classmethod
    def from_json(cls, data) -> "Zone":
        """Builds a zone from one element of the /zones payload."""
        coordinator = Speaker(_room_name(data["coordinator"]))
        members = []
        for member in data.get("members", []):
            speaker = Speaker(_room_name(member))
            # The backend lists the coordinator among its own members
            if speaker != coordinator and speaker not in members:
                members.append(speaker)
        return cls(coordinator, tuple(members))


def _room_name(obj) -> str:
    name = obj["roomName"]
    if not isinstance(name, str) or not name:
        raise ValueError(f"Invalid roomName: {name!r}")
    return name


@dataclass(frozen=True)
class TopologySnapshot:
    """Zones returned by one directory query. Stale as soon as it is returned."""

    zones: Tuple[Zone, ...] = ()

    @property
    def coordinators(self) -> Tuple[Speaker, ...]:
        return tuple(zone.coordinator for zone in self.zones)

    @property
    def speakers(self) -> Tuple[Speaker, ...]:
        return tuple(speaker for zone in self.zones for speaker in zone.speakers)

    def zone_for(self, speaker: Speaker) -> Optional[Zone]:
        for zone in self.zones:
            if speaker in zone.speakers:
                return zone
        return None


@dataclass(frozen=True)
class DesiredTopology:
    """The single group a mutation should leave behind."""

    coordinator: Speaker
    members: Tuple[Speaker, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))
        if self.coordinator in self.members:
            raise ValueError(f"{self.coordinator} cannot be a member of its own group")
        if len(set(self.members)) != len(self.members):
            raise ValueError(f"Duplicate members in {[str(m) for m in self.members]}")

    @classmethod
    def from_combination(cls, combination: Combination) -> "DesiredTopology":
        """The first speaker of a combination becomes the coordinator."""
        if not combination:
            raise ValueError("Cannot build a topology from an empty combination")
        return cls(combination[0], tuple(combination[1:]))

    @classmethod
    def from_names(cls, names) -> "DesiredTopology":
        return cls.from_combination(tuple(Speaker(name) for name in names))

    @property
    def speakers(self) -> Tuple[Speaker, ...]:
        return (self.coordinator,) + self.members

    def matches(self, snapshot: TopologySnapshot) -> bool:
        """Checks whether the snapshot already shows this group."""
        for zone in snapshot.zones:
            if zone.coordinator == self.coordinator:
                return set(zone.members) == set(self.members)
        return False

    def __str__(self) -> str:
        if not self.members:
            return str(self.coordinator)
        return f"{self.coordinator} <- {', '.join(str(m) for m in self.members)}"
