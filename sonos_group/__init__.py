"""
Sonos Grouping Library

This library regroups Sonos speakers through a node-sonos-http-api control surface.
It tears down existing zones, forms the requested group and optionally resumes playback,
with an async interface for all operations.
"""

from .combinations import count_combinations, describe, generate
from .directory import list_zones, wait_for_topology
from .errors import (
    ApiError,
    BackendUnavailable,
    ConvergenceTimeout,
    InvalidSelection,
    MutationError,
    PlaybackError,
    ResumeWarning,
    SonosGroupError,
)
from .models import DesiredTopology, Speaker, TopologySnapshot, Zone
from .playback import play_uri, resume
from .session import GroupResult, SessionController, select
from .settings import Settings, Timing, load_settings
from .topology import apply_topology, dissolve, form

__version__ = "0.1.0"

__all__ = [
    'generate',
    'count_combinations',
    'describe',
    'list_zones',
    'wait_for_topology',
    'apply_topology',
    'dissolve',
    'form',
    'resume',
    'play_uri',
    'select',
    'SessionController',
    'GroupResult',
    'Settings',
    'Timing',
    'load_settings',
    'Speaker',
    'Zone',
    'TopologySnapshot',
    'DesiredTopology',
    'SonosGroupError',
    'ApiError',
    'BackendUnavailable',
    'MutationError',
    'ConvergenceTimeout',
    'InvalidSelection',
    'PlaybackError',
    'ResumeWarning',
]
