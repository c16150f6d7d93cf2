"""Exceptions raised while talking to the HTTP control surface."""


class SonosGroupError(Exception):
    """Base class for all grouping errors."""


class ApiError(SonosGroupError):
    """A request to the HTTP control surface failed."""

    def __init__(self, method, url, cause):
        super().__init__(f"{method} {url} failed: {cause}")
        self.method = method
        self.url = url
        self.cause = cause


class BackendUnavailable(SonosGroupError):
    """The zone directory could not be queried or decoded."""


class MutationError(SonosGroupError):
    """An ungroup or join call failed while applying a topology.

    A partially applied topology may already be in effect.
    """

    def __init__(self, speaker, cause):
        super().__init__(f"Topology change failed at {speaker}: {cause}")
        self.speaker = speaker
        self.cause = cause


class ConvergenceTimeout(MutationError):
    """The requested topology was not observed before the verify timeout."""


class InvalidSelection(SonosGroupError):
    """The operator picked an option outside the offered range."""


class PlaybackError(SonosGroupError):
    """Direct playback of a URI failed."""


class ResumeWarning(UserWarning):
    """Playback could not be resumed after grouping. Never fatal."""

    def __init__(self, speaker, cause):
        super().__init__(f"Could not resume playback on {speaker}: {cause}. Resume manually.")
        self.speaker = speaker
        self.cause = cause
