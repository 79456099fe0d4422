"""Exception hierarchy for the effectivedex core.

Remote boundary errors (``RemoteSourceError`` and subclasses) describe why
a single fetch failed. Everything above the cache only sees
``SourceUnavailable``, raised when no cached fallback existed.
"""


class EffectivedexError(Exception):
    """Base class for all effectivedex errors."""


class SourceUnavailable(EffectivedexError):
    """Remote fetch failed and neither cache tier held a live entry."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        self.reason = reason
        message = f"Source unavailable for {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotFound(EffectivedexError):
    """A referenced roster or member does not exist."""


class RosterFull(EffectivedexError):
    """Roster already holds the maximum number of members."""


class DuplicateMember(EffectivedexError):
    """Member id already present in the roster."""


class PersistenceFailure(EffectivedexError):
    """Storage layer read/write error (distinct from data-not-found)."""


class RemoteSourceError(EffectivedexError):
    """A single remote fetch failed."""

    def __init__(self, resource_id: str, message: str):
        self.resource_id = resource_id
        super().__init__(f"{resource_id}: {message}")


class RemoteUnreachable(RemoteSourceError):
    """Transport failure or unexpected HTTP status."""


class RemoteNotFound(RemoteSourceError):
    """The remote source has no such resource."""


class RemoteMalformed(RemoteSourceError):
    """The payload could not be decoded or failed validation."""
