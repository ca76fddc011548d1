"""Collection of usage events for an analytics backend."""

from __future__ import annotations

import uuid
from typing import Any, Protocol

_SET_OPERATION = "$set"


class _TrackingClient(Protocol):
    def update_user(self, distinct_id: str, operation: str, properties: dict[str, Any]) -> None:
        """Update the profile of a user."""

    def track(self, distinct_id: str, event_name: str, properties: dict[str, Any]) -> None:
        """Record one event."""


class Collector:
    """Sends events to a tracking client, numbering them per runner.

    With an empty token the collector is disabled and every call is a no-op.
    """

    def __init__(self, token: str, id: str, client: _TrackingClient | None = None) -> None:
        self.token = token
        self.id = id
        self.runner_id = str(uuid.uuid4())
        self.order = 0
        if token and client is None:
            raise ValueError("a tracking client is required when a token is set")
        self._client = client
        if token:
            profile = dict(name=id)
            client.update_user(id, _SET_OPERATION, profile)

    def collect(self, event_name: str, properties: dict[str, Any]) -> None:
        """Record an event, tagging it with the runner id and its order."""
        if not self.token:
            return
        properties["runnerId"] = self.runner_id
        properties["order"] = self.order
        self.order += 1
        self._client.track(self.id, event_name, properties)