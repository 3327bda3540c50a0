"""Self-healing event subscription for smart cameras.

A ListenLoop owns exactly one live EventSubscription at a time. Whenever the
subscription reports a NetworkFault, or the camera's settings change
(ConfigChanged), the loop drops the subscription and acquires a fresh one
after a fixed delay:

    IDLE --start()--> LISTENING --fault/config change--> RESTARTING
                          ^                                   |
                          +--------- delay elapsed -----------+

Both event kinds go through the same restart path on purpose: a settings
change invalidates the current subscription exactly like a network fault does.

Overlapping triggers are resolved latest-wins. Each acquisition gets a
generation number and events from an older generation are ignored. A trigger
that arrives while a restart is pending cancels that restart and schedules a
new one, so a burst of triggers produces a single acquisition. Superseded
subscriptions are dropped without calling destroy().
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from ..const import LISTEN_RESTART_DELAY, ListenState

if TYPE_CHECKING:
    from ..host import CallLater

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkFault:
    """The subscription failed."""

    details: Any = None


@dataclass(frozen=True)
class ConfigChanged:
    """The camera's settings changed; the subscription is stale."""


ListenEvent = NetworkFault | ConfigChanged
EventCallback = Callable[[ListenEvent], None]


class EventSubscription(ABC):
    """A live, cancelable event subscription."""

    @abstractmethod
    def destroy(self) -> None:
        """Tear down the subscription."""
        ...


class ListenLoop:
    """Acquire a subscription and re-acquire it after every error."""

    def __init__(
        self,
        name: str,
        acquire: Callable[[EventCallback], EventSubscription],
        call_later: CallLater,
        restart_delay: float = LISTEN_RESTART_DELAY,
    ) -> None:
        """Initialize the loop.

        Args:
            name: Label used in log messages
            acquire: Returns a new subscription that reports errors through
                the callback it is given
            call_later: Schedules a callback after a delay, returns a cancel
                function
            restart_delay: Seconds between an error and the re-acquire
        """
        self.name = name
        self._acquire = acquire
        self._call_later = call_later
        self.restart_delay = restart_delay

        self.state = ListenState.IDLE
        self.listener: EventSubscription | None = None
        self._generation = 0
        self._cancel_restart: Callable[[], None] | None = None

    def start(self) -> None:
        """Acquire the first subscription."""
        self._listen()

    def signal(self, event: ListenEvent) -> None:
        """Deliver an event as if the current subscription emitted it."""
        self._handle_event(self._generation, event)

    def _listen(self) -> None:
        self._cancel_restart = None
        self._generation += 1
        generation = self._generation

        def on_event(event: ListenEvent) -> None:
            self._handle_event(generation, event)

        try:
            listener = self._acquire(on_event)
        except Exception as err:
            self._handle_event(generation, NetworkFault(err))
            return

        # The subscription may have faulted before acquire returned
        if generation != self._generation:
            return

        self.listener = listener
        self.state = ListenState.LISTENING

    def _handle_event(self, generation: int, event: ListenEvent) -> None:
        if generation != self._generation:
            _LOGGER.debug("%s: ignoring %s from a replaced listener", self.name, event)
            return

        if isinstance(event, ConfigChanged):
            _LOGGER.debug(
                "%s: settings changed, restarting listener in %ss",
                self.name,
                self.restart_delay,
            )
        else:
            _LOGGER.error(
                "%s: listen loop error, restarting in %ss: %s",
                self.name,
                self.restart_delay,
                event.details,
            )

        if self._cancel_restart is not None:
            self._cancel_restart()

        # Drop the current listener; anything it emits from now on is stale
        self._generation += 1
        self.listener = None
        self.state = ListenState.RESTARTING
        self._cancel_restart = self._call_later(self.restart_delay, self._listen)
