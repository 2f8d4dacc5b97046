"""Dashboard controller: owns the current state and runs lookups."""

import logging
from typing import Callable, List, Optional

from ..errors import ClientTransportError
from . import state as transitions
from .client import ProxyClient
from .state import ClientState
from .storage import KeyValueStore, PreferencePersister, load_preferences


logger = logging.getLogger(__name__)

StateObserver = Callable[[ClientState, ClientState], None]


class Dashboard:
    """Applies transitions to the dashboard state and notifies observers.

    Observers receive ``(previous, current)`` after every change. They are
    how side effects such as persistence hang off the state machine.
    """

    def __init__(
        self,
        client: ProxyClient,
        initial_state: Optional[ClientState] = None,
        observers: Optional[List[StateObserver]] = None
    ):
        self.client = client
        self._state = initial_state or ClientState()
        self._observers: List[StateObserver] = list(observers or [])

    @classmethod
    def from_storage(cls, client: ProxyClient, store: KeyValueStore) -> "Dashboard":
        """Build a dashboard seeded from, and persisting to, ``store``."""
        preferences = load_preferences(store)
        initial_state = ClientState(
            dark_mode=preferences.dark_mode,
            recent_searches=preferences.recent_searches,
        )
        return cls(client, initial_state=initial_state, observers=[PreferencePersister(store)])

    @property
    def state(self) -> ClientState:
        return self._state

    def add_observer(self, observer: StateObserver) -> None:
        self._observers.append(observer)

    def _apply(self, new_state: ClientState) -> ClientState:
        previous = self._state
        if new_state == previous:
            return previous
        self._state = new_state
        for observer in self._observers:
            observer(previous, new_state)
        return new_state

    def edit_city(self, text: str) -> ClientState:
        return self._apply(transitions.edit_city(self._state, text))

    def toggle_theme(self) -> ClientState:
        return self._apply(transitions.toggle_theme(self._state))

    async def search(self, city: Optional[str] = None) -> ClientState:
        """Submit a lookup for ``city`` (default: the current input)."""
        if city is None:
            city = self._state.current_city_input
        new_state, lookup = transitions.submit(self._state, city)
        return await self._run(new_state, lookup)

    async def select_recent(self, city: str) -> ClientState:
        new_state, lookup = transitions.select_recent(self._state, city)
        return await self._run(new_state, lookup)

    async def _run(self, new_state: ClientState, lookup: Optional[transitions.Lookup]) -> ClientState:
        if lookup is None:
            return self._state
        self._apply(new_state)

        try:
            weather = await self.client.fetch_weather(lookup.city)
        except ClientTransportError as e:
            logger.info(f"Lookup {lookup.request_id} for {lookup.city} failed: {e}")
            resolved = transitions.resolve_error(self._state, lookup)
        else:
            resolved = transitions.resolve_success(self._state, lookup, weather)

        # Resolutions are applied against the state at resolution time
        if not transitions.is_current(self._state, lookup):
            logger.debug(f"Discarding stale result of lookup {lookup.request_id} for {lookup.city}")
        return self._apply(resolved)
