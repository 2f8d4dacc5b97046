"""Dashboard state and the pure transitions that move it between phases.

The dashboard holds a single immutable ``ClientState``. Every user action or
lookup result is a function ``state -> state``; nothing here performs I/O, so
the whole machine can be exercised without a proxy or a storage file.

Lookups are tagged with a monotonically increasing request id when they are
submitted. A result is applied only if its id is still the latest one issued,
so a slow earlier response can never overwrite a newer one.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from ..models import NormalizedWeather


RECENT_SEARCHES_LIMIT = 5
LOOKUP_ERROR_MESSAGE = "City not found or server error"


class Phase(str, Enum):
    """Phase of the search/result cycle, derived from state."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Lookup(BaseModel):
    """Ticket for one issued lookup; required to resolve it."""

    model_config = ConfigDict(frozen=True)

    request_id: int
    city: str


class ClientState(BaseModel):
    """Everything the dashboard renders from."""

    model_config = ConfigDict(frozen=True)

    current_city_input: str = ""
    weather: Optional[NormalizedWeather] = None
    loading: bool = False
    error_message: str = ""
    recent_searches: Tuple[str, ...] = ()
    dark_mode: bool = True
    last_request_id: int = 0

    @property
    def phase(self) -> Phase:
        if self.loading:
            return Phase.LOADING
        if self.error_message:
            return Phase.ERROR
        if self.weather is not None:
            return Phase.SUCCESS
        return Phase.IDLE


def remember_search(recent: Sequence[str], city: str) -> Tuple[str, ...]:
    """Return the recent-search list after a successful lookup of ``city``.

    The city moves to the front, any other occurrence is dropped and the
    list is capped. The relative order of the remaining entries is kept.
    """
    recent = tuple(recent)
    if recent and recent[0] == city:
        return recent
    return ((city,) + tuple(entry for entry in recent if entry != city))[:RECENT_SEARCHES_LIMIT]


def edit_city(state: ClientState, text: str) -> ClientState:
    return state.model_copy(update={"current_city_input": text})


def toggle_theme(state: ClientState) -> ClientState:
    return state.model_copy(update={"dark_mode": not state.dark_mode})


def submit(state: ClientState, city: Optional[str]) -> Tuple[ClientState, Optional[Lookup]]:
    """Start a lookup for ``city``.

    Blank input is a no-op: the same state comes back with no ticket.
    Otherwise the previous error is cleared and loading starts; the weather
    already on screen is left in place until the new result arrives.
    """
    city = (city or "").strip()
    if not city:
        return state, None

    lookup = Lookup(request_id=state.last_request_id + 1, city=city)
    new_state = state.model_copy(update={
        "loading": True,
        "error_message": "",
        "last_request_id": lookup.request_id,
    })
    return new_state, lookup


def select_recent(state: ClientState, city: str) -> Tuple[ClientState, Optional[Lookup]]:
    """Fill the input with a recent-search entry and submit it."""
    return submit(edit_city(state, city), city)


def is_current(state: ClientState, lookup: Lookup) -> bool:
    """Whether ``lookup`` is the latest lookup issued from ``state``."""
    return lookup.request_id == state.last_request_id


def resolve_success(state: ClientState, lookup: Lookup, weather: NormalizedWeather) -> ClientState:
    if not is_current(state, lookup):
        return state
    return state.model_copy(update={
        "weather": weather,
        "error_message": "",
        "loading": False,
        "recent_searches": remember_search(state.recent_searches, lookup.city),
    })


def resolve_error(state: ClientState, lookup: Lookup) -> ClientState:
    # The recent-search list is only updated on success
    if not is_current(state, lookup):
        return state
    return state.model_copy(update={
        "weather": None,
        "error_message": LOOKUP_ERROR_MESSAGE,
        "loading": False,
    })
