"""Tests for the dashboard state machine."""

import pytest

from app.dashboard.state import (
    ClientState,
    Lookup,
    LOOKUP_ERROR_MESSAGE,
    Phase,
    edit_city,
    remember_search,
    resolve_error,
    resolve_success,
    select_recent,
    submit,
    toggle_theme,
)


class TestRememberSearch:
    """Test recent-search bookkeeping."""

    def test_prepends_new_city(self):
        assert remember_search(("b", "a"), "c") == ("c", "b", "a")

    def test_moves_existing_city_to_front(self):
        assert remember_search(("b", "a"), "a") == ("a", "b")

    def test_keeps_order_of_remaining_entries(self):
        assert remember_search(("e", "d", "c", "b", "a"), "c") == ("c", "e", "d", "b", "a")

    def test_already_first_is_unchanged(self):
        assert remember_search(("a", "b"), "a") == ("a", "b")

    def test_capped_at_five(self):
        recent = ("e", "d", "c", "b", "a")

        updated = remember_search(recent, "f")

        assert updated == ("f", "e", "d", "c", "b")

    def test_never_duplicates(self):
        recent = ()
        for city in ["a", "b", "a", "c", "b", "d", "e", "f", "a"]:
            recent = remember_search(recent, city)
            assert len(recent) == len(set(recent))
            assert len(recent) <= 5
            assert recent[0] == city


class TestSubmit:
    """Test entering the loading phase."""

    @pytest.mark.parametrize("city", ["", "   ", "\t\n", None])
    def test_blank_input_is_a_no_op(self, city):
        state = ClientState(error_message=LOOKUP_ERROR_MESSAGE)

        new_state, lookup = submit(state, city)

        assert new_state is state
        assert lookup is None

    def test_starts_loading_and_clears_error(self):
        state = ClientState(error_message=LOOKUP_ERROR_MESSAGE)

        new_state, lookup = submit(state, "  Paris ")

        assert new_state.loading is True
        assert new_state.error_message == ""
        assert new_state.phase is Phase.LOADING
        assert lookup == Lookup(request_id=1, city="Paris")

    def test_keeps_stale_weather_while_loading(self, sample_weather):
        state = ClientState(weather=sample_weather)

        new_state, _ = submit(state, "Paris")

        assert new_state.weather == sample_weather
        assert new_state.phase is Phase.LOADING

    def test_request_ids_increase(self):
        state = ClientState()

        state, first = submit(state, "Paris")
        state, second = submit(state, "Oslo")

        assert second.request_id == first.request_id + 1
        assert state.last_request_id == second.request_id

    def test_select_recent_fills_input(self):
        state = ClientState(recent_searches=("Oslo", "Paris"))

        new_state, lookup = select_recent(state, "Paris")

        assert new_state.current_city_input == "Paris"
        assert lookup.city == "Paris"
        assert new_state.loading is True


class TestResolve:
    """Test leaving the loading phase."""

    def test_success(self, sample_weather):
        state, lookup = submit(ClientState(recent_searches=("Paris",)), "London")

        state = resolve_success(state, lookup, sample_weather)

        assert state.phase is Phase.SUCCESS
        assert state.weather == sample_weather
        assert state.loading is False
        assert state.error_message == ""
        assert state.recent_searches == ("London", "Paris")

    def test_error_clears_weather_and_keeps_recent(self, sample_weather):
        state = ClientState(weather=sample_weather, recent_searches=("London",))
        state, lookup = submit(state, "Atlantis")

        state = resolve_error(state, lookup)

        assert state.phase is Phase.ERROR
        assert state.weather is None
        assert state.loading is False
        assert state.error_message == "City not found or server error"
        assert state.recent_searches == ("London",)

    def test_weather_and_error_are_exclusive(self, sample_weather):
        state, lookup = submit(ClientState(), "Atlantis")
        state = resolve_error(state, lookup)
        state, lookup = submit(state, "London")
        state = resolve_success(state, lookup, sample_weather)

        assert state.weather is not None
        assert state.error_message == ""

    def test_stale_success_is_discarded(self, sample_weather):
        state, slow = submit(ClientState(), "London")
        state, fast = submit(state, "Atlantis")
        state = resolve_error(state, fast)

        after = resolve_success(state, slow, sample_weather)

        assert after == state
        assert after.weather is None
        assert after.recent_searches == ()

    def test_stale_error_is_discarded(self, sample_weather):
        state, slow = submit(ClientState(), "Atlantis")
        state, fast = submit(state, "London")

        pending = resolve_error(state, slow)
        assert pending.loading is True

        state = resolve_success(pending, fast, sample_weather)
        assert state.phase is Phase.SUCCESS


class TestSimpleTransitions:
    """Test input and theme transitions."""

    def test_edit_city(self):
        assert edit_city(ClientState(), "Par").current_city_input == "Par"

    def test_toggle_theme(self):
        state = ClientState()

        assert state.dark_mode is True
        assert toggle_theme(state).dark_mode is False
        assert toggle_theme(toggle_theme(state)).dark_mode is True

    def test_initial_phase_is_idle(self):
        assert ClientState().phase is Phase.IDLE
