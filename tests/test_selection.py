"""Tests for the Selection State."""

from datetime import datetime, timedelta

from cosmos_kernel.models.mutation import NodePayload
from cosmos_kernel.models.selection import Selection
from cosmos_kernel.models.universe import Mode, Universe
from cosmos_kernel.mutation.engine import create_node, create_system, delete_object
from cosmos_kernel.selection.state import SelectionState, resolve_selection


def _make_universe():
    universe = Universe(mode=Mode.EVOLVE)
    system = create_system(universe, "Alpha")
    selection = Selection(system=system.id)
    planet = create_node(universe, selection, NodePayload(title="Planet-1"))
    selection.planet = planet.id
    moon = create_node(universe, selection, NodePayload(title="Moon-1"))
    return universe, system, planet, moon


class TestResolve:
    def setup_method(self):
        self.universe, self.system, self.planet, self.moon = _make_universe()

    def test_full_resolution(self):
        resolved = resolve_selection(
            self.universe,
            Selection(system=self.system.id, planet=self.planet.id, moon=self.moon.id),
        )
        assert resolved.system is self.system
        assert resolved.planet is self.planet
        assert resolved.moon is self.moon

    def test_inconsistent_levels_read_as_none(self):
        resolved = resolve_selection(
            self.universe,
            Selection(system="stale", planet=self.planet.id, moon=self.moon.id),
        )
        assert resolved == (None, None, None)

    def test_planet_from_other_system_does_not_resolve(self):
        other = create_system(self.universe, "Other")
        resolved = resolve_selection(
            self.universe,
            Selection(system=other.id, planet=self.planet.id),
        )
        assert resolved.system is other
        assert resolved.planet is None


class TestSelectionState:
    def setup_method(self):
        self.universe, self.system, self.planet, self.moon = _make_universe()
        self.state = SelectionState()
        self.state.select_system(self.system.id)
        self.state.select_planet(self.planet.id)
        self.state.select_moon(self.moon.id)

    def test_select_system_clears_lower_levels(self):
        self.state.select_system("other")
        assert self.state.current == Selection(system="other")

    def test_select_planet_clears_moon(self):
        self.state.select_planet(self.planet.id)
        assert self.state.current.moon is None
        assert self.state.current.system == self.system.id

    def test_empty_string_means_none(self):
        self.state.select_moon("")
        assert self.state.current.moon is None

    def test_clear(self):
        self.state.clear()
        assert self.state.current == Selection()

    def test_prune_after_moon_deleted(self):
        delete_object(self.universe, self.moon.id)
        assert self.state.prune(self.universe) is True
        assert self.state.current == Selection(system=self.system.id, planet=self.planet.id)

    def test_prune_after_system_deleted(self):
        delete_object(self.universe, self.system.id)
        self.state.prune(self.universe)
        assert self.state.current == Selection()

    def test_prune_noop_when_valid(self):
        assert self.state.prune(self.universe) is False


class TestSummary:
    def setup_method(self):
        self.universe, self.system, self.planet, self.moon = _make_universe()
        self.state = SelectionState()

    def test_nothing_selected(self):
        summary = self.state.summary(self.universe)
        assert summary.kind == "none"
        assert summary.title == "—"
        assert summary.child_label == "0"

    def test_system(self):
        self.state.select_system(self.system.id)
        summary = self.state.summary(self.universe)
        assert summary.kind == "system"
        assert summary.path == "Alpha"
        assert summary.child_label == "1 planets"
        assert summary.last_update == self.system.updated

    def test_planet(self):
        self.state.select_system(self.system.id)
        self.state.select_planet(self.planet.id)
        summary = self.state.summary(self.universe)
        assert summary.kind == "planet"
        assert summary.path == "Alpha / Planet-1"
        assert summary.child_count == 1

    def test_moon_entries_sorted_by_creation(self):
        selection = Selection(system=self.system.id, planet=self.planet.id, moon=self.moon.id)
        first = create_node(self.universe, selection, NodePayload(text="first"))
        second = create_node(self.universe, selection, NodePayload(text="second"))
        first.created = datetime.utcnow() + timedelta(hours=1)

        self.state.select_system(self.system.id)
        self.state.select_planet(self.planet.id)
        self.state.select_moon(self.moon.id)
        summary = self.state.summary(self.universe)

        assert summary.kind == "moon"
        assert summary.path == "Alpha / Planet-1 / Moon-1"
        assert summary.child_label == "2 entries"
        assert [e.text for e in summary.entries] == ["second", "first"]
        assert [e.id for e in self.moon.entries] == [first.id, second.id]
