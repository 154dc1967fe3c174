"""Tests for the orbit layout pass."""

import math
import random

from cosmos_kernel.layout.orbits import assign_orbits
from cosmos_kernel.models.mutation import NodePayload
from cosmos_kernel.models.selection import Selection
from cosmos_kernel.models.universe import Mode, Universe
from cosmos_kernel.mutation.engine import create_node, create_system


def _make_universe() -> Universe:
    universe = Universe(mode=Mode.EVOLVE)
    system = create_system(universe, "Alpha", energy=2)
    selection = Selection(system=system.id)
    planet = create_node(universe, selection, NodePayload(title="P", energy=-1))
    selection.planet = planet.id
    create_node(universe, selection, NodePayload(title="M", energy=3))
    return universe


class TestAssignOrbits:
    def test_distances_follow_energy_bands(self):
        universe = _make_universe()
        assign_orbits(universe, random.Random(7))

        system = universe.systems[0]
        planet = system.planets[0]
        moon = planet.moons[0]
        assert 200 + 2 * 18 <= system.orbit_band < 320 + 2 * 18
        assert 80 - 12 <= planet.orbit_radius < 130 - 12
        assert 28 + 30 <= moon.orbit_radius < 48 + 30

    def test_positions_are_relative_to_owner(self):
        universe = _make_universe()
        assign_orbits(universe, random.Random(1))

        system = universe.systems[0]
        planet = system.planets[0]
        moon = planet.moons[0]
        assert math.isclose(math.hypot(system.x, system.y), system.orbit_band)
        assert math.isclose(math.hypot(planet.x - system.x, planet.y - system.y), planet.orbit_radius)
        assert math.isclose(math.hypot(moon.x - planet.x, moon.y - planet.y), moon.orbit_radius)

    def test_initialised_only_once(self):
        universe = _make_universe()
        assign_orbits(universe, random.Random(1))
        band = universe.systems[0].orbit_band
        radius = universe.systems[0].planets[0].orbit_radius

        assign_orbits(universe, random.Random(99))
        assert universe.systems[0].orbit_band == band
        assert universe.systems[0].planets[0].orbit_radius == radius

    def test_seeded_layout_is_reproducible(self):
        first = _make_universe()
        second = first.model_copy(deep=True)

        assign_orbits(first, random.Random(42))
        assign_orbits(second, random.Random(42))

        assert first.systems[0].x == second.systems[0].x
        assert first.systems[0].planets[0].moons[0].y == second.systems[0].planets[0].moons[0].y
