"""Tests for core data models and the object factory."""

import math
from datetime import datetime

import pytest

from cosmos_kernel.models import (
    Camera,
    CosmosConfig,
    Entry,
    Mode,
    Moon,
    NodePayload,
    Planet,
    Selection,
    System,
    Theme,
    Universe,
)
from cosmos_kernel.objects.factory import (
    create_entry,
    create_moon,
    create_planet,
    create_system,
    random_angle,
    uid,
)


class TestEntities:
    def test_system_defaults(self):
        now = datetime.utcnow()
        system = System(id="sys_1", title="Alpha", created=now, updated=now)
        assert system.type == "system"
        assert system.planets == []
        assert system.lineage == []
        assert system.radius == 40
        assert system.orbit_band == 0

    def test_type_tag_is_fixed(self):
        entry = Entry(id="e_1", text="hello", created=datetime.utcnow())
        with pytest.raises(Exception):
            entry.type = "moon"

    def test_wrong_type_tag_rejected(self):
        now = datetime.utcnow()
        with pytest.raises(Exception):
            Planet(id="p_1", type="moon", created=now, updated=now)

    def test_default_lists_not_shared(self):
        now = datetime.utcnow()
        a = Moon(id="m_1", created=now, updated=now)
        b = Moon(id="m_2", created=now, updated=now)
        a.entries.append(create_entry("x"))
        assert b.entries == []

    def test_universe_defaults(self):
        universe = Universe()
        assert universe.systems == []
        assert universe.mode == Mode.GENERATE
        assert universe.theme == Theme.DARK
        assert universe.camera == Camera(x=0, y=0, zoom=1)

    def test_selection_defaults_to_nothing(self):
        selection = Selection()
        assert selection.system is None
        assert selection.planet is None
        assert selection.moon is None

    def test_node_payload_defaults(self):
        payload = NodePayload(title="Planet-1")
        assert payload.text == ""
        assert payload.tone is None
        assert payload.energy == 0


class TestConfig:
    def test_defaults(self):
        config = CosmosConfig()
        assert config.playback_interval_seconds == 0.6
        assert config.storage_key == "cosmos.state.v1"
        assert config.record_restores is False
        assert config.promote_carries_subtree is False

    def test_interval_must_be_positive(self):
        with pytest.raises(Exception):
            CosmosConfig(playback_interval_seconds=0)


class TestFactory:
    def test_ids_are_unique(self):
        ids = {uid() for _ in range(500)}
        assert len(ids) == 500

    def test_create_system(self):
        system = create_system("Alpha", "a lens", energy=3)
        assert system.title == "Alpha"
        assert system.description == "a lens"
        assert system.energy == 3
        assert system.lineage == []
        assert system.planets == []
        assert system.updated >= system.created

    def test_create_planet_and_moon_geometry(self):
        planet = create_planet("P", "text", "calm", 2)
        moon = create_moon("M", "text", "calm", -1)

        assert planet.radius == 26
        assert moon.radius == 14
        assert planet.orbit_radius == 0
        assert moon.orbit_radius == 0
        assert 0 <= planet.orbit_angle < 2 * math.pi
        assert 0 <= moon.orbit_angle < 2 * math.pi
        assert planet.moons == [] and planet.entries == []
        assert moon.entries == []

    def test_create_entry(self):
        entry = create_entry("log entry", "warm")
        assert entry.type == "entry"
        assert entry.text == "log entry"
        assert entry.tone == "warm"

    def test_distinct_kinds_never_share_ids(self):
        objects = [create_system("S"), create_planet("P"), create_moon("M"), create_entry("E")]
        assert len({o.id for o in objects}) == 4

    def test_random_angle_range(self):
        for _ in range(100):
            assert 0 <= random_angle() < 2 * math.pi
