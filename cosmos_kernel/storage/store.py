"""
Universe Store — the Persistence Port.

Saves and loads the universe as a single JSON blob under a key.

Behavioral Contract:
- Persisted shape: {systems, theme, mode, camera}. Timeline history and
  selection are not persisted.
- Loading never blocks startup: absent data yields None, malformed data
  falls back to defaults field by field, and a System that fails
  validation is skipped on its own.
- Save failures are logged, not raised.
"""

import json
import logging
import math
import sqlite3
from typing import Any, Optional

from pydantic import ValidationError

from cosmos_kernel.models.universe import Camera, Mode, System, Theme, Universe

logger = logging.getLogger(__name__)

DEFAULT_KEY = "cosmos.state.v1"


def _number(value: Any, default: float) -> float:
    """Numeric coercion with JS-style fallback: non-numeric, NaN and 0 become the default."""
    if isinstance(value, bool):
        value = int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number) or number == 0:
        return default
    return number


def universe_from_data(data: Any) -> Optional[Universe]:
    """
    Build a Universe from loosely-typed persisted data, keeping every field
    that validates and defaulting the rest. None if `data` is not a mapping.
    """
    if not isinstance(data, dict):
        return None

    universe = Universe()

    systems = data.get("systems")
    if isinstance(systems, list):
        for raw in systems:
            try:
                universe.systems.append(System.model_validate(raw))
            except ValidationError as exc:
                logger.warning(
                    "Skipping unreadable system %r: %d validation errors",
                    raw.get("id") if isinstance(raw, dict) else raw,
                    exc.error_count(),
                )

    if data.get("theme") in (Theme.LIGHT.value, Theme.DARK.value):
        universe.theme = Theme(data["theme"])

    if data.get("mode") in (Mode.GENERATE.value, Mode.EVOLVE.value):
        universe.mode = Mode(data["mode"])

    camera = data.get("camera")
    if isinstance(camera, dict):
        universe.camera = Camera(
            x=_number(camera.get("x"), 0.0),
            y=_number(camera.get("y"), 0.0),
            zoom=_number(camera.get("zoom"), 1.0),
        )

    return universe


def universe_to_data(universe: Universe) -> dict:
    return {
        "systems": [s.model_dump(mode="json") for s in universe.systems],
        "theme": universe.theme.value,
        "mode": universe.mode.value,
        "camera": universe.camera.model_dump(mode="json"),
    }


class UniverseStore:
    """
    Key-value blob store for universes.
    Default: in-memory SQLite. Pass a file path to persist across sessions.
    """

    def __init__(self, db_path: str = ":memory:", key: str = DEFAULT_KEY):
        self.db_path = db_path
        self.key = key
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        """Create the state table if it doesn't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS cosmos_state (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                saved_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """)
        self._conn.commit()

    def save(self, universe: Universe) -> bool:
        """Write the universe under the store key. Returns False on failure."""
        try:
            blob = json.dumps(universe_to_data(universe))
            self._conn.execute(
                """
                INSERT INTO cosmos_state (key, value, saved_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    saved_at = excluded.saved_at
                """,
                (self.key, blob),
            )
            self._conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as exc:
            logger.warning("Failed to save universe state: %s", exc)
            return False
        return True

    def load(self) -> Optional[Universe]:
        """The saved universe, or None if nothing usable is stored."""
        raw = self.load_raw()
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Failed to load saved universe state: %s", exc)
            return None
        return universe_from_data(data)

    def load_raw(self) -> Optional[str]:
        try:
            row = self._conn.execute(
                "SELECT value FROM cosmos_state WHERE key = ?", (self.key,)
            ).fetchone()
        except sqlite3.Error as exc:
            logger.warning("Failed to read universe state: %s", exc)
            return None
        return row["value"] if row else None

    def write_raw(self, value: str) -> None:
        """Store an arbitrary blob under the key (imports, tests)."""
        self._conn.execute(
            "INSERT OR REPLACE INTO cosmos_state (key, value) VALUES (?, ?)",
            (self.key, value),
        )
        self._conn.commit()

    def clear(self) -> None:
        self._conn.execute("DELETE FROM cosmos_state WHERE key = ?", (self.key,))
        self._conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
