"""
Cosmos Kernel API — FastAPI endpoints.

Exposes one CosmosSession via a REST API for:
- Universe and selection inspection
- Node creation, editing, promotion and deletion
- Mode, theme and camera control
- Timeline scrubbing and playback
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from cosmos_kernel.models.config import CosmosConfig
from cosmos_kernel.models.mutation import NodePayload
from cosmos_kernel.models.universe import Mode, Theme
from cosmos_kernel.session.cosmos import CosmosSession


# --- Request/Response Models ---

class SystemCreateRequest(BaseModel):
    title: str
    description: str = ""
    energy: int = 0


class ObjectEditRequest(BaseModel):
    title: Optional[str] = None
    text: Optional[str] = None


class SelectionRequest(BaseModel):
    system: Optional[str] = None
    planet: Optional[str] = None
    moon: Optional[str] = None


class PromoteRequest(BaseModel):
    carry_subtree: Optional[bool] = None


class ModeRequest(BaseModel):
    mode: Mode


class ThemeRequest(BaseModel):
    theme: Theme


# --- Application Factory ---

def create_app(
    session: Optional[CosmosSession] = None,
    config: Optional[CosmosConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Cosmos Kernel API",
        description="Orbital note map — universe model and timeline",
        version="0.1.0-alpha",
    )

    # Endpoints are coroutines so every session access runs on the event
    # loop thread, serialised with the playback ticker.
    cs = session or CosmosSession(config=config)
    app.state.session = cs

    def _timeline_status() -> dict:
        tl = cs.timeline
        return {
            "index": tl.index,
            "count": tl.count,
            "state": tl.state.value,
            "label": tl.label(),
            "time": tl.time_at(tl.index).isoformat() if tl.count else None,
        }

    # === UNIVERSE ===

    @app.get("/universe")
    async def get_universe():
        """Current universe."""
        return cs.universe.model_dump(mode="json")

    @app.get("/lineage")
    async def get_lineage():
        """Renderable lineage links between existing systems."""
        return [
            {"ancestor": ancestor, "descendant": descendant}
            for ancestor, descendant in cs.lineage_links()
        ]

    # === SELECTION ===

    def _selection_view() -> dict:
        return {
            "selection": cs.selection.current.model_dump(mode="json"),
            "summary": cs.summary().model_dump(mode="json"),
        }

    @app.get("/selection")
    async def get_selection():
        return _selection_view()

    @app.put("/selection")
    async def set_selection(req: SelectionRequest):
        """Set the pointer top-down, applying the cascade rules."""
        cs.select_system(req.system)
        if req.planet:
            cs.select_planet(req.planet)
        if req.moon:
            cs.select_moon(req.moon)
        return _selection_view()

    # === EDITS ===

    @app.post("/systems")
    async def create_system(req: SystemCreateRequest):
        system = cs.create_system(req.title, req.description, req.energy)
        if not system:
            raise HTTPException(422, "System title must not be blank")
        return system.model_dump(mode="json")

    @app.post("/nodes")
    async def create_node(payload: NodePayload):
        """Mode-aware creation from the current selection."""
        created = cs.create_node(payload)
        if not created:
            raise HTTPException(409, "Nothing to create for the current mode and selection")
        return created.model_dump(mode="json")

    @app.patch("/objects/{object_id}")
    async def edit_object(object_id: str, req: ObjectEditRequest):
        obj = cs.edit_object(object_id, title=req.title, text=req.text)
        if not obj:
            raise HTTPException(404, "Object not found")
        return obj.model_dump(mode="json")

    @app.delete("/objects/{object_id}")
    async def delete_object(object_id: str):
        removed = cs.delete_object(object_id)
        if not removed:
            raise HTTPException(404, "Object not found")
        return {"status": "deleted", "removed": removed}

    @app.post("/objects/{object_id}/promote")
    async def promote_object(object_id: str, req: Optional[PromoteRequest] = None):
        carry = req.carry_subtree if req else None
        system = cs.promote(object_id, carry_subtree=carry)
        if not system:
            raise HTTPException(404, "No planet or moon with that id")
        return system.model_dump(mode="json")

    # === SESSION SETTINGS ===

    @app.put("/mode")
    async def set_mode(req: ModeRequest):
        cs.set_mode(req.mode)
        return {"mode": cs.universe.mode.value}

    @app.put("/theme")
    async def set_theme(req: ThemeRequest):
        cs.set_theme(req.theme)
        return {"theme": cs.universe.theme.value}

    @app.post("/camera/focus")
    async def focus_camera():
        if not cs.focus_on_selection():
            raise HTTPException(404, "Nothing selected")
        return cs.universe.camera.model_dump(mode="json")

    # === TIMELINE ===

    @app.get("/timeline")
    async def get_timeline():
        return {**_timeline_status(), "entries": cs.timeline.entries()}

    @app.post("/timeline/{index}/restore")
    async def restore_snapshot(index: int):
        if not cs.restore(index):
            raise HTTPException(404, "Snapshot not found")
        return _timeline_status()

    @app.post("/timeline/play")
    async def start_playback():
        cs.start_playback()
        return _timeline_status()

    @app.post("/timeline/pause")
    async def pause_playback():
        cs.pause_playback()
        return _timeline_status()

    # === CONFIG ===

    @app.get("/config")
    async def get_config():
        return cs.config.model_dump()

    @app.put("/config")
    async def update_config(config: CosmosConfig):
        """Update tunables. Storage location changes apply to new sessions only."""
        cs.config = config
        cs.timeline.config = config
        return config.model_dump()

    return app


# Default application instance
app = create_app()
