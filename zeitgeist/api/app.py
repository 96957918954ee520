"""
Zeitgeist Pet API: FastAPI endpoints.

Exposes the kernel for:
- Entity state (the pet as clients see it)
- Brain scan (the raw inputs behind it)
- Comfort / agitate interactions
- Shareable mood cards
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from zeitgeist.entity.service import EntityService, EntityUnavailableError
from zeitgeist.interaction.store import InteractionValidationError
from zeitgeist.logging_config import setup_logging
from zeitgeist.models.config import ZeitgeistConfig


# --- Request/Response Models ---

class InteractRequest(BaseModel):
    action: str


class InteractResponse(BaseModel):
    message: str
    total_comfort: int
    total_agitate: int


INTERACTION_MESSAGES = {
    "comfort": "You gently comfort the entity...",
    "agitate": "You poke the entity aggressively!",
}


# --- Application Factory ---

def create_app(
    service: Optional[EntityService] = None,
    config: Optional[ZeitgeistConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    config = config or (service.config if service else ZeitgeistConfig.from_env())
    svc = service or EntityService(config=config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stop_event = asyncio.Event()
        reset_task = asyncio.create_task(svc.interactions.run_reset_schedule(stop_event))
        try:
            yield
        finally:
            stop_event.set()
            await reset_task

    app = FastAPI(
        title="Zeitgeist Pet API",
        description="A digital pet whose mood follows the state of the internet",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.entity_service = svc

    @app.exception_handler(EntityUnavailableError)
    async def entity_unavailable(request, exc: EntityUnavailableError):
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # === ENTITY ===

    @app.get("/api/entity")
    async def get_entity():
        """Current state of the pet."""
        state = await svc.get_current_entity_state()
        return state.model_dump(mode="json")

    @app.get("/api/brain-scan")
    async def brain_scan(refresh: bool = False):
        """Raw inputs, for the technically curious."""
        bundle = await svc.get_raw_bundle(refresh=refresh)
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "raw_inputs": bundle.model_dump(mode="json"),
            "failed_sources": bundle.failed_sources,
            "user_interactions": svc.get_interaction_state().model_dump(mode="json"),
            "message": "You are looking directly into the entity's neural pathways...",
        }

    @app.get("/api/mood-card")
    async def mood_card():
        """Shareable mood card."""
        return await svc.get_mood_card()

    @app.get("/api/history/{date}")
    def history(date: str):
        """Historical archive placeholder; nothing is persisted."""
        return {
            "date": date,
            "message": "Historical archive coming soon...",
            "note": "The Graveyard remembers all past forms",
        }

    # === INTERACTIONS ===

    @app.post("/api/interact", response_model=InteractResponse)
    def interact(req: InteractRequest):
        """Comfort or agitate the pet."""
        try:
            state = svc.record_interaction(req.action)
        except InteractionValidationError:
            raise HTTPException(400, "Invalid action")
        return InteractResponse(
            message=INTERACTION_MESSAGES[req.action],
            total_comfort=state.comfort,
            total_agitate=state.agitate,
        )

    @app.get("/api/interactions")
    def get_interactions():
        """Current interaction counters."""
        return svc.get_interaction_state().model_dump(mode="json")

    # === HEALTH ===

    @app.get("/health")
    def health():
        return {"status": "ok", "sources": svc.source_count}

    return app


# Default application instance
setup_logging()
app = create_app()
