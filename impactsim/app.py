from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .config import Settings, load_settings
from .geonames import GeoNamesOceanClient
from .simulator import ImpactSimulator
from .surface import SurfaceLookup, classify


def create_app(settings: Optional[Settings] = None,
               surface_lookup: Optional[SurfaceLookup] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")

    if surface_lookup is None and settings.geonames_username:
        surface_lookup = GeoNamesOceanClient(settings.geonames_username, timeout_s=settings.geonames_timeout_s)
    simulator = ImpactSimulator(settings, surface_lookup=surface_lookup)

    app = FastAPI(title="Impact effects simulator", version="1.0.0")
    app.state.settings = settings
    app.state.simulator = simulator

    # -------------------------------
    # Health + small utility endpoint
    # -------------------------------
    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/surface")
    def surface(
        lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
        lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    ):
        t = classify(lon, lat, lookup=surface_lookup)
        return {"surface": t.surface, "density_kg_m3": t.density_kgpm3, "source": t.source, "rule": t.rule}

    # -------------------------------
    # Impact simulation endpoint
    # -------------------------------
    @app.post("/api/simulate")
    async def simulate(request: Request):
        raw = await request.body()
        # the surface lookup may block on network I/O
        outcome = await run_in_threadpool(simulator.handle, raw)
        return JSONResponse(outcome.body, status_code=outcome.status_code)

    return app


# Support 'uvicorn impactsim.app:app' from the repo root
app = create_app()
