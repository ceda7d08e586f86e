"""API routes for the monitor snapshot.

Endpoints:
  GET  /api/status                              — last update + every service
  GET  /api/status/summary                      — count of services per status
  GET  /api/services/{category}                 — services of one category
  POST /api/services/{category}/{name}/check    — probe one service now
  POST /api/probe                               — start a probing round
  GET  /api/health                              — liveness of the monitor itself
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from src.monitor import Manager, ServiceNotFoundError

router = APIRouter()


# -- Response models -----------------------------------------------------------


class CheckResponse(BaseModel):
    category: str
    name: str
    status: str
    message: str


class RoundResponse(BaseModel):
    started: int


def _manager(request: Request) -> Manager:
    manager = getattr(request.app.state, "manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Monitor not initialised")
    return manager


@router.get("/status")
def get_status(request: Request) -> dict[str, Any]:
    """Snapshot of every service, grouped by category."""
    return _manager(request).snapshot()


@router.get("/status/summary")
def get_summary(request: Request) -> dict[str, Any]:
    manager = _manager(request)
    counts = manager.status_counts()
    overall = "down" if counts["ERROR"] else "degraded" if counts["WARNING"] else "up"
    return {
        "status": overall,
        "counts": counts,
        "last_update": manager.last_update.isoformat() if manager.last_update else None,
    }


@router.get("/services/{category}")
def get_category(category: str, request: Request) -> dict[str, Any]:
    services = _manager(request).services.get(category)
    if services is None:
        raise HTTPException(status_code=404, detail=f"Category not found: {category}")
    return {"category": category, "services": [s.to_dict() for s in services]}


@router.post("/services/{category}/{name}/check")
async def check_service(category: str, name: str, request: Request) -> CheckResponse:
    """Probe one service immediately and return its new state."""
    manager = _manager(request)
    try:
        state = await manager.probe_service(category, name)
    except ServiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return CheckResponse(
        category=category, name=name, status=state.status.value, message=state.message,
    )


@router.post("/probe")
async def trigger_round(request: Request) -> RoundResponse:
    """Start a probing round in the background; returns how many services were started."""
    started = _manager(request).start_round()
    return RoundResponse(started=len(started))


@router.get("/health")
def health(request: Request) -> dict[str, Any]:
    manager = getattr(request.app.state, "manager", None)
    return {
        "status": "ok" if manager is not None else "starting",
        "services": sum(1 for _ in manager.iter_services()) if manager else 0,
        "alerters": len(manager.alerters) if manager else 0,
    }
