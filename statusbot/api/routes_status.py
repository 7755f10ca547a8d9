# statusbot/api/routes_status.py
"""
Status API routes.

Health of the poll loop and the current list of delays.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ..status.models import EventType

router = APIRouter(tags=["status"])


class StatusResponse(BaseModel):
    """Time of the last poll cycle that completed."""
    last_successful_run: Optional[datetime] = Field(None, alias="lastSuccessfulRun")

    model_config = {"populate_by_name": True}


class DelaysResponse(BaseModel):
    """Post text for every current delay."""
    count: int
    delays: List[str]


def _cycle(request: Request):
    cycle = getattr(request.app.state, "cycle", None)
    if cycle is None:
        raise HTTPException(status_code=503, detail="Poll cycle not configured")
    return cycle


@router.get("/status", response_model=StatusResponse, response_model_by_alias=True)
async def get_status(request: Request) -> StatusResponse:
    """Report when the last poll cycle succeeded."""
    cycle = _cycle(request)
    return StatusResponse(last_successful_run=cycle.last_successful_run)


@router.get("/delays", response_model=DelaysResponse)
async def get_delays(request: Request) -> DelaysResponse:
    """
    Current delays, closures excluded.

    503 until the first poll cycle has completed.
    """
    cycle = _cycle(request)
    records = cycle.current_delays()
    if records is None:
        raise HTTPException(
            status_code=503,
            detail="Current delays are not available yet. Please try again later.",
        )

    generator = cycle.generator.with_now(cycle.last_successful_run)
    texts = []
    for record in records:
        if record.event_type is EventType.CLOSURE:
            continue
        text = generator.to_new_post(record)
        if text:
            texts.append(text)
    return DelaysResponse(count=len(texts), delays=texts)
