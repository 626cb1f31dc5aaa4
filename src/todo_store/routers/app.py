from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status

from ..db import initialize_store
from ..schemas import DbStatusOut
from ..settings import get_settings
from ..state import AppState, get_app_state

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/app",
    tags=["app"],
)


async def _run_initialization(state: AppState) -> None:
    settings = get_settings()
    await initialize_store(settings.data_dir, state, settings.db_max_connections)


# PUBLIC_INTERFACE
@router.post(
    "/ready",
    response_model=DbStatusOut,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Front Ready",
    description=(
        "Signal that the presentation layer is listening. The first call schedules database "
        "initialization; its outcome is published as the dbstatus signal. Later calls are ignored."
    ),
)
async def front_ready(
    background: BackgroundTasks, state: AppState = Depends(get_app_state)
) -> DbStatusOut:
    if state.claim_initialization():
        background.add_task(_run_initialization, state)
    else:
        logger.info("front-ready received again; database initialization already started")
    last = state.dbstatus.last
    return DbStatusOut(status=last.status if last else None)


# PUBLIC_INTERFACE
@router.get(
    "/dbstatus",
    response_model=DbStatusOut,
    summary="Database Status",
    description="Return the last readiness signal: 'ready', an error description, or null.",
)
async def db_status(state: AppState = Depends(get_app_state)) -> DbStatusOut:
    last = state.dbstatus.last
    return DbStatusOut(status=last.status if last else None)
