# city_explorer/api/routers/healthz.py
from fastapi import APIRouter

from city_explorer.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Liveness probe",
    description="Always 200 (no DB access).",
)
async def healthz():
    return {"ok": True}
