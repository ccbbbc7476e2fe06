from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.models.schemas import KarigarCreate, SettlementRequest
from app.routers.deps import get_karigar_service
from app.services.karigar_service import KarigarService

router = APIRouter(prefix="/karigars", tags=["karigars"])


@router.get("")
async def list_karigars(karigars: KarigarService = Depends(get_karigar_service)):
    return await karigars.get_karigars()


@router.post("", status_code=201)
async def create_karigar(karigar: KarigarCreate, karigars: KarigarService = Depends(get_karigar_service)):
    return await karigars.create_karigar(karigar)


@router.get("/work")
async def work_history(
    karigar_id: Optional[str] = None,
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    karigars: KarigarService = Depends(get_karigar_service),
):
    return await karigars.get_karigar_work_history(karigar_id, month)


@router.post("/settle")
async def settle(request: SettlementRequest, karigars: KarigarService = Depends(get_karigar_service)):
    await karigars.settle_karigar_payments(request.ids, request.payment_date, request.payment_mode)
    return {"status": "ok", "settled": len(request.ids)}
