from typing import Optional

from fastapi import APIRouter, Depends

from app.models.schemas import RateSource, SilverRateCreate
from app.routers.deps import get_rate_service
from app.services.rate_service import RateService

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/latest")
async def latest_rate(rates: RateService = Depends(get_rate_service)):
    return await rates.get_latest_rate()


@router.get("/history")
async def rate_history(source: Optional[RateSource] = None, rates: RateService = Depends(get_rate_service)):
    return await rates.get_rate_history(source)


@router.post("", status_code=201)
async def add_rate(rate: SilverRateCreate, rates: RateService = Depends(get_rate_service)):
    return await rates.add_silver_rate(rate)
