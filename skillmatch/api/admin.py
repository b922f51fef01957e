from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from skillmatch.database import get_db
from skillmatch.schemas.stats import PlatformStats
from skillmatch.services import stats_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats", response_model=PlatformStats)
def get_platform_stats(
    top: Optional[int] = Query(None, ge=1, le=50),
    db: Session = Depends(get_db),
):
    return stats_service.platform_stats(db, top_n=top)
