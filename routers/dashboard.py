from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from db.init import get_db
from models.enums import STAFF_ROLES
from services.stats import dashboard_stats, daily_metrics, metric_to_dict
from utils.deps import role_required
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", dependencies=[Depends(role_required(*STAFF_ROLES))])
def get_stats(db: Session = Depends(get_db)):
    try:
        return dashboard_stats(db)
    except Exception as e:
        logger.exception(f"Failed to fetch dashboard stats: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch dashboard stats"})


@router.get("/metrics", dependencies=[Depends(role_required(*STAFF_ROLES))])
def get_metrics(
    days: int = Query(30, ge=1),
    db: Session = Depends(get_db),
):
    try:
        return [metric_to_dict(m) for m in daily_metrics(db, min(days, 365))]
    except Exception as e:
        logger.exception(f"Failed to fetch daily metrics: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch daily metrics"})
