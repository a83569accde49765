"""
Dashboard API endpoints
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from clinic_admin.core.exceptions import ClinicException
from clinic_admin.dependencies import get_current_user, get_store
from clinic_admin.models.user import User
from clinic_admin.schemas.dashboard import DashboardStatsResponse
from clinic_admin.services.dashboard_service import DashboardService
from clinic_admin.services.record_store import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    current_user: User = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
):
    try:
        stats = await DashboardService(store).get_stats()
        return DashboardStatsResponse(stats=stats)

    except ClinicException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Get dashboard stats error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while fetching stats"
        )
