"""Admin dashboard with overview cards and charts."""
from fastapi import APIRouter, Depends, Request

from app.backend.client import BackendClient, BackendError
from app.models.dashboard_model import DashboardStats
from app.services import recommendation_service
from app.utils.dependencies import get_backend
from app.utils.templating import render

router = APIRouter()


@router.get("")
async def dashboard(request: Request, api: BackendClient = Depends(get_backend)):
    stats = None
    error = None
    try:
        stats = await recommendation_service.dashboard_stats(api)
    except BackendError as exc:
        error = exc.message

    charts = (stats or DashboardStats()).charts.model_dump(by_alias=True)
    return render(request, "admin/dashboard.html", {"stats": stats, "charts": charts, "error": error})
