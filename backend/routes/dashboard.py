# backend/routes/dashboard.py

from fastapi import APIRouter, Depends, Request

from schemas.common import ApiResponse, ok
from schemas.dashboard import DashboardView, SalaryStatistics
from services.dashboard import DashboardService, get_dashboard_service
from utils.exceptions import UnauthorizedError
from utils.request_tracking import RequestCounter, get_request_counter
from utils.sessions import SessionStore, get_session_principal, get_session_store, session_id_from

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_session_principal)],
)

# Per-session page view counter key
DASHBOARD_VIEWS = "dashboard_views"


# === Endpoint 1: Dashboard Summary ===

@router.get("", response_model=ApiResponse[DashboardView])
@router.get("/index", response_model=ApiResponse[DashboardView])
def index(
    request: Request,
    service: DashboardService = Depends(get_dashboard_service),
    store: SessionStore = Depends(get_session_store),
    counter: RequestCounter = Depends(get_request_counter),
):
    try:
        page_views = store.increment(session_id_from(request), DASHBOARD_VIEWS)
    except KeyError:
        # Session ended after sign-in was checked
        raise UnauthorizedError("Please sign in to continue")
    view = DashboardView(
        summary=service.summary(),
        page_views=page_views,
        total_app_requests=counter.total,
    )
    return ok(view, "Dashboard loaded")


# === Endpoint 2: Salary statistics ===

@router.get("/stats", response_model=ApiResponse[SalaryStatistics])
def statistics(department: str = "", service: DashboardService = Depends(get_dashboard_service)):
    return ok(service.statistics(department))


# === Endpoint 3: Session reset ===

@router.get("/reset-session", response_model=ApiResponse)
def reset_session(request: Request, store: SessionStore = Depends(get_session_store)):
    # Clears everything kept in the session, sign-in identity included
    store.clear(session_id_from(request))
    return ok(None, "Session data has been cleared.")
