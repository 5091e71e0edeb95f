from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from auth import CurrentUser, get_current_user
from models.task import StatusUpdate, TaskCreate, TaskUpdate
from services.dashboard_service import TaskDashboard
from services.filter_service import ALL, FilterConfig, SortKey
from services.task_service import TaskNotFoundError, TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["Tasks"])


# ── Dependencies ──────────────────────────────────────────────────
def get_task_service(user: CurrentUser = Depends(get_current_user)) -> TaskService:
    return TaskService(access_token=user.access_token)


def get_filters(
    category: str = ALL,
    status_filter: str = Query(ALL, alias="status"),
    priority: str = ALL,
    sort: str = SortKey.DUE_DATE.value,
) -> FilterConfig:
    try:
        return FilterConfig(category=category, status=status_filter, priority=priority, sort_by=sort)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


def get_dashboard(
    user: CurrentUser = Depends(get_current_user),
    repo: TaskService = Depends(get_task_service),
    filters: FilterConfig = Depends(get_filters),
) -> TaskDashboard:
    return TaskDashboard(repo, user.id, config=filters)


def _raise_for(dashboard: TaskDashboard):
    code = 404 if isinstance(dashboard.last_error, TaskNotFoundError) else 502
    raise HTTPException(status_code=code, detail=dashboard.notice)


def _load(dashboard: TaskDashboard) -> TaskDashboard:
    if not dashboard.refresh():
        _raise_for(dashboard)
    return dashboard


# ── Routes ────────────────────────────────────────────────────────
@router.get("")
async def list_tasks(dashboard: TaskDashboard = Depends(get_dashboard)):
    """Filtered, sorted task cards plus stats over the whole collection."""
    return _load(dashboard).snapshot()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(task_data: TaskCreate, dashboard: TaskDashboard = Depends(get_dashboard)):
    if not dashboard.create_task(task_data):
        _raise_for(dashboard)
    return dashboard.snapshot()


@router.get("/stats")
async def task_stats(dashboard: TaskDashboard = Depends(get_dashboard)):
    return _load(dashboard).stats().to_dict()


@router.get("/{task_id}")
async def get_task(task_id: str, dashboard: TaskDashboard = Depends(get_dashboard)):
    task = _load(dashboard).find(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return dashboard.card(task)


@router.put("/{task_id}")
async def update_task(task_id: str, task_data: TaskUpdate, dashboard: TaskDashboard = Depends(get_dashboard)):
    if not _load(dashboard).update_task(task_id, task_data):
        _raise_for(dashboard)
    return dashboard.snapshot()


@router.patch("/{task_id}/status")
async def change_status(task_id: str, body: StatusUpdate, dashboard: TaskDashboard = Depends(get_dashboard)):
    if not _load(dashboard).change_status(task_id, body.status):
        _raise_for(dashboard)
    return dashboard.snapshot()


@router.post("/{task_id}/toggle")
async def toggle_task(task_id: str, dashboard: TaskDashboard = Depends(get_dashboard)):
    """Quick-complete: Completed <-> Pending."""
    if not _load(dashboard).toggle_complete(task_id):
        _raise_for(dashboard)
    return dashboard.snapshot()


@router.delete("/{task_id}")
async def delete_task(task_id: str, dashboard: TaskDashboard = Depends(get_dashboard)):
    if not dashboard.delete_task(task_id):
        _raise_for(dashboard)
    return dashboard.snapshot()
