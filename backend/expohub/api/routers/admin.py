# expohub/api/routers/admin.py
from fastapi import APIRouter, Depends, status

from expohub.api.deps import require_admin, search_params
from expohub.api.search import apply_search
from expohub.models.admin_log import AdminActivityLog
from expohub.models.user import User
from expohub.schemas.activity import (
    ACTIVITY_LOG_SEARCH_FIELDS,
    ACTIVITY_LOG_SORT_KEYS,
    ActivityLogCreateIn,
    activity_log_to_dict,
)
from expohub.schemas.common import SearchParams

router = APIRouter(prefix="/admin", tags=["admin"])


# ==============================================================================
# Activity log
#     Prefix: /api/admin/activity-logs
# ==============================================================================
@router.post("/activity-logs", status_code=status.HTTP_201_CREATED)
async def create_activity_log(body: ActivityLogCreateIn, admin: User = Depends(require_admin)):
    """
    Append an entry to the admin activity log.
    The author is always the calling admin.
    """
    log = await AdminActivityLog.create(admin_id=admin.id, activity_description=body.activity_description)
    return activity_log_to_dict(log)


@router.get("/activity-logs")
async def list_activity_logs(
    params: SearchParams = Depends(search_params(ACTIVITY_LOG_SORT_KEYS)),
    _: User = Depends(require_admin),
):
    """
    Search the activity log (admin only).

    Query params:
        query: substring of activity_description
        limit / offset / sort_order: shared list parameters (sort key: timestamp)
    """
    rows = await apply_search(AdminActivityLog.all(), params, ACTIVITY_LOG_SEARCH_FIELDS)
    return [activity_log_to_dict(log) for log in rows]
