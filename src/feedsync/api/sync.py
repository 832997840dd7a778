"""同步 API."""

from fastapi import APIRouter, Depends

from feedsync.api.deps import get_sync_service
from feedsync.core.sync import FeedSyncService

router = APIRouter(prefix="/api/sync", tags=["sync"])


def _status_payload(service: FeedSyncService) -> dict:
    progress = service.last_progress
    return {
        "syncing": service.syncing,
        "error": str(service.last_error) if service.last_error else None,
        "last_progress": progress.model_dump() if progress else None,
        "last_synced_at": (
            service.last_synced_at.isoformat() if service.last_synced_at else None
        ),
    }


@router.post("")
async def trigger_sync(
    service: FeedSyncService = Depends(get_sync_service),
) -> dict:
    """触发同步（用户主动，完成后刷新可见列表）."""
    success = await service.sync_all_feeds(user_initiated=True)
    return {"success": success, **_status_payload(service)}


@router.get("/status")
async def get_sync_status(
    service: FeedSyncService = Depends(get_sync_service),
) -> dict:
    """获取同步状态."""
    return _status_payload(service)
