"""API 依赖."""

from fastapi import HTTPException, Request

from feedsync.core.store import ArticleStore
from feedsync.core.sync import FeedSyncService


def get_sync_service(request: Request) -> FeedSyncService:
    """获取应用级同步服务."""
    service = getattr(request.app.state, "sync_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="同步服务未初始化")
    return service


def get_article_store(request: Request) -> ArticleStore:
    """获取应用级文章状态."""
    store = getattr(request.app.state, "article_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="文章状态未初始化")
    return store
