"""文章 API."""

from fastapi import APIRouter, Depends, Query

from feedsync.api.deps import get_article_store
from feedsync.core.store import ArticleStore

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("")
async def list_articles(
    feed_id: str | None = Query(None, description="按 Feed 筛选"),
    unread_only: bool = Query(False, description="只看未读"),
    saved_only: bool = Query(False, description="只看收藏"),
    store: ArticleStore = Depends(get_article_store),
) -> dict:
    """按筛选条件获取当前可见文章."""
    store.set_filter(
        feed_id=feed_id,
        unread_only=unread_only,
        saved_only=saved_only,
    )
    await store.fetch_articles()
    return {
        "total": len(store.articles),
        "items": store.articles,
    }


@router.get("/all")
async def list_all_articles(
    store: ArticleStore = Depends(get_article_store),
) -> dict:
    """获取本地全部文章（最近一次同步结果）."""
    return {
        "total": len(store.all_articles),
        "items": store.all_articles,
    }


@router.get("/unread-counts")
async def get_unread_counts(
    store: ArticleStore = Depends(get_article_store),
) -> dict[str, int]:
    """获取未读计数."""
    return store.unread_counts()
