"""文章视图筛选模型."""

from pydantic import BaseModel, Field


class ArticleFilter(BaseModel):
    """当前可见文章列表的筛选条件."""

    feed_id: str | int | None = Field(default=None, description="按 Feed 筛选")
    unread_only: bool = Field(default=False, description="只看未读")
    saved_only: bool = Field(default=False, description="只看收藏")
