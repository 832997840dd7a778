"""SyncProgress 同步进度事件模型."""

from pydantic import BaseModel, ConfigDict, Field


class SyncProgress(BaseModel):
    """服务端同步进度事件（宽松结构，保留未知字段）."""

    model_config = ConfigDict(extra="allow")

    type: str | None = Field(default=None, description="事件类型: progress|complete")
    synced: int | None = Field(default=None, description="同步成功的订阅源数")
    failed: int | None = Field(default=None, description="同步失败的订阅源数")
    completed: int | None = Field(default=None, description="已完成的订阅源数")
    total: int | None = Field(default=None, description="订阅源总数")

    @property
    def is_complete(self) -> bool:
        """是否为结束事件."""
        return self.type == "complete"
