"""
表模型公共字段

created_at 参与看板排序：同一投递日期的记录按创建时间倒序展示。
"""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampModel(SQLModel):
    """为表模型提供 created_at / updated_at（UTC）"""
    created_at: Optional[datetime] = Field(default_factory=utc_now, nullable=False)
    # 每次 UPDATE 时由 SQLAlchemy 刷新
    updated_at: Optional[datetime] = Field(
        default_factory=utc_now,
        nullable=False,
        sa_column_kwargs={"onupdate": utc_now}
    )
