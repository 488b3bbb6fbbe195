"""
求职记录快照与输入模型

RecordStore 对外只暴露 JobRecord 快照，而不是 SQLModel 行对象，
调用方拿到的数据不会随存储内部状态变化。
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .job import JobStatus


class JobDraft(BaseModel):
    """
    创建求职记录的输入

    company / role 会去除首尾空白；是否为空由 RecordStore 校验，
    这样空草稿永远不会到达持久层。
    """
    company: str = Field(default="", description="公司名称")
    role: str = Field(default="", description="岗位名称")
    status: JobStatus = Field(default=JobStatus.APPLIED, description="初始申请状态")
    applied_date: date = Field(default_factory=date.today, description="投递日期，默认当天")

    @field_validator("company", "role", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if value is None:
            return ""
        return str(value).strip()


class JobRecord(BaseModel):
    """求职记录只读快照"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    company: str
    role: str
    status: JobStatus = JobStatus.APPLIED
    applied_date: date
    liked: bool = False
    ai_prep: Optional[str] = None
    # 创建时间，用于同一投递日期下的排序
    created_at: Optional[datetime] = None
