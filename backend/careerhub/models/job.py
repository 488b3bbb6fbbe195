"""
求职域模型 - 求职申请表
"""

import uuid
from datetime import date
from enum import Enum
from typing import Optional

from sqlmodel import Field

from .base import TimestampModel


class JobStatus(str, Enum):
    """申请状态枚举，取值与界面展示保持一致"""
    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    REJECTED = "Rejected"
    OFFERED = "Offered"


# 创建后仍可修改的字段
MUTABLE_FIELDS = frozenset({"status", "liked", "ai_prep"})


class JobApplication(TimestampModel, table=True):
    """
    求职申请表
    每一行对应一次投递，归属于某个用户
    """
    __tablename__ = "job_applications"

    # 主键：不透明的 UUID 字符串，创建后不可变
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )

    # 外键：归属用户，列表查询热点
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)

    # 公司名称与岗位名称（已去除首尾空白，不可为空）
    company: str = Field(nullable=False)
    role: str = Field(nullable=False)

    # 申请状态
    status: JobStatus = Field(default=JobStatus.APPLIED, nullable=False)

    # 投递日期，默认为创建当天
    applied_date: date = Field(default_factory=date.today, nullable=False)

    # 是否收藏
    liked: bool = Field(default=False, nullable=False)

    # AI 生成的面试准备内容，补全成功前为空
    ai_prep: Optional[str] = Field(default=None)
