"""
数据库模型模块
导出所有表模型、快照类型和枚举
"""

# 用户域模型
from .user import User

# 求职域模型
from .job import JobApplication, JobStatus, MUTABLE_FIELDS
from .schemas import JobDraft, JobRecord

# 基础模型
from .base import TimestampModel

__all__ = [
    # 用户域
    "User",
    # 求职域
    "JobApplication", "JobStatus", "MUTABLE_FIELDS",
    "JobDraft", "JobRecord",
    # 基础模型
    "TimestampModel"
]
