"""
用户域模型 - 用户索引表
所有求职记录都归属于一个用户，单机模式下默认为 "me"
"""

from typing import Optional
from sqlmodel import Field

from .base import TimestampModel


class User(TimestampModel, table=True):
    """
    用户索引表
    存储系统的绝对根节点
    """
    __tablename__ = "users"

    # 主键
    id: Optional[int] = Field(default=None, primary_key=True)

    # 唯一用户名，单机默认为 "me"
    username: str = Field(unique=True, index=True, nullable=False)
