"""
筛选与统计

纯函数：根据记录快照和视图参数，计算可见列表和看板统计。
没有副作用，可以针对任意快照随时重复调用。

注意两种状态比较方式并存：
- 筛选：status_filter 与记录状态精确相等（区分大小写）
- 统计：按状态名小写计数，与 status_filter 无关
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from careerhub.models.schemas import JobRecord

STATUS_FILTER_ALL = "All"


class ViewParams(BaseModel):
    """视图参数（搜索文本、状态筛选、只看收藏）"""
    model_config = ConfigDict(frozen=True)

    search_text: str = Field(default="", description="在公司名和岗位名中做不区分大小写的子串匹配")
    status_filter: str = Field(default=STATUS_FILTER_ALL, description="'All' 或某个申请状态")
    liked_only: bool = Field(default=False, description="只显示已收藏的记录")


class StatusCounts(BaseModel):
    """看板统计，基于完整集合而不是筛选结果"""
    model_config = ConfigDict(frozen=True)

    total: int = 0
    interviewing: int = 0
    offered: int = 0
    rejected: int = 0


class JobView(BaseModel):
    """视图结果"""
    model_config = ConfigDict(frozen=True)

    visible: List[JobRecord] = Field(default_factory=list)
    counts: StatusCounts = Field(default_factory=StatusCounts)


def matches_search(record: JobRecord, search_text: str) -> bool:
    needle = search_text.lower()
    if not needle:
        return True
    return needle in record.company.lower() or needle in record.role.lower()


def matches_status(record: JobRecord, status_filter: str) -> bool:
    return status_filter == STATUS_FILTER_ALL or record.status.value == status_filter


def matches_liked(record: JobRecord, liked_only: bool) -> bool:
    return not liked_only or record.liked


def count_statuses(records: Sequence[JobRecord]) -> StatusCounts:
    """统计完整集合的状态分布"""
    statuses = [record.status.value.lower() for record in records]
    return StatusCounts(
        total=len(records),
        interviewing=statuses.count("interviewing"),
        offered=statuses.count("offered"),
        rejected=statuses.count("rejected"),
    )


def build_view(records: Sequence[JobRecord], params: Optional[ViewParams] = None) -> JobView:
    """
    计算可见列表和统计

    可见列表按投递日期倒序排列；同一天的记录按创建先后倒序，
    创建时间也相同时以输入中靠后的记录为先。

    Args:
        records: 记录快照
        params: 视图参数，默认为不筛选

    Returns:
        JobView
    """
    params = params or ViewParams()

    indexed = [
        (position, record)
        for position, record in enumerate(records)
        if matches_search(record, params.search_text)
        and matches_status(record, params.status_filter)
        and matches_liked(record, params.liked_only)
    ]

    def sort_key(item):
        position, record = item
        # created_at 缺失时只靠输入位置决定顺序
        created = record.created_at.timestamp() if record.created_at else float("-inf")
        return (record.applied_date, created, position)

    indexed.sort(key=sort_key, reverse=True)

    return JobView(
        visible=[record for _, record in indexed],
        counts=count_statuses(records),
    )
