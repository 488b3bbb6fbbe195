"""
服务层模块
记录存储、筛选统计、变更 API 与 AI 面试准备补全流程
"""

from .errors import (
    CareerHubError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    EnrichmentError,
    EnrichmentInProgressError
)
from .record_store import RecordStore
from .job_view import JobView, StatusCounts, ViewParams, build_view, count_statuses
from .job_service import JobService, build_job_service
from .enrichment import EnrichmentState, EnrichmentWorkflow

__all__ = [
    "CareerHubError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "EnrichmentError",
    "EnrichmentInProgressError",
    "RecordStore",
    "JobView", "StatusCounts", "ViewParams", "build_view", "count_statuses",
    "JobService", "build_job_service",
    "EnrichmentState", "EnrichmentWorkflow"
]
