"""
服务层异常定义

所有异常都可以在调用处恢复，不会导致进程退出。
"""

from typing import Optional


class CareerHubError(Exception):
    """服务层异常基类"""


class ValidationError(CareerHubError):
    """输入校验失败：必填字段为空或状态取值非法，不会到达持久层"""


class NotFoundError(CareerHubError):
    """操作的记录不存在（界面可能持有过期数据）"""

    def __init__(self, job_id: str, message: Optional[str] = None):
        self.job_id = job_id
        super().__init__(message or f"求职记录不存在: {job_id}")


class PersistenceError(CareerHubError):
    """持久层调用失败，内存视图保持不变"""


class EnrichmentError(CareerHubError):
    """AI 面试准备生成失败或超时，原有 ai_prep 保持不变"""

    def __init__(self, job_id: str, message: str):
        self.job_id = job_id
        super().__init__(message)


class EnrichmentInProgressError(CareerHubError):
    """同一条记录已有正在进行的生成请求"""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"记录 {job_id} 的面试准备正在生成中")
