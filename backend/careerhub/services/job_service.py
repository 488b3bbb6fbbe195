"""
求职记录服务层（变更 API）

封装对 RecordStore 的四个核心操作：
1. add_job: 创建记录
2. delete_job: 删除记录（重复删除视为成功）
3. set_status: 修改申请状态
4. toggle_liked: 切换收藏

每次成功变更后，都会把最新的完整快照推送给订阅者，
订阅者（如展示层）据此重新计算可见列表和统计。
"""

from datetime import date
from typing import Any, Callable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from careerhub.models.job import JobStatus
from careerhub.models.schemas import JobDraft, JobRecord
from careerhub.repositories.job_repository import JobRepository
from careerhub.repositories.user_repository import UserRepository
from careerhub.services.errors import NotFoundError, ValidationError
from careerhub.services.job_view import JobView, ViewParams, build_view
from careerhub.services.record_store import RecordStore, coerce_status

Snapshot = Tuple[JobRecord, ...]
SnapshotListener = Callable[[Snapshot], None]


class JobService:
    """
    求职记录服务类

    使用示例：
        service = JobService(RecordStore(repo))
        service.subscribe(lambda snapshot: render(build_view(snapshot, params)))
        job = service.add_job("Acme", "Engineer")
        service.set_status(job.id, "Interviewing")
    """

    def __init__(self, store: RecordStore):
        """
        初始化服务

        Args:
            store: 记录存储，由调用方注入
        """
        self.store = store
        self._listeners: List[SnapshotListener] = []

    # ==================== 订阅 ====================

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        订阅快照变更

        Args:
            listener: 接收完整快照的回调

        Returns:
            取消订阅的函数
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        """把当前快照推送给所有订阅者"""
        snapshot = self.store.all()
        for listener in list(self._listeners):
            listener(snapshot)

    # ==================== 读取 ====================

    def snapshot(self) -> Snapshot:
        """当前完整快照"""
        return self.store.all()

    def get(self, job_id: str) -> JobRecord:
        """获取单条记录，不存在抛出 NotFoundError"""
        return self.store.get(job_id)

    def view(self, params: Optional[ViewParams] = None) -> JobView:
        """对当前快照计算可见列表和统计"""
        return build_view(self.store.all(), params)

    def _notify_if_evicted(self, job_id: str, was_held: bool) -> None:
        """持久层已没有该记录、store 丢弃了内存副本时，同样推送快照"""
        if was_held and job_id not in self.store:
            print(f"[JobService] 记录 {job_id} 在持久层已不存在，同步移除")
            self.notify()

    def refresh(self) -> Snapshot:
        """从持久层重新加载，并通知订阅者"""
        snapshot = self.store.load()
        self.notify()
        return snapshot

    # ==================== 变更 ====================

    def add_job(
        self,
        company: str,
        role: str,
        status: Any = JobStatus.APPLIED,
        applied_date: Optional[date] = None
    ) -> JobRecord:
        """
        新增求职记录

        Args:
            company: 公司名称
            role: 岗位名称
            status: 初始状态，默认 Applied
            applied_date: 投递日期，默认当天

        Returns:
            新建的 JobRecord

        Raises:
            ValidationError: 公司或岗位为空、状态或日期非法（存储不变）
            PersistenceError: 持久层写入失败
        """
        try:
            draft = JobDraft(
                company=company,
                role=role,
                status=coerce_status(status),
                applied_date=applied_date or date.today()
            )
        except PydanticValidationError as e:
            raise ValidationError(f"创建参数非法: {e}") from e
        record = self.store.create(draft)
        print(f"[JobService] 新增记录: {record.company} / {record.role} (ID: {record.id})")
        self.notify()
        return record

    def delete_job(self, job_id: str) -> bool:
        """
        删除求职记录

        重复删除不会抛错，界面可能正在操作刚被删除的记录。

        Returns:
            本次确实删除了记录返回 True，记录早已不存在返回 False
        """
        was_held = job_id in self.store
        try:
            self.store.delete(job_id)
        except NotFoundError:
            print(f"[JobService] 记录 {job_id} 已不存在，忽略删除")
            self._notify_if_evicted(job_id, was_held)
            return False

        print(f"[JobService] 已删除记录: {job_id}")
        self.notify()
        return True

    def set_status(self, job_id: str, status: Any) -> JobRecord:
        """
        修改申请状态

        Raises:
            ValidationError: 状态不是四个合法取值之一
            NotFoundError: 记录不存在
        """
        fields = {"status": coerce_status(status)}
        was_held = job_id in self.store
        try:
            record = self.store.patch(job_id, fields)
        except NotFoundError:
            self._notify_if_evicted(job_id, was_held)
            raise
        print(f"[JobService] 状态更新: {job_id} -> {record.status.value}")
        self.notify()
        return record

    def toggle_liked(self, job_id: str) -> JobRecord:
        """
        切换收藏状态

        Raises:
            NotFoundError: 记录不存在
        """
        current = self.store.get(job_id)
        try:
            record = self.store.patch(job_id, {"liked": not current.liked})
        except NotFoundError:
            self._notify_if_evicted(job_id, True)
            raise
        self.notify()
        return record

    def save_prep(self, job_id: str, ai_prep: str) -> Optional[JobRecord]:
        """
        写入 AI 面试准备内容，只修改 ai_prep 字段

        记录已被删除时静默丢弃结果。

        Returns:
            更新后的 JobRecord，记录不存在返回 None
        """
        was_held = job_id in self.store
        try:
            record = self.store.patch(job_id, {"ai_prep": ai_prep})
        except NotFoundError:
            print(f"[JobService] 记录 {job_id} 已删除，丢弃面试准备结果")
            self._notify_if_evicted(job_id, was_held)
            return None

        self.notify()
        return record

    def reset_dashboard(self) -> int:
        """
        清空当前用户的全部记录

        Returns:
            删除的记录数
        """
        removed = self.store.clear()
        print(f"[JobService] 看板已重置，删除 {removed} 条记录")
        self.notify()
        return removed


def build_job_service(session: Session, username: str = "me") -> JobService:
    """
    创建绑定到某个用户的 JobService

    流程：
    1. 身份锚定：username -> user_id（不存在则创建）
    2. 以 JobRepository 作为持久化协作方创建 RecordStore
    3. 从数据库加载已有记录

    Args:
        session: SQLModel 数据库会话（由调用方管理生命周期）
        username: 用户名

    Returns:
        已加载数据的 JobService
    """
    user = UserRepository(session).get_or_create(username)
    store = RecordStore(JobRepository(session, user_id=user.id))
    store.load()
    print(f"[JobService] 初始化: 用户 '{username}' -> 数据库 ID [{user.id}]")
    return JobService(store)
