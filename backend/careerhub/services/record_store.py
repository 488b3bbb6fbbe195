"""
求职记录存储

持有求职记录的规范集合（按 id 索引），并在写入前校验实体约束。
所有变更都先交给持久化协作方确认，确认成功后才更新内存视图，
因此持久层失败时内存视图保持不变。

持久化协作方需要提供：
    list_all() -> List[JobRecord]
    insert(draft) -> JobRecord
    update(job_id, fields) -> Optional[JobRecord]   # None 表示不存在
    remove(job_id) -> bool                          # False 表示不存在
    remove_all() -> int
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from careerhub.models.job import JobStatus, MUTABLE_FIELDS
from careerhub.models.schemas import JobDraft, JobRecord
from careerhub.services.errors import NotFoundError, PersistenceError, ValidationError


def coerce_status(value: Any) -> JobStatus:
    """
    将输入转换为 JobStatus，只接受四个合法取值（区分大小写）

    Raises:
        ValidationError: 取值非法
    """
    if isinstance(value, JobStatus):
        return value
    try:
        return JobStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in JobStatus)
        raise ValidationError(f"非法的申请状态: {value!r}（可选值: {allowed}）")


def validate_patch(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    校验部分更新的字段，返回规范化后的副本

    只允许修改 status / liked / ai_prep，其余字段创建后不可变。

    Raises:
        ValidationError: 含有不可修改的字段或取值非法
    """
    if not fields:
        raise ValidationError("没有需要更新的字段")

    illegal = sorted(set(fields) - MUTABLE_FIELDS)
    if illegal:
        raise ValidationError(f"以下字段创建后不可修改: {', '.join(illegal)}")

    cleaned: Dict[str, Any] = {}
    if "status" in fields:
        cleaned["status"] = coerce_status(fields["status"])
    if "liked" in fields:
        if not isinstance(fields["liked"], bool):
            raise ValidationError(f"liked 必须是布尔值: {fields['liked']!r}")
        cleaned["liked"] = fields["liked"]
    if "ai_prep" in fields:
        ai_prep = fields["ai_prep"]
        if ai_prep is not None and not isinstance(ai_prep, str):
            raise ValidationError(f"ai_prep 必须是文本: {ai_prep!r}")
        cleaned["ai_prep"] = ai_prep
    return cleaned


class RecordStore:
    """
    求职记录存储

    对外只暴露 JobRecord 快照；all() 返回的元组顺序为插入顺序，
    但调用方不应依赖它，需要按时间排序时请显式排序。
    """

    def __init__(self, persistence):
        """
        初始化存储

        Args:
            persistence: 持久化协作方（通常是 JobRepository）
        """
        self.persistence = persistence
        self._records: Dict[str, JobRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._records

    def load(self) -> Tuple[JobRecord, ...]:
        """
        从持久层重新加载全部记录，替换内存视图

        Raises:
            PersistenceError: 持久层读取失败（内存视图保持不变）
        """
        try:
            records = self.persistence.list_all()
        except SQLAlchemyError as e:
            print(f"[RecordStore Error] 加载记录失败: {e}")
            raise PersistenceError(f"加载记录失败: {e}") from e

        self._records = {record.id: record for record in records}
        print(f"[RecordStore] 已加载 {len(self._records)} 条记录")
        return self.all()

    def all(self) -> Tuple[JobRecord, ...]:
        """返回当前集合的只读快照"""
        return tuple(self._records.values())

    def get(self, job_id: str) -> JobRecord:
        """
        获取单条记录

        Raises:
            NotFoundError: 记录不存在
        """
        record = self._records.get(job_id)
        if record is None:
            raise NotFoundError(job_id)
        return record

    def find(self, job_id: str) -> Optional[JobRecord]:
        """获取单条记录，不存在返回 None"""
        return self._records.get(job_id)

    def create(self, draft: JobDraft) -> JobRecord:
        """
        创建记录：分配新 ID，liked=False，ai_prep 为空

        Raises:
            ValidationError: company 或 role 去除空白后为空
            PersistenceError: 持久层写入失败
        """
        if isinstance(draft, dict):
            try:
                draft = JobDraft.model_validate(draft)
            except PydanticValidationError as e:
                raise ValidationError(f"创建参数非法: {e}") from e

        if not draft.company:
            raise ValidationError("公司名称不能为空")
        if not draft.role:
            raise ValidationError("岗位名称不能为空")

        try:
            record = self.persistence.insert(draft)
        except SQLAlchemyError as e:
            print(f"[RecordStore Error] 创建记录失败: {e}")
            raise PersistenceError(f"创建记录失败: {e}") from e

        self._records[record.id] = record
        return record

    def patch(self, job_id: str, fields: Dict[str, Any]) -> JobRecord:
        """
        原子地部分更新记录：要么全部字段生效，要么记录保持原样

        Raises:
            ValidationError: 字段不可修改或取值非法
            NotFoundError: 记录不存在
            PersistenceError: 持久层写入失败
        """
        if job_id not in self._records:
            raise NotFoundError(job_id)
        cleaned = validate_patch(fields)

        try:
            record = self.persistence.update(job_id, cleaned)
        except SQLAlchemyError as e:
            print(f"[RecordStore Error] 更新记录 {job_id} 失败: {e}")
            raise PersistenceError(f"更新记录失败: {e}") from e

        if record is None:
            # 持久层已经没有这条记录，丢弃过期的内存副本
            self._records.pop(job_id, None)
            raise NotFoundError(job_id)

        self._records[job_id] = record
        return record

    def delete(self, job_id: str) -> None:
        """
        删除记录（不可恢复）

        Raises:
            NotFoundError: 记录不存在
            PersistenceError: 持久层删除失败
        """
        if job_id not in self._records:
            raise NotFoundError(job_id)

        try:
            removed = self.persistence.remove(job_id)
        except SQLAlchemyError as e:
            print(f"[RecordStore Error] 删除记录 {job_id} 失败: {e}")
            raise PersistenceError(f"删除记录失败: {e}") from e

        self._records.pop(job_id, None)
        if not removed:
            raise NotFoundError(job_id)

    def clear(self) -> int:
        """
        删除全部记录

        Returns:
            删除的记录数

        Raises:
            PersistenceError: 持久层删除失败
        """
        try:
            removed = self.persistence.remove_all()
        except SQLAlchemyError as e:
            print(f"[RecordStore Error] 清空记录失败: {e}")
            raise PersistenceError(f"清空记录失败: {e}") from e

        self._records.clear()
        return removed
