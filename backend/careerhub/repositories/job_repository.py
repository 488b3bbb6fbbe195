"""
求职记录 Repository
RecordStore 的持久化协作方：list_all / insert / update / remove
所有查询都限定在一个 user_id 之下
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, col

from careerhub.models.job import JobApplication
from careerhub.models.schemas import JobDraft, JobRecord


class JobRepository:
    """
    求职记录数据访问对象
    封装所有与 job_applications 表相关的数据库操作

    返回值一律是 JobRecord 快照，调用方拿不到会话内的行对象。
    数据库异常会先回滚会话再原样抛出。
    """

    def __init__(self, session: Session, user_id: int):
        """
        初始化 Repository

        Args:
            session: SQLModel 数据库会话
            user_id: 记录归属的用户 ID
        """
        self.session = session
        self.user_id = user_id

    def _get_row(self, job_id: str) -> Optional[JobApplication]:
        row = self.session.get(JobApplication, job_id)
        if row is None or row.user_id != self.user_id:
            return None
        return row

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def list_all(self) -> List[JobRecord]:
        """
        获取当前用户的所有求职记录（按创建时间正序）

        Returns:
            JobRecord 列表
        """
        statement = select(JobApplication).where(
            JobApplication.user_id == self.user_id
        ).order_by(col(JobApplication.created_at).asc())
        return [JobRecord.model_validate(row) for row in self.session.exec(statement).all()]

    def get(self, job_id: str) -> Optional[JobRecord]:
        """根据 ID 获取记录，不存在返回 None"""
        row = self._get_row(job_id)
        return JobRecord.model_validate(row) if row else None

    def insert(self, draft: JobDraft) -> JobRecord:
        """
        插入新记录

        Args:
            draft: 已校验的创建输入

        Returns:
            带有新 ID 的 JobRecord
        """
        row = JobApplication(
            user_id=self.user_id,
            company=draft.company,
            role=draft.role,
            status=draft.status,
            applied_date=draft.applied_date,
            liked=False,
            ai_prep=None
        )
        self.session.add(row)
        self._commit()
        self.session.refresh(row)
        return JobRecord.model_validate(row)

    def update(self, job_id: str, fields: Dict[str, Any]) -> Optional[JobRecord]:
        """
        部分更新记录

        Args:
            job_id: 记录 ID
            fields: 需要更新的字段

        Returns:
            更新后的 JobRecord，不存在则返回 None
        """
        row = self._get_row(job_id)
        if row is None:
            return None

        for name, value in fields.items():
            setattr(row, name, value)
        self.session.add(row)
        self._commit()
        self.session.refresh(row)
        return JobRecord.model_validate(row)

    def remove(self, job_id: str) -> bool:
        """
        删除记录

        Returns:
            删除成功返回 True，记录不存在返回 False
        """
        row = self._get_row(job_id)
        if row is None:
            return False
        self.session.delete(row)
        self._commit()
        return True

    def remove_all(self) -> int:
        """
        删除当前用户的全部记录（重置看板）

        Returns:
            删除的记录数
        """
        statement = select(JobApplication).where(JobApplication.user_id == self.user_id)
        rows = self.session.exec(statement).all()
        for row in rows:
            self.session.delete(row)
        self._commit()
        return len(rows)
