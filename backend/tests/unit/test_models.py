"""
数据库模型与快照类型单元测试
验证 User、JobApplication、JobDraft、JobRecord 的定义是否正确
"""

import uuid
from datetime import date, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from careerhub.models import (
    User,
    JobApplication, JobStatus, MUTABLE_FIELDS,
    JobDraft, JobRecord
)


class TestUserModel:
    """测试用户模型"""

    def test_user_creation(self):
        """测试创建用户实例"""
        user = User(username="me")

        assert user.username == "me"
        assert user.id is None  # 尚未保存到数据库
        assert isinstance(user.created_at, datetime)


class TestJobStatus:
    """测试申请状态枚举"""

    def test_all_status_values(self):
        """测试四个状态取值"""
        assert [s.value for s in JobStatus] == ["Applied", "Interviewing", "Rejected", "Offered"]

    def test_status_is_str(self):
        """测试枚举可以直接与字符串比较"""
        assert JobStatus.OFFERED == "Offered"
        assert JobStatus("Interviewing") is JobStatus.INTERVIEWING

    def test_status_is_case_sensitive(self):
        """测试小写取值不是合法状态"""
        with pytest.raises(ValueError):
            JobStatus("offered")


class TestJobApplicationModel:
    """测试求职申请表模型"""

    def test_defaults(self):
        """测试默认值：Applied、未收藏、无面试准备、投递日期为当天"""
        job = JobApplication(user_id=1, company="Acme", role="Engineer")

        assert job.status == JobStatus.APPLIED
        assert job.liked is False
        assert job.ai_prep is None
        assert job.applied_date == date.today()
        assert isinstance(job.created_at, datetime)

    def test_id_is_uuid_string(self):
        """测试 ID 自动生成为 UUID 字符串"""
        job = JobApplication(user_id=1, company="Acme", role="Engineer")

        assert isinstance(job.id, str)
        assert str(uuid.UUID(job.id)) == job.id

    def test_ids_are_unique(self):
        """测试每条记录的 ID 不同"""
        ids = {JobApplication(user_id=1, company="A", role="B").id for _ in range(20)}
        assert len(ids) == 20

    def test_mutable_fields(self):
        """测试创建后可修改的字段集合"""
        assert MUTABLE_FIELDS == {"status", "liked", "ai_prep"}


class TestJobDraft:
    """测试创建输入"""

    def test_strips_whitespace(self):
        """测试公司和岗位去除首尾空白"""
        draft = JobDraft(company="  Acme  ", role="\tEngineer\n")

        assert draft.company == "Acme"
        assert draft.role == "Engineer"

    def test_blank_values_become_empty(self):
        """测试空白输入变为空字符串（由 RecordStore 负责拒绝）"""
        draft = JobDraft(company="   ", role=None)

        assert draft.company == ""
        assert draft.role == ""

    def test_defaults(self):
        """测试默认状态和日期"""
        draft = JobDraft(company="Acme", role="Engineer")

        assert draft.status == JobStatus.APPLIED
        assert draft.applied_date == date.today()

    def test_invalid_status(self):
        """测试非法状态被拒绝"""
        with pytest.raises(PydanticValidationError):
            JobDraft(company="Acme", role="Engineer", status="Ghosted")


class TestJobRecord:
    """测试只读快照"""

    def test_from_row(self):
        """测试从数据库行构建快照"""
        row = JobApplication(
            user_id=1,
            company="Acme",
            role="Engineer",
            status=JobStatus.INTERVIEWING,
            applied_date=date(2024, 5, 1),
            liked=True,
            ai_prep="QUESTIONS:"
        )
        record = JobRecord.model_validate(row)

        assert record.id == row.id
        assert record.status == JobStatus.INTERVIEWING
        assert record.applied_date == date(2024, 5, 1)
        assert record.liked is True
        assert record.ai_prep == "QUESTIONS:"

    def test_record_is_frozen(self):
        """测试快照不可修改"""
        record = JobRecord(id="x", company="Acme", role="Engineer", applied_date=date(2024, 1, 1))

        with pytest.raises(PydanticValidationError):
            record.liked = True

    def test_equality_by_value(self):
        """测试相同字段的快照相等"""
        a = JobRecord(id="x", company="Acme", role="Engineer", applied_date=date(2024, 1, 1))
        b = JobRecord(id="x", company="Acme", role="Engineer", applied_date=date(2024, 1, 1))

        assert a == b
