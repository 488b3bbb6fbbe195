"""
Pytest 测试配置
提供测试数据库、Repository / Store / Service 以及 Mock LLM 等测试基础设施
"""

import sys
from datetime import date
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from sqlmodel import Session, create_engine

# 添加 backend 目录到 sys.path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from careerhub.db.init_db import create_tables
from careerhub.models import User
from careerhub.repositories.job_repository import JobRepository
from careerhub.services.job_service import JobService
from careerhub.services.record_store import RecordStore


SAMPLE_PREP = """QUESTIONS:
1. Tell me about a system you designed end to end.
2. How do you debug a production incident?
3. Why do you want to work at Acme?

PRO-TIP:
Research the team's recent launches before the interview."""


# ==================== 数据库 Fixtures ====================

@pytest.fixture(scope="function")
def test_db_engine():
    """
    创建测试用的内存数据库引擎
    每个测试函数都会获得一个全新的数据库
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False}
    )
    create_tables(engine)
    yield engine


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """
    创建测试用的数据库会话
    """
    with Session(test_db_engine) as session:
        yield session


@pytest.fixture(scope="function")
def test_user(test_db_session: Session) -> User:
    """
    创建测试用户
    """
    user = User(username="test_user")
    test_db_session.add(user)
    test_db_session.commit()
    test_db_session.refresh(user)
    return user


# ==================== 核心组件 Fixtures ====================

@pytest.fixture(scope="function")
def job_repository(test_db_session: Session, test_user: User) -> JobRepository:
    """
    创建绑定测试用户的 JobRepository
    """
    return JobRepository(test_db_session, user_id=test_user.id)


@pytest.fixture(scope="function")
def record_store(job_repository: JobRepository) -> RecordStore:
    """
    创建空的 RecordStore
    """
    store = RecordStore(job_repository)
    store.load()
    return store


@pytest.fixture(scope="function")
def job_service(record_store: RecordStore) -> JobService:
    """
    创建 JobService
    """
    return JobService(record_store)


@pytest.fixture(scope="function")
def seeded_service(job_service: JobService) -> JobService:
    """
    预置 4 条记录的 JobService
    """
    job_service.add_job("Acme", "Backend Engineer", "Applied", date(2024, 1, 1))
    job_service.add_job("Globex", "Data Scientist", "Interviewing", date(2024, 3, 1))
    job_service.add_job("Initech", "Platform Engineer", "Offered", date(2024, 2, 1))
    job_service.add_job("Umbrella", "ML Engineer", "Interviewing", date(2024, 2, 15))
    return job_service


# ==================== Mock LLM Fixtures ====================

@pytest.fixture(scope="function")
def sample_prep() -> str:
    """
    一段符合约定格式的面试准备文本
    """
    return SAMPLE_PREP


@pytest.fixture(scope="function")
def mock_llm():
    """
    Mock LLM 实例
    避免真实调用 LLM API
    """
    mock = Mock()
    mock.ainvoke = AsyncMock(return_value=Mock(content=SAMPLE_PREP))
    return mock


@pytest.fixture(scope="function")
def mock_generator():
    """
    Mock 面试准备生成器，generate 立即返回 SAMPLE_PREP
    """
    generator = Mock()
    generator.generate = AsyncMock(return_value=SAMPLE_PREP)
    return generator


# ==================== Pytest 配置 ====================

def pytest_configure(config):
    """
    Pytest 初始化配置
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: Slow running tests"
    )
