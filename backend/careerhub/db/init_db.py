"""
数据库初始化脚本
负责创建数据库表结构和默认用户
"""

import os
from pathlib import Path

from sqlmodel import SQLModel, Session, create_engine, select

from careerhub.models.user import User
from careerhub.models.job import JobApplication  # noqa: F401  注册表结构

DEFAULT_USERNAME = "me"


def get_database_url() -> str:
    """
    获取数据库连接 URL
    优先使用环境变量，否则使用默认的 SQLite 文件
    """
    db_path = os.environ.get("DATABASE_PATH", "database.db")
    # 确保路径是绝对路径
    if not os.path.isabs(db_path):
        # 从 backend 目录解析
        project_root = Path(__file__).parent.parent.parent
        db_path = str(project_root / db_path)
    return f"sqlite:///{db_path}"


def get_engine():
    """
    创建并返回数据库引擎
    """
    database_url = get_database_url()
    engine = create_engine(
        database_url,
        echo=False,  # 设置为 True 可查看 SQL 语句
        connect_args={"check_same_thread": False}  # SQLite 特有配置
    )
    return engine


def create_tables(engine) -> None:
    """
    创建所有数据库表
    """
    SQLModel.metadata.create_all(engine)
    print(f"Database tables created successfully at {engine.url}")


def create_default_user(session: Session) -> User:
    """
    创建默认用户 'me'
    如果用户已存在，则返回现有用户
    """
    statement = select(User).where(User.username == DEFAULT_USERNAME)
    result = session.exec(statement).first()

    if result:
        print(f"Default user '{DEFAULT_USERNAME}' already exists (ID: {result.id})")
        return result

    default_user = User(username=DEFAULT_USERNAME)
    session.add(default_user)
    session.commit()
    session.refresh(default_user)
    print(f"Created default user '{DEFAULT_USERNAME}' (ID: {default_user.id})")
    return default_user


def init_db() -> None:
    """
    完整的数据库初始化流程
    1. 创建数据库引擎
    2. 创建所有表结构
    3. 创建默认用户
    """
    print("\n=== Initializing database ===")

    engine = get_engine()
    create_tables(engine)

    with Session(engine) as session:
        create_default_user(session)

    print("=== Database initialization completed ===\n")


if __name__ == "__main__":
    # 直接运行此脚本时，执行数据库初始化
    init_db()
