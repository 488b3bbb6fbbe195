"""
用户管理 Repository
提供 users 表的查询与创建操作
"""

from typing import Optional

from sqlmodel import Session, select

from careerhub.models.user import User


class UserRepository:
    """
    用户数据访问对象
    封装所有与 users 表相关的数据库操作
    """

    def __init__(self, session: Session):
        """
        初始化 Repository

        Args:
            session: SQLModel 数据库会话
        """
        self.session = session

    def get_by_username(self, username: str) -> Optional[User]:
        """
        根据用户名获取用户

        Args:
            username: 用户名

        Returns:
            User 对象，不存在则返回 None
        """
        statement = select(User).where(User.username == username)
        return self.session.exec(statement).first()

    def get_or_create(self, username: str) -> User:
        """
        根据用户名获取用户，不存在则创建

        实现"身份锚定"：将外部字符串 username 转换为内部整数 user_id，
        之后所有求职记录都挂在这个 ID 下

        Args:
            username: 用户名

        Returns:
            User 对象（已存在的或新创建的）
        """
        user = self.get_by_username(username)
        if user:
            return user

        print(f"[UserRepository] 检测到新用户 '{username}'，正在注册...")
        user = User(username=username)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        print(f"[UserRepository] 新用户创建成功 (ID: {user.id})")
        return user
