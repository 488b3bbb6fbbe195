"""
面试准备生成器

补全协作方：generate(role, company) -> text
一次性调用，不做流式输出，也不要求结构化结果；
返回文本按约定包含 QUESTIONS: 和 PRO-TIP: 两段，但这里不做解析。
"""

from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from careerhub.agent.llm_factory import get_llm
from careerhub.agent.prompts import INTERVIEW_PREP_SYSTEM_PROMPT, INTERVIEW_PREP_USER_TEMPLATE


def build_prep_messages(role: str, company: str) -> list:
    """构建面试准备请求的消息列表"""
    return [
        SystemMessage(content=INTERVIEW_PREP_SYSTEM_PROMPT),
        HumanMessage(content=INTERVIEW_PREP_USER_TEMPLATE.format(role=role, company=company))
    ]


def extract_text(content: Any) -> str:
    """
    从模型返回的 content 中提取纯文本

    部分 provider 返回内容块列表，例如 [{"type": "text", "text": "..."}]
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


class InterviewPrepGenerator:
    """
    面试准备生成器

    LLM 实例延迟创建，缺少 API Key 时只在真正生成时才报错。
    """

    def __init__(self, llm: Optional[Any] = None):
        """
        Args:
            llm: LangChain 聊天模型，为 None 时通过 get_llm() 创建
        """
        self._llm = llm

    @property
    def llm(self) -> Any:
        if self._llm is None:
            self._llm = get_llm()
        return self._llm

    async def generate(self, role: str, company: str) -> str:
        """
        生成面试准备文本

        Args:
            role: 岗位名称
            company: 公司名称

        Returns:
            模型返回的原始文本（未裁剪）

        Raises:
            模型调用抛出的任何异常，由调用方统一处理
        """
        response = await self.llm.ainvoke(build_prep_messages(role, company))
        return extract_text(getattr(response, "content", response))
