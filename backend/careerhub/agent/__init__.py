"""
AI 模块
提供 LLM 工厂、提示词以及面试准备生成器
"""

from .llm_factory import LLMFactory, get_llm, get_prep_timeout
from .prep_generator import InterviewPrepGenerator

__all__ = [
    "LLMFactory",
    "get_llm",
    "get_prep_timeout",
    "InterviewPrepGenerator"
]
