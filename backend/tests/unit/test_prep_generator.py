"""
面试准备生成器单元测试
使用 Mock LLM，不调用真实 API
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from careerhub.agent.prep_generator import (
    InterviewPrepGenerator,
    build_prep_messages,
    extract_text,
)
from careerhub.agent.prompts import INTERVIEW_PREP_SYSTEM_PROMPT


class TestBuildPrepMessages:
    """测试消息构建"""

    def test_messages(self):
        messages = build_prep_messages("Backend Engineer", "Acme")

        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == INTERVIEW_PREP_SYSTEM_PROMPT
        assert isinstance(messages[1], HumanMessage)
        assert messages[1].content == "Job: Backend Engineer at Acme"

    def test_prompt_format_sections(self):
        assert "QUESTIONS:" in INTERVIEW_PREP_SYSTEM_PROMPT
        assert "PRO-TIP:" in INTERVIEW_PREP_SYSTEM_PROMPT


class TestExtractText:
    """测试从模型返回中提取文本"""

    def test_plain_string(self):
        assert extract_text("hello") == "hello"

    def test_content_blocks(self):
        content = [
            {"type": "text", "text": "QUESTIONS:\n"},
            {"type": "image_url", "image_url": "ignored"},
            "1. Why us?",
        ]

        assert extract_text(content) == "QUESTIONS:\n1. Why us?"

    def test_unknown_content(self):
        assert extract_text(None) == ""


class TestInterviewPrepGenerator:
    """测试 InterviewPrepGenerator"""

    @pytest.mark.asyncio
    async def test_generate(self, mock_llm, sample_prep):
        generator = InterviewPrepGenerator(llm=mock_llm)

        result = await generator.generate("Backend Engineer", "Acme")

        assert result == sample_prep
        messages = mock_llm.ainvoke.await_args.args[0]
        assert messages[1].content == "Job: Backend Engineer at Acme"

    @pytest.mark.asyncio
    async def test_generate_returns_untrimmed_text(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=Mock(content="  text \n"))

        assert await InterviewPrepGenerator(llm=llm).generate("R", "C") == "  text \n"

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("rate limited"))

        with pytest.raises(RuntimeError):
            await InterviewPrepGenerator(llm=llm).generate("R", "C")

    def test_llm_created_lazily(self, mock_llm):
        """测试 LLM 只在首次使用时创建"""
        with patch("careerhub.agent.prep_generator.get_llm", return_value=mock_llm) as mock_get_llm:
            generator = InterviewPrepGenerator()
            mock_get_llm.assert_not_called()

            assert generator.llm is mock_llm
            assert generator.llm is mock_llm
            mock_get_llm.assert_called_once()
