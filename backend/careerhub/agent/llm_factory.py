"""LLM 工厂模块

根据配置文件创建 LLM 实例，并提供面试准备请求的超时配置。
遵循安全协议：从不读取 .env 文件，只从系统环境变量获取密钥。
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI

DEFAULT_PREP_TIMEOUT = 30.0

# 使用 OpenAI 兼容接口的 provider
OPENAI_COMPATIBLE_PROVIDERS = ("openai_official", "moonshot")


def default_config_path() -> str:
    """默认配置路径：环境变量 LLM_CONFIG_PATH，否则为 backend/llm_config.json"""
    env_path = os.getenv("LLM_CONFIG_PATH")
    if env_path:
        return env_path
    return str(Path(__file__).parent.parent.parent / "llm_config.json")


class LLMFactory:
    """LLM 工厂类，负责读取配置并创建 LLM 实例"""

    def __init__(self, config_path: Optional[str] = None):
        """初始化工厂

        Args:
            config_path: 配置文件路径，为 None 时使用 default_config_path()
        """
        self.config_path = config_path or default_config_path()
        self._loaded_config: Optional[Dict[str, Any]] = None

    def _load_config(self) -> Dict[str, Any]:
        """加载配置文件（只读取一次）

        Raises:
            FileNotFoundError: 配置文件不存在
            json.JSONDecodeError: JSON 格式错误
        """
        if self._loaded_config is None:
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    self._loaded_config = json.load(f)
            except FileNotFoundError:
                raise FileNotFoundError(f"配置文件不存在: {self.config_path}")
            except json.JSONDecodeError as e:
                raise json.JSONDecodeError(f"JSON 格式错误: {e}", e.doc, e.pos)

        return self._loaded_config

    def get_active_model_name(self) -> str:
        """获取 active_model 名称

        Raises:
            ValueError: 配置中缺少 active_model
        """
        active_model = self._load_config().get("active_model")
        if not active_model:
            raise ValueError("配置文件中缺少 active_model 字段")
        return active_model

    def get_active_model_config(self) -> Dict[str, Any]:
        """获取当前激活的模型配置

        Raises:
            ValueError: active_model 或 providers 缺失，或找不到对应 provider
        """
        active_model = self.get_active_model_name()

        providers = self._load_config().get("providers")
        if not providers:
            raise ValueError("配置文件中缺少 providers 字段")

        model_config = providers.get(active_model)
        if not model_config:
            raise ValueError(f"providers 中找不到 '{active_model}' 的配置")

        return model_config

    def get_prep_timeout(self) -> float:
        """面试准备请求的超时秒数，未配置时为 DEFAULT_PREP_TIMEOUT

        Raises:
            ValueError: 配置值不是正数
        """
        value = self._load_config().get("prep_timeout_seconds", DEFAULT_PREP_TIMEOUT)
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"prep_timeout_seconds 必须是数字: {value!r}")
        if timeout <= 0:
            raise ValueError(f"prep_timeout_seconds 必须大于 0: {value!r}")
        return timeout

    def _get_api_key(self, env_key: str) -> str:
        """从系统环境变量获取 API Key

        Raises:
            ValueError: 环境变量不存在或为空
        """
        api_key = os.getenv(env_key)
        if not api_key:
            raise ValueError(f"环境变量 '{env_key}' 未设置或为空，无法初始化 LLM")

        return api_key

    def create_llm(self) -> Any:
        """创建并返回 LLM 实例

        Returns:
            LangChain 聊天模型 (ChatOpenAI 或 ChatGoogleGenerativeAI)

        Raises:
            ValueError: 配置错误或环境变量缺失
            NotImplementedError: 不支持的模型类型
        """
        model_config = self.get_active_model_config()
        active_model = self.get_active_model_name()

        env_key_map = model_config.get("env_key_map")
        if not env_key_map:
            raise ValueError("模型配置中缺少 env_key_map 字段")
        api_key = self._get_api_key(env_key_map)

        model_name = model_config.get("model_name")
        if not model_name:
            raise ValueError("模型配置中缺少 model_name 字段")
        temperature = model_config.get("temperature", 0.7)

        if active_model in OPENAI_COMPATIBLE_PROVIDERS:
            return ChatOpenAI(
                api_key=api_key,
                base_url=model_config.get("base_url"),
                model=model_name,
                temperature=temperature
            )
        if active_model == "gemini":
            return ChatGoogleGenerativeAI(
                google_api_key=api_key,
                model=model_name,
                temperature=temperature
            )
        raise NotImplementedError(f"不支持的模型类型: {active_model}")


# 全局工厂实例
llm_factory = LLMFactory()


def get_llm():
    """获取 LLM 实例的便捷函数"""
    return llm_factory.create_llm()


def get_prep_timeout() -> float:
    """获取面试准备超时秒数的便捷函数"""
    return llm_factory.get_prep_timeout()
