import asyncio
from types import SimpleNamespace

import pytest

from core.config import AppConfig
from core.llm_service import (
    ChatModelService,
    LlmService,
    NoModelsAvailableError,
    find_best_model,
)
from conftest import ScriptedLlm


class FakeChat:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.seen = []

    async def ainvoke(self, prompt):
        self.seen.append(prompt)
        if self.error:
            raise self.error
        return SimpleNamespace(content=self.reply)


class FakeModels:
    def __init__(self, names):
        self.names = names

    async def list(self):
        return SimpleNamespace(data=[SimpleNamespace(id=n) for n in self.names])


def _client(names):
    return SimpleNamespace(models=FakeModels(names))


def test_best_model_prefers_instruct():
    assert find_best_model(["llama3:70b", "qwen2:8b", "mistral:7b-instruct"]) == "mistral:7b-instruct"


def test_best_model_then_8b_then_first():
    assert find_best_model(["llama3:70b", "llama3:8b"]) == "llama3:8b"
    assert find_best_model(["gemma:2b", "phi3"]) == "gemma:2b"


def test_best_model_needs_models():
    with pytest.raises(NoModelsAvailableError):
        find_best_model([])


def test_generate_returns_content():
    chat = FakeChat(reply="A gull, a line.")
    service = ChatModelService(chat, _client([]), "stub")
    assert asyncio.run(service.generate("write")) == "A gull, a line."
    assert chat.seen == ["write"]


def test_generate_errors_propagate():
    service = ChatModelService(FakeChat(error=TimeoutError("slow")), _client([]), "stub")
    with pytest.raises(TimeoutError):
        asyncio.run(service.generate("write"))


def test_generate_without_model_fails():
    service = ChatModelService(None, _client([]))
    with pytest.raises(RuntimeError, match="No model"):
        asyncio.run(service.generate("write"))


def test_list_models():
    service = ChatModelService(None, _client(["a", "b"]))
    assert asyncio.run(service.list_models()) == ["a", "b"]


def test_from_config_builds_without_network():
    cfg = AppConfig(openai_api_key="sk-test", base_url="http://localhost:11434/v1")
    service = ChatModelService.from_config(cfg, "llama3:8b")
    assert service.model == "llama3:8b"
    assert service.llm is not None
    assert ChatModelService.from_config(cfg).llm is None


def test_structural_conformance():
    assert isinstance(ScriptedLlm(), LlmService)
    assert isinstance(ChatModelService(None, _client([])), LlmService)
