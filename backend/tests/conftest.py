from __future__ import annotations
from threading import Lock
from typing import List, Optional

import pytest

from docchat.config import Settings
from docchat.container import build_container
from docchat.core.entities import ChatMessage
from docchat.core.ports.corpus import ICorpusSource
from docchat.core.ports.generator import GenerationError, IChatGenerator
from docchat.core.services.document_loader import DocumentLoader
from docchat.core.services.prompt_assembler import PromptAssembler
from docchat.core.services.relevance import RelevanceIndex
from docchat.models.store.inmemory_memory import InMemoryConversationMemory

HANDBOOK = (
    "Welcome to the company. This handbook describes how we work together. "
    "Our vacation policy grants twenty days per year. The vacation policy also covers "
    "carry-over of unused days. Expense reports are due monthly and require receipts. "
    "Remote work is allowed two days per week with manager approval. "
    "Parental leave is sixteen weeks, and the vacation balance is paid out on exit."
)


class FakeCorpusSource(ICorpusSource):
    def __init__(self, text: Optional[str]):
        self.text = text
        self.reads = 0
        self._lock = Lock()

    def read(self, path: str) -> Optional[str]:
        with self._lock:
            self.reads += 1
        return self.text


class FakeGenerator(IChatGenerator):
    def __init__(self, reply: str = "fake reply"):
        self.reply = reply
        self.calls: List[List[ChatMessage]] = []

    def complete(self, messages: List[ChatMessage]) -> str:
        self.calls.append(list(messages))
        return self.reply


class FailingGenerator(IChatGenerator):
    def __init__(self, reason: str = "Azure API error", message: str = "quota exceeded"):
        self.reason = reason
        self.message = message
        self.calls = 0

    def complete(self, messages: List[ChatMessage]) -> str:
        self.calls += 1
        raise GenerationError(self.reason, self.message)


@pytest.fixture
def handbook_source() -> FakeCorpusSource:
    return FakeCorpusSource(HANDBOOK)


@pytest.fixture
def missing_source() -> FakeCorpusSource:
    return FakeCorpusSource(None)


@pytest.fixture
def memory() -> InMemoryConversationMemory:
    return InMemoryConversationMemory()


@pytest.fixture
def make_assembler(memory):
    def _make(source: ICorpusSource, chunk_size: int = 120) -> PromptAssembler:
        loader = DocumentLoader(source=source, path="handbook.txt", chunk_size=chunk_size)
        return PromptAssembler(index=RelevanceIndex(loader), memory=memory)
    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(
        azure_inference_sdk_endpoint="https://example.openai.azure.com",
        azure_inference_sdk_key="test-key",
        azure_openai_deployment_name="test-deployment",
        corpus_path="handbook.txt",
        chunk_size=120,
        retrieval_top_k=3,
        history_max_turns=0,
    )


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator("Twenty days per year.")


@pytest.fixture
def container(settings, handbook_source, fake_generator):
    return build_container(settings, corpus_source=handbook_source, generator=fake_generator)
