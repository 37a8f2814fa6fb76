from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from docchat.config import Settings
from docchat.core.ports.corpus import ICorpusSource
from docchat.core.ports.generator import IChatGenerator
from docchat.core.services.chat_service import ChatService
from docchat.core.services.document_loader import DocumentLoader
from docchat.core.services.prompt_assembler import PromptAssembler
from docchat.core.services.relevance import RelevanceIndex
from docchat.models.corpus.file_corpus import FileCorpusSource
from docchat.models.llm.azure_chat_generator import AzureChatGenerator
from docchat.models.store.inmemory_memory import InMemoryConversationMemory

logger = logging.getLogger("docchat.container")


@dataclass
class AppContainer:
    document_loader: DocumentLoader
    index: RelevanceIndex
    memory: InMemoryConversationMemory
    assembler: PromptAssembler
    generator: IChatGenerator
    chat_service: ChatService


def build_generator(settings: Settings) -> AzureChatGenerator:
    """Validate the Azure configuration and create the chat client."""
    settings.validate_required()
    return AzureChatGenerator(
        endpoint=settings.azure_inference_sdk_endpoint,
        api_key=settings.azure_inference_sdk_key,
        deployment=settings.azure_openai_deployment_name,
        api_version=settings.azure_openai_api_version,
        max_tokens=settings.generation_max_tokens,
        temperature=settings.generation_temperature,
        top_p=settings.generation_top_p,
        timeout=settings.generation_timeout,
    )


def build_container(
    settings: Settings,
    corpus_source: Optional[ICorpusSource] = None,
    generator: Optional[IChatGenerator] = None,
) -> AppContainer:
    """
    Wire the document loader, retrieval, conversation memory and prompt
    assembly into one object graph. Collaborators can be injected so tests
    and tools run without the filesystem or Azure.
    """
    if generator is None:
        generator = build_generator(settings)
        logger.info(f"🔌 Using Azure OpenAI deployment: {settings.azure_openai_deployment_name}")

    loader = DocumentLoader(
        source=corpus_source or FileCorpusSource(),
        path=settings.corpus_path,
        chunk_size=settings.chunk_size,
    )
    index = RelevanceIndex(loader, top_k=settings.retrieval_top_k)
    memory = InMemoryConversationMemory(max_turns=settings.history_max_turns)
    assembler = PromptAssembler(index=index, memory=memory, top_k=settings.retrieval_top_k)
    chat_service = ChatService(assembler=assembler, generator=generator, memory=memory)

    logger.info(
        f"✅ Container built | corpus={settings.corpus_path} | chunk_size={settings.chunk_size} | "
        f"top_k={settings.retrieval_top_k} | history_max_turns={settings.history_max_turns or 'unbounded'}"
    )
    return AppContainer(
        document_loader=loader,
        index=index,
        memory=memory,
        assembler=assembler,
        generator=generator,
        chat_service=chat_service,
    )
