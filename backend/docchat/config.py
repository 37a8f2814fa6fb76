# backend/docchat/config.py
from __future__ import annotations
import logging
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load .env before reading settings
load_dotenv()

logger = logging.getLogger("docchat.config")

REQUIRED_ENV = {
    "azure_inference_sdk_endpoint": "AZURE_INFERENCE_SDK_ENDPOINT",
    "azure_inference_sdk_key": "AZURE_INFERENCE_SDK_KEY",
    "azure_openai_deployment_name": "AZURE_OPENAI_DEPLOYMENT_NAME",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    # Azure OpenAI
    azure_inference_sdk_endpoint: Optional[str] = None
    azure_inference_sdk_key: Optional[str] = None
    azure_openai_deployment_name: Optional[str] = None
    azure_openai_api_version: str = "2024-05-01-preview"

    generation_max_tokens: int = Field(4096, gt=0)
    generation_temperature: float = 1.0
    generation_top_p: float = 1.0
    generation_timeout: int = Field(120, gt=0, description="Seconds before the chat call is abandoned")

    # Corpus and retrieval
    corpus_path: str = "data/employee_handbook.pdf"
    chunk_size: int = Field(800, gt=0)
    retrieval_top_k: int = Field(3, gt=0)

    # Conversations
    default_session_id: str = "default"
    history_max_turns: int = Field(0, ge=0, description="0 keeps history unbounded")

    port: int = 3002

    def missing_required(self) -> List[str]:
        return [env for field, env in REQUIRED_ENV.items() if not getattr(self, field)]

    def validate_required(self) -> None:
        missing = self.missing_required()
        if missing:
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")


# Instantiate settings once
settings = Settings()
