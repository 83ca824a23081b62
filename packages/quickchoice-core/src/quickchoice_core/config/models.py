from pydantic import BaseModel, Field, model_validator
from typing import Literal

from quickchoice_core.choices.models import Choice
from quickchoice_core.choices.tree import duplicate_ids


class LLMSettings(BaseModel):
    provider: Literal["anthropic", "openai"] = "openai"
    model: str = "gpt-4o"
    api_key_env: str = "OPENAI_API_KEY"
    max_tokens: int = Field(default=4096, gt=0)
    temperature: float = Field(default=0.3, ge=0)
    timeout: int = Field(default=60, gt=0)
    max_retries: int = Field(default=2, ge=0)


class AISettings(BaseModel):
    prompt_templates_folder: str = "prompts"
    default_system_prompt: str = (
        "As an AI assistant within a Markdown note-taking workflow, you help the user "
        "write, rewrite and summarize their notes. Answer in Markdown."
    )
    progress_interval_ms: int = Field(default=100, gt=0)
    notice_dismiss_seconds: float = Field(default=5.0, ge=0)


class QuickChoiceConfig(BaseModel):
    vault_path: str = "."
    template_folder_path: str = "templates"
    choices: list[Choice] = Field(default_factory=list)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    ai: AISettings = Field(default_factory=AISettings)
    dev_mode: bool = False
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"

    @model_validator(mode="after")
    def _unique_choice_ids(self) -> "QuickChoiceConfig":
        repeated = duplicate_ids(self.choices)
        if repeated:
            raise ValueError(f"Duplicate choice ids: {', '.join(repeated)}")
        return self

    @property
    def effective_log_level(self) -> str:
        """``dev_mode`` forces debug logging."""
        return "debug" if self.dev_mode else self.log_level
