"""YAML settings loading and saving with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import QuickChoiceConfig


def default_config_paths(cli_path: str | None = None) -> list[Path]:
    """Resolution order: CLI > project-local > user-global."""
    return [
        path
        for path in (
            Path(cli_path) if cli_path else None,
            Path("./quickchoice.yaml"),
            Path.home() / ".quickchoice" / "config.yaml",
        )
        if path is not None
    ]


def find_config_path(cli_path: str | None = None) -> Path | None:
    for path in default_config_paths(cli_path):
        if path.exists():
            return path
    return None


def load_config(cli_path: str | None = None) -> QuickChoiceConfig:
    """Load settings from the first config file found, or return defaults."""
    for path in default_config_paths(cli_path):
        if path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return QuickChoiceConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return QuickChoiceConfig()


def save_config(config: QuickChoiceConfig, path: str | Path) -> Path:
    """Write settings as YAML, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    path.write_text(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    return path


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `quickchoice config init`
DEFAULT_CONFIG_TEMPLATE = """\
# quickchoice.yaml

# Folder holding your Markdown notes
vault_path: "."
template_folder_path: "templates"

log_level: "info"             # debug | info | warn | error
dev_mode: false               # true forces debug logging

# AI provider used by AI assistant macro steps
llm:
  provider: "openai"           # openai | anthropic
  model: "gpt-4o"
  api_key_env: "OPENAI_API_KEY"
  max_tokens: 4096
  timeout: 60

ai:
  prompt_templates_folder: "prompts"
  progress_interval_ms: 100
  notice_dismiss_seconds: 5

choices:
  - name: "Daily note"
    type: "Template"
    command: true
    template_path: "templates/daily.md"
    folder: "daily"
    file_name_format: "{{DATE}}"

  - name: "Log to inbox"
    type: "Capture"
    command: true
    capture_to: "inbox.md"
    format: "- {{VALUE}}"
    insert_after:
      enabled: true
      after: "## Log"
      insert_at_end: true
      create_if_not_found: true

  - name: "Summarize"
    type: "Macro"
    commands:
      - type: "AIAssistant"
        output_variable_name: "summary"
      - type: "Choice"
        choice_id: "<id of a capture choice using {{VALUE:summary}}>"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
