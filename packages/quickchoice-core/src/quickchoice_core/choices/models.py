"""Pydantic models for choices and macro commands."""

from __future__ import annotations

import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


def _new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Macro commands
# ---------------------------------------------------------------------------


class _CommandBase(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=_new_id, min_length=1, frozen=True)
    name: str = ""


class ChoiceCommand(_CommandBase):
    """Runs another choice, sharing the macro's variables."""

    type: Literal["Choice"] = Field(default="Choice", frozen=True)
    choice_id: str


class UserScriptCommand(_CommandBase):
    """Imports a Python file from the vault and calls its ``entry`` function."""

    type: Literal["UserScript"] = Field(default="UserScript", frozen=True)
    path: str
    settings: dict[str, Any] = Field(default_factory=dict)


class PromptTemplateSelection(BaseModel):
    enable: bool = False
    name: str = ""


class AIAssistantCommand(_CommandBase):
    """Formats a prompt template, sends it to the AI provider, binds the answer."""

    type: Literal["AIAssistant"] = Field(default="AIAssistant", frozen=True)
    model: str | None = None
    system_prompt: str | None = None
    output_variable_name: str = "output"
    prompt_template: PromptTemplateSelection = Field(default_factory=PromptTemplateSelection)
    prompt_template_folder: str | None = None


class WaitCommand(_CommandBase):
    type: Literal["Wait"] = Field(default="Wait", frozen=True)
    time: int = Field(default=100, ge=0)  # milliseconds


class HostCommand(_CommandBase):
    """Runs a command already registered with the host command registry."""

    type: Literal["Host"] = Field(default="Host", frozen=True)
    command_id: str


Command = Annotated[
    Union[ChoiceCommand, UserScriptCommand, AIAssistantCommand, WaitCommand, HostCommand],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Choices
# ---------------------------------------------------------------------------


class _ChoiceBase(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=_new_id, min_length=1, frozen=True)
    name: str
    command: bool = False


class TemplateChoice(_ChoiceBase):
    type: Literal["Template"] = Field(default="Template", frozen=True)
    template_path: str
    folder: str = ""
    file_name_format: str = "{{VALUE}}"
    file_exists_behavior: Literal["increment", "append", "prepend", "overwrite", "skip"] = (
        "increment"
    )


class InsertAfter(BaseModel):
    enabled: bool = False
    after: str = ""
    insert_at_end: bool = False
    consider_subsections: bool = False
    create_if_not_found: bool = False
    create_if_not_found_location: Literal["top", "bottom"] = "top"


class CaptureChoice(_ChoiceBase):
    type: Literal["Capture"] = Field(default="Capture", frozen=True)
    capture_to: str
    format: str = "{{VALUE}}"
    prepend: bool = False
    create_file_if_missing: bool = True
    insert_after: InsertAfter = Field(default_factory=InsertAfter)


class MacroChoice(_ChoiceBase):
    type: Literal["Macro"] = Field(default="Macro", frozen=True)
    commands: list[Command] = Field(default_factory=list)
    run_on_startup: bool = False


class MultiChoice(_ChoiceBase):
    """Container whose children are offered for further selection, in order."""

    type: Literal["Multi"] = Field(default="Multi", frozen=True)
    choices: list[Choice] = Field(default_factory=list)
    collapsed: bool = False


Choice = Annotated[
    Union[TemplateChoice, CaptureChoice, MacroChoice, MultiChoice],
    Field(discriminator="type"),
]

MultiChoice.model_rebuild()
