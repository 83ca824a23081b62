"""Choice execution: executor, per-type engines, macro engine."""

from quickchoice_core.engine.capture import CaptureChoiceEngine, insert_after_target
from quickchoice_core.engine.executor import ChoiceExecutor
from quickchoice_core.engine.formatter import FormatCancelledError, Formatter
from quickchoice_core.engine.macro import MacroEngine, MacroRunReport, NestedMacroError, ScriptContext
from quickchoice_core.engine.startup import run_startup_macros
from quickchoice_core.engine.template import TemplateChoiceEngine, increment_file_name

__all__ = [
    "CaptureChoiceEngine",
    "ChoiceExecutor",
    "FormatCancelledError",
    "Formatter",
    "MacroEngine",
    "MacroRunReport",
    "NestedMacroError",
    "ScriptContext",
    "TemplateChoiceEngine",
    "increment_file_name",
    "insert_after_target",
    "run_startup_macros",
]
