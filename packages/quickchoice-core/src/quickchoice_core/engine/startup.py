"""Macros flagged to run once when the application starts."""

from __future__ import annotations

import logging
from collections.abc import Callable

from quickchoice_core.choices import Choice, MacroChoice, iter_choices
from quickchoice_core.engine.executor import ChoiceExecutor
from quickchoice_core.engine.macro import MacroRunReport

logger = logging.getLogger(__name__)


async def run_startup_macros(
    choices: list[Choice],
    executor_factory: Callable[[], ChoiceExecutor],
) -> list[MacroRunReport]:
    """Run every macro with ``run_on_startup`` in tree order, each with a fresh executor."""
    reports: list[MacroRunReport] = []
    for choice in iter_choices(choices):
        if isinstance(choice, MacroChoice) and choice.run_on_startup:
            logger.info("Running startup macro %r", choice.name)
            reports.append(await executor_factory().execute(choice))
    return reports
