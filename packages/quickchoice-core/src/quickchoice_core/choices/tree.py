"""Lookup, traversal and pure edits over the choice tree.

All walks are iterative pre-order traversals, so user-authored trees of any
depth are handled without touching the recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Literal

from quickchoice_core.choices.models import Choice, MultiChoice
from quickchoice_core.errors import ChoiceNotFoundError, InvalidArgumentError


def iter_choices(choices: Sequence[Choice]) -> Iterator[Choice]:
    """Yield every choice depth-first, parents before their children."""
    stack: list[Choice] = list(reversed(choices))
    while stack:
        choice = stack.pop()
        yield choice
        if isinstance(choice, MultiChoice):
            stack.extend(reversed(choice.choices))


def flatten(choices: Sequence[Choice]) -> list[Choice]:
    return list(iter_choices(choices))


def duplicate_ids(choices: Sequence[Choice]) -> list[str]:
    """Ids that appear more than once anywhere in the tree."""
    seen: set[str] = set()
    repeated: list[str] = []
    for choice in iter_choices(choices):
        if choice.id in seen and choice.id not in repeated:
            repeated.append(choice.id)
        seen.add(choice.id)
    return repeated


def find_choice(
    by: Literal["id", "name"],
    value: str,
    choices: Sequence[Choice],
) -> Choice | None:
    """Return the first choice in tree order whose ``by`` attribute equals ``value``."""
    if by not in ("id", "name"):
        raise InvalidArgumentError(f"Cannot look up choices by {by!r}")
    for choice in iter_choices(choices):
        if getattr(choice, by) == value:
            return choice
    return None


def get_choice_by_id(choices: Sequence[Choice], choice_id: str) -> Choice:
    choice = find_choice("id", choice_id, choices)
    if choice is None:
        raise ChoiceNotFoundError("id", choice_id)
    return choice


def get_choice_by_name(choices: Sequence[Choice], name: str) -> Choice:
    choice = find_choice("name", name, choices)
    if choice is None:
        raise ChoiceNotFoundError("name", name)
    return choice


def _rebuild(choices: Sequence[Choice], edit) -> list[Choice]:
    """Apply ``edit`` to every sibling list, bottom-up, copying Multi nodes on the way."""
    # Post-order over Multi containers: children lists are rebuilt first.
    result_for: dict[int, list[Choice]] = {}
    pending: list[tuple[Sequence[Choice], bool]] = [(choices, False)]
    while pending:
        siblings, expanded = pending.pop()
        if not expanded:
            pending.append((siblings, True))
            for choice in siblings:
                if isinstance(choice, MultiChoice):
                    pending.append((choice.choices, False))
            continue
        rebuilt: list[Choice] = []
        for choice in siblings:
            if isinstance(choice, MultiChoice):
                choice = choice.model_copy(update={"choices": result_for.pop(id(choice.choices))})
            rebuilt.append(choice)
        result_for[id(siblings)] = edit(rebuilt, siblings)
    return result_for[id(choices)]


def insert_choice(
    choices: Sequence[Choice],
    choice: Choice,
    parent_id: str | None = None,
) -> list[Choice]:
    """Return a new tree with ``choice`` appended to the root or to a Multi parent."""
    repeated = duplicate_ids([*choices, choice])
    if repeated:
        raise InvalidArgumentError(f"Choice id {repeated[0]} already exists")
    if parent_id is None:
        return [*choices, choice]

    parent = get_choice_by_id(choices, parent_id)
    if not isinstance(parent, MultiChoice):
        raise InvalidArgumentError(f"Choice {parent.name!r} cannot hold other choices")

    def _edit(rebuilt: list[Choice], original: Sequence[Choice]) -> list[Choice]:
        if original is parent.choices:
            return [*rebuilt, choice]
        return rebuilt

    return _rebuild(choices, _edit)


def replace_choice(choices: Sequence[Choice], choice: Choice) -> list[Choice]:
    """Return a new tree where the choice with the same id is swapped for ``choice``."""
    current = get_choice_by_id(choices, choice.id)
    if current.type != choice.type:
        raise InvalidArgumentError(
            f"Choice {choice.id} is a {current.type} choice; its type cannot change"
        )
    # the replaced subtree goes away, so only the rest of the tree can clash
    repeated = duplicate_ids([*remove_choice(choices, choice.id), choice])
    if repeated:
        raise InvalidArgumentError(f"Choice id {repeated[0]} already exists")

    def _edit(rebuilt: list[Choice], original: Sequence[Choice]) -> list[Choice]:
        return [choice if c.id == choice.id else c for c in rebuilt]

    return _rebuild(choices, _edit)


def remove_choice(choices: Sequence[Choice], choice_id: str) -> list[Choice]:
    """Return a new tree without the choice (and, for a Multi, its descendants)."""
    get_choice_by_id(choices, choice_id)

    def _edit(rebuilt: list[Choice], original: Sequence[Choice]) -> list[Choice]:
        return [c for c in rebuilt if c.id != choice_id]

    return _rebuild(choices, _edit)
