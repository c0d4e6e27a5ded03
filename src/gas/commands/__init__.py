"""Built-in CLI commands for gas.

* :mod:`~gas.commands.accounts` -- ``setup``, ``add``, ``remove``, ``use``,
  ``list``, ``with``, and ``lang``: everything a person types.
* :mod:`~gas.commands.helper` -- ``get``, ``store``, and ``erase``: the
  credential-helper actions git invokes.

Each command is a plain callback registered directly on the root app in
:mod:`gas.app`. The prompt helpers below are shared by the interactive
commands; they write to stderr so stdout stays reserved for data.
"""

from __future__ import annotations

import typer

from gas.config import save_config
from gas.exceptions import InvalidUsageError
from gas.i18n import Msg, t
from gas.models import AppConfig, Language
from gas.output import info


def choose(prompt: str, items: list[str], lang: Language | None = None) -> int:
    """Show a numbered list on stderr and return the 0-based index picked.

    Raises:
        InvalidUsageError: If the answer is not a number in range.
    """
    for i, item in enumerate(items, 1):
        info(f"  {i}. {item}")
    answer = typer.prompt(prompt, default="1", err=True)
    try:
        idx = int(answer) - 1
    except ValueError:
        raise InvalidUsageError(t(lang, Msg.INVALID_SELECTION, count=len(items))) from None
    if idx < 0 or idx >= len(items):
        raise InvalidUsageError(t(lang, Msg.INVALID_SELECTION, count=len(items)))
    return idx


def ensure_language(config: AppConfig) -> Language:
    """Return the configured language, asking for and saving one if unset."""
    if config.language is not None:
        return config.language
    languages = list(Language)
    idx = choose(
        t(Language.EN, Msg.ASK_LANGUAGE), [lang.label for lang in languages]
    )
    config.language = languages[idx]
    save_config(config)
    return config.language
