from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from translate_core.languages import SUPPORTED_LANGUAGES
from translate_core.models import Language

SEARCH_PLACEHOLDER = "Search languages..."


def _noop_change(_code: str) -> None:
    return None


def filter_languages(
    languages: Sequence[Language], query: str, *, exclude_auto: bool = False
) -> tuple[Language, ...]:
    needle = query.casefold()
    matches: list[Language] = []
    for language in languages:
        if exclude_auto and language.is_auto:
            continue
        if (
            needle in language.name.casefold()
            or needle in language.native_name.casefold()
            or needle in language.code.casefold()
        ):
            matches.append(language)
    return tuple(matches)


def display_label(language: Language) -> str:
    if language.is_auto or language.native_name == language.name:
        return language.name
    return f"{language.name} ({language.native_name})"


@dataclass(slots=True)
class LanguagePicker:
    """Searchable single-select list over the language catalog.

    The selected code belongs to the caller: ``select`` only reports the
    choice through ``on_change`` and the caller pushes it back with
    ``set_selected``.
    """

    selected_code: str
    on_change: Callable[[str], None] = _noop_change
    exclude_auto: bool = False
    catalog: tuple[Language, ...] = SUPPORTED_LANGUAGES
    is_open: bool = False
    query: str = ""
    _visible: tuple[Language, ...] = field(default=(), init=False)

    def __post_init__(self) -> None:
        self._visible = self._compute_visible()

    @property
    def visible_languages(self) -> tuple[Language, ...]:
        return self._visible

    @property
    def is_empty(self) -> bool:
        return not self._visible

    @property
    def empty_message(self) -> str:
        return f'No languages found matching "{self.query}"'

    @property
    def selected_language(self) -> Language:
        for language in self.catalog:
            if language.code == self.selected_code:
                return language
        return self.catalog[0]

    @property
    def label(self) -> str:
        return display_label(self.selected_language)

    def set_open(self, is_open: bool) -> None:
        self.is_open = is_open

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def handle_outside_click(self) -> None:
        self.is_open = False

    def update_query(self, text: str) -> tuple[Language, ...]:
        self.query = text
        self._visible = self._compute_visible()
        return self._visible

    def select(self, code: str) -> None:
        self.on_change(code)
        self.is_open = False
        self.update_query("")

    def set_selected(self, code: str) -> None:
        self.selected_code = code

    def is_selected(self, language: Language) -> bool:
        return language.code == self.selected_code

    def _compute_visible(self) -> tuple[Language, ...]:
        return filter_languages(
            self.catalog, self.query, exclude_auto=self.exclude_auto
        )
