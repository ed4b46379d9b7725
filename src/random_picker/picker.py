"""
The picker as seen by a launcher-style host.

The host sends the text typed so far and shows whatever entries come back.
Three menus are offered:

    pick <RandomDefinition>[ <ResultCount>[ <MaxRepCount>]]
    history [search]
    favorites [search]

Picking happens on demand: selecting "Generate Random..." records the
definition in the history, asks the host to re-run the same query, and
only that next query actually draws values.
"""

import re
from typing import List, Optional, Protocol, Sequence

from .errors import ParseError, PickerError
from .parser import parse_request
from .ranking import ContextAction, Entry, fix_position_as_score
from .sampler import pick
from .store import PickerStore


class Menu:
    PICK = "pick"
    FAVORITES = "favorites"
    HISTORY = "history"


class Host(Protocol):
    """What the picker needs from whoever displays it."""

    def change_query(self, text: str) -> None:
        ...

    def write_clipboard(self, text: str) -> None:
        ...

    def present(self, entries: Sequence[Entry]) -> None:
        ...


def error_entry(error: PickerError) -> Entry:
    """Turn an expected failure into a single explanatory entry."""
    if error.help_text:
        return Entry(title=f"{error.title}: {error.message}", subtitle=error.help_text, warning=True)
    return Entry(title=error.title, subtitle=error.message, warning=True)


class RandomPicker:
    """Builds menu entries for a query and wires their actions to the host."""

    def __init__(self, host: Host, store: PickerStore, rng=None, action_keyword: str = ""):
        self.host = host
        self.store = store
        self.rng = rng
        self.action_keyword = action_keyword
        self.generation_counter = 0
        # True for exactly one query after "Generate Random..." was selected
        self._generate_next = False

    def _query_for(self, *parts: str) -> str:
        prefix = [self.action_keyword] if self.action_keyword else []
        return " ".join(prefix + list(parts))

    def query(self, text: str) -> List[Entry]:
        """Build, present and return the entries for the given query text."""
        try:
            entries = self._dispatch(text)
        except PickerError as e:
            entries = [error_entry(e)]
        self.host.present(entries)
        return entries

    def _dispatch(self, text: str) -> List[Entry]:
        terms = text.split()
        first = terms[0] if terms else None

        if first == Menu.PICK:
            return self._pick(text, " ".join(terms[1:]))
        if first == Menu.HISTORY:
            return self._history(self._search_after(Menu.HISTORY, text))
        if first == Menu.FAVORITES:
            return self._favorites(text, self._search_after(Menu.FAVORITES, text))

        menus = self._menus(terms)
        return menus or [Entry(title="No result", warning=True)]

    @staticmethod
    def _search_after(menu: str, text: str) -> str:
        match = re.match(rf"^\s*{menu}\s?(?P<search>.*)$", text, re.DOTALL)
        return match.group("search") if match else ""

    # =========================================================================
    # Top level
    # =========================================================================

    def _menus(self, terms: List[str]) -> List[Entry]:
        if len(terms) > 1:
            return []

        menus = [
            Entry(title=Menu.PICK, subtitle="Provide a random definition", query_text=Menu.PICK),
            Entry(title=Menu.FAVORITES, subtitle="Select a saved random definition", query_text=Menu.FAVORITES),
            Entry(title=Menu.HISTORY, subtitle="Select a previously used random definition", query_text=Menu.HISTORY),
        ]
        if terms:
            menus = [m for m in menus if terms[0] in m.query_text]

        for menu in menus:
            target = self._query_for(menu.query_text) + " "
            menu.action = lambda target=target: self.host.change_query(target)
        return menus

    # =========================================================================
    # Pick
    # =========================================================================

    def _pick(self, text: str, definition_input: str) -> List[Entry]:
        generate = self._generate_next
        self._generate_next = False

        try:
            request = parse_request(definition_input)
        except ParseError as e:
            return [error_entry(e)]

        if generate:
            self.generation_counter += 1

        entries = [
            Entry(
                title="Generate Random...",
                subtitle=f"Generation counter: {self.generation_counter}",
                action=lambda: self._start_generation(request.definition, text),
                definition=request.definition,
            )
        ]
        if not generate:
            return entries

        outcome = pick(request, self.rng)
        if not outcome.ok:
            return [error_entry(outcome.error)]

        for value in outcome.values:
            entries.append(
                Entry(title=value, action=lambda value=value: self._copy_value(value, text))
            )
        return list(fix_position_as_score(entries))

    def _start_generation(self, definition: str, text: str) -> None:
        try:
            self.store.add_history(definition)
        finally:
            self._generate_next = True
            self.host.change_query(text)

    def _copy_value(self, value: str, text: str) -> None:
        self.host.change_query(text)
        self.host.write_clipboard(value)

    # =========================================================================
    # History and favorites
    # =========================================================================

    def _select_definition(self, definition: str) -> None:
        self.host.change_query(self._query_for(Menu.PICK, definition))

    def _history(self, search: str) -> List[Entry]:
        # Numbering follows the full history, not the filtered view
        entries = [
            Entry(
                title=f"{index}: {definition}",
                query_text=search,
                action=lambda d=definition: self._select_definition(d),
                context_actions=[
                    ContextAction(
                        title="Add to Favorites (Ctrl+F)",
                        action=lambda d=definition: self.store.add_favorite(d),
                        shortcut="ctrl+f",
                    )
                ],
                definition=definition,
            )
            for index, definition in enumerate(self.store.history())
            if not search or search in definition
        ]
        if not entries:
            return [Entry(title="No history result", query_text=search, warning=True)]
        return list(fix_position_as_score(entries))

    def _favorites(self, text: str, search: str) -> List[Entry]:
        entries = [
            Entry(
                title=definition,
                query_text=search,
                action=lambda d=definition: self._select_definition(d),
                context_actions=[
                    ContextAction(
                        title="Delete from Favorites (Ctrl+D)",
                        action=lambda d=definition: self._delete_favorite(d, text),
                        shortcut="ctrl+d",
                    )
                ],
                definition=definition,
            )
            for definition in self.store.favorites(search)
        ]
        if not entries:
            return [Entry(title="No favorite result", query_text=search, warning=True)]
        return list(fix_position_as_score(entries))

    def _delete_favorite(self, definition: str, text: str) -> None:
        try:
            self.store.remove_favorite(definition)
        finally:
            self.host.change_query(text)


class RecordingHost:
    """A host that only remembers what it was asked to do."""

    def __init__(self):
        self.queries: List[str] = []
        self.clipboard: Optional[str] = None
        self.presented: List[Entry] = []

    def change_query(self, text: str) -> None:
        self.queries.append(text)

    def write_clipboard(self, text: str) -> None:
        self.clipboard = text

    def present(self, entries: Sequence[Entry]) -> None:
        self.presented = list(entries)
