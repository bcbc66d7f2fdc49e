"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from sqliteops.cli.common.tui_style import (
    DESTRUCTIVE_STYLE,
    PICK_STYLE,
)

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
        "sql": "magenta",
    }
)

console = Console(theme=_THEME)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "checked_icon", "unchecked_icon", "auto_enter"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts so they stand out from regular output."""
        return f"[SQLITEOPS] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {escape(msg)}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {escape(msg)}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {escape(msg)}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {escape(msg)}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{escape(title)}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {escape(str(v))}")

    def statement(self, sql: str) -> None:
        """Print a generated SQL statement verbatim."""
        console.print(f"[sql]{escape(sql)}[/]", soft_wrap=True)

    def select_many(self, message: str, choices: list[str]) -> list[str]:
        """
        Prompt the user to select multiple items from a list.

        Returns a list of selected values.
        """
        if not choices:
            return []

        prompt = self._q_try(
            questionary.checkbox,
            self._q(message),
            choices=choices,
            style=PICK_STYLE,
            qmark="✦",
            instruction="Use ↑/↓, space, a (all), i (invert), enter",
            pointer="❯",
            checked_icon="▣",
            unchecked_icon="▢",
        )
        picked = prompt.ask()
        return list(picked or [])

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        # Questionary renders `instruction=...` inline next to the echoed answer.
        console.print("[meta]Use y/n then Enter[/]")

        prompt = self._q_try(
            questionary.confirm,
            self._q(message),
            default=default,
            style=DESTRUCTIVE_STYLE,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def entries_table(self, entries: Iterable[Any], title: str = "Entries") -> None:
        """
        Expects objects with .type .name .table_name .root_page
        (like sqliteops.core.schema.SchemaEntry)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Type", style="meta", no_wrap=True)
        t.add_column("Name", style="ok")
        t.add_column("Table")
        t.add_column("Root page", style="meta", justify="right")

        for e in entries:
            root_page = "" if e.root_page is None else str(e.root_page)
            t.add_row(escape(e.type), escape(e.name), escape(e.table_name), root_page)

        console.print(t)

    def tables_table(self, tables: Iterable[Any], title: str = "Tables") -> None:
        """
        Render a summary of tables.

        Accepts either:
          - strings with table names, or
          - objects with `.name`, `.columns` and `.indexes` (like TableInfo).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok")
        t.add_column("Columns", justify="right")
        t.add_column("Indexes", justify="right")

        for item in tables:
            if isinstance(item, str):
                t.add_row(escape(item), "", "")
                continue
            t.add_row(
                escape(item.name), str(len(item.columns)), str(len(item.indexes))
            )

        console.print(t)

    def columns_table(self, columns: Iterable[Any], title: str = "Columns") -> None:
        """Expects objects like sqliteops.core.tables.ColumnInfo."""
        t = Table(title=title, show_lines=False)
        t.add_column("#", style="meta", justify="right")
        t.add_column("Name", style="ok")
        t.add_column("Type")
        t.add_column("Not null")
        t.add_column("Default", style="meta")
        t.add_column("PK", justify="right")

        for c in columns:
            t.add_row(
                str(c.index),
                escape(c.name),
                escape(c.type or ""),
                _yes_no(c.not_null),
                escape(c.default_value or ""),
                str(c.primary_key_index) if c.primary_key_index else "",
            )

        console.print(t)

    def indexes_table(self, indexes: Iterable[Any], title: str = "Indexes") -> None:
        """Expects objects like sqliteops.core.tables.IndexInfo."""
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok")
        t.add_column("Unique")
        t.add_column("Origin", style="meta")
        t.add_column("Partial")
        t.add_column("Columns")

        for i in indexes:
            t.add_row(
                escape(i.name),
                _yes_no(i.is_unique),
                escape(str(i.origin)),
                _yes_no(i.is_partial),
                escape(", ".join(i.column_names)),
            )

        console.print(t)

    def drop_results_table(
        self, results: Iterable[Any], title: str = "Drop results"
    ) -> None:
        """
        Render a results table for table drops.

        Expects objects with `.table`, `.dropped` and optional `.error`.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok")
        t.add_column("Dropped")
        t.add_column("Error", style="err")

        for r in results:
            err = str(getattr(r, "error", "") or "")
            t.add_row(
                escape(str(getattr(r, "table", ""))),
                _yes_no(getattr(r, "dropped", False)),
                escape(err),
            )

        console.print(t)


out = Out()
