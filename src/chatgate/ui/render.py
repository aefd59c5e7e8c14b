"""Render helpers for the chatgate CLI."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from chatgate.chat.types import ChatResponse
from chatgate.ui.console import get_console, get_error_console


def render_info(text: str) -> None:
    get_console().print(text, style="info", markup=False)


def render_error(text: str) -> None:
    panel = Panel(
        Text(text, style="error"),
        box=box.ROUNDED,
        border_style="error",
        padding=(0, 2),
        expand=True,
    )
    get_error_console().print(panel)


def render_text_block(title: str, body: str) -> None:
    panel = Panel(
        Text(body, style="value"),
        title=Text(title, style="title"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    get_console().print(panel)


def render_reply(response: ChatResponse) -> None:
    console = get_console()
    for choice in response.choices:
        header = Text()
        header.append(choice.message.role.value, style="role")
        header.append(f" · choice {choice.index} · {choice.finish_reason}", style="subtitle")
        panel = Panel(
            Text(choice.message.content, style="value"),
            title=header,
            title_align="left",
            box=box.ROUNDED,
            border_style="border",
            padding=(0, 2),
            expand=True,
        )
        console.print(panel)


def render_summary_table(rows: Mapping[str, str] | Sequence[tuple[str, str]], title: str = "Summary") -> None:
    console = get_console()
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="label", no_wrap=True, justify="right")
    table.add_column(style="value")

    items = rows.items() if hasattr(rows, "items") else rows
    for key, value in items:
        table.add_row(Text(str(key), style="label"), Text(str(value), style="value"))

    panel = Panel(
        table,
        title=Text(title, style="title"),
        title_align="left",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_validation_panel(title: str, issues: Sequence[str], *, style: str) -> None:
    lines = [Text(f"- {issue}", style=style) for issue in issues]
    panel = Panel(
        Group(*lines),
        title=Text(title, style="title"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    get_console().print(panel)
