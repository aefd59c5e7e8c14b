"""CLI entrypoint for chatgate."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from chatgate.chat import (
    Chat,
    ChatCompletionMessageBuilder,
    ChatResponse,
    CreateChatRequest,
    CreateChatRequestBuilder,
    Role,
)
from chatgate.chat.api import build_template_request
from chatgate.env import load_dotenv
from chatgate.errors import ChatGateError
from chatgate.prompt import PromptTemplate
from chatgate.schema import SchemaError
from chatgate.settings import ClientSettings, create_client, load_settings, validate_settings
from chatgate.ui.progress import status_spinner
from chatgate.ui.render import (
    render_error,
    render_info,
    render_reply,
    render_summary_table,
    render_text_block,
    render_validation_panel,
)
from chatgate.util.logging import configure_logging

app = typer.Typer(add_completion=False, help="Chat completions against direct or gateway-routed deployments.")
config_app = typer.Typer(add_completion=False, help="Settings helpers and validation.")
app.add_typer(config_app, name="config")

_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="JSON settings file.")
_PROVIDER_OPTION = typer.Option(None, "--provider", help="openai, azure or mock.")


class _CLIError(ChatGateError):
    """Invalid CLI input such as a malformed template file or value pair."""


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level name."),
) -> None:
    """chatgate command line client."""
    load_dotenv()
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


@app.command("chat")
def chat(
    prompt: str = typer.Argument(..., help="User message to send."),
    system: Optional[str] = typer.Option(None, "--system", "-s", help="Optional system message."),
    model: Optional[str] = typer.Option(None, "--model", "-m"),
    temperature: Optional[float] = typer.Option(None, "--temperature", "-t"),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens"),
    provider: Optional[str] = _PROVIDER_OPTION,
    config: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """Send one prompt and print the reply."""
    try:
        settings = load_settings(config, provider=provider, model=model)
        builder = CreateChatRequestBuilder().model(settings.model)
        if system:
            builder.message(ChatCompletionMessageBuilder().role(Role.SYSTEM).content(system).build())
        builder.message(ChatCompletionMessageBuilder().role(Role.USER).content(prompt).build())
        if temperature is not None:
            builder.temperature(temperature)
        if max_tokens is not None:
            builder.max_tokens(max_tokens)
        request = builder.build()
        with status_spinner(f"Waiting for {settings.model}"):
            response = asyncio.run(_create(settings, request))
    except ChatGateError as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc

    render_reply(response)
    _render_usage(response)


@app.command("template")
def template(
    path: Path = typer.Argument(..., help="JSON prompt template file."),
    value: Optional[list[str]] = typer.Option(None, "--value", "-v", help="Field value as name=value; repeatable."),
    model: Optional[str] = typer.Option(None, "--model", "-m"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the prompt and request body only."),
    provider: Optional[str] = _PROVIDER_OPTION,
    config: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """Render a prompt template and complete it."""
    try:
        prompt_template = _load_template(path)
        values = _parse_values(value or [])
        settings = load_settings(config, provider=provider, model=model)
        if dry_run:
            request = build_template_request(prompt_template, values, settings.model)
            render_text_block("Prompt", prompt_template.generate_prompt(values))
            print(json.dumps(request.to_dict(), indent=2, sort_keys=True, ensure_ascii=True))
            return
        with status_spinner(f"Waiting for {settings.model}"):
            response = asyncio.run(_create_with_template(settings, prompt_template, values))
    except ChatGateError as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc

    render_reply(response)
    _render_usage(response)


@config_app.command("validate")
def config_validate(
    provider: Optional[str] = _PROVIDER_OPTION,
    config: Optional[Path] = _CONFIG_OPTION,
) -> None:
    """Check that settings are complete for the selected provider."""
    try:
        settings = load_settings(config, provider=provider)
    except ChatGateError as exc:
        render_validation_panel("INVALID", [str(exc)], style="error")
        raise typer.Exit(code=1) from exc

    issues = validate_settings(settings)
    if issues:
        render_validation_panel("INVALID", [f"{issue.path}: {issue.message}" for issue in issues], style="error")
        raise typer.Exit(code=1)
    render_validation_panel("VALID", ["No issues found."], style="success")
    render_summary_table({key: str(item) for key, item in settings.to_dict().items()}, title="Settings")


async def _create(settings: ClientSettings, request: CreateChatRequest) -> ChatResponse:
    async with create_client(settings) as client:
        return await Chat(client).create(request)


async def _create_with_template(
    settings: ClientSettings,
    prompt_template: PromptTemplate,
    values: dict[str, str],
) -> ChatResponse:
    async with create_client(settings) as client:
        return await Chat(client).create_with_template(prompt_template, values, settings.model)


def _load_template(path: Path) -> PromptTemplate:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return PromptTemplate.from_dict(raw)
    except FileNotFoundError as exc:
        raise _CLIError(f"Template not found: {path}") from exc
    except (OSError, json.JSONDecodeError, SchemaError) as exc:
        raise _CLIError(f"Invalid template {path}: {exc}") from exc


def _parse_values(pairs: list[str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise _CLIError(f"Expected name=value, got '{pair}'.")
        name, item = pair.split("=", 1)
        values[name.strip()] = item
    return values


def _render_usage(response: ChatResponse) -> None:
    render_summary_table(
        {
            "Id": response.id,
            "Prompt tokens": str(response.usage.prompt_tokens),
            "Completion tokens": str(response.usage.completion_tokens),
            "Total tokens": str(response.usage.total_tokens),
        },
        title="Usage",
    )
    render_info(f"created={response.created} object={response.object}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
