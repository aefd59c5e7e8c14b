"""Settings resolution and client construction for applications and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import json
import os
from pathlib import Path
from typing import Any, Mapping

import httpx

from chatgate.client import Client
from chatgate.errors import ConfigurationError

PROVIDERS = ("openai", "azure", "mock")
DEFAULT_API_VERSION = "2023-05-15"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TIMEOUT_S = 60.0

_ENV_KEYS: dict[str, tuple[str, ...]] = {
    "provider": ("CHATGATE_PROVIDER",),
    "model": ("CHATGATE_MODEL",),
    "api_key": ("OPENAI_API_KEY", "AZURE_OPENAI_API_KEY"),
    "org_id": ("OPENAI_ORG_ID",),
    "resource_name": ("AZURE_OPENAI_RESOURCE",),
    "deployment_id": ("AZURE_OPENAI_DEPLOYMENT",),
    "api_version": ("AZURE_OPENAI_API_VERSION",),
}


@dataclass(frozen=True)
class ClientSettings:
    provider: str = "openai"
    api_key: str | None = None
    org_id: str | None = None
    resource_name: str | None = None
    deployment_id: str | None = None
    api_version: str = DEFAULT_API_VERSION
    model: str = DEFAULT_MODEL
    timeout_s: float = DEFAULT_TIMEOUT_S

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "api_key": "***" if self.api_key else None,
            "org_id": self.org_id,
            "resource_name": self.resource_name,
            "deployment_id": self.deployment_id,
            "api_version": self.api_version,
            "model": self.model,
            "timeout_s": self.timeout_s,
        }


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


def load_settings(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ClientSettings:
    """Resolve settings from overrides, then a JSON file, then the environment.

    ``None`` overrides are ignored so CLI options can be passed straight through.
    Raises :class:`ConfigurationError` when the file is unreadable or not a JSON object.
    """

    env = os.environ if environ is None else environ
    known = {item.name for item in fields(ClientSettings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"Unknown settings: {', '.join(unknown)}")

    file_values: dict[str, Any] = {}
    if path is not None:
        file_values = _read_settings_file(path)
        unknown = sorted(set(file_values) - known)
        if unknown:
            raise ConfigurationError(f"Unknown settings in {path}: {', '.join(unknown)}")
    explicit = {key: value for key, value in file_values.items() if value is not None}
    explicit.update({key: value for key, value in overrides.items() if value is not None})

    provider = explicit.get("provider") or env.get("CHATGATE_PROVIDER") or ""
    resolved: dict[str, Any] = {}
    for key, names in _ENV_KEYS.items():
        for name in _env_names(key, names, str(provider)):
            value = env.get(name)
            if value:
                resolved[key] = value
                break
    resolved.update(explicit)

    settings = ClientSettings()
    if "timeout_s" in resolved:
        try:
            resolved["timeout_s"] = float(resolved["timeout_s"])
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("timeout_s must be a number.") from exc
    if "provider" in resolved:
        resolved["provider"] = str(resolved["provider"]).lower()
    return replace(settings, **resolved)


def validate_settings(settings: ClientSettings) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if settings.provider not in PROVIDERS:
        issues.append(
            ValidationIssue("provider", f"Unsupported provider '{settings.provider}'. Expected one of {', '.join(PROVIDERS)}.")
        )
        return issues
    if not settings.model:
        issues.append(ValidationIssue("model", "Missing model."))
    if settings.timeout_s <= 0:
        issues.append(ValidationIssue("timeout_s", "timeout_s must be positive."))
    if settings.provider == "mock":
        return issues
    if not settings.api_key:
        issues.append(ValidationIssue("api_key", f"Missing api_key for provider '{settings.provider}'."))
    if settings.provider == "azure":
        if not settings.resource_name:
            issues.append(ValidationIssue("resource_name", "Missing resource_name for provider 'azure'."))
        if not settings.deployment_id:
            issues.append(ValidationIssue("deployment_id", "Missing deployment_id for provider 'azure'."))
        if not settings.api_version:
            issues.append(ValidationIssue("api_version", "Missing api_version for provider 'azure'."))
    return issues


def create_client(settings: ClientSettings, *, http_client: httpx.AsyncClient | None = None) -> Client:
    issues = validate_settings(settings)
    if issues:
        details = "; ".join(f"{issue.path}: {issue.message}" for issue in issues)
        raise ConfigurationError(f"Invalid client settings: {details}")

    if settings.provider == "azure":
        return Client.azure(
            settings.api_key or "",
            settings.resource_name or "",
            settings.deployment_id or "",
            settings.api_version,
            http_client=http_client,
            timeout_s=settings.timeout_s,
        )
    if settings.provider == "mock":
        from chatgate.mock import create_mock_http_client

        return Client.openai(
            settings.api_key or "mock-key",
            settings.org_id,
            http_client=http_client or create_mock_http_client(),
            timeout_s=settings.timeout_s,
        )
    return Client.openai(
        settings.api_key or "",
        settings.org_id,
        http_client=http_client,
        timeout_s=settings.timeout_s,
    )


def _env_names(key: str, names: tuple[str, ...], provider: str) -> tuple[str, ...]:
    # Azure credentials take precedence when the resolved provider is azure.
    if key == "api_key" and provider.lower() == "azure":
        return tuple(reversed(names))
    return names


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Settings file not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Invalid settings JSON in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object.")
    return raw
