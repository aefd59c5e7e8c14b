from __future__ import annotations

import json
from pathlib import Path

import pytest

from chatgate.backends import AzureOpenAI, OpenAI
from chatgate.errors import ConfigurationError
from chatgate.settings import ClientSettings, create_client, load_settings, validate_settings


def test_environment_fills_openai_settings() -> None:
    settings = load_settings(environ={"OPENAI_API_KEY": "sk-env", "OPENAI_ORG_ID": "org-env"})
    assert settings.provider == "openai"
    assert settings.api_key == "sk-env"
    assert settings.org_id == "org-env"
    assert validate_settings(settings) == []


def test_azure_provider_prefers_azure_key() -> None:
    env = {
        "CHATGATE_PROVIDER": "azure",
        "OPENAI_API_KEY": "sk-env",
        "AZURE_OPENAI_API_KEY": "az-env",
        "AZURE_OPENAI_RESOURCE": "acme",
        "AZURE_OPENAI_DEPLOYMENT": "gpt-x",
    }
    settings = load_settings(environ=env)
    assert settings.api_key == "az-env"
    assert settings.api_version == "2023-05-15"


def test_provider_override_selects_azure_key() -> None:
    env = {
        "OPENAI_API_KEY": "sk-openai",
        "AZURE_OPENAI_API_KEY": "az-key",
        "AZURE_OPENAI_RESOURCE": "acme",
        "AZURE_OPENAI_DEPLOYMENT": "gpt-x",
    }
    assert load_settings(environ=env, provider="azure").api_key == "az-key"
    assert load_settings(environ=env).api_key == "sk-openai"
    assert load_settings(environ={**env, "CHATGATE_PROVIDER": "azure"}, provider="openai").api_key == "sk-openai"


def test_provider_from_file_selects_azure_key(tmp_path: Path) -> None:
    path = tmp_path / "chatgate.json"
    path.write_text(json.dumps({"provider": "azure"}), encoding="utf-8")
    settings = load_settings(path, environ={"OPENAI_API_KEY": "sk-openai", "AZURE_OPENAI_API_KEY": "az-key"})
    assert settings.provider == "azure"
    assert settings.api_key == "az-key"


def test_overrides_beat_file_and_file_beats_environment(tmp_path: Path) -> None:
    path = tmp_path / "chatgate.json"
    path.write_text(json.dumps({"model": "from-file", "api_key": "sk-file", "timeout_s": "5"}), encoding="utf-8")
    settings = load_settings(path, environ={"CHATGATE_MODEL": "from-env", "OPENAI_API_KEY": "sk-env"}, model="cli", provider=None)
    assert settings.model == "cli"
    assert settings.api_key == "sk-file"
    assert settings.timeout_s == 5.0


def test_unknown_or_broken_settings_file_raises(tmp_path: Path) -> None:
    unknown = tmp_path / "unknown.json"
    unknown.write_text(json.dumps({"colour": "blue"}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="colour"):
        load_settings(unknown, environ={})

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(broken, environ={})

    with pytest.raises(ConfigurationError, match="not found"):
        load_settings(tmp_path / "missing.json", environ={})


def test_validation_lists_missing_azure_fields() -> None:
    issues = validate_settings(ClientSettings(provider="azure", api_key="k"))
    assert [issue.path for issue in issues] == ["resource_name", "deployment_id"]


def test_validation_rejects_unknown_provider() -> None:
    issues = validate_settings(ClientSettings(provider="bedrock"))
    assert issues and issues[0].path == "provider"


@pytest.mark.asyncio
async def test_create_client_builds_matching_backend() -> None:
    direct = create_client(ClientSettings(api_key="sk", org_id="org"))
    gateway = create_client(
        ClientSettings(provider="azure", api_key="k", resource_name="acme", deployment_id="gpt-x")
    )
    assert isinstance(direct.backend, OpenAI)
    assert direct.headers() == {"OpenAI-Organization": "org"}
    assert isinstance(gateway.backend, AzureOpenAI)
    assert gateway.api_base() == "https://acme.openai.azure.com"
    await direct.aclose()
    await gateway.aclose()


def test_create_client_refuses_incomplete_settings() -> None:
    with pytest.raises(ConfigurationError, match="api_key"):
        create_client(ClientSettings())


def test_to_dict_masks_api_key() -> None:
    assert ClientSettings(api_key="secret").to_dict()["api_key"] == "***"
