"""Tests for langfuse_cli.config."""

import os
import stat

import pytest
import yaml

from langfuse_cli.api import ConfigurationError, Credentials
from langfuse_cli.config import (
    DEFAULT_HOST,
    Config,
    config_file_path,
    mask_key,
)


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.yml"


def write_config(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


class TestLoad:
    def test_defaults_only(self):
        cfg = Config.load()
        assert cfg.host == DEFAULT_HOST
        assert cfg.profile == "default"
        assert cfg.output_format == "table"
        assert cfg.page_limit == 50
        assert cfg.public_key is None

    def test_config_path_follows_environment(self, config_path):
        assert config_file_path() == config_path

    def test_file_profile(self, config_path):
        write_config(config_path, {"profiles": {"default": {
            "public_key": "pk-file",
            "secret_key": "sk-file",
            "host": "https://file.example.com",
            "output_format": "json",
        }}})
        cfg = Config.load()
        assert cfg.public_key == "pk-file"
        assert cfg.host == "https://file.example.com"
        assert cfg.output_format == "json"

    def test_precedence_file_env_cli(self, config_path, monkeypatch):
        write_config(config_path, {"profiles": {"default": {
            "public_key": "pk-file",
            "secret_key": "sk-file",
            "host": "https://file.example.com",
        }}})
        monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-env")
        monkeypatch.setenv("LANGFUSE_HOST", "https://env.example.com")

        cfg = Config.load(host="https://cli.example.com", format="csv", limit=7)

        assert cfg.public_key == "pk-env"
        assert cfg.secret_key == "sk-file"
        assert cfg.host == "https://cli.example.com"
        assert cfg.output_format == "csv"
        assert cfg.page_limit == 7

    def test_named_profile(self, config_path):
        write_config(config_path, {"profiles": {
            "default": {"public_key": "pk-default"},
            "staging": {"public_key": "pk-staging"},
        }})
        assert Config.load(profile="staging").public_key == "pk-staging"

    def test_profile_from_environment(self, config_path, monkeypatch):
        write_config(config_path, {"profiles": {"prod": {"public_key": "pk-prod"}}})
        monkeypatch.setenv("LANGFUSE_PROFILE", "prod")
        cfg = Config.load()
        assert cfg.profile == "prod"
        assert cfg.public_key == "pk-prod"

    def test_top_level_default_block(self, config_path):
        write_config(config_path, {"default": {"public_key": "pk-legacy"}})
        assert Config.load().public_key == "pk-legacy"

    def test_env_var_expansion(self, config_path, monkeypatch):
        monkeypatch.setenv("MY_SECRET", "sk-expanded")
        config_path.write_text(
            "profiles:\n  default:\n    secret_key: ${MY_SECRET}\n", encoding="utf-8"
        )
        assert Config.load().secret_key == "sk-expanded"

    def test_malformed_file_falls_back_to_defaults(self, config_path):
        config_path.write_text("profiles: [unclosed", encoding="utf-8")
        cfg = Config.load()
        assert cfg.host == DEFAULT_HOST
        assert cfg.public_key is None

    def test_unknown_keys_are_ignored(self, config_path):
        write_config(config_path, {"profiles": {"default": {"public_key": "pk", "colour": "blue"}}})
        assert Config.load().public_key == "pk"

    def test_none_cli_args_do_not_override(self, monkeypatch):
        monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-env")
        assert Config.load(secret_key=None).secret_key == "sk-env"


class TestValidation:
    def test_missing_fields(self):
        cfg = Config(host=DEFAULT_HOST, public_key="pk", secret_key="  ")
        assert cfg.missing_fields() == ["secret_key"]
        assert not cfg.is_valid()

    def test_validate_messages(self):
        errors = Config(host=DEFAULT_HOST, page_limit=0).validate()
        assert any("public_key is required" in e for e in errors)
        assert any("LANGFUSE_SECRET_KEY" in e for e in errors)
        assert any("page_limit" in e for e in errors)

    def test_credentials(self):
        cfg = Config(host=DEFAULT_HOST, public_key="pk", secret_key="sk")
        assert cfg.credentials() == Credentials(host=DEFAULT_HOST, public_key="pk", secret_key="sk")

    def test_credentials_name_every_missing_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Config(host=DEFAULT_HOST).credentials()
        assert exc_info.value.missing_fields == ["public_key", "secret_key"]
        assert "lf config setup" in exc_info.value.message


class TestSave:
    def test_save_creates_file_with_owner_only_permissions(self, config_path):
        cfg = Config(public_key="pk", secret_key="sk", host=DEFAULT_HOST)
        written = cfg.save("default")

        assert written == config_path
        assert stat.S_IMODE(os.stat(written).st_mode) == 0o600
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        assert data["profiles"]["default"]["public_key"] == "pk"

    def test_save_keeps_other_profiles(self, config_path):
        write_config(config_path, {"profiles": {"prod": {"public_key": "pk-prod"}}})

        Config(public_key="pk-dev", secret_key="sk-dev", host=DEFAULT_HOST).save("dev")

        profiles = Config.list_profiles()
        assert set(profiles) == {"prod", "dev"}
        assert profiles["prod"]["public_key"] == "pk-prod"

    def test_save_creates_parent_directory(self, tmp_path):
        target = tmp_path / "nested" / "dir" / "config.yml"
        Config(public_key="pk", secret_key="sk").save("default", path=target)
        assert target.exists()

    def test_roundtrip_through_load(self):
        Config(public_key="pk", secret_key="sk", host="https://h.example.com", page_limit=20).save("team")
        cfg = Config.load(profile="team")
        assert cfg.host == "https://h.example.com"
        assert cfg.page_limit == 20


def test_list_profiles_without_file():
    assert Config.list_profiles() == {}


@pytest.mark.parametrize(
    "key, expected",
    [
        ("pk-lf-1234567890", "pk-lf-12********"),
        ("12345678", "12345678"),
        ("short", "short"),
        ("", ""),
        (None, ""),
    ],
)
def test_mask_key(key, expected):
    assert mask_key(key) == expected
