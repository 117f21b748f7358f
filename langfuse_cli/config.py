"""
Configuration Management
"""

import os
import re
import copy
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, List, Any, Dict
import yaml

from langfuse_cli.api.exceptions import ConfigurationError
from langfuse_cli.api.transport import Credentials
from langfuse_cli.observability import mainLogger

DEFAULT_HOST = "https://cloud.langfuse.com"
DEFAULT_PROFILE = "default"
DEFAULT_CONFIG_FILE = "~/.langfuse/config.yml"

# Default values (centralized)
DEFAULTS = {
    "host": DEFAULT_HOST,
    "output_format": "table",
    "page_limit": 50,
}

# Fields stored per profile in the config file
PROFILE_FIELDS = ("public_key", "secret_key", "host", "output_format", "page_limit")

# Environment variable mapping (field, env vars)
ENV_MAPPING = [
    ("public_key", ["LANGFUSE_PUBLIC_KEY"]),
    ("secret_key", ["LANGFUSE_SECRET_KEY"]),
    ("host", ["LANGFUSE_HOST"]),
]

# Required fields with the CLI flag and environment variable that set them
REQUIRED_FIELDS = [
    ("public_key", "--public-key", "LANGFUSE_PUBLIC_KEY"),
    ("secret_key", "--secret-key", "LANGFUSE_SECRET_KEY"),
    ("host", "--host", "LANGFUSE_HOST"),
]


def config_file_path() -> Path:
    """Profile file location, overridable with LANGFUSE_CONFIG"""
    return Path(os.getenv("LANGFUSE_CONFIG", DEFAULT_CONFIG_FILE)).expanduser()


def _get_env_value(env_vars: List[str]) -> Optional[str]:
    """Get first available environment variable"""
    for env_var in env_vars:
        value = os.getenv(env_var)
        if value is not None:
            return value
    return None


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} in strings"""
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        def replacer(match):
            var_name = match.group(1) or match.group(2)
            return os.getenv(var_name, match.group(0))
        return re.sub(r'\$\{([^}]+)\}|\$(\w+)', replacer, data)
    return data


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def mask_key(key: Optional[str]) -> str:
    """Show the first 8 characters of a key and mask the rest"""
    if not key:
        return ""
    if len(key) < 8:
        return key
    return key[:8] + "*" * (len(key) - 8)


def _read_config_file(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("config file must contain a mapping")
    return data


@dataclass
class Config:
    """Resolved CLI configuration for one profile"""
    public_key: Optional[str] = None
    secret_key: Optional[str] = None
    host: Optional[str] = None
    profile: Optional[str] = None
    output_format: Optional[str] = None
    page_limit: Optional[int] = None

    @classmethod
    def from_defaults(cls) -> "Config":
        """Create config from default values"""
        return cls(profile=DEFAULT_PROFILE, **DEFAULTS)

    @classmethod
    def from_yaml(cls, profile: str, path: Optional[Path] = None) -> Optional["Config"]:
        """
        Load one profile from the YAML config file

        Looks up profiles.<profile>, falling back to a top-level 'default'
        block. Returns None when the file is missing or unreadable.
        """
        file_path = Path(path).expanduser() if path else config_file_path()
        if not file_path.exists():
            return None

        try:
            data = _expand_env_vars(_read_config_file(file_path))
        except (OSError, ValueError, yaml.YAMLError) as e:
            mainLogger.error("Failed to load config from file", path=str(file_path), error=str(e))
            return None

        profile_data = (data.get("profiles") or {}).get(profile) or data.get("default") or {}
        if not isinstance(profile_data, dict):
            mainLogger.warning("Ignoring malformed profile", path=str(file_path), profile=profile)
            return None

        mainLogger.info("Loaded configuration from file", path=str(file_path), profile=profile)
        return cls(**{k: v for k, v in profile_data.items() if k in PROFILE_FIELDS})

    @classmethod
    def from_env(cls) -> "Config":
        """Load config from environment variables"""
        cfg = cls()
        for field_name, env_vars in ENV_MAPPING:
            value = _get_env_value(env_vars)
            if value is not None:
                setattr(cfg, field_name, value)
        return cfg

    @classmethod
    def load(cls, profile: Optional[str] = None, path: Optional[Path] = None, **cli_args) -> "Config":
        """
        Load configuration: defaults → file → env → cli
        Priority: defaults < file < env < cli
        """
        profile = profile or os.getenv("LANGFUSE_PROFILE") or DEFAULT_PROFILE

        cfg = cls.from_defaults()
        cfg.profile = profile

        file_cfg = cls.from_yaml(profile, path)
        if file_cfg:
            cfg = cls._merge(cfg, file_cfg)

        cfg = cls._merge(cfg, cls.from_env())
        return cls.merge_with_cli_args(cfg, **cli_args)

    @staticmethod
    def _merge(base: "Config", override: "Config") -> "Config":
        """Merge configs: non-None values in override take precedence"""
        result = copy.deepcopy(base)
        for field in fields(result):
            override_value = getattr(override, field.name)
            if override_value is not None:
                setattr(result, field.name, override_value)
        return result

    @classmethod
    def merge_with_cli_args(cls, config: "Config", **cli_args) -> "Config":
        """Merge CLI arguments (highest priority)"""
        result = copy.deepcopy(config)

        # Special mapping: CLI 'format' / 'limit' → config fields
        aliases = {"format": "output_format", "limit": "page_limit"}

        for key, value in cli_args.items():
            if value is None:
                continue
            name = aliases.get(key, key)
            if hasattr(result, name):
                setattr(result, name, value)

        return result

    def missing_fields(self) -> List[str]:
        """Names of required fields that are unset or blank"""
        return [name for name, _, _ in REQUIRED_FIELDS if _is_blank(getattr(self, name))]

    def is_valid(self) -> bool:
        return not self.missing_fields()

    def validate(self) -> List[str]:
        """Validate configuration, returning human-readable errors"""
        errors = []
        for field_name, flag, env_var in REQUIRED_FIELDS:
            if _is_blank(getattr(self, field_name)):
                errors.append(
                    f"{field_name} is required. "
                    f"Set it via {flag} flag, {env_var} environment variable, "
                    f"or run: lf config setup"
                )
        if self.page_limit is not None and (not isinstance(self.page_limit, int) or self.page_limit < 1):
            errors.append(f"page_limit must be positive, got {self.page_limit}")
        return errors

    def credentials(self) -> Credentials:
        """
        Build transport credentials

        Raises:
            ConfigurationError: Naming every missing field
        """
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}\n\n"
                "Please set environment variables or run: lf config setup",
                missing_fields=missing,
            )
        return Credentials(host=self.host, public_key=self.public_key, secret_key=self.secret_key)

    def save(self, profile_name: Optional[str] = None, path: Optional[Path] = None) -> Path:
        """
        Write this config as a profile, keeping other profiles intact

        The file is created with 0600 permissions.

        Returns:
            Path of the written file
        """
        profile_name = profile_name or self.profile or DEFAULT_PROFILE
        file_path = Path(path).expanduser() if path else config_file_path()
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data: Dict[str, Any] = {}
        if file_path.exists():
            data = _read_config_file(file_path)
        data.setdefault("profiles", {})
        if data["profiles"] is None:
            data["profiles"] = {}

        data["profiles"][profile_name] = {name: getattr(self, name) for name in PROFILE_FIELDS}

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        os.chmod(file_path, 0o600)

        mainLogger.info("Saved configuration", path=str(file_path), profile=profile_name)
        return file_path

    @staticmethod
    def list_profiles(path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
        """All profiles in the config file (empty when there is no file)"""
        file_path = Path(path).expanduser() if path else config_file_path()
        if not file_path.exists():
            return {}
        profiles = _read_config_file(file_path).get("profiles") or {}
        return {name: (values or {}) for name, values in profiles.items()}
