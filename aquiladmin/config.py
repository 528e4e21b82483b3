"""
Config system - layered admin configuration.

Merge precedence (later overrides earlier):
defaults < config files (YAML/JSON) < .env file < environment < overrides
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import json
import os

from .faults.domains import ConfigInvalidFault


DEFAULT_ENV_PREFIX = "AQADMIN_"

SECURITY_HANDLERS = ("noop", "role")


@dataclass
class AdminConfig:
    """
    Typed admin configuration.

    Attributes:
        title: Back-office title
        title_logo: Path to the back-office logo
        options: Free-form options exposed through `Pool.get_option`
        templates: Global template name -> path mapping
        security_handler: "noop" or "role"
        super_admin_roles: Roles bypassing every role check
    """
    title: str = "Aquilia Admin"
    title_logo: str = ""
    options: Dict[str, Any] = field(default_factory=dict)
    templates: Dict[str, str] = field(default_factory=dict)
    security_handler: str = "noop"
    super_admin_roles: List[str] = field(default_factory=lambda: ["ROLE_SUPER_ADMIN"])

    def __post_init__(self):
        if self.security_handler not in SECURITY_HANDLERS:
            raise ConfigInvalidFault(
                "security_handler",
                f"expected one of {', '.join(SECURITY_HANDLERS)}, got {self.security_handler!r}",
            )
        if not isinstance(self.options, dict):
            raise ConfigInvalidFault("options", "expected a mapping")
        if not isinstance(self.templates, dict):
            raise ConfigInvalidFault("templates", "expected a mapping")
        if isinstance(self.super_admin_roles, str):
            self.super_admin_roles = [self.super_admin_roles]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdminConfig":
        """Build from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def create_template_registry(self):
        """Global template registry seeded with the configured templates."""
        from .templating.registry import MutableTemplateRegistry

        return MutableTemplateRegistry(self.templates)

    def create_security_handler(self, checker: Optional[Callable] = None):
        """
        Instantiate the configured security handler.

        The role handler needs a `checker(roles, obj) -> bool`.
        """
        from .security.handler import NoopSecurityHandler, RoleSecurityHandler

        if self.security_handler == "role":
            if checker is None:
                raise ConfigInvalidFault(
                    "security_handler", "the role handler requires a role checker"
                )
            return RoleSecurityHandler(checker, self.super_admin_roles)

        return NoopSecurityHandler()


class AdminConfigLoader:
    """
    Loads and merges admin configuration from multiple sources.

    Example:
        loader = AdminConfigLoader.load(paths=["config/admin.yaml"])
        config = loader.to_config()
    """

    def __init__(self, env_prefix: str = DEFAULT_ENV_PREFIX):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[List[str]] = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        use_environ: bool = True,
    ) -> "AdminConfigLoader":
        """
        Load configuration from every source with proper merge order.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)
            use_environ: Read `os.environ`
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        if use_environ:
            loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def to_config(self) -> AdminConfig:
        return AdminConfig.from_dict(self.config_data)

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data

        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        from glob import glob

        for path_str in sorted(glob(pattern)):
            path = Path(path_str)

            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)

    def _load_json_file(self, path: Path):
        with open(path) as f:
            data = json.load(f)
            self._merge_dict(self.config_data, data)

    def _load_yaml_file(self, path: Path):
        import yaml
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        from dotenv import dotenv_values

        env_path = Path(path)
        if not env_path.exists():
            return

        for key, value in dotenv_values(env_path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _load_from_env(self):
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert AQADMIN_OPTIONS__PER_PAGE to {"options": {"per_page": ...}}."""
        key = key[len(self.env_prefix):]

        # Double underscore separates nested keys
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value
