"""Configuration manager for loading and saving Metacast config."""

from pathlib import Path

import yaml

from metacast.config.defaults import DEFAULT_GLOBAL_CONFIG, get_default_config_content
from metacast.config.schema import GlobalConfig
from metacast.utils.errors import InvalidConfigError

DEFAULT_CONFIG_FILENAME = "metacast.yaml"


class ConfigManager:
    """Manages the Metacast configuration file."""

    def __init__(self, config_file: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_file: Optional config file path. Defaults to ./metacast.yaml.
        """
        self.config_file = config_file or Path.cwd() / DEFAULT_CONFIG_FILENAME

    def load_config(self) -> GlobalConfig:
        """Load and validate configuration.

        Relative ``data_dir``/``out_dir`` entries are resolved against the
        directory holding the config file.

        Returns:
            Validated GlobalConfig instance (defaults if the file is missing)

        Raises:
            InvalidConfigError: If config is invalid
        """
        if not self.config_file.exists():
            return DEFAULT_GLOBAL_CONFIG.model_copy(deep=True)

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            config = GlobalConfig(**data)
        except Exception as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

        base = self.config_file.parent
        if not config.data_dir.is_absolute():
            config.data_dir = base / config.data_dir
        if not config.out_dir.is_absolute():
            config.out_dir = base / config.out_dir
        return config

    def save_config(self, config: GlobalConfig) -> None:
        """Save configuration.

        Args:
            config: GlobalConfig instance to save
        """
        data = config.model_dump(mode="json")

        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def create_default_config(self, overwrite: bool = False) -> bool:
        """Write the commented default config file.

        Args:
            overwrite: Replace an existing file

        Returns:
            True if the file was written
        """
        if self.config_file.exists() and not overwrite:
            return False

        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(get_default_config_content(), encoding="utf-8")
        return True
