import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from blinker import Signal
from platformdirs import user_config_dir

logger = logging.getLogger(__name__)


CONFIG_DIR = Path(user_config_dir("bmpcodec"))
CONFIG_FILE = CONFIG_DIR / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    def __init__(self):
        self.log_level = "INFO"
        self.overwrite = False  # allow convert to replace existing files
        self.changed = Signal()

    def set_log_level(self, log_level: str):
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'")
        if self.log_level == log_level:
            return
        self.log_level = log_level
        self.changed.send(self)

    def set_overwrite(self, overwrite: bool):
        if self.overwrite == overwrite:
            return
        self.overwrite = overwrite
        self.changed.send(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "log_level": self.log_level,
            "overwrite": self.overwrite,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        config = cls()
        log_level = str(data.get("log_level", config.log_level)).upper()
        if log_level in LOG_LEVELS:
            config.log_level = log_level
        else:
            logger.warning(
                "Ignoring invalid log_level '%s' in config", log_level
            )
        config.overwrite = bool(data.get("overwrite", config.overwrite))
        return config


class ConfigManager:
    """
    Loads the Config from a YAML file and writes it back whenever it
    changes.
    """

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)
        self.config: Config = Config()

        self.load_config()

    def save(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w") as f:
            yaml.safe_dump(self.config.to_dict(), f)
        logger.debug("Saved config to %s", self.filepath)

    def load_config(self) -> Config:
        if self.filepath.exists():
            with open(self.filepath, "r") as f:
                data = yaml.safe_load(f)
            if isinstance(data, dict):
                self.config = Config.from_dict(data)
            else:
                self.config = Config()
        else:
            self.config = Config()  # defaults

        self.config.changed.connect(self._on_config_changed)
        return self.config

    def _on_config_changed(self, sender, **kwargs):
        self.save()


# Created on first use so that importing the package has no file I/O.
config_mgr: Optional[ConfigManager] = None


def initialize_config() -> ConfigManager:
    """
    Loads the user configuration. Safe to call multiple times.
    """
    global config_mgr
    if config_mgr is None:
        logger.debug("Loading configuration from %s", CONFIG_FILE)
        config_mgr = ConfigManager(CONFIG_FILE)
    return config_mgr
