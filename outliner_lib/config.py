# --- outliner_lib/config.py ---
import configparser
import logging

from .params import Params
from .pdf_outline import DEFAULT_FOLD_LEVEL

log = logging.getLogger("outliner.config")


class ConfigService:
    """Reads pipeline defaults from an optional pdfoutliner.cfg file."""

    def __init__(self, config_path: str = None):
        self.config_path = config_path
        self.defaults = {
            "Params": {},
            "Outline": {
                "fold_level": str(DEFAULT_FOLD_LEVEL),
                "mark": "false",
            },
        }

    def _load(self) -> configparser.ConfigParser:
        config = configparser.ConfigParser()
        # Keep parameter names as written (MAX_LEVELS, not max_levels)
        config.optionxform = str
        for section, values in self.defaults.items():
            config[section] = values
        if self.config_path and not config.read(self.config_path, encoding="utf-8"):
            log.info("Config file not found at %s. Using defaults.", self.config_path)
        return config

    def get_settings(self) -> dict:
        """Returns all sections as a nested dictionary."""
        config = self._load()
        return {s: dict(config.items(s)) for s in config.sections()}

    def get_params(self, overrides=None) -> Params:
        """Builds Params from the [Params] section, then applies overrides on top."""
        config = self._load()
        params = Params.from_overrides(dict(config.items("Params")))
        return params.with_overrides(overrides or {})

    def get_fold_level(self) -> int:
        return self._load().getint("Outline", "fold_level")

    def get_mark(self) -> bool:
        return self._load().getboolean("Outline", "mark")
