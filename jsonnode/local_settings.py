import logging
import os
from typing import Any, List, Tuple

import yaml
from appdirs import user_config_dir
from attrs import define, field
from pyrsistent import freeze, pmap, thaw
from pyrsistent.typing import PMap

from jsonnode.constants import DEFAULT_INDENT, FORMAT_JSON

CONFIG_DIR_ENV = "JSONNODE_CONFIG_DIR"
SETTINGS_FILE_NAME = "settings.yaml"
logger = logging.getLogger(__name__)


@define
class LocalSettings:
    """Local settings for the node editor.

    The settings live in a YAML file inside the user's configuration
    directory (or the directory named by `JSONNODE_CONFIG_DIR`). Keys are
    dot-separated paths into the nested mapping. Each change is written to
    the file right away unless the settings are read-only.

    Attributes:
        settings: The immutable tree of settings.
        read_only: Changes are kept in memory and never written.
    """

    settings: PMap[str, Any] = field(default=pmap())
    read_only: bool = field(default=False, init=False)

    def __attrs_post_init__(self):
        self.load_settings()

    def __getitem__(self, key: str) -> Any:
        return self.get_setting(key)

    def __setitem__(self, key: str, value: Any):
        self.set_setting(key, value)

    @property
    def indent(self) -> int:
        """Indentation used when writing the document back."""
        value = self.get_setting("jsonnode.indent", DEFAULT_INDENT)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Invalid jsonnode.indent setting %r", value)
            return DEFAULT_INDENT

    @property
    def format(self) -> str:
        """The format of the raw text in the document store."""
        return self.get_setting("jsonnode.format", FORMAT_JSON)

    def set_read_only(self, read_only: bool):
        """Stop (or resume) writing changes to the settings file."""
        self.read_only = read_only

    def save_settings(self):
        """Write the settings file through a temporary file."""
        if self.read_only:
            logger.debug("Settings are read-only; not saving")
            return
        settings_file = self.settings_file()
        tmp_settings = f"{settings_file}.tmp"
        try:
            with open(tmp_settings, "w", encoding="utf-8") as f:
                yaml.dump(thaw(self.settings), f, allow_unicode=True)
            os.replace(tmp_settings, settings_file)
        except OSError as e:
            logger.error("Error saving settings: %s", e, exc_info=True)

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting.

        Args:
            key: The dot-separated path of the setting.
            default: The value to return if the setting does not exist.
        """
        current: Any = self.settings
        for part in key.split("."):
            if not hasattr(current, "get") or part not in current:
                return default
            current = current[part]
        return current

    def set_setting(self, key: str, value: Any):
        """Set a setting and save the file if the value changed.

        Missing intermediate mappings are created.

        Args:
            key: The dot-separated path of the setting.
            value: The new value; it is stored frozen.
        """
        *parents, name = key.split(".")

        chain: List[Tuple[str, Any]] = []
        current = self.settings
        for part in parents:
            chain.append((part, current))
            current = current.get(part, pmap())

        frozen = freeze(value)
        if current.get(name) == frozen and name in current:
            return

        updated = current.set(name, frozen)
        for part, parent in reversed(chain):
            updated = parent.set(part, updated)
        self.settings = updated
        self.save_settings()

    def load_settings(self):
        """Read the settings file, if there is one."""
        settings_file = self.settings_file()
        if not os.path.exists(settings_file):
            logger.debug("Settings file %s does not exist", settings_file)
            return
        with open(settings_file, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            logger.warning("Settings file %s is empty", settings_file)
            return
        self.settings = freeze(loaded)
        logger.debug("Settings loaded from %s", settings_file)

    def settings_file(self) -> str:
        """The path of the settings file; its directory is created."""
        config_dir = os.environ.get(CONFIG_DIR_ENV) or user_config_dir(
            "jsonnode"
        )
        os.makedirs(config_dir, exist_ok=True)
        return os.path.join(config_dir, SETTINGS_FILE_NAME)
