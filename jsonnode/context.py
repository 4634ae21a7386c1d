import copy
import logging
import logging.config
import os
from typing import Any, Optional

from attrs import define, field
from pyrsistent import thaw

from jsonnode.controller import EditController
from jsonnode.local_settings import LocalSettings
from jsonnode.selection import NodeSelection, node_at
from jsonnode.store import DocumentStore, MemoryDocumentStore, parse_content

DEFAULT_LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": (
                "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: "
                "%(message)s"
            ),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "standard",
            "filename": "jsonnode.log",
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8",
        },
    },
    "loggers": {
        "": {  # Root logger
            "handlers": ["console", "file"],
            "level": "INFO",
            "propagate": True,
        },
    },
}


@define
class EditContext:
    """The collaborators of a node editing session.

    Attributes:
        stg: The local settings.
        store: The owner of the raw text of the document.
        selection: The currently selected node.
    """

    stg: LocalSettings = field(factory=LocalSettings)
    store: DocumentStore = field(factory=MemoryDocumentStore)
    selection: NodeSelection = field(factory=NodeSelection)

    def setup_logging(self):
        """Configure logging from the `logging` setting.

        The default configuration is stored in the settings the first time
        so it can be tuned by hand afterwards.
        """
        log_stg = self.stg.get_setting("logging")
        if log_stg is None:
            log_stg = copy.deepcopy(DEFAULT_LOGGING)
            log_stg["handlers"]["file"]["filename"] = os.path.join(
                os.path.dirname(self.stg.settings_file()), "jsonnode.log"
            )
            self.stg.set_setting("logging", log_stg)

        logging.config.dictConfig(thaw(log_stg))

        logger = logging.getLogger(__name__)
        logger.debug("Logging has been setup")

    def document(self) -> Any:
        """Parse the current text of the store."""
        return parse_content(self.store.contents, self.stg.format)

    def select_path(self, path, id: Optional[str] = None):
        """Select the node found at `path` in the current document."""
        node = node_at(self.document(), path, id=id)
        self.selection.select(node)
        return node

    def create_controller(self) -> EditController:
        """Create a controller bound to this context."""
        return EditController(
            store=self.store,
            selection=self.selection,
            fmt=self.stg.format,
            indent=self.stg.indent,
        )
