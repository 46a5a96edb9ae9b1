"""Read and write deploy-time values in the project's ``.env`` file."""

import logging
from pathlib import Path

from django.conf import settings
from dotenv import dotenv_values, set_key

logger = logging.getLogger(__name__)


class EnvService:
    """Thin wrapper over python-dotenv for the admin settings pages.

    Values written here take effect on the next process start, when
    settings load the file again.
    """

    def __init__(self, path=None):
        self.path = Path(path or settings.ENV_FILE)

    def get_all(self):
        if not self.path.exists():
            return {}
        return {key: value for key, value in dotenv_values(self.path).items() if value is not None}

    def get(self, keys):
        values = self.get_all()
        return {key: values[key] for key in keys if key in values}

    def set(self, values):
        """Write ``values`` to the file. ``None`` is written as an empty value."""
        self.path.touch(exist_ok=True)
        for key, value in values.items():
            if value is None:
                value = ""
            elif isinstance(value, bool):
                value = "true" if value else "false"
            set_key(self.path, key, str(value), quote_mode="auto")
        logger.info("Environment file updated", extra={"path": str(self.path), "keys": sorted(values)})
        return True
