import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "qgh"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Read by the shell wrapper after qgh exits, then deleted by it
CD_HANDOFF_FILE = Path("/tmp/qgh_cd")

WORKSPACE_ENV = "QGH_WORKSPACE"
CONFIG_ENV = "QGH_CONFIG"

DEFAULT_TERMINAL_HEIGHT = 24
DEFAULT_PR_LIMIT = 200
PR_TITLE_WIDTH = 40


@dataclass
class AppConfig:
    """Settings read at startup. qgh never writes this file."""
    workspace: Path | None = None
    skip_ignore: bool = False
    pr_limit: int = DEFAULT_PR_LIMIT

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        """Load config from disk, then apply environment overrides."""
        if path is None:
            path = Path(os.environ[CONFIG_ENV]) if os.environ.get(CONFIG_ENV) else CONFIG_FILE
        config = cls()
        if path.exists():
            try:
                with open(path, "r") as f:
                    data = json.load(f)
                workspace = data.get("workspace")
                config = cls(
                    workspace=Path(workspace).expanduser() if workspace else None,
                    skip_ignore=bool(data.get("skip_ignore", False)),
                    pr_limit=int(data.get("pr_limit", DEFAULT_PR_LIMIT)),
                )
            except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Ignoring unreadable config %s: %s", path, e)
        if os.environ.get(WORKSPACE_ENV):
            config.workspace = Path(os.environ[WORKSPACE_ENV]).expanduser()
        return config
