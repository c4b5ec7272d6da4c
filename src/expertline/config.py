"""
Bridge configuration, persisted as JSON under ~/.expertline/.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from expertline.host.pusher import DEFAULT_OFFSETS_S
from expertline.ui.compare import DEFAULT_API_URL

logger = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".expertline" / "config.json"


class BridgeConfig(BaseModel):
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0
    push_offsets: list[float] = list(DEFAULT_OFFSETS_S)
    mode: str = "expert"
    max_alternatives: int = 3
    host: str = "127.0.0.1"
    port: int = 8765


def load_config(path: Optional[Path] = None) -> BridgeConfig:
    path = path or CONFIG_FILE
    try:
        return BridgeConfig.model_validate(json.loads(path.read_text()))
    except FileNotFoundError:
        return BridgeConfig()
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return BridgeConfig()


def save_config(cfg: BridgeConfig, path: Optional[Path] = None) -> None:
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg.model_dump(), indent=2))
