"""Thread-safe registry of (user_id, side) -> BrowserPane."""
import threading
import logging
from typing import Dict, Tuple

from studio.modules.data_browser.pagination import BrowserPane

logger = logging.getLogger(__name__)
_lock = threading.Lock()
_registry: Dict[Tuple[str, str], BrowserPane] = {}


def get_pane(user_id: str, side: str) -> BrowserPane:
    """Return the caller's pane for a side, creating an idle one on first use."""
    key = (user_id, side)
    with _lock:
        pane = _registry.get(key)
        if pane is None:
            pane = BrowserPane()
            _registry[key] = pane
            logger.debug(f"Created {side} pane for user {user_id}")
        return pane


def drop_user(user_id: str) -> None:
    with _lock:
        for key in [k for k in _registry if k[0] == user_id]:
            _registry.pop(key, None)


def clear() -> None:
    with _lock:
        _registry.clear()
