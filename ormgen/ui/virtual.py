from typing import Optional

from ormgen.log import get_logger
from ormgen.ui.base import UIBase, UISource

log = get_logger(__name__)


class VirtualUI(UIBase):
    """
    Testing UI adapter.

    Messages are recorded instead of printed, as (source, message) tuples.
    """

    def __init__(self):
        self.messages: list[tuple[Optional[str], str]] = []

    def send_message(self, message: str, *, source: Optional[UISource] = None):
        log.debug(f"Virtual UI message: {message}")
        self.messages.append((str(source) if source else None, message))


__all__ = ["VirtualUI"]
