from typing import Optional, TextIO

from ormgen.ui.base import UIBase, UISource


class PlainConsoleUI(UIBase):
    """
    UI adapter for plain (no color) console output.

    Messages go to stdout unless another stream is given (eg. stderr,
    when the generated code itself is printed to stdout).
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def send_message(self, message: str, *, source: Optional[UISource] = None):
        if source:
            print(f"[{source}] {message}", file=self.stream, flush=True)
        else:
            print(message, file=self.stream, flush=True)


__all__ = ["PlainConsoleUI"]
