from typing import Optional


class UISource:
    """
    Source for UI messages.

    Attributes:
    * `display_name`: Human-readable name of the source.
    * `type_name`: Type name of the source
    """

    display_name: str
    type_name: str

    def __init__(self, display_name: str, type_name: str):
        """
        Create a new UI source.

        :param display_name: Human-readable name of the source.
        :param type_name: Type name of the source
        """
        self.display_name = display_name
        self.type_name = type_name

    def __str__(self) -> str:
        return self.display_name


class UIBase:
    """
    Base class for UI adapters.

    The generator reports operator-facing notices (eg. fields it had to
    skip) through the UI, separately from the log.
    """

    def send_message(self, message: str, *, source: Optional[UISource] = None):
        """
        Send a message to the operator.

        :param message: Message text.
        :param source: Source of the message (if any).
        """
        raise NotImplementedError()


generator_source = UISource("ormgen", "generator")
renderer_source = UISource("Renderer", "renderer")


__all__ = ["UISource", "UIBase", "generator_source", "renderer_source"]
