from typing import Optional

from ormgen.config import DeclarationKind, RenderConfig, TypeMapConfig, get_config
from ormgen.log import get_logger
from ormgen.naming import UnsupportedTypeError, map_type
from ormgen.schema import Declaration
from ormgen.templates.render import escape_string
from ormgen.ui.base import UIBase, renderer_source

log = get_logger(__name__)

# Options are rendered in this order, whatever order they were given in
OPTION_ORDER = ("values", "fk", "ref", "join_through", "join_keys")

# Identifier fields are implicit in generated schemas
IMPLICIT_FIELDS = ("id",)


class DeclarationRenderer:
    """
    Render declarations as single lines of ORM schema code.

    The keyword starting each line and the option labels come from
    the render configuration, eg. with the default configuration:

        has_many :comments, Comment, foreign_key: :alt_comment_id
    """

    def __init__(
        self,
        ui: UIBase,
        render_config: Optional[RenderConfig] = None,
        types_config: Optional[TypeMapConfig] = None,
    ):
        config = get_config()
        self.ui = ui
        self.render_config = render_config or config.render
        self.types_config = types_config or config.types

    def render(self, decl: Declaration) -> str:
        """
        Render a declaration.

        Implicit and unsupported fields render as an empty string; the
        latter are also reported to the UI.

        :param decl: Declaration to render.
        :return: Declaration code, or an empty string if it should be omitted.
        """
        kind = DeclarationKind(decl.kind)
        keyword = self.render_config.keywords[kind]

        if kind == DeclarationKind.FIELD:
            if decl.name in IMPLICIT_FIELDS:
                return ""
            try:
                target = map_type(decl.type, self.types_config.mapping, self.types_config.unsupported_pattern)
            except UnsupportedTypeError as err:
                log.warning(f"Skipping field {decl.name}: {err}")
                self.ui.send_message(
                    f"Field {decl.name} has unsupported type {decl.type} and was left out; "
                    "declare it by hand with a custom type",
                    source=renderer_source,
                )
                return ""
        else:
            target = decl.target

        line = f"{keyword} :{decl.name}, {target}"
        for option in OPTION_ORDER:
            # many_to_many is keyed by its join table, not a foreign key
            if option == "fk" and kind == DeclarationKind.MANY_TO_MANY:
                continue
            value = getattr(decl, option, None)
            if value is None:
                continue
            line += f", {self.render_config.option_labels[option]}: {self._format_option(option, value)}"

        return line

    @staticmethod
    def _format_option(option: str, value) -> str:
        if option == "values":
            return "[" + ", ".join(f":{v}" for v in value) + "]"
        if option == "join_through":
            return f'"{escape_string(value)}"'
        if option == "join_keys":
            (current_id, _), (associated_id, _) = value
            return f"[{current_id}: :id, {associated_id}: :id]"
        return f":{value}"


__all__ = ["DeclarationRenderer"]
