from __future__ import annotations

from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


def escape_string(str: str) -> str:
    """
    Escape special characters in a string

    :param str: The string to escape
    :return: The escaped string
    """
    return str.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


class Renderer:
    """
    Render a Jinja template

    Sets up Jinja renderer and renders schema templates using
    provided context. Templates are searched for in the given
    directories, in order.

    Rendered templates are returned as strings. Nothing is written
    to disk.

    Usage:

    >>> from ormgen.templates.render import Renderer
    >>> r = Renderer(['path/to/templates'])
    >>> output_string = r.render_template('ecto_schema.ex', {'module': 'MyApp.Post'})
    """

    def __init__(self, template_dirs: list[str]):
        self.template_dirs = template_dirs
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dirs),
            autoescape=False,
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        # Add filters here
        self.jinja_env.filters["escape_string"] = escape_string

    def render_template(self, template: str, context: Any) -> str:
        """
        Render a single template to a string using provided context

        :param template: Name of the template file, relative to one of `template_dirs`.
        :param context: Context to render the template with.
        :return: The resulting string.
        """

        # Jinja2 always uses /, even on Windows
        template = template.replace("\\", "/")

        tpl_object = self.jinja_env.get_template(template)
        return tpl_object.render(context)


__all__ = ["Renderer", "escape_string"]
