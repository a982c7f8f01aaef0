from os.path import splitext
from typing import Optional

from jinja2 import TemplateError

from ormgen.associations.dedupe import deduplicate_associations, deduplicate_joins
from ormgen.config import Config, get_config
from ormgen.log import get_logger
from ormgen.schema import Declaration, Entity, Schema
from ormgen.templates.declarations import DeclarationRenderer
from ormgen.templates.render import Renderer
from ormgen.ui.base import UIBase, generator_source

log = get_logger(__name__)


class SchemaGenerator:
    """
    Generate ORM schema modules for an introspected schema.

    For each entity, association names are deduplicated (first by
    foreign key, then by join table and join keys), each declaration
    is rendered to a line of code and the lines are put together with
    the configured schema template.
    """

    def __init__(self, ui: UIBase, config: Optional[Config] = None):
        self.ui = ui
        self.config = config or get_config()
        self.renderer = Renderer(self.config.render.template_paths)
        self.declaration_renderer = DeclarationRenderer(ui, self.config.render, self.config.types)

    @staticmethod
    def prepare(entity: Entity) -> list[Declaration]:
        """
        Deduplicate association names of an entity.

        :param entity: Entity to prepare.
        :return: Deduplicated declarations.
        """
        return deduplicate_joins(deduplicate_associations(entity.declarations))

    def render_entity(self, entity: Entity) -> str:
        """
        Render the schema module for a single entity.

        :param entity: Entity to render.
        :return: Module source code.
        """
        lines = [self.declaration_renderer.render(decl) for decl in self.prepare(entity)]
        return self.renderer.render_template(
            self.config.render.schema_template,
            {
                "module": entity.module,
                "table": entity.table,
                "lines": [line for line in lines if line],
            },
        )

    def output_file_name(self, entity: Entity) -> str:
        _, ext = splitext(self.config.render.schema_template)
        return f"{entity.table}{ext}"

    def generate(self, schema: Schema) -> dict[str, str]:
        """
        Generate schema modules for all entities.

        An entity that can't be rendered is skipped and reported, the
        remaining entities are still generated. Only the first entity
        for a given table is generated.

        :param schema: Schema to generate code for.
        :return: A flat dictionary with file name => content structure.
        """
        files = {}
        for entity in schema.entities:
            file_name = self.output_file_name(entity)
            if file_name in files:
                log.error(f"Duplicate table {entity.table} ({entity.module}), {file_name} already generated")
                self.ui.send_message(
                    f"Skipping table {entity.table} ({entity.module}) because {file_name} "
                    "was already generated for another entity with the same table",
                    source=generator_source,
                )
                continue

            try:
                files[file_name] = self.render_entity(entity)
            except ValueError as err:
                log.error(f"Error generating schema for table {entity.table}: {err}", exc_info=True)
                self.ui.send_message(
                    f"Skipping table {entity.table} because of malformed declarations: {err}",
                    source=generator_source,
                )
            except TemplateError as err:
                log.error(f"Error rendering template for table {entity.table}: {err}", exc_info=True)
                self.ui.send_message(
                    f"Skipping table {entity.table} because template "
                    f"{self.config.render.schema_template} could not be rendered: {err}",
                    source=generator_source,
                )

        log.info(f"Generated {len(files)} of {len(schema.entities)} schema modules")
        return files


__all__ = ["SchemaGenerator"]
