from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from typing_extensions import Annotated

# (column name, referenced table)
JoinKey = tuple[str, str]


class _Declaration(BaseModel):
    """
    Common shape of all declarations.

    Declarations are immutable; renaming one produces a copy
    (see `renamed()`).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    name: str = Field(min_length=1, description="Field or association name in the generated code")

    def renamed(self, name: str):
        """Return a copy of the declaration with a different name."""
        return self.model_copy(update={"name": name})


class PlainField(_Declaration):
    """
    Plain column declaration.

    `type` is the raw column type, mapped when the field is rendered.
    """

    kind: Literal["field"] = "field"
    type: str = Field(min_length=1)
    values: Optional[list[str]] = Field(None, description="Enum values")


class _Association(_Declaration):
    target: str = Field(min_length=1, description="Name of the related entity type")
    fk: Optional[str] = Field(None, description="Foreign key, if not the default one")


class BelongsTo(_Association):
    kind: Literal["belongs_to"] = "belongs_to"
    ref: Optional[str] = Field(None, description="Referenced column")


class HasMany(_Association):
    kind: Literal["has_many"] = "has_many"
    ref: Optional[str] = Field(None, description="Referenced column")


class HasOne(_Association):
    kind: Literal["has_one"] = "has_one"
    ref: Optional[str] = Field(None, description="Referenced column")


class ManyToMany(_Association):
    """
    Many-to-many association through a join table.

    `join_keys[0]` is the owning side; its column name is used to
    disambiguate associations sharing both name and join table.
    """

    kind: Literal["many_to_many"] = "many_to_many"
    join_through: Optional[str] = Field(None, description="Join table name")
    join_keys: Optional[tuple[JoinKey, JoinKey]] = Field(
        None,
        description="(column, referenced table) pairs for the owning and the associated side",
    )


Declaration = Annotated[
    Union[PlainField, BelongsTo, HasMany, HasOne, ManyToMany],
    Field(discriminator="kind"),
]

_declaration_adapter = TypeAdapter(Declaration)


def parse_declaration(data: dict) -> Declaration:
    """
    Build a declaration from its dict representation.

    The `kind` key selects the variant; unknown kinds and options that
    don't belong to the variant raise `pydantic.ValidationError`.

    :param data: Declaration as a dict, eg. `{"kind": "has_many", "name": "posts", "target": "Post"}`.
    :return: Declaration object.
    """
    return _declaration_adapter.validate_python(data)


class Entity(BaseModel):
    """
    One table of the introspected schema and its declarations.
    """

    model_config = ConfigDict(extra="forbid")

    table: str = Field(min_length=1, description="Source table name")
    module: str = Field(min_length=1, description="Generated module name")
    declarations: list[Declaration] = Field(default_factory=list)


class Schema(BaseModel):
    """
    Introspected schema, as consumed by the generator.
    """

    model_config = ConfigDict(extra="forbid")

    entities: list[Entity] = Field(default_factory=list)


__all__ = [
    "BelongsTo",
    "Declaration",
    "Entity",
    "HasMany",
    "HasOne",
    "JoinKey",
    "ManyToMany",
    "PlainField",
    "Schema",
    "parse_declaration",
]
