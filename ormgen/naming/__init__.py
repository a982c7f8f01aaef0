import re
from typing import Optional

import inflect

from ormgen.config import get_config

FK_SUFFIX = "_id"

# Singular nouns with these endings (eg. "address", "bus", "analysis") are
# otherwise singularized by dropping the trailing "s"
SINGULAR_S_ENDINGS = ("ss", "us", "is")

inflect_engine = inflect.engine()


class UnsupportedTypeError(ValueError):
    """The raw column type has no counterpart in the generated schema."""

    def __init__(self, raw_type: str):
        super().__init__(f"Unsupported column type: {raw_type}")
        self.raw_type = raw_type


def map_type(raw_type: str, type_map: Optional[dict[str, str]] = None, unsupported: Optional[str] = None) -> str:
    """
    Map a raw column type to the type used in the generated schema.

    Types not present in the type map are returned unchanged.

    :param raw_type: Column type as reported by the database, eg. "uuid".
    :param type_map: Type map to use (default: from the current configuration).
    :param unsupported: Pattern matching unsupported types (default: from the current configuration).
    :return: Generated type name.
    :raises UnsupportedTypeError: If the type can't be represented (eg. vector types).
    """
    if type_map is None or unsupported is None:
        config = get_config().types
        type_map = config.mapping if type_map is None else type_map
        unsupported = config.unsupported_pattern if unsupported is None else unsupported

    if re.search(unsupported, raw_type):
        raise UnsupportedTypeError(raw_type)

    return type_map.get(raw_type, raw_type)


def _split_last_word(name: str) -> tuple[str, str]:
    head, sep, word = name.rpartition("_")
    return head + sep, word


def _singular_of(word: str) -> Optional[str]:
    """Singular form of a plural word, or None if the word is singular."""
    if not word or word.lower().endswith(SINGULAR_S_ENDINGS):
        return None
    return inflect_engine.singular_noun(word) or None


def singularize(name: str) -> str:
    """
    Singularize the last word of a snake_case name.

    Names that are already singular are returned unchanged.
    """
    head, word = _split_last_word(name)
    singular = _singular_of(word)
    return head + singular if singular else name


def pluralize(name: str) -> str:
    """
    Pluralize the last word of a snake_case name.

    Names that are already plural are returned unchanged, so this
    can safely be applied more than once.
    """
    head, word = _split_last_word(name)
    if not word or _singular_of(word):
        return name
    return head + inflect_engine.plural_noun(word)


def format_assoc(fk: str, table_name: str) -> str:
    """
    Build a compound association name from a foreign key and a table name.

    The `_id` suffix is stripped from the foreign key. If what remains
    already names the table (eg. "alt_comment" for "comments"), it is
    used as is; otherwise the table name is appended:

    >>> format_assoc("alt_comment_id", "comments")
    'alt_comment'
    >>> format_assoc("created_by", "users")
    'created_by_users'

    The result is not pluralized.

    :param fk: Foreign key column name or a prefix to use.
    :param table_name: Name of the associated table.
    :return: Compound association name.
    """
    prefix = fk[: -len(FK_SUFFIX)] if fk.endswith(FK_SUFFIX) else fk
    singular = singularize(table_name)
    if prefix == singular or prefix.endswith("_" + singular):
        return prefix
    return f"{prefix}_{table_name}"


__all__ = ["UnsupportedTypeError", "format_assoc", "map_type", "pluralize", "singularize"]
