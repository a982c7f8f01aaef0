"""
Association name deduplication.

Schema introspection yields one association per foreign key or join
table, named after the associated table. An entity with two foreign keys
to the same table (eg. `author_id` and `editor_id` both referencing
`users`) therefore ends up with two associations called "users". The
functions here rename such duplicates using the foreign key or the join
table that tells them apart.

Collisions are detected purely on names. Declarations without the
information needed to rename them keep their (still colliding) name;
the generated code is left to fail loudly rather than being numbered
arbitrarily.
"""

from collections import Counter
from typing import Iterable

from ormgen.log import get_logger
from ormgen.naming import format_assoc, pluralize
from ormgen.schema import Declaration

log = get_logger(__name__)


def _duplicated_names(declarations: Iterable[Declaration]) -> set[str]:
    counts = Counter(decl.name for decl in declarations)
    return {name for name, count in counts.items() if count > 1}


def _log_residual_collisions(declarations: list[Declaration], context: str):
    residual = _duplicated_names(declarations)
    if residual:
        log.debug(f"Unresolved association name collisions after {context}: {', '.join(sorted(residual))}")


def deduplicate_associations(declarations: Iterable[Declaration]) -> list[Declaration]:
    """
    Rename associations that share a name, using their foreign key.

    Declarations are sorted by name first. Same-named declarations end up
    in reverse input order, so a declaration listed later in the input
    comes first in the output. A colliding declaration with a non-default
    foreign key is renamed after that key; the one using the default key
    keeps the plain name.

    Eg. given a "comments" association using the default foreign key,
    followed by a "comments" association with `fk="alt_comment_id"`, the
    latter is renamed to "alt_comments" and comes first in the output.

    :param declarations: Declarations of a single entity.
    :return: New list of declarations, sorted by their original name.
    """
    ordered = sorted(reversed(list(declarations)), key=lambda decl: decl.name)
    duplicated = _duplicated_names(ordered)

    result = []
    for decl in ordered:
        fk = getattr(decl, "fk", None)
        if decl.name in duplicated and fk:
            new_name = pluralize(format_assoc(fk, decl.name))
            log.debug(f"Renaming {decl.kind} association {decl.name} to {new_name} (foreign key {fk})")
            decl = decl.renamed(new_name)
        result.append(decl)

    _log_residual_collisions(result, "foreign key deduplication")
    return result


def _rename_by_join_keys(decl: Declaration) -> Declaration:
    join_keys = getattr(decl, "join_keys", None)
    if join_keys is None:
        return decl

    # Destructuring enforces the (owner, associated) pair shape even for
    # declarations built without validation.
    (prefix, _), _ = join_keys
    return decl.renamed(f"{decl.name}_by_{prefix}")


def deduplicate_join_associations(declarations: Iterable[Declaration], attempt: int) -> list[Declaration]:
    """
    Rename many-to-many associations that share a name.

    Only colliding declarations going through a join table are touched.
    Order of the declarations is preserved.

    On the first attempt, associations are renamed after their join table,
    eg. two "objects" associations through "attachments" and "object_activity_events"
    become "objects_by_attachments" and "objects_by_object_activity_events".

    On the second attempt, the remaining collisions (associations sharing
    both the name and the join table) are renamed after the owning side
    column of their join keys, eg. "users_by_memberships_by_member_id". `has_many`
    associations are never renamed on the second attempt.

    :param declarations: Declarations to deduplicate.
    :param attempt: Deduplication pass, 1 or 2.
    :return: New list of declarations.
    """
    if attempt not in (1, 2):
        raise ValueError(f"Invalid join deduplication attempt: {attempt}")

    declarations = list(declarations)
    duplicated = _duplicated_names(declarations)

    result = []
    for decl in declarations:
        join_through = getattr(decl, "join_through", None)
        if decl.name not in duplicated or not join_through:
            result.append(decl)
        elif attempt == 1:
            result.append(decl.renamed(pluralize(format_assoc(decl.name + "_by", join_through))))
        elif decl.kind == "has_many":
            result.append(decl)
        else:
            result.append(_rename_by_join_keys(decl))

    return result


def deduplicate_joins(declarations: Iterable[Declaration]) -> list[Declaration]:
    """
    Deduplicate many-to-many association names by join table, then by join keys.

    :param declarations: Declarations to deduplicate.
    :return: New list of declarations.
    """
    first_pass = deduplicate_join_associations(declarations, 1)
    result = deduplicate_join_associations(first_pass, 2)
    _log_residual_collisions(result, "join deduplication")
    return result


__all__ = ["deduplicate_associations", "deduplicate_join_associations", "deduplicate_joins"]
