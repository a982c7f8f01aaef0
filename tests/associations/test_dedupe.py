import pytest

from ormgen.associations.dedupe import (
    deduplicate_associations,
    deduplicate_join_associations,
    deduplicate_joins,
)
from ormgen.schema import BelongsTo, HasMany, HasOne, ManyToMany, PlainField


def names(declarations):
    return [decl.name for decl in declarations]


def test_deduplicate_by_foreign_key():
    declarations = [
        HasMany(name="comments", target="Comment"),
        HasMany(name="foos", target="Foo"),
        HasMany(name="comments", target="Comment", fk="alt_comment_id"),
    ]

    result = deduplicate_associations(declarations)

    assert result == [
        HasMany(name="alt_comments", target="Comment", fk="alt_comment_id"),
        HasMany(name="comments", target="Comment"),
        HasMany(name="foos", target="Foo"),
    ]


def test_deduplicate_many_to_many_by_foreign_key():
    declarations = [
        ManyToMany(name="users", target="User", join_through="objects", fk="created_by"),
        ManyToMany(name="users", target="User", join_through="objects", fk="archived_by"),
    ]

    result = deduplicate_associations(declarations)

    assert result == [
        ManyToMany(name="archived_by_users", target="User", join_through="objects", fk="archived_by"),
        ManyToMany(name="created_by_users", target="User", join_through="objects", fk="created_by"),
    ]


def test_deduplicate_by_foreign_key_with_sibilant_table_name():
    declarations = [
        HasMany(name="addresses", target="Address"),
        HasMany(name="addresses", target="Address", fk="billing_address_id"),
    ]

    result = deduplicate_associations(declarations)

    assert names(result) == ["billing_addresses", "addresses"]


def test_unique_names_are_only_sorted():
    declarations = [
        PlainField(name="title", type="text"),
        BelongsTo(name="author", target="User", fk="author_id"),
        HasOne(name="cover", target="Image", ref="uuid"),
        HasMany(name="comments", target="Comment", fk="post_id"),
    ]

    result = deduplicate_associations(declarations)

    assert names(result) == ["author", "comments", "cover", "title"]
    assert sorted(result, key=lambda decl: decl.name) == sorted(declarations, key=lambda decl: decl.name)


def test_kind_target_and_options_are_preserved():
    declarations = [
        BelongsTo(name="user", target="User", fk="owner_id", ref="uuid"),
        BelongsTo(name="user", target="User"),
    ]

    kept, renamed = deduplicate_associations(declarations)

    assert renamed.kind == "belongs_to"
    assert renamed.target == "User"
    assert renamed.fk == "owner_id"
    assert renamed.ref == "uuid"
    assert renamed.name == "owner_users"
    assert kept == BelongsTo(name="user", target="User")


def test_input_is_not_modified():
    declarations = [
        HasMany(name="comments", target="Comment", fk="alt_comment_id"),
        HasMany(name="comments", target="Comment"),
    ]
    original = list(declarations)

    result = deduplicate_associations(declarations)

    assert declarations == original
    assert declarations[0].name == "comments"
    assert result is not declarations


def test_colliding_without_foreign_key_keep_their_name():
    declarations = [
        HasMany(name="users", target="User"),
        HasMany(name="users", target="User"),
        HasMany(name="users", target="User", fk="editor_id"),
    ]

    result = deduplicate_associations(declarations)

    # Not enough information to tell the first two apart
    assert names(result) == ["editor_users", "users", "users"]


def test_empty_list():
    assert deduplicate_associations([]) == []
    assert deduplicate_joins([]) == []


def test_join_first_pass():
    declarations = [
        ManyToMany(name="objects", target="Object", join_through="attachments"),
        ManyToMany(name="objects", target="Object", join_through="object_activity_events"),
    ]

    result = deduplicate_join_associations(declarations, 1)

    assert result == [
        ManyToMany(name="objects_by_attachments", target="Object", join_through="attachments"),
        ManyToMany(
            name="objects_by_object_activity_events",
            target="Object",
            join_through="object_activity_events",
        ),
    ]
    assert deduplicate_join_associations(result, 2) == result
    assert deduplicate_joins(declarations) == result


def test_join_second_pass_uses_join_keys():
    declarations = [
        ManyToMany(
            name="users",
            target="User",
            join_through="memberships",
            join_keys=(("member_id", "users"), ("group_id", "groups")),
        ),
        ManyToMany(
            name="users",
            target="User",
            join_through="memberships",
            join_keys=(("inviter_id", "users"), ("group_id", "groups")),
        ),
    ]

    result = deduplicate_joins(declarations)

    assert names(result) == [
        "users_by_memberships_by_member_id",
        "users_by_memberships_by_inviter_id",
    ]
    assert [decl.join_keys for decl in result] == [decl.join_keys for decl in declarations]


def test_join_second_pass_without_join_keys():
    declarations = [
        ManyToMany(name="tags", target="Tag", join_through="taggings"),
        ManyToMany(name="tags", target="Tag", join_through="taggings"),
    ]

    result = deduplicate_joins(declarations)

    assert names(result) == ["tags_by_taggings", "tags_by_taggings"]


def test_join_dedupe_ignores_declarations_without_join_table():
    declarations = [
        HasMany(name="objects", target="Object"),
        ManyToMany(name="objects", target="Object", join_through="attachments"),
        PlainField(name="status", type="text"),
    ]

    result = deduplicate_joins(declarations)

    assert names(result) == ["objects", "objects_by_attachments", "status"]


def test_join_dedupe_keeps_order():
    declarations = [
        ManyToMany(name="zebras", target="Zebra", join_through="zoo_animals"),
        ManyToMany(name="apes", target="Ape", join_through="apes_zoos"),
        ManyToMany(name="zebras", target="Zebra", join_through="safari_animals"),
    ]

    result = deduplicate_join_associations(declarations, 1)

    assert names(result) == ["zebras_by_zoo_animals", "apes", "zebras_by_safari_animals"]


def test_deduplicate_joins_is_composition_of_passes():
    declarations = [
        ManyToMany(name="users", target="User", join_through="objects", join_keys=(("a_id", "users"), ("o", "x"))),
        ManyToMany(name="users", target="User", join_through="objects", join_keys=(("b_id", "users"), ("o", "x"))),
        ManyToMany(name="objects", target="Object", join_through="attachments"),
        ManyToMany(name="objects", target="Object", join_through="object_activity_events"),
        HasMany(name="comments", target="Comment"),
    ]

    expected = deduplicate_join_associations(deduplicate_join_associations(declarations, 1), 2)

    assert deduplicate_joins(declarations) == expected


@pytest.mark.parametrize("attempt", [0, 3])
def test_invalid_attempt(attempt):
    with pytest.raises(ValueError):
        deduplicate_join_associations([], attempt)


def test_malformed_join_keys_fail_fast():
    # Bypasses validation, as a buggy upstream producer could
    declarations = [
        ManyToMany.model_construct(name="users", target="User", join_through="objects", join_keys=(("a_id", "users"),)),
        ManyToMany.model_construct(name="users", target="User", join_through="objects", join_keys=(("b_id", "users"),)),
    ]

    with pytest.raises(ValueError):
        deduplicate_join_associations(declarations, 2)
