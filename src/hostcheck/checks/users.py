"""User and group checks.

Groups come from /etc/group; users come from the passwd database
through the pwd module.
"""

import pwd
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from hostcheck.checks.base import check, is_integer, parse_int, read_table
from hostcheck.core.diagnostic import PASS, Outcome, generic_error
from hostcheck.core.errors import SourceUnavailable
from hostcheck.core.source import FileSource, SourceReader
from hostcheck.tabular import ExactDelimiter

GROUP_FILE = FileSource(Path("/etc/group"))
GROUP_FORMAT = ExactDelimiter(row_separator="\n", column_separator=":")


@dataclass
class Group:
    """One entry of /etc/group."""

    name: str
    gid: int
    users: list[str] = field(default_factory=list)


def get_groups(reader: SourceReader | None = None) -> list[Group]:
    """Parse /etc/group.

    Lines without all four fields are skipped.

    Raises:
        SourceUnavailable: If a group id is not an integer
    """
    groups = []
    for line in read_table(GROUP_FILE, GROUP_FORMAT, reader, min_fields=4):
        name, _, gid, members = line[:4]
        if not is_integer(gid):
            raise SourceUnavailable(f"Could not parse ID for group: {name}")
        users = [user for user in members.split(",") if user]
        groups.append(Group(name=name, gid=int(gid), users=users))
    return groups


def find_group(name: str, groups: list[Group]) -> Group | None:
    for group in groups:
        if group.name == name:
            return group
    return None


def group_not_found(name: str, groups: list[Group]) -> Outcome:
    return generic_error(
        "Group not found", name, [group.name for group in groups]
    )


@check("GroupExists", "group")
def group_exists(parameters: list[str], reader=None) -> Outcome:
    """The UNIX group exists."""
    name = parameters[0]
    groups = get_groups(reader)
    if find_group(name, groups):
        return PASS
    return group_not_found(name, groups)


@check("UserInGroup", "user", "group")
def user_in_group(parameters: list[str], reader=None) -> Outcome:
    """The user is a member of the group."""
    user, group_name = parameters[0], parameters[1]
    groups = get_groups(reader)
    group = find_group(group_name, groups)
    if group is None:
        return group_not_found(group_name, groups)
    if user in group.users:
        return PASS
    return generic_error("User not found in group", user, group.users)


@check("GroupId", "group", "gid")
def group_id(parameters: list[str], reader=None) -> Outcome:
    """The group has the given numeric id."""
    name = parameters[0]
    gid = parse_int(parameters[1])
    groups = get_groups(reader)
    group = find_group(name, groups)
    if group is None:
        return group_not_found(name, groups)
    if group.gid == gid:
        return PASS
    return generic_error(
        "Group does not have expected ID", str(gid), [str(group.gid)]
    )


# Comparable user attributes, by the name used in messages
USER_FIELDS: dict[str, Callable[[pwd.struct_passwd], str]] = {
    "Uid": lambda user: str(user.pw_uid),
    "Gid": lambda user: str(user.pw_gid),
    "Username": lambda user: user.pw_name,
    "Name": lambda user: user.pw_gecos.split(",")[0],
    "HomeDir": lambda user: user.pw_dir,
}


def lookup_user(username_or_uid: str) -> pwd.struct_passwd | None:
    """Find a user by numeric uid first, then by username."""
    if is_integer(username_or_uid, signed=False):
        try:
            return pwd.getpwuid(int(username_or_uid))
        except (KeyError, OverflowError):
            pass
    try:
        return pwd.getpwnam(username_or_uid)
    except KeyError:
        return None


def user_not_found(username_or_uid: str) -> Outcome:
    return generic_error(
        "User does not exist",
        username_or_uid,
        [user.pw_name for user in pwd.getpwall()],
    )


def user_has_field(
    username_or_uid: str, field_name: str, expected: str
) -> Outcome:
    user = lookup_user(username_or_uid)
    if user is None:
        return user_not_found(username_or_uid)
    actual = USER_FIELDS[field_name](user)
    if actual == expected:
        return PASS
    return generic_error(
        f"User {username_or_uid} does not have expected {field_name}",
        expected,
        [actual],
    )


@check("UserExists", "user")
def user_exists(parameters: list[str], reader=None) -> Outcome:
    """A user with this username or uid exists."""
    if lookup_user(parameters[0]) is not None:
        return PASS
    return user_not_found(parameters[0])


@check("UserHasUID", "user", "uid")
def user_has_uid(parameters: list[str], reader=None) -> Outcome:
    """The user has the given uid."""
    return user_has_field(parameters[0], "Uid", parameters[1])


@check("UserHasGID", "user", "gid")
def user_has_gid(parameters: list[str], reader=None) -> Outcome:
    """The user's primary group id is the given gid."""
    return user_has_field(parameters[0], "Gid", parameters[1])


@check("UserHasUsername", "user", "username")
def user_has_username(parameters: list[str], reader=None) -> Outcome:
    """The user has the given login name."""
    return user_has_field(parameters[0], "Username", parameters[1])


@check("UserHasName", "user", "name")
def user_has_name(parameters: list[str], reader=None) -> Outcome:
    """The user's full name (GECOS) is the given name."""
    return user_has_field(parameters[0], "Name", parameters[1])


@check("UserHasHomeDir", "user", "home")
def user_has_home_dir(parameters: list[str], reader=None) -> Outcome:
    """The user's home directory is the given path."""
    return user_has_field(parameters[0], "HomeDir", parameters[1])
