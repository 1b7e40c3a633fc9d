"""Docker checks, read from `docker images` and `docker ps -a`."""

from hostcheck.checks.base import check, read_table
from hostcheck.core.diagnostic import PASS, Outcome, generic_error
from hostcheck.core.source import CommandSource, SourceReader
from hostcheck.tabular import MULTISPACE, WHITESPACE, column

DOCKER_IMAGES = CommandSource("docker", ("images",))
DOCKER_PS = CommandSource("docker", ("ps", "-a"))

# `docker ps -a` columns
PS_IMAGE = 1
PS_STATUS = 4

# Placeholder docker prints for a missing repository or tag
UNNAMED = "<none>"


def get_images(reader: SourceReader | None = None) -> tuple[list[str], set[str]]:
    """Repositories of pulled images, plus their "repo:tag" forms.

    Dangling images, listed with a "<none>" repository, have no
    name to match and are left out; so are "<none>" tags.
    """
    table = read_table(DOCKER_IMAGES, WHITESPACE, reader)
    repositories = [
        name for name in column(table, 0, skip_header=True)
        if name != UNNAMED
    ]
    tagged = {
        f"{row[0]}:{row[1]}" for row in table[1:]
        if len(row) > 1 and UNNAMED not in (row[0], row[1])
    }
    return repositories, tagged


def get_running_containers(reader: SourceReader | None = None) -> list[str]:
    """Images and names of containers whose status is "Up ...".

    The PORTS column is blank for many containers, so NAMES is
    taken from the end of the row rather than a fixed index.
    """
    table = read_table(DOCKER_PS, MULTISPACE, reader)
    running = []
    for row in table[1:]:
        if len(row) <= PS_STATUS or "Up" not in row[PS_STATUS]:
            continue
        running.append(row[PS_IMAGE])
        if row[-1] != row[PS_IMAGE]:
            running.append(row[-1])
    return running


@check("DockerImage", "image")
def docker_image(parameters: list[str], reader=None) -> Outcome:
    """The Docker image (e.g. "ubuntu", "user/image") has been pulled."""
    name = parameters[0]
    repositories, tagged = get_images(reader)
    if name in repositories or name in tagged:
        return PASS
    return generic_error("Docker image was not found", name, repositories)


@check("DockerRunning", "container")
def docker_running(parameters: list[str], reader=None) -> Outcome:
    """A container with this image or name is running."""
    name = parameters[0]
    running = get_running_containers(reader)
    if name in running:
        return PASS
    return generic_error("Docker container not running", name, running)
