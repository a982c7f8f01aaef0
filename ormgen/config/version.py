from importlib.metadata import PackageNotFoundError, version
from os.path import abspath, basename, dirname, isdir, isfile, join
from typing import Optional

GIT_DIR_PATH = abspath(join(dirname(__file__), "..", "..", ".git"))
PACKAGE_NAME = "ormgen"


def get_git_commit() -> Optional[str]:
    """
    Return the current git commit (if running from a repo).

    :return: commit hash or None if not running from a git repo
    """

    git_head = join(GIT_DIR_PATH, "HEAD")
    if not isdir(GIT_DIR_PATH) or not isfile(git_head):
        return None

    with open(git_head, "r", encoding="utf-8") as f:
        ref = f.read().strip()

    # Detached HEAD
    if not ref.startswith("ref: "):
        return ref

    ref_path = join(GIT_DIR_PATH, ref[5:])
    if not isfile(ref_path):
        return basename(ref_path)

    with open(ref_path, "r", encoding="utf-8") as f:
        return f.read().strip()


def get_package_version() -> str:
    """
    Get the version of the installed ormgen distribution.

    If the package isn't installed, returns "0.0.0".
    """
    try:
        return version(PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def get_version() -> str:
    """
    Find and return the current version of ormgen.

    The version string is built from the package version and the current
    git commit hash (if running from a git repo).

    Example: 0.1.0-gitbf01c19

    :return: version string
    """

    version_str = get_package_version()
    commit = get_git_commit()
    if commit:
        version_str = version_str + "-git" + commit[:7]

    return version_str


__all__ = ["get_version"]
