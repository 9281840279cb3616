"""
skillforge - build, scaffold and install skills.

Skills are directories with a SKILL.md descriptor. skillforge validates
and packages them from a source tree, scaffolds new ones, and installs,
updates or removes them in the project or personal scope.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("skillforge")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from skillforge.config import Scope, Settings  # noqa: E402

__all__ = ["__version__", "__version_info__", "Scope", "Settings"]
