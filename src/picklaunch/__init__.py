"""picklaunch — interactive, tree-shaped command launcher.

Walks a declarative YAML menu through fuzzy pickers and prompts, then
runs the assembled shell command.
"""

from picklaunch.version import __version__

__all__: list[str] = ["__version__"]
