"""Base class for external dependency resolution tools."""

from abc import ABC, abstractmethod
from pathlib import Path

from maven_overview.dependency_graph import TreeNode


class ExternalTool(ABC):
    """A build tool that can produce a resolved dependency tree for a project."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Executable name."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the tool is installed."""

    @abstractmethod
    async def resolve_tree(self, project_dir: Path) -> TreeNode:
        """Resolve the dependency tree of the project in ``project_dir``."""

    @abstractmethod
    async def resolve_reactor(self, project_dir: Path) -> list[TreeNode]:
        """Resolve the trees of the project and all of its modules."""
