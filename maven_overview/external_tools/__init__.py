"""External tool wrappers for resolving dependency trees."""

from maven_overview.external_tools.base import ExternalTool
from maven_overview.external_tools.maven import MavenTreeTool

__all__ = ["ExternalTool", "MavenTreeTool"]
