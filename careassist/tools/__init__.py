"""CareAssist tool catalog."""

from careassist.tools.catalog import TOOL_CATALOG, TOOL_DEFINITIONS, ToolName

__all__ = ["TOOL_CATALOG", "TOOL_DEFINITIONS", "ToolName"]
