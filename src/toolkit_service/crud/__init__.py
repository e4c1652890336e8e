from .tools import ToolMutations, ToolPage, ToolQueries, build_tool_conditions

__all__ = ["ToolMutations", "ToolPage", "ToolQueries", "build_tool_conditions"]
