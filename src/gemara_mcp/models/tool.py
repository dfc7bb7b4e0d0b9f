"""Uniform tool response envelope."""

from __future__ import annotations

import json
from typing import Any, Optional

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel


class ToolResult(BaseModel):
    text: str
    structured: Optional[dict[str, Any]] = None
    is_error: bool = False

    @classmethod
    def ok(cls, payload: dict[str, Any], text: Optional[str] = None) -> "ToolResult":
        """Build a success result; text defaults to the payload as indented JSON."""
        if text is None:
            text = json.dumps(payload, indent=2)
        return cls(text=text, structured=payload)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(text=message, is_error=True)

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            structuredContent=self.structured,
            isError=self.is_error,
        )
