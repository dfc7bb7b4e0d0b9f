"""Tool handlers.

Each handler loads its own inputs, runs one transform and returns a
``ToolResult``. Errors never escape: they come back as error-flagged results.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..compliance.controls import filter_controls
from ..compliance.guidance import filter_guidance
from ..compliance.loader import load_control_catalog, load_guidance_document
from ..compliance.mapping import create_control_modifiers, parse_mod_type
from ..compliance.matching import label_set
from ..core.config import DEFAULT_CONFIG
from ..core.cue import CueRunner
from ..core.errors import GemaraError, LoadError, UsageError
from ..models.tool import ToolResult
from ..utils.sanitize import sanitize_error

logger = logging.getLogger(__name__)


def tool_boundary(func: Callable[..., Awaitable[ToolResult]]) -> Callable[..., Awaitable[ToolResult]]:
    """Convert ``GemaraError`` raised by a handler into an error result."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
        logger.debug("Tool %s called", func.__name__)
        try:
            return await func(*args, **kwargs)
        except GemaraError as e:
            message = sanitize_error(str(e))
            logger.warning("Tool %s failed: %s", func.__name__, message)
            return ToolResult.error(message)

    return wrapper


class GemaraTools:
    """The server's tool surface, independent of the MCP transport."""

    def __init__(self, config: Optional[dict] = None, client: Optional[httpx.AsyncClient] = None):
        self.config = config or DEFAULT_CONFIG
        self.client = client
        self.cue = CueRunner.from_config(self.config)

    def _loader_options(self) -> dict:
        http_config = self.config.get("http") or {}
        return {
            "client": self.client,
            "timeout": http_config.get("timeout_seconds", 30),
            "follow_redirects": http_config.get("follow_redirects", True),
        }

    async def _load(self, loader: Callable, reference: str, what: str):
        try:
            return await loader(reference, **self._loader_options())
        except LoadError as e:
            raise LoadError(f"Error loading {what}: {e}") from e

    # -- Gemara layers ------------------------------------------------------

    @tool_boundary
    async def import_guidelines_by_criteria(
        self,
        file_path: str,
        technology: Optional[str] = None,
        sector: Optional[str] = None,
        jurisdiction: Optional[str] = None,
    ) -> ToolResult:
        document = await self._load(load_guidance_document, file_path, "guidance document")
        filtered = filter_guidance(document, technology, sector, jurisdiction)
        return ToolResult.ok(filtered.to_dict())

    @tool_boundary
    async def import_controls_by_label(self, file_path: str, labels: list[str]) -> ToolResult:
        if not label_set(labels):
            raise UsageError("At least one label must be provided")
        catalog = await self._load(load_control_catalog, file_path, "control catalog")
        filtered = filter_controls(catalog, labels)
        return ToolResult.ok(filtered.to_dict())

    @tool_boundary
    async def create_layer3_control_modifiers(
        self,
        guidelines_file: str,
        controls_file: str,
        modification_rationale: str,
        modification_type: Optional[str] = None,
    ) -> ToolResult:
        mod_type = parse_mod_type(modification_type)
        guidance = await self._load(load_guidance_document, guidelines_file, "guidelines document")
        catalog = await self._load(load_control_catalog, controls_file, "controls catalog")
        mapping = create_control_modifiers(guidance, catalog, modification_rationale, mod_type)
        return ToolResult.ok(mapping.to_dict())

    # -- CUE ----------------------------------------------------------------

    @tool_boundary
    async def validate_cue(self, files: Optional[list[str]] = None, content: Optional[str] = None) -> ToolResult:
        return ToolResult.ok(await asyncio.to_thread(self.cue.validate, files, content))

    @tool_boundary
    async def evaluate_cue(self, content: str, expression: Optional[str] = None) -> ToolResult:
        return ToolResult.ok(await asyncio.to_thread(self.cue.evaluate, content, expression))

    @tool_boundary
    async def format_cue(self, content: str) -> ToolResult:
        payload = await asyncio.to_thread(self.cue.format_source, content)
        return ToolResult.ok(payload, text=payload["formatted"])

    @tool_boundary
    async def unify_cue(self, configs: list[str]) -> ToolResult:
        return ToolResult.ok(await asyncio.to_thread(self.cue.unify, configs))

    @tool_boundary
    async def export_cue(self, content: str, format: str = "json", expression: Optional[str] = None) -> ToolResult:
        payload = await asyncio.to_thread(self.cue.export, content, format, expression)
        return ToolResult.ok(payload, text=json.dumps(payload["data"], indent=2))

    @tool_boundary
    async def import_to_cue(self, content: str, format: str = "json") -> ToolResult:
        payload = await asyncio.to_thread(self.cue.import_data, content, format)
        return ToolResult.ok(payload, text=payload["cue"])
