"""MCP server wiring: registers the tool handlers with FastMCP and runs it."""

# Annotations stay evaluated here: FastMCP builds argument models from them.

import logging
from typing import Annotated, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .. import get_version
from ..core.config import DEFAULT_CONFIG
from ..core.logs import configure_logging, console
from .tools import GemaraTools

logger = logging.getLogger(__name__)

FilePath = Annotated[
    str,
    Field(description="Path to the document (YAML or JSON). Supports file:/// or https:// URIs."),
]
CueContent = Annotated[str, Field(description="CUE content")]
CueExpression = Annotated[
    Optional[str],
    Field(description="Optional CUE expression path (e.g., 'foo.bar')"),
]
DataFormat = Annotated[Literal["json", "yaml"], Field(description="Data format: 'json' or 'yaml'")]


def create_server(config: Optional[dict] = None, tools: Optional[GemaraTools] = None) -> FastMCP:
    """Build a FastMCP server exposing the Gemara and CUE tools."""
    config = config or DEFAULT_CONFIG
    tools = tools or GemaraTools(config)

    server = FastMCP((config.get("server") or {}).get("name", "gemara-mcp-server"))
    # FastMCP takes no version argument; the low-level server reports this one
    # to clients in the initialize response.
    server._mcp_server.version = get_version()

    @server.tool(
        name="import_guidelines_by_criteria",
        description=(
            "Imports Layer 1 Guidelines (Guidance Documents) filtered by technology domain, "
            "industry sector, or jurisdiction. Returns matching guidelines in JSON format."
        ),
        structured_output=False,
    )
    async def import_guidelines_by_criteria(
        file_path: FilePath,
        technology: Annotated[
            Optional[str],
            Field(description="Filter by technology domain (e.g., 'artificial-intelligence', 'cloud-computing')"),
        ] = None,
        sector: Annotated[
            Optional[str],
            Field(description="Filter by industry sector (e.g., 'financial-services', 'healthcare')"),
        ] = None,
        jurisdiction: Annotated[
            Optional[str],
            Field(description="Filter by jurisdiction (e.g., 'US', 'EU', 'HIPAA')"),
        ] = None,
    ) -> CallToolResult:
        result = await tools.import_guidelines_by_criteria(file_path, technology, sector, jurisdiction)
        return result.to_call_tool_result()

    @server.tool(
        name="import_controls_by_label",
        description=(
            "Imports Layer 2 Controls filtered by labels (applicability categories). "
            "Returns matching controls in JSON format."
        ),
        structured_output=False,
    )
    async def import_controls_by_label(
        file_path: FilePath,
        labels: Annotated[
            list[str],
            Field(description="Label IDs to filter controls by (e.g., ['tlp_clear', 'PII-Data-Protection'])"),
        ],
    ) -> CallToolResult:
        result = await tools.import_controls_by_label(file_path, labels)
        return result.to_call_tool_result()

    @server.tool(
        name="create_layer3_control_modifiers",
        description=(
            "Creates Layer 3 Control Modifiers to harmonize Layer 2 Controls with Layer 1 Guidelines. "
            "Analyzes controls and guidelines to generate appropriate modifiers."
        ),
        structured_output=False,
    )
    async def create_layer3_control_modifiers(
        guidelines_file: Annotated[str, Field(description="Path to Layer 1 Guidance Document file (YAML or JSON)")],
        controls_file: Annotated[str, Field(description="Path to Layer 2 Control Catalog file (YAML or JSON)")],
        modification_rationale: Annotated[
            str,
            Field(description="Rationale for the modifications (e.g., 'Harmonize controls with HIPAA requirements')"),
        ],
        modification_type: Annotated[
            Literal["alter", "add", "remove"],
            Field(description="Type of modification: 'alter', 'add', 'remove' (default: 'alter')"),
        ] = "alter",
    ) -> CallToolResult:
        result = await tools.create_layer3_control_modifiers(
            guidelines_file, controls_file, modification_rationale, modification_type
        )
        return result.to_call_tool_result()

    @server.tool(name="validate_cue", description="Validates CUE files and returns any errors found", structured_output=False)
    async def validate_cue(
        files: Annotated[Optional[list[str]], Field(description="List of CUE file paths to validate")] = None,
        content: Annotated[Optional[str], Field(description="CUE content to validate (alternative to files)")] = None,
    ) -> CallToolResult:
        return (await tools.validate_cue(files, content)).to_call_tool_result()

    @server.tool(name="evaluate_cue", description="Evaluates CUE expressions and returns the result", structured_output=False)
    async def evaluate_cue(content: CueContent, expression: CueExpression = None) -> CallToolResult:
        return (await tools.evaluate_cue(content, expression)).to_call_tool_result()

    @server.tool(name="format_cue", description="Formats CUE code according to CUE style guidelines", structured_output=False)
    async def format_cue(content: CueContent) -> CallToolResult:
        return (await tools.format_cue(content)).to_call_tool_result()

    @server.tool(name="unify_cue", description="Unifies (merges) multiple CUE configurations", structured_output=False)
    async def unify_cue(
        configs: Annotated[list[str], Field(description="Array of CUE configuration strings to unify")],
    ) -> CallToolResult:
        return (await tools.unify_cue(configs)).to_call_tool_result()

    @server.tool(name="export_cue", description="Exports CUE configuration to JSON or YAML format", structured_output=False)
    async def export_cue(content: CueContent, format: DataFormat = "json", expression: CueExpression = None) -> CallToolResult:
        return (await tools.export_cue(content, format, expression)).to_call_tool_result()

    @server.tool(name="import_to_cue", description="Converts JSON or YAML data to CUE format", structured_output=False)
    async def import_to_cue(
        content: Annotated[str, Field(description="JSON or YAML content to convert")],
        format: DataFormat = "json",
    ) -> CallToolResult:
        return (await tools.import_to_cue(content, format)).to_call_tool_result()

    return server


def run_server(config: Optional[dict] = None) -> None:
    """Configure logging, build the server and serve until interrupted."""
    config = config or DEFAULT_CONFIG
    log_config = config.get("logging") or {}
    configure_logging(log_config.get("level", "INFO"), log_config.get("file"))

    transport = (config.get("server") or {}).get("transport", "stdio")
    server = create_server(config)

    logger.info("Starting Gemara CUE MCP server version=%s transport=%s", get_version(), transport)
    console.print(f"Gemara CUE MCP Server running on {transport}")
    try:
        server.run(transport=transport)
    except KeyboardInterrupt:
        logger.info("Shutting down server")
