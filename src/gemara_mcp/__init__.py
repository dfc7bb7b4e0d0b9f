"""Gemara MCP server: Layer 1/2/3 compliance authoring tools and CUE helpers."""

from __future__ import annotations

import os

__version__ = "0.1.0"


def get_version() -> str:
    """Return the version string, suffixed with the build tag."""
    build = os.environ.get("GEMARA_MCP_BUILD", "dev")
    return f"{__version__}-{build}"
