"""Shared fixtures for Gemara MCP tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from gemara_mcp.models.catalog import ControlCatalog
from gemara_mcp.models.guidance import GuidanceDocument


@pytest.fixture
def guidance_data() -> dict:
    """Return a Layer 1 guidance document as loaded from YAML."""
    return {
        "metadata": {
            "id": "OSPS-GD",
            "title": "Open Source Project Security Guidance",
            "applicability": {
                "technology-domains": ["cloud-computing", "artificial-intelligence"],
                "industry-sectors": ["healthcare"],
                "jurisdictions": ["US", "EU"],
            },
        },
        "categories": [
            {
                "id": "basic-security",
                "title": "Basic Security",
                "description": "Baseline expectations",
                "guidelines": [
                    {
                        "id": "req-1",
                        "title": "Enable MFA",
                        "objective": "Protect maintainer accounts",
                        "recommendations": ["Require MFA for all maintainers"],
                    },
                    {
                        "id": "req-2",
                        "title": "Sign releases",
                        "objective": "Provide release provenance",
                        "recommendations": [],
                    },
                ],
            },
            {
                "id": "data-protection",
                "title": "Data Protection",
                "guidelines": [
                    {"id": "req-3", "title": "Encrypt at rest", "objective": "Protect stored data"},
                ],
            },
        ],
    }


@pytest.fixture
def catalog_data() -> dict:
    """Return a Layer 2 control catalog as loaded from YAML."""
    return {
        "metadata": {
            "id": "OSPS-CC",
            "title": "Open Source Control Catalog",
            "applicability-categories": [
                {"id": "maturity-1", "title": "Maturity Level 1"},
            ],
        },
        "control-families": [
            {
                "id": "AC",
                "title": "Access Control",
                "controls": [
                    {
                        "id": "AC-01",
                        "title": "Multi-factor authentication",
                        "objective": "Enforce MFA",
                        "assessment-requirements": [
                            {"id": "AC-01.01", "text": "MFA is enforced", "applicability": ["tlp_clear", "tlp_green"]},
                        ],
                        "guideline-mappings": [
                            {"reference-id": "OSPS-GD", "entries": [{"reference-id": "req-1", "strength": 8}]},
                        ],
                    },
                    {
                        "id": "AC-02",
                        "title": "Branch protection",
                        "objective": "Protect the primary branch",
                        "assessment-requirements": [
                            {"id": "AC-02.01", "text": "Force pushes are blocked", "applicability": ["tlp_amber"]},
                        ],
                        "guideline-mappings": [
                            {"reference-id": "OTHER", "entries": [{"reference-id": "missing-9"}]},
                        ],
                    },
                ],
            },
            {
                "id": "BR",
                "title": "Build and Release",
                "controls": [
                    {
                        "id": "BR-01",
                        "title": "Signed releases",
                        "objective": "Sign all release artifacts",
                        "assessment-requirements": [
                            {"id": "BR-01.01", "text": "Releases are signed", "applicability": ["tlp_red"]},
                        ],
                        "guideline-mappings": [],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def guidance(guidance_data: dict) -> GuidanceDocument:
    return GuidanceDocument.model_validate(guidance_data)


@pytest.fixture
def catalog(catalog_data: dict) -> ControlCatalog:
    return ControlCatalog.model_validate(catalog_data)


@pytest.fixture
def guidance_file(tmp_path: Path, guidance_data: dict) -> Path:
    path = tmp_path / "guidance.yaml"
    path.write_text(yaml.safe_dump(guidance_data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_data: dict) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path
