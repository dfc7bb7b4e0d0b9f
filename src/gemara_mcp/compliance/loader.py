"""Gemara document loading from paths, file:// and http(s):// references."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional, TypeVar
from urllib.parse import urlparse

import httpx
import yaml
from pydantic import ValidationError

from ..core.errors import LoadError
from ..models.base import GemaraModel
from ..models.catalog import ControlCatalog
from ..models.guidance import GuidanceDocument

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=GemaraModel)

DEFAULT_TIMEOUT = 30.0

_WINDOWS_DRIVE = re.compile(r"^[a-zA-Z]:[\\/]")


def _decode_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LoadError(f"error decoding YAML: {e}") from e


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(f"error decoding JSON: {e}") from e


def _validate(data: Any, model: type[M]) -> M:
    if not isinstance(data, dict):
        raise LoadError(f"expected a mapping at document root, got {type(data).__name__}")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise LoadError(f"invalid {model.__name__}: {e}") from e


def read_local(path: str) -> Any:
    """Read and decode a local file: JSON for ``.json``, YAML otherwise."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise LoadError(f"error opening file: {e}") from e

    if file_path.suffix.lower() == ".json":
        return _decode_json(text)
    return _decode_yaml(text)


async def read_remote(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
    follow_redirects: bool = True,
) -> Any:
    """Fetch a remote document once and decode it as YAML, falling back to JSON."""
    try:
        if client is not None:
            response = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=follow_redirects) as own:
                response = await own.get(url)
    except httpx.HTTPError as e:
        raise LoadError(f"failed to fetch URL: {e}") from e

    if response.status_code != httpx.codes.OK:
        raise LoadError(
            f"failed to fetch URL; response status: {response.status_code} {response.reason_phrase}"
        )

    text = response.text
    try:
        data = _decode_yaml(text)
        if isinstance(data, dict):
            return data
    except LoadError as yaml_error:
        logger.debug("YAML decode failed for %s, retrying as JSON: %s", url, yaml_error)
    return _decode_json(text)


async def read_reference(
    reference: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
    follow_redirects: bool = True,
) -> Any:
    """Resolve a reference to decoded data, dispatching on its scheme."""
    if not reference:
        raise LoadError("no document reference given")

    if _WINDOWS_DRIVE.match(reference):
        return read_local(reference)

    scheme = urlparse(reference).scheme.lower()
    if scheme == "":
        return read_local(reference)
    if scheme == "file":
        return read_local(reference[len("file://"):])
    if scheme in ("http", "https"):
        return await read_remote(reference, client, timeout, follow_redirects)
    raise LoadError(f"unsupported scheme: {scheme}")


async def load_document(reference: str, model: type[M], **kwargs: Any) -> M:
    """Load ``reference`` and validate it as ``model``."""
    logger.debug("Loading %s from %s", model.__name__, reference)
    data = await read_reference(reference, **kwargs)
    return _validate(data, model)


async def load_guidance_document(reference: str, **kwargs: Any) -> GuidanceDocument:
    return await load_document(reference, GuidanceDocument, **kwargs)


async def load_control_catalog(reference: str, **kwargs: Any) -> ControlCatalog:
    return await load_document(reference, ControlCatalog, **kwargs)
