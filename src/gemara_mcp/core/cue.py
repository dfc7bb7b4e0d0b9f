"""CUE pass-through operations.

Evaluation is delegated to the ``cue`` executable. Each call works in its
own temporary directory, removed when the call returns.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import CueError, UsageError

logger = logging.getLogger(__name__)

DATA_FORMATS = ("json", "yaml")


class CueRunner:
    """Runs ``cue`` subcommands against files in a scratch directory."""

    def __init__(self, binary: str = "cue", timeout: int = 60):
        self.binary = binary
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: dict) -> "CueRunner":
        cue_config = config.get("cue") or {}
        return cls(
            binary=cue_config.get("binary", "cue"),
            timeout=cue_config.get("timeout_seconds", 60),
        )

    def executable(self) -> str:
        path = shutil.which(self.binary)
        if not path:
            raise CueError(f"cue executable not found: {self.binary}")
        return path

    def run(self, args: list[str], cwd: Path) -> subprocess.CompletedProcess:
        command = [self.executable(), *args]
        logger.debug("Running %s", " ".join(command))
        try:
            return subprocess.run(
                command,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CueError(f"cue {args[0]} timed out after {self.timeout}s") from e
        except OSError as e:
            raise CueError(f"failed to run cue: {e}") from e

    def check(self, args: list[str], cwd: Path, prefix: str) -> str:
        """Run and return stdout, raising ``CueError`` prefixed with ``prefix``."""
        result = self.run(args, cwd)
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise CueError(f"{prefix}: {detail}")
        return result.stdout

    # -- operations ---------------------------------------------------------

    def validate(self, files: Optional[list[str]] = None, content: Optional[str] = None) -> dict:
        errors: list[str] = []

        if files:
            for file_name in files:
                path = Path(file_name).resolve()
                result = self.run(["vet", str(path)], path.parent)
                if result.returncode != 0:
                    errors.append(f"{file_name}: {(result.stderr or result.stdout).strip()}")
        elif content:
            with tempfile.TemporaryDirectory(prefix="gemara-cue-") as tmp:
                workdir = Path(tmp)
                (workdir / "input.cue").write_text(content, encoding="utf-8")
                result = self.run(["vet", "input.cue"], workdir)
                if result.returncode != 0:
                    errors.append((result.stderr or result.stdout).strip())
        else:
            raise UsageError("Either 'files' or 'content' must be provided")

        return {"valid": not errors, "errors": errors}

    def evaluate(self, content: str, expression: Optional[str] = None) -> dict:
        with tempfile.TemporaryDirectory(prefix="gemara-cue-") as tmp:
            workdir = Path(tmp)
            (workdir / "input.cue").write_text(content, encoding="utf-8")
            self.check(["vet", "input.cue"], workdir, "Compilation error")

            expr = ["-e", expression] if expression else []
            value = self.check(["eval", *expr, "input.cue"], workdir, "Expression error" if expression else "Validation error")
            exported = self.check(["export", "--out", "json", *expr, "input.cue"], workdir, "Export error")

        return {"result": json.loads(exported), "value": value.rstrip("\n")}

    def format_source(self, content: str) -> dict:
        with tempfile.TemporaryDirectory(prefix="gemara-cue-") as tmp:
            workdir = Path(tmp)
            source = workdir / "input.cue"
            source.write_text(content, encoding="utf-8")
            self.check(["fmt", "input.cue"], workdir, "Format error")
            formatted = source.read_text(encoding="utf-8")
        return {"formatted": formatted}

    def unify(self, configs: list[str]) -> dict:
        if not configs:
            raise UsageError("At least one config must be provided")

        with tempfile.TemporaryDirectory(prefix="gemara-cue-") as tmp:
            workdir = Path(tmp)
            names: list[str] = []
            for i, config in enumerate(configs, start=1):
                name = f"config_{i}.cue"
                (workdir / name).write_text(config, encoding="utf-8")
                self.check(["vet", name], workdir, f"Compilation error in config {i}")
                names.append(name)

            unified = self.check(["def", *names], workdir, "Unification error")
            value = self.check(["eval", *names], workdir, "Validation error")
            exported = self.check(["export", "--out", "json", *names], workdir, "Export error")

        return {"unified": unified, "json": json.loads(exported), "value": value.rstrip("\n")}

    def export(self, content: str, out_format: str = "json", expression: Optional[str] = None) -> dict:
        out_format = out_format or "json"
        if out_format not in DATA_FORMATS:
            raise UsageError("Format must be 'json' or 'yaml'")

        with tempfile.TemporaryDirectory(prefix="gemara-cue-") as tmp:
            workdir = Path(tmp)
            (workdir / "input.cue").write_text(content, encoding="utf-8")
            self.check(["vet", "input.cue"], workdir, "Validation error")

            expr = ["-e", expression] if expression else []
            output = self.check(["export", "--out", out_format, *expr, "input.cue"], workdir, "Export error")

        data: Any = json.loads(output) if out_format == "json" else yaml.safe_load(output)
        return {"format": out_format, "data": data}

    def import_data(self, content: str, in_format: str = "json") -> dict:
        in_format = in_format or "json"
        if in_format not in DATA_FORMATS:
            raise UsageError("Format must be 'json' or 'yaml'")

        with tempfile.TemporaryDirectory(prefix="gemara-cue-") as tmp:
            workdir = Path(tmp)
            name = f"input.{in_format}"
            (workdir / name).write_text(content, encoding="utf-8")
            output = self.check(["import", "-o", "-", name], workdir, "Import error")

        return {"cue": output}
