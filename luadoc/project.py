"""
luadoc/project.py

Project mode: a JSON config maps namespace names to ordered lists of file
paths / glob patterns (relative to the config's directory):

    {
      "server": ["server/main.lua", "server/**/*.lua"],
      "shared": ["shared/*.lua"]
    }

Every file is parsed on its own and the results of one namespace are merged
in config order (see merge.py). Missing files and directories are reported
as warnings and skipped; any other I/O error is fatal.
"""

from __future__ import annotations

import glob
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from pydantic import RootModel, ValidationError

from luadoc.adapters.lua_adapter import LuaAdapter
from luadoc.doc.model import LuaDoc, Namespace
from luadoc.merge import merge_docs

logger = logging.getLogger(__name__)

_GLOB_CHARS = ("*", "?")


class ProjectConfigError(ValueError):
    """The project configuration is unreadable or has the wrong shape."""


class ProjectConfig(RootModel[Dict[str, List[str]]]):
    """namespace name -> ordered list of paths / glob patterns"""

    def namespaces(self) -> Iterable[Tuple[str, List[str]]]:
        return self.root.items()


@dataclass
class ProjectResult:
    doc: LuaDoc
    parse_errors: List[Dict[str, str]] = field(default_factory=list)


def load_project_config(config_path: str) -> ProjectConfig:
    with open(config_path, "r", encoding="utf-8") as f:
        raw = f.read()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ProjectConfigError(f"Invalid project config {config_path}: {e}") from e
    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ProjectConfigError(
            f"Project config {config_path} must map namespace names to lists of paths: {e}"
        ) from e


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------

def _is_glob(pattern: str) -> bool:
    return any(ch in pattern for ch in _GLOB_CHARS)


def _glob_root(base_dir: str, pattern: str) -> str:
    """Directory part in front of the first wildcard ("server/**/*.lua" -> base/server)."""
    cut = min(pattern.index(ch) for ch in _GLOB_CHARS if ch in pattern)
    prefix = pattern[:cut]
    prefix = prefix[: max(prefix.rfind("/"), prefix.rfind("\\")) + 1]
    return os.path.join(base_dir, prefix) if prefix else base_dir


def _warn(errors: List[Dict[str, str]], path: str, message: str) -> None:
    logger.warning("%s: %s", message, path)
    errors.append({"file": path, "error": message})


def resolve_files(
    base_dir: str,
    patterns: Iterable[str],
    errors: List[Dict[str, str]],
) -> List[str]:
    """
    Expand the configured entries of one namespace into existing files,
    in config order. Glob matches are sorted to keep the merge deterministic.
    """
    files: List[str] = []

    for entry in patterns:
        if _is_glob(entry):
            root = _glob_root(base_dir, entry)
            if not os.path.isdir(root):
                _warn(errors, root, "Directory not found")
                continue
            matches = sorted(
                p for p in glob.glob(os.path.join(base_dir, entry), recursive=True)
                if os.path.isfile(p)
            )
            if not matches:
                logger.warning("No files match pattern: %s", entry)
            files.extend(matches)
            continue

        path = os.path.join(base_dir, entry)
        if not os.path.exists(path):
            _warn(errors, path, "File not found")
        elif not os.path.isfile(path):
            _warn(errors, path, "Not a regular file")
        else:
            files.append(path)

    return files


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def build_doc_for_files(
    namespace: str,
    files: Iterable[str],
    adapter: LuaAdapter | None = None,
) -> Namespace:
    """Parse each file on its own, then merge in the given order."""
    adapter = adapter or LuaAdapter()
    docs: List[LuaDoc] = []
    for path in files:
        with open(path, "r", encoding="utf-8") as f:
            code = f.read()
        docs.append(adapter.parse(code, namespace))
    return merge_docs(namespace, docs)


def build_doc_for_sources(
    sources: Dict[str, List[Tuple[str, str]]],
    adapter: LuaAdapter | None = None,
) -> LuaDoc:
    """
    In-memory project mode: namespace -> [(filename, code), ...].
    Same merge rules as ``parse_project``.
    """
    adapter = adapter or LuaAdapter()
    namespaces = []
    for name, items in sources.items():
        docs = [adapter.parse(code, name) for _, code in items]
        namespaces.append(merge_docs(name, docs))
    return LuaDoc(namespaces=tuple(namespaces))


def parse_project(config_path: str) -> ProjectResult:
    config = load_project_config(config_path)
    base_dir = os.path.dirname(os.path.abspath(config_path))
    adapter = LuaAdapter()

    errors: List[Dict[str, str]] = []
    namespaces = []
    for name, patterns in config.namespaces():
        files = resolve_files(base_dir, patterns, errors)
        logger.debug("Namespace %s: %d files", name, len(files))
        namespaces.append(build_doc_for_files(name, files, adapter))

    return ProjectResult(doc=LuaDoc(namespaces=tuple(namespaces)), parse_errors=errors)
