from __future__ import annotations

import logging
import os

from dotenv import load_dotenv  # type: ignore

load_dotenv()

logger = logging.getLogger(__name__)

# Namespace used when a single file is parsed on its own
DEFAULT_NAMESPACE = "global"

# Comment markers of the annotated source
DOC_COMMENT_MARKER = "---"
INLINE_COMMENT_MARKER = "--"

# Type given to undocumented parameters, enum values and inferred returns
ANY_TYPE = "any"


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer), using %d", name, raw, default)
        return default


LOG_LEVEL = (os.getenv("LUADOC_LOG_LEVEL") or "INFO").strip().upper()

# 0 -> compact single-line JSON
JSON_INDENT = env_int("LUADOC_JSON_INDENT", 2)
