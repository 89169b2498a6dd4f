"""
Initial dataset loader.

- Reads the fixed seed file (JSON or YAML) the stores are filled from at start-up.
- `${ENV_VAR}` references inside YAML are substituted from os.environ.
- Handles UTF-8 and UTF-8 with BOM.
- Each record is validated against its entity model; ValidationError propagates as-is.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel

from packages.schemas.community import Testimonial
from packages.schemas.content import BlogPost, Video, derive_excerpt
from packages.schemas.users import User

log = logging.getLogger(__name__)

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


class SeedData(BaseModel):
    """The initial contents of every collection, newest first."""
    users: List[User] = []
    videos: List[Video] = []
    posts: List[BlogPost] = []
    testimonials: List[Testimonial] = []


def _sub_env_vars(text: str) -> str:
    """Replace ${VAR} with os.environ['VAR']; unknown variables are left as written."""
    return _ENV_PATTERN.sub(lambda m: os.getenv(m.group(1), m.group(0)), text)


def _read_text(path: Path) -> str:
    # utf-8-sig reads plain UTF-8 too and drops a leading BOM
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read()


def _detect_file_type_and_load(path: Path) -> Dict[str, Any]:
    """Detect file type by suffix and parse it into a dict."""
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        return json.loads(_read_text(path))
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(_sub_env_vars(_read_text(path))) or {}

    raise ValueError(f"Unsupported seed file type: {path.suffix}")


def load_seed(seed_path: str | os.PathLike[str]) -> SeedData:
    """Load and validate the seed dataset.

    Args:
        seed_path: Path to a `.json`, `.yaml` or `.yml` file.

    Returns:
        SeedData with blank post excerpts already derived.

    Raises:
        FileNotFoundError / ValueError / ValidationError
    """
    path = Path(seed_path).expanduser().resolve()
    data = SeedData.model_validate(_detect_file_type_and_load(path))
    data.posts = [derive_excerpt(p) for p in data.posts]
    log.info(
        "seed loaded from %s: users=%d videos=%d posts=%d testimonials=%d",
        path, len(data.users), len(data.videos), len(data.posts), len(data.testimonials),
    )
    return data
