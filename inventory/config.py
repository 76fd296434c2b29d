"""Default tables and the immutable configuration passed through a scan."""

from __future__ import annotations

import logging
import os
from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


DEFAULT_IGNORED_DIRS = frozenset({
	"node_modules",
	".git",
	".cache",
	"dist",
	"build",
	"library",
	"packagecache",
})

IGNORED_FILES = frozenset({
	".gitignore",
	".gitattributes",
	"edge-functions-import-map.json",
	"netlify.toml",
	"debug-env.js",
})

BINARY_EXTENSIONS = frozenset({
	".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico",
	".zip", ".tar", ".gz", ".tgz", ".rar", ".7z",
	".pdf", ".woff", ".woff2", ".ttf", ".eot",
	".mp3", ".mp4", ".mov", ".avi",
})

PROJECT_MARKERS = (
	"package.json",
	"requirements.txt",
	"pyproject.toml",
	"Gemfile",
	"composer.json",
	".git",
)

CONTAINER_DIR_NAME = "svn"
CONTAINER_ROOT_NAMES = frozenset({"svn", "bitbucket"})

# <project>/netlify/functions holds deploy plumbing of <project>
SERVERLESS_SEGMENTS = ("netlify", "functions")

MAX_SCAN_FILE_SIZE = 1_500_000
MAX_BLOCK_CHARS = 10_000
DEFAULT_MAX_WORKERS = min(32, (os.cpu_count() or 1) + 4)

ENV_MAX_WORKERS = "INVENTORY_MAX_WORKERS"
ENV_MAX_FILE_SIZE = "INVENTORY_MAX_FILE_SIZE"


class ScanConfig(BaseModel):
	model_config = ConfigDict(frozen=True)

	ignored_dirs: FrozenSet[str] = DEFAULT_IGNORED_DIRS
	ignored_files: FrozenSet[str] = IGNORED_FILES
	binary_extensions: FrozenSet[str] = BINARY_EXTENSIONS
	max_file_size: int = MAX_SCAN_FILE_SIZE
	max_block_chars: int = MAX_BLOCK_CHARS
	max_workers: int = Field(default=DEFAULT_MAX_WORKERS, gt=0)


def build_ignored_set(extra: Optional[Iterable[str]] = None) -> FrozenSet[str]:
	names = set(DEFAULT_IGNORED_DIRS)
	for name in extra or []:
		cleaned = str(name or "").strip().lower()
		if cleaned:
			names.add(cleaned)
	return frozenset(names)


def _env_int(name: str) -> Optional[int]:
	raw = os.environ.get(name)
	if raw is None:
		return None
	try:
		value = int(raw)
	except ValueError:
		logger.warning("Ignoring %s=%r: not an integer", name, raw)
		return None
	if value <= 0:
		logger.warning("Ignoring %s=%r: must be positive", name, raw)
		return None
	return value


def load_config(extra_ignored: Optional[Iterable[str]] = None, **overrides) -> ScanConfig:
	"""Build a ScanConfig from defaults, environment and explicit overrides.

	Explicit keyword overrides win over environment variables.
	"""
	values = {"ignored_dirs": build_ignored_set(extra_ignored)}
	workers = _env_int(ENV_MAX_WORKERS)
	if workers is not None:
		values["max_workers"] = workers
	max_size = _env_int(ENV_MAX_FILE_SIZE)
	if max_size is not None:
		values["max_file_size"] = max_size
	values.update(overrides)
	return ScanConfig(**values)
