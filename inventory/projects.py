from __future__ import annotations

import logging
import os
from typing import AbstractSet, List, Optional

from .config import (
	CONTAINER_DIR_NAME,
	CONTAINER_ROOT_NAMES,
	PROJECT_MARKERS,
	SERVERLESS_SEGMENTS,
)
from .fs_scan import walk_directories

logger = logging.getLogger(__name__)


def _segments(path: str) -> List[str]:
	return [s.lower() for s in os.path.normpath(path).split(os.sep)]


def _serverless_index(path: str) -> Optional[int]:
	segments = _segments(path)
	first, second = SERVERLESS_SEGMENTS
	for i, segment in enumerate(segments[:-1]):
		if segment == first and segments[i + 1] == second:
			return i
	return None


def is_project_directory(path: str) -> bool:
	return any(os.path.exists(os.path.join(path, marker)) for marker in PROJECT_MARKERS)


def is_container_directory(path: str) -> bool:
	normalized = os.path.normpath(path)
	name = os.path.basename(normalized).lower()
	parent = os.path.basename(os.path.dirname(normalized)).lower()
	return name == CONTAINER_DIR_NAME or (parent == CONTAINER_DIR_NAME and name in CONTAINER_ROOT_NAMES)


def is_serverless_functions_path(path: str) -> bool:
	return _serverless_index(path) is not None


def project_name(path: str) -> str:
	normalized = os.path.normpath(path)
	index = _serverless_index(normalized)
	if index is not None:
		ancestor = normalized.split(os.sep)[:index]
		if ancestor and ancestor[-1]:
			return ancestor[-1]
	return os.path.basename(normalized)


def is_project_root(path: str) -> bool:
	return (
		not is_container_directory(path)
		and is_project_directory(path)
		and not is_serverless_functions_path(path)
	)


def find_project_roots(root: str, ignored_dirs: AbstractSet[str]) -> List[str]:
	"""Return every directory below ``root`` that qualifies as a project root.

	The scan root is the workspace and never a candidate. Nested directories
	that carry their own markers are reported as separate projects.
	"""
	roots: List[str] = []
	for directory in walk_directories(root, ignored_dirs):
		if is_project_root(directory):
			logger.debug("Found project root %s", directory)
			roots.append(os.path.normpath(directory))
	return roots
