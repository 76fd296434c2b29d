from __future__ import annotations

import logging
import os
from typing import AbstractSet, Iterator, List, Tuple

logger = logging.getLogger(__name__)


def _list_dir(path: str) -> List[os.DirEntry]:
	try:
		with os.scandir(path) as it:
			entries = list(it)
	except OSError as e:
		logger.debug("Skipping unreadable directory %s: %s", path, e)
		return []
	return sorted(entries, key=lambda entry: entry.name)


def _has_text_name(entry: os.DirEntry) -> bool:
	try:
		entry.name.encode("utf-8")
	except UnicodeEncodeError:
		logger.debug("Skipping entry with undecodable name %r", entry.path)
		return False
	return True


def _is_dir(entry: os.DirEntry) -> bool:
	try:
		return entry.is_dir()
	except OSError:
		return False


def _is_file(entry: os.DirEntry) -> bool:
	try:
		return entry.is_file()
	except OSError:
		return False


def _walk(root: str, ignored_dirs: AbstractSet[str]) -> Iterator[Tuple[str, List[os.DirEntry]]]:
	# Depth-first, children in name order; canonical paths guard against symlink loops
	visited = set()
	stack = [root]
	while stack:
		current = stack.pop()
		real = os.path.realpath(current)
		if real in visited:
			logger.debug("Skipping already visited directory %s", current)
			continue
		visited.add(real)

		entries = [
			e for e in _list_dir(current)
			if e.name.lower() not in ignored_dirs and _has_text_name(e)
		]
		yield current, entries
		subdirs = [e.path for e in entries if _is_dir(e)]
		stack.extend(reversed(subdirs))


def walk_files(root: str, ignored_dirs: AbstractSet[str]) -> List[str]:
	files: List[str] = []
	for _, entries in _walk(root, ignored_dirs):
		for entry in entries:
			if _is_file(entry):
				files.append(entry.path)
	return files


def walk_directories(root: str, ignored_dirs: AbstractSet[str]) -> Iterator[str]:
	"""Yield every non-ignored directory below ``root`` (``root`` itself excluded)."""
	for current, _ in _walk(root, ignored_dirs):
		if current != root:
			yield current
