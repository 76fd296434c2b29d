from __future__ import annotations

import hashlib
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Dict, List, NamedTuple, Optional, Sequence

from .config import DEFAULT_MAX_WORKERS
from .model import DuplicateEntry

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 65536


class FileRef(NamedTuple):
	project: str
	rel_path: str
	path: str


def hash_file(path: str) -> str:
	sha1 = hashlib.sha1()
	with open(path, "rb") as fh:
		for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
			sha1.update(chunk)
	return sha1.hexdigest()


def hash_text(text: str) -> str:
	return hashlib.sha1(text.encode("utf-8")).hexdigest()


def _try_hash(ref: FileRef) -> Optional[str]:
	try:
		return hash_file(ref.path)
	except OSError as e:
		logger.debug("Dropping %s from duplicate detection: %s", ref.path, e)
		return None


def group_by_hash(refs: Sequence[FileRef], hashes: Sequence[Optional[str]]) -> Dict[str, List[FileRef]]:
	groups: Dict[str, List[FileRef]] = {}
	for ref, digest in zip(refs, hashes):
		if digest is not None:
			groups.setdefault(digest, []).append(ref)
	return groups


def find_duplicate_files(
	refs: Sequence[FileRef],
	executor: Optional[Executor] = None,
	max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[DuplicateEntry]:
	"""Group files by content hash and report groups shared by several projects.

	Hashing runs on ``executor`` (or a private thread pool); grouping happens
	afterwards on the calling thread, in input order.
	"""
	refs = list(refs)
	if executor is None:
		with ThreadPoolExecutor(max_workers=max_workers) as pool:
			hashes = list(pool.map(_try_hash, refs))
	else:
		hashes = list(executor.map(_try_hash, refs))

	duplicates: List[DuplicateEntry] = []
	for members in group_by_hash(refs, hashes).values():
		projects = list(dict.fromkeys(ref.project for ref in members))
		if len(projects) > 1:
			duplicates.append(
				DuplicateEntry(
					projects=projects,
					files=[f"{ref.project}/{ref.rel_path}" for ref in members],
				)
			)
	return duplicates
