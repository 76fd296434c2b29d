"""Workspace scan: discover projects, extract facts and cross-reference them."""

from __future__ import annotations

import functools
import logging
import os
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from .config import ScanConfig, build_ignored_set, load_config
from .crossref import find_shared_identifiers, index_project_names, resolve_references
from .errors import InvalidRootError
from .fingerprint import FileRef, find_duplicate_files, hash_text
from .fs_scan import walk_files
from .lex_parse import extract_file, read_source
from .model import (
	FileExtraction,
	FileInfo,
	IdentifierDetail,
	ProjectInventory,
	ScanReport,
)
from .projects import find_project_roots, project_name
from .summarize import aggregate_project, build_report
from .tech import technologies_for_file, technologies_from_manifest
from .vcs import has_uncommitted_changes

logger = logging.getLogger(__name__)

STATUS_WORKERS = 4


class FileOutcome(NamedTuple):
	path: str
	rel_path: str
	technologies: Set[str]
	fingerprint: bool
	extraction: Optional[FileExtraction]
	identifiers: List[IdentifierDetail]


def inspect_file(path: str, project_root: str, config: ScanConfig) -> Optional[FileOutcome]:
	if os.path.basename(path).lower() in config.ignored_files:
		return None
	rel_path = os.path.relpath(path, project_root)
	try:
		non_empty = os.path.getsize(path) > 0
	except OSError:
		non_empty = False

	extraction = None
	identifiers: List[IdentifierDetail] = []
	text = read_source(path, config)
	if text is not None:
		extraction = extract_file(text, config.max_block_chars)
		identifiers = [
			IdentifierDetail(
				name=block.name,
				kind=block.kind,
				rel_path=rel_path,
				content_hash=hash_text(block.text),
			)
			for block in extraction.blocks
		]
	return FileOutcome(
		path=path,
		rel_path=rel_path,
		technologies=technologies_for_file(path),
		fingerprint=non_empty,
		extraction=extraction,
		identifiers=identifiers,
	)


def inspect_project(project_root: str, config: ScanConfig, executor: Executor) -> ProjectInventory:
	paths = walk_files(project_root, config.ignored_dirs)
	inventory = ProjectInventory(name=project_name(project_root), root_path=project_root)
	mentions: Dict[str, None] = {}

	worker = functools.partial(inspect_file, project_root=project_root, config=config)
	for outcome in executor.map(worker, paths):
		if outcome is None:
			continue
		inventory.technologies.update(outcome.technologies)
		if outcome.fingerprint:
			inventory.fingerprint_paths.append(outcome.rel_path)
		extraction = outcome.extraction
		if extraction is None:
			continue
		inventory.files.append(
			FileInfo(
				path=outcome.path,
				rel_path=outcome.rel_path,
				variables=[v.name for v in extraction.variables],
				functions=extraction.functions,
				classes=extraction.classes,
				methods=extraction.methods,
			)
		)
		inventory.variables.extend(extraction.variables)
		inventory.identifiers.extend(outcome.identifiers)
		for mention in extraction.references:
			mentions.setdefault(mention, None)

	inventory.reference_mentions = list(mentions)
	inventory.technologies.update(technologies_from_manifest(project_root))
	logger.debug(
		"Inspected %s: %d files parsed, %d fingerprinted",
		inventory.name, len(inventory.files), len(inventory.fingerprint_paths),
	)
	return inventory


def _resolve_config(
	extra_ignored_folder_names: Optional[Iterable[str]],
	config: Optional[ScanConfig],
) -> ScanConfig:
	if config is None:
		return load_config(extra_ignored_folder_names)
	if extra_ignored_folder_names:
		ignored = config.ignored_dirs | build_ignored_set(extra_ignored_folder_names)
		return config.model_copy(update={"ignored_dirs": ignored})
	return config


def scan(
	root_directory: str,
	extra_ignored_folder_names: Optional[Iterable[str]] = None,
	config: Optional[ScanConfig] = None,
) -> ScanReport:
	"""Scan every project below ``root_directory`` and cross-reference them.

	Raises InvalidRootError when the root is missing or not a directory. Any
	other problem (unreadable files or directories, broken manifests, git
	failures) only makes the report less complete.
	"""
	if not root_directory or not os.path.isdir(root_directory):
		raise InvalidRootError(root_directory)
	root = os.path.abspath(root_directory)
	config = _resolve_config(extra_ignored_folder_names, config)

	roots = find_project_roots(root, config.ignored_dirs)
	logger.info("Found %d projects under %s", len(roots), root)

	with ThreadPoolExecutor(max_workers=STATUS_WORKERS) as status_pool, \
			ThreadPoolExecutor(max_workers=config.max_workers) as pool:
		status = [status_pool.submit(has_uncommitted_changes, r) for r in roots]
		inventories = [inspect_project(r, config, pool) for r in roots]
		refs = [
			FileRef(inv.name, rel, os.path.join(inv.root_path, rel))
			for inv in inventories
			for rel in inv.fingerprint_paths
		]
		duplicates = find_duplicate_files(refs, executor=pool)
		dirty = [future.result() for future in status]

	known = index_project_names(inv.name for inv in inventories)
	projects = []
	for inventory, is_dirty in zip(inventories, dirty):
		references, external = resolve_references(inventory.name, inventory.reference_mentions, known)
		projects.append(aggregate_project(inventory, is_dirty, references, external))

	shared = find_shared_identifiers((inv.name, inv.identifiers) for inv in inventories)
	logger.info(
		"Scan of %s finished: %d duplicate groups, %d shared identifiers",
		root, len(duplicates), len(shared),
	)
	return build_report(projects, duplicates, shared)
