"""Cross-project resolution of import mentions and shared identifiers."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from .model import IdentifierDetail, SharedIdentifierEntry


def matches_project_name(mention: str, name: str) -> bool:
	value = mention.lower()
	name = name.lower()
	return (
		value == name
		or value.endswith(f"/{name}")
		or f"/{name}/" in value
		or f"@{name}" in value
		or f":{name}" in value
		or f"{name}/" in value
		or f"{name}." in value
	)


def index_project_names(names: Iterable[str]) -> Dict[str, str]:
	known: Dict[str, str] = {}
	for name in names:
		known.setdefault(name.lower(), name)
	return known


def resolve_references(
	project: str,
	mentions: Iterable[str],
	known: Mapping[str, str],
) -> Tuple[List[str], List[str]]:
	"""Split a project's mentions into internal references and external ones.

	``known`` maps lowercased project names to display names. A mention is
	internal when it matches the name of any other project; it then adds that
	project once. Unmatched mentions are kept verbatim.
	"""
	own = project.lower()
	references: Dict[str, None] = {}
	external: Dict[str, None] = {}
	for mention in mentions:
		matched = False
		for lower_name, original in known.items():
			if lower_name != own and matches_project_name(mention, lower_name):
				matched = True
				references.setdefault(original, None)
		if not matched:
			external.setdefault(mention, None)
	return list(references), list(external)


def find_shared_identifiers(
	details_by_project: Iterable[Tuple[str, Sequence[IdentifierDetail]]],
) -> List[SharedIdentifierEntry]:
	groups: Dict[Tuple[str, str], List[Tuple[str, str]]] = {}
	for project, details in details_by_project:
		for detail in details:
			groups.setdefault((detail.kind, detail.name), []).append((project, detail.content_hash))

	shared: List[SharedIdentifierEntry] = []
	for (kind, name), members in groups.items():
		projects = list(dict.fromkeys(project for project, _ in members))
		if len(projects) < 2:
			continue

		by_hash: Dict[str, Dict[str, None]] = {}
		for project, content_hash in members:
			if content_hash:
				by_hash.setdefault(content_hash, {}).setdefault(project, None)
		overlaps = [list(group) for group in by_hash.values() if len(group) > 1]

		shared.append(
			SharedIdentifierEntry(
				name=name,
				kind=kind,
				projects=projects,
				strength="hard" if overlaps else "soft",
				hard_overlap_groups=overlaps,
			)
		)

	shared.sort(key=lambda entry: (entry.name.lower(), entry.name, entry.kind))
	return shared