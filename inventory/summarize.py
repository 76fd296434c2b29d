from __future__ import annotations

from typing import Dict, Iterable, List, Set

from .model import (
	SCOPE_KINDS,
	DuplicateEntry,
	Project,
	ProjectInventory,
	ScanReport,
	SharedIdentifierEntry,
)


def _unique_sorted(names: Iterable[str]) -> List[str]:
	return sorted(set(names))


def group_variables_by_scope(inventory: ProjectInventory) -> Dict[str, List[str]]:
	groups: Dict[str, Set[str]] = {scope: set() for scope in SCOPE_KINDS}
	for detail in inventory.variables:
		groups[detail.scope].add(detail.name)
	return {scope: sorted(names) for scope, names in groups.items()}


def aggregate_project(
	inventory: ProjectInventory,
	has_uncommitted_changes: bool,
	references: List[str],
	external_references: List[str],
) -> Project:
	files = inventory.files
	return Project(
		name=inventory.name,
		root_path=inventory.root_path,
		files=files,
		technologies=sorted(inventory.technologies),
		has_uncommitted_changes=has_uncommitted_changes,
		variables=_unique_sorted(v for f in files for v in f.variables),
		functions=_unique_sorted(n for f in files for n in f.functions),
		classes=_unique_sorted(n for f in files for n in f.classes),
		methods=_unique_sorted(n for f in files for n in f.methods),
		variables_by_scope=group_variables_by_scope(inventory),
		references=references,
		external_references=external_references,
	)


def build_report(
	projects: List[Project],
	duplicates: List[DuplicateEntry],
	shared_identifiers: List[SharedIdentifierEntry],
) -> ScanReport:
	return ScanReport(
		projects=projects,
		duplicates=duplicates,
		shared_identifiers=shared_identifiers,
	)


def summarize_project(p: Project) -> str:
	parts: List[str] = []
	parts.append(f"Project {p.name} at {p.root_path}")
	parts.append(
		f"  {len(p.files)} files, {len(p.functions)} functions, "
		f"{len(p.classes)} classes, {len(p.methods)} methods, {len(p.variables)} variables"
	)
	if p.technologies:
		parts.append(f"  Technologies: {', '.join(p.technologies)}")
	if p.has_uncommitted_changes:
		parts.append("  Uncommitted changes")
	if p.references:
		parts.append(f"  References: {', '.join(p.references)}")
	if p.external_references:
		parts.append(f"  External: {', '.join(sorted(p.external_references)[:10])}")
	return "\n".join(parts)


def summarize_report(report: ScanReport) -> str:
	hard = [s for s in report.shared_identifiers if s.strength == "hard"]
	parts: List[str] = [
		f"{len(report.projects)} projects, {len(report.duplicates)} duplicated files, "
		f"{len(report.shared_identifiers)} shared identifiers ({len(hard)} hard)"
	]
	for p in report.projects:
		parts.append(summarize_project(p))
	for d in report.duplicates:
		parts.append(f"Duplicate across {', '.join(d.projects)}: {', '.join(d.files)}")
	for s in hard:
		groups = "; ".join(", ".join(g) for g in s.hard_overlap_groups)
		parts.append(f"Shared {s.kind} {s.name}: {groups}")
	return "\n".join(parts)
