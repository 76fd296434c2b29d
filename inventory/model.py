from __future__ import annotations

from typing import Dict, List, Literal, Set

from pydantic import BaseModel, ConfigDict, Field


BlockKind = Literal["function", "method", "class"]
ScopeKind = Literal["global", "class", "function", "method"]
Strength = Literal["soft", "hard"]

SCOPE_KINDS: List[str] = ["global", "class", "function", "method"]


class FileInfo(BaseModel):
	model_config = ConfigDict(frozen=True)

	path: str
	rel_path: str
	variables: List[str] = []
	functions: List[str] = []
	classes: List[str] = []
	methods: List[str] = []


class CodeBlock(BaseModel):
	"""A brace-delimited scope; ``start`` and ``end`` are both inclusive."""

	name: str
	kind: BlockKind
	text: str
	start: int
	end: int

	@property
	def span(self) -> int:
		return self.end - self.start

	def contains(self, offset: int) -> bool:
		return self.start <= offset <= self.end


class VariableDetail(BaseModel):
	name: str
	offset: int
	scope: ScopeKind


class IdentifierDetail(BaseModel):
	name: str
	kind: BlockKind
	rel_path: str
	content_hash: str


class FileExtraction(BaseModel):
	variables: List[VariableDetail] = []
	functions: List[str] = []
	classes: List[str] = []
	methods: List[str] = []
	blocks: List[CodeBlock] = []
	references: List[str] = []


class ProjectInventory(BaseModel):
	"""Per-project extraction state carried between scan phases."""

	name: str
	root_path: str
	files: List[FileInfo] = Field(default_factory=list)
	variables: List[VariableDetail] = Field(default_factory=list)
	identifiers: List[IdentifierDetail] = Field(default_factory=list)
	reference_mentions: List[str] = Field(default_factory=list)
	technologies: Set[str] = Field(default_factory=set)
	fingerprint_paths: List[str] = Field(default_factory=list)


class Project(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	root_path: str
	files: List[FileInfo] = []
	technologies: List[str] = []
	has_uncommitted_changes: bool = False
	variables: List[str] = []
	functions: List[str] = []
	classes: List[str] = []
	methods: List[str] = []
	variables_by_scope: Dict[str, List[str]] = {}
	references: List[str] = []
	external_references: List[str] = []


class DuplicateEntry(BaseModel):
	projects: List[str]
	files: List[str]


class SharedIdentifierEntry(BaseModel):
	name: str
	kind: BlockKind
	projects: List[str]
	strength: Strength
	hard_overlap_groups: List[List[str]] = []


class ScanReport(BaseModel):
	projects: List[Project] = []
	duplicates: List[DuplicateEntry] = []
	shared_identifiers: List[SharedIdentifierEntry] = []