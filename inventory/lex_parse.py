"""Lexical extraction of declarations, scopes and import targets.

No parser is involved: declarations are found with regular expressions and
their bodies are delimited by counting braces. Brace characters inside
strings, comments or regex literals are counted like any other, so results
are an approximation.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from .config import MAX_BLOCK_CHARS, ScanConfig
from .model import CodeBlock, FileExtraction, VariableDetail

logger = logging.getLogger(__name__)


_NAME = r"[a-zA-Z_$][\w$]*"

FUNCTION_BLOCK = re.compile(r"function\s+(" + _NAME + r")\s*\([^)]*\)\s*\{", re.ASCII)
# Matches any "name(...) {" at the start of a line: methods, but also if/for/while
METHOD_BLOCK = re.compile(r"\n\s*(" + _NAME + r")\s*\([^;]*\)\s*\{", re.ASCII)
CLASS_BLOCK = re.compile(
	r"class\s+(" + _NAME + r")\s*(?:extends\s+" + _NAME + r")?\s*\{", re.ASCII
)

BLOCK_PATTERNS: List[Tuple[str, Pattern[str]]] = [
	("function", FUNCTION_BLOCK),
	("method", METHOD_BLOCK),
	("class", CLASS_BLOCK),
]

VARIABLE_DECL = re.compile(r"(?:const|let|var)\s+(" + _NAME + r")", re.ASCII)
FUNCTION_NAME = re.compile(r"function\s+(" + _NAME + r")", re.ASCII)
CLASS_NAME = re.compile(r"class\s+(" + _NAME + r")", re.ASCII)

_QUOTED = r"['\"`]([^'\"`]+)['\"`]"
REFERENCE_PATTERNS: List[Pattern[str]] = [
	re.compile(r"import[^'\"`]*" + _QUOTED),
	re.compile(r"require\(\s*" + _QUOTED + r"\s*\)"),
	re.compile(r"import\(\s*" + _QUOTED + r"\s*\)"),
]

SCOPE_PRIORITY: Dict[str, int] = {"method": 0, "function": 1, "class": 2}

_BRACE = re.compile(r"[{}]")
_LINE_COMMENT = re.compile(r"//[^\r\n]*")
_QUOTE = re.compile(r"['\"]")
_WHITESPACE = re.compile(r"\s+")


def find_block_end(text: str, start: int) -> Optional[int]:
	"""Index of the brace closing the first ``{`` at or after ``start``.

	Returns None when there is no opening brace, and the opening brace's own
	index when the braces never balance.
	"""
	opening = text.find("{", start)
	if opening == -1:
		return None
	depth = 0
	for match in _BRACE.finditer(text, opening):
		depth += 1 if match.group() == "{" else -1
		if depth == 0:
			return match.start()
	return opening


def normalize_code(code: str) -> str:
	code = _LINE_COMMENT.sub("", code)
	code = _QUOTE.sub('"', code)
	return _WHITESPACE.sub(" ", code).strip()


def extract_code_blocks(text: str, max_chars: int = MAX_BLOCK_CHARS) -> List[CodeBlock]:
	blocks: List[CodeBlock] = []
	for kind, pattern in BLOCK_PATTERNS:
		for match in pattern.finditer(text):
			start = match.start()
			end = find_block_end(text, start)
			if end is None:
				continue
			blocks.append(
				CodeBlock(
					name=match.group(1),
					kind=kind,
					text=normalize_code(text[start:end + 1])[:max_chars],
					start=start,
					end=end,
				)
			)
	return blocks


def resolve_scope(offset: int, blocks: Iterable[CodeBlock]) -> str:
	containing = [b for b in blocks if b.contains(offset)]
	if not containing:
		return "global"
	innermost = min(containing, key=lambda b: (SCOPE_PRIORITY[b.kind], b.span))
	return innermost.kind


def extract_variables(text: str, blocks: List[CodeBlock]) -> List[VariableDetail]:
	return [
		VariableDetail(name=m.group(1), offset=m.start(), scope=resolve_scope(m.start(), blocks))
		for m in VARIABLE_DECL.finditer(text)
	]


def extract_names(text: str, pattern: Pattern[str]) -> List[str]:
	return [m.group(1) for m in pattern.finditer(text)]


def extract_reference_targets(text: str) -> List[str]:
	targets: Dict[str, None] = {}
	for pattern in REFERENCE_PATTERNS:
		for match in pattern.finditer(text):
			if match.group(1):
				targets.setdefault(match.group(1), None)
	return list(targets)


def extract_file(text: str, max_chars: int = MAX_BLOCK_CHARS) -> FileExtraction:
	blocks = extract_code_blocks(text, max_chars)
	return FileExtraction(
		variables=extract_variables(text, blocks),
		functions=extract_names(text, FUNCTION_NAME),
		classes=extract_names(text, CLASS_NAME),
		methods=extract_names(text, METHOD_BLOCK),
		blocks=blocks,
		references=extract_reference_targets(text),
	)


def read_source(path: str, config: ScanConfig) -> Optional[str]:
	"""Return the file's text, or None when it should not be parsed."""
	ext = os.path.splitext(path)[1].lower()
	if ext in config.binary_extensions:
		return None
	try:
		size = os.path.getsize(path)
		if size == 0 or size > config.max_file_size:
			logger.debug("Skipping %s: size %d outside parse limits", path, size)
			return None
		with open(path, "rb") as fh:
			data = fh.read()
	except OSError as e:
		logger.debug("Skipping unreadable file %s: %s", path, e)
		return None
	try:
		return data.decode("utf-8")
	except UnicodeDecodeError:
		logger.debug("Skipping non UTF-8 file %s", path)
		return None
