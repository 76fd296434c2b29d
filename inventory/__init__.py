"""Workspace inventory: lexical facts, duplicates and cross-references across projects.

Modules:
- fs_scan.py: Directory walking with an ignore set.
- projects.py: Project root detection and naming.
- lex_parse.py: Regex and brace-matching extraction of declarations and imports.
- fingerprint.py: Content hashing and duplicate file grouping.
- crossref.py: Inter-project references and shared identifiers.
- summarize.py: Per-project aggregation and text summaries.
- scan.py: The scan entry point.
"""

from .errors import InvalidRootError, ScanError
from .scan import scan

__all__ = [
	"InvalidRootError",
	"ScanError",
	"scan",
]
