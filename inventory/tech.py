from __future__ import annotations

import json
import logging
import os
from typing import Dict, Optional, Set

logger = logging.getLogger(__name__)


EXTENSION_TECH: Dict[str, str] = {
	".js": "JavaScript",
	".mjs": "JavaScript",
	".cjs": "JavaScript",
	".jsx": "React (JSX)",
	".ts": "TypeScript",
	".tsx": "React (TSX)",
	".json": "JSON",
	".html": "HTML",
	".htm": "HTML",
	".css": "CSS",
	".scss": "Sass/SCSS",
	".sass": "Sass/SCSS",
	".less": "Less",
	".md": "Markdown",
	".py": "Python",
	".rb": "Ruby",
	".java": "Java",
	".cs": "C#",
	".go": "Go",
	".php": "PHP",
	".rs": "Rust",
	".swift": "Swift",
	".kt": "Kotlin",
	".cpp": "C++",
	".c": "C",
}

BASENAME_TECH: Dict[str, str] = {
	"dockerfile": "Docker",
	"docker-compose.yml": "Docker Compose",
	"docker-compose.yaml": "Docker Compose",
	"makefile": "Makefile",
}

PACKAGE_TECH: Dict[str, str] = {
	"react": "React",
	"react-dom": "React DOM",
	"vue": "Vue",
	"@angular/core": "Angular",
	"express": "Express",
	"next": "Next.js",
	"nuxt": "Nuxt",
	"svelte": "Svelte",
	"@nestjs/core": "NestJS",
	"tailwindcss": "Tailwind CSS",
	"typescript": "TypeScript",
	"jest": "Jest",
	"vitest": "Vitest",
	"webpack": "Webpack",
	"rollup": "Rollup",
	"parcel": "Parcel",
	"eslint": "ESLint",
	"prettier": "Prettier",
	"@babel/core": "Babel",
}

MANIFEST_NAME = "package.json"


def technology_for_extension(ext: str) -> Optional[str]:
	return EXTENSION_TECH.get(ext.lower())


def technology_for_basename(name: str) -> Optional[str]:
	return BASENAME_TECH.get(name.lower())


def technologies_for_file(path: str) -> Set[str]:
	found: Set[str] = set()
	by_ext = technology_for_extension(os.path.splitext(path)[1])
	if by_ext:
		found.add(by_ext)
	by_name = technology_for_basename(os.path.basename(path))
	if by_name:
		found.add(by_name)
	return found


def technologies_from_manifest(project_root: str) -> Set[str]:
	manifest = os.path.join(project_root, MANIFEST_NAME)
	if not os.path.isfile(manifest):
		return set()
	try:
		with open(manifest, "r", encoding="utf-8") as fh:
			pkg = json.load(fh)
	except (OSError, ValueError) as e:
		logger.debug("Ignoring unreadable manifest %s: %s", manifest, e)
		return set()
	if not isinstance(pkg, dict):
		return set()

	found = {"Node.js"}
	for section in ("dependencies", "devDependencies"):
		deps = pkg.get(section)
		if not isinstance(deps, dict):
			continue
		for dep in deps:
			if dep in PACKAGE_TECH:
				found.add(PACKAGE_TECH[dep])
	return found
