from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

STATUS_TIMEOUT = 10


def has_uncommitted_changes(project_root: str) -> bool:
	"""Whether the git working tree at ``project_root`` is dirty.

	False when there is no ``.git`` directory or git cannot answer.
	"""
	if not os.path.isdir(os.path.join(project_root, ".git")):
		return False
	try:
		status = subprocess.check_output(
			["git", "status", "--porcelain"],
			cwd=project_root,
			stderr=subprocess.DEVNULL,
			timeout=STATUS_TIMEOUT,
		).decode(errors="replace").strip()
	except subprocess.TimeoutExpired:
		logger.warning("git status timed out in %s", project_root)
		return False
	except subprocess.CalledProcessError:
		logger.debug("git status failed in %s", project_root)
		return False
	except OSError:
		logger.debug("git not available")
		return False
	return len(status) > 0
