from typing import Dict, Union

import pytest


def _write_tree(root, files: Dict[str, Union[str, bytes]]):
	for rel, content in files.items():
		path = root / rel
		path.parent.mkdir(parents=True, exist_ok=True)
		if isinstance(content, bytes):
			path.write_bytes(content)
		else:
			path.write_text(content, encoding="utf-8")
	return root


@pytest.fixture
def write_tree():
	return _write_tree


@pytest.fixture
def workspace(tmp_path):
	ws = tmp_path / "ws"
	ws.mkdir()
	return ws
