import pytest

from inventory.crossref import (
	find_shared_identifiers,
	index_project_names,
	matches_project_name,
	resolve_references,
)
from inventory.model import IdentifierDetail


@pytest.mark.parametrize(
	"mention",
	[
		"beta",
		"../beta",
		"../beta/index",
		"@beta/core",
		"workspace:beta",
		"beta/utils",
		"beta.config",
		"BETA",
	],
)
def test_matches_project_name(mention):
	assert matches_project_name(mention, "beta")


@pytest.mark.parametrize("mention", ["react", "./alphabet", "betamax"])
def test_does_not_match_unrelated_mentions(mention):
	assert not matches_project_name(mention, "beta")


def test_resolve_references_per_direction():
	known = index_project_names(["alpha", "Beta", "gamma"])
	refs, external = resolve_references("alpha", ["../beta/index", "react", "@beta/ui", "gamma.js"], known)
	assert refs == ["Beta", "gamma"]
	assert external == ["react"]

	refs, external = resolve_references("Beta", ["lodash"], known)
	assert refs == []
	assert external == ["lodash"]


def test_project_never_references_itself():
	known = index_project_names(["alpha", "beta"])
	refs, external = resolve_references("alpha", ["alpha/lib"], known)
	assert refs == []
	assert external == ["alpha/lib"]


def _detail(name, kind, content_hash, rel_path="x.js"):
	return IdentifierDetail(name=name, kind=kind, rel_path=rel_path, content_hash=content_hash)


def test_find_shared_identifiers_strength():
	details = [
		("alpha", [_detail("add", "function", "h1"), _detail("Box", "class", "c1"), _detail("solo", "function", "s")]),
		("beta", [_detail("add", "function", "h1"), _detail("Box", "class", "c2")]),
		("gamma", [_detail("add", "function", "h2"), _detail("Box", "method", "c1")]),
	]
	shared = find_shared_identifiers(details)
	assert [(s.name, s.kind) for s in shared] == [("add", "function"), ("Box", "class")]

	add, box = shared
	assert add.strength == "hard"
	assert add.projects == ["alpha", "beta", "gamma"]
	assert add.hard_overlap_groups == [["alpha", "beta"]]
	assert box.strength == "soft"
	assert box.hard_overlap_groups == []


def test_same_project_repeats_are_not_shared():
	details = [("alpha", [_detail("init", "method", "a", "a.js"), _detail("init", "method", "a", "b.js")])]
	assert find_shared_identifiers(details) == []
