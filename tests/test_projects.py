import os

from inventory.config import build_ignored_set
from inventory.projects import (
	find_project_roots,
	is_container_directory,
	is_serverless_functions_path,
	project_name,
)


def test_find_project_roots(workspace, write_tree):
	write_tree(workspace, {
		"package.json": "{}",
		"alpha/package.json": '{"name": "alpha"}',
		"alpha/packages/inner/pyproject.toml": "",
		"alpha/netlify/functions/package.json": "{}",
		"beta/requirements.txt": "flask",
		"plain/readme.md": "# hi",
		"node_modules/pkg/package.json": "{}",
		"svn/package.json": "{}",
		"svn/bitbucket/package.json": "{}",
		"svn/bitbucket/repo/Gemfile": "",
		"gamma/.git/HEAD": "ref",
	})
	roots = find_project_roots(str(workspace), build_ignored_set())
	rel = [os.path.relpath(r, workspace) for r in roots]
	assert rel == [
		"alpha",
		os.path.join("alpha", "packages", "inner"),
		"beta",
		"gamma",
		os.path.join("svn", "bitbucket", "repo"),
	]


def test_container_directories():
	assert is_container_directory("/work/svn")
	assert is_container_directory("/work/SVN/Bitbucket")
	assert not is_container_directory("/work/bitbucket")
	assert not is_container_directory("/work/svn/bitbucket/repo")


def test_serverless_functions_path():
	assert is_serverless_functions_path("/work/site/netlify/functions")
	assert is_serverless_functions_path("/work/site/Netlify/Functions/api")
	assert not is_serverless_functions_path("/work/site/netlify")
	assert not is_serverless_functions_path("/work/functions/netlify")


def test_project_name():
	assert project_name("/work/alpha") == "alpha"
	assert project_name("/work/alpha/") == "alpha"
	assert project_name("/work/site/netlify/functions/api") == "site"
