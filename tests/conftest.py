"""Shared fixtures for Maven Overview tests."""

import json

import pytest

from maven_overview.dependency_graph import TreeNode


def dep(coordinate: str, scope: str | None = "compile", *children: TreeNode) -> TreeNode:
    """Build a TreeNode from 'group:artifact:version'."""
    group_id, artifact_id, version = coordinate.split(":")
    return TreeNode(group_id, artifact_id, version, scope=scope, children=tuple(children))


@pytest.fixture
def sample_tree() -> TreeNode:
    """
    com.example:app:1.0
    +- com.example:core:1.0 (compile)
    |  \\- org.slf4j:slf4j-api:2.0.9 (compile)
    +- junit:junit:4.13.2 (test)
    |  \\- org.hamcrest:hamcrest-core:1.3 (test)
    \\- org.other:lib:1.0 (compile)
       \\- com.google.guava:guava:32.1.3-jre (compile)
    """
    return dep(
        "com.example:app:1.0",
        None,
        dep("com.example:core:1.0", "compile", dep("org.slf4j:slf4j-api:2.0.9")),
        dep("junit:junit:4.13.2", "test", dep("org.hamcrest:hamcrest-core:1.3", "test")),
        dep("org.other:lib:1.0", "compile", dep("com.google.guava:guava:32.1.3-jre")),
    )


@pytest.fixture
def sample_tree_json() -> dict:
    """The sample tree in maven-dependency-plugin JSON format."""
    return {
        "groupId": "com.example",
        "artifactId": "app",
        "version": "1.0",
        "type": "jar",
        "scope": "",
        "classifier": "",
        "optional": "false",
        "children": [
            {
                "groupId": "com.example",
                "artifactId": "core",
                "version": "1.0",
                "type": "jar",
                "scope": "compile",
                "classifier": "",
                "optional": "false",
                "children": [
                    {
                        "groupId": "org.slf4j",
                        "artifactId": "slf4j-api",
                        "version": "2.0.9",
                        "type": "jar",
                        "scope": "compile",
                        "classifier": "",
                        "optional": "false",
                    }
                ],
            },
            {
                "groupId": "junit",
                "artifactId": "junit",
                "version": "4.13.2",
                "type": "jar",
                "scope": "test",
                "classifier": "",
                "optional": "false",
                "children": [
                    {
                        "groupId": "org.hamcrest",
                        "artifactId": "hamcrest-core",
                        "version": "1.3",
                        "type": "jar",
                        "scope": "test",
                        "classifier": "",
                        "optional": "false",
                        "children": [],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def sample_tree_file(tmp_path, sample_tree_json):
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(sample_tree_json))
    return path


@pytest.fixture
def make_dep():
    """Factory for TreeNode values from 'group:artifact:version' strings."""
    return dep
