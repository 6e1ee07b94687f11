"""
Tests for the Maven dependency tree tool.
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from maven_overview.exceptions import DependencyResolutionError
from maven_overview.external_tools.maven import (
    TREE_OUTPUT_FILE,
    MavenTreeTool,
    load_tree_file,
    parse_tree_json,
)


def fake_process(returncode=0, stdout=b"", stderr=b""):
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    return process


def write_pom(directory, artifact_id, modules=()):
    directory.mkdir(parents=True, exist_ok=True)
    module_xml = "".join(f"<module>{module}</module>" for module in modules)
    (directory / "pom.xml").write_text(
        f"<project><groupId>com.example</groupId><artifactId>{artifact_id}</artifactId>"
        f"<modules>{module_xml}</modules></project>"
    )


class TestParseTreeJson:
    """Test parsing of maven-dependency-plugin JSON output."""

    def test_parse_sample(self, sample_tree_json):
        root = parse_tree_json(sample_tree_json)

        assert (root.group_id, root.artifact_id, root.version) == ("com.example", "app", "1.0")
        assert root.scope is None
        assert [child.artifact_id for child in root.children] == ["core", "junit"]
        core, junit = root.children
        assert core.scope == "compile"
        assert core.children[0].artifact_id == "slf4j-api"
        assert core.children[0].children == ()
        assert junit.scope == "test"

    def test_defaults_for_missing_fields(self):
        node = parse_tree_json(
            {
                "groupId": "g",
                "artifactId": "a",
                "children": [
                    {
                        "groupId": "g",
                        "artifactId": "b",
                        "version": "1",
                        "type": "test-jar",
                        "classifier": "tests",
                        "scope": "test",
                        "optional": "true",
                    }
                ],
            }
        )

        assert node.version == "unknown"
        assert node.packaging == "jar"
        assert node.classifier == ""
        child = node.children[0]
        assert child.packaging == "test-jar"
        assert child.classifier == "tests"

    def test_missing_coordinates(self):
        with pytest.raises(DependencyResolutionError, match="without groupId/artifactId"):
            parse_tree_json({"groupId": "g", "children": []})

    def test_non_object_node(self):
        with pytest.raises(DependencyResolutionError, match="Expected a JSON object"):
            parse_tree_json(["not", "a", "node"])


class TestLoadTreeFile:
    """Test loading tree files from disk."""

    def test_load(self, sample_tree_file):
        assert load_tree_file(sample_tree_file).artifact_id == "app"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DependencyResolutionError, match="not found"):
            load_tree_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text("{not json")

        with pytest.raises(DependencyResolutionError, match="Failed to read"):
            load_tree_file(path)


class TestMavenTreeTool:
    """Test MavenTreeTool subprocess handling."""

    def test_name(self):
        assert MavenTreeTool().name == "mvn"

    def test_is_available(self):
        with patch("maven_overview.external_tools.maven.shutil.which", return_value=None):
            assert MavenTreeTool().is_available() is False
        with patch(
            "maven_overview.external_tools.maven.shutil.which",
            return_value="/usr/bin/mvn",
        ):
            assert MavenTreeTool().is_available() is True

    def test_resolve_tree_without_maven(self, tmp_path):
        tool = MavenTreeTool()
        with patch.object(MavenTreeTool, "is_available", return_value=False):
            with pytest.raises(DependencyResolutionError, match="not installed"):
                asyncio.run(tool.resolve_tree(tmp_path))

    def test_resolve_tree(self, tmp_path, sample_tree_json):
        async def create_process(*args, cwd, **kwargs):
            output = tmp_path / TREE_OUTPUT_FILE
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(json.dumps(sample_tree_json))
            return fake_process()

        tool = MavenTreeTool()
        with (
            patch.object(MavenTreeTool, "is_available", return_value=True),
            patch(
                "maven_overview.external_tools.maven.asyncio.create_subprocess_exec",
                side_effect=create_process,
            ) as mock_exec,
        ):
            tree = asyncio.run(tool.resolve_tree(tmp_path))

        assert tree.artifact_id == "app"
        args = mock_exec.call_args.args
        assert args[:2] == ("mvn", "dependency:tree")
        assert "-DoutputType=json" in args
        assert "-N" in args
        assert mock_exec.call_args.kwargs["cwd"] == str(tmp_path)

    def test_resolve_tree_maven_failure(self, tmp_path):
        tool = MavenTreeTool()
        with (
            patch.object(MavenTreeTool, "is_available", return_value=True),
            patch(
                "maven_overview.external_tools.maven.asyncio.create_subprocess_exec",
                new=AsyncMock(
                    return_value=fake_process(1, b"", b"Could not resolve dependencies")
                ),
            ),
        ):
            with pytest.raises(DependencyResolutionError, match="Could not resolve"):
                asyncio.run(tool.resolve_tree(tmp_path))

    def test_resolve_tree_missing_output(self, tmp_path):
        tool = MavenTreeTool()
        with (
            patch.object(MavenTreeTool, "is_available", return_value=True),
            patch(
                "maven_overview.external_tools.maven.asyncio.create_subprocess_exec",
                new=AsyncMock(return_value=fake_process()),
            ),
        ):
            with pytest.raises(DependencyResolutionError, match="output file was not created"):
                asyncio.run(tool.resolve_tree(tmp_path))

    def test_resolve_reactor(self, tmp_path):
        write_pom(tmp_path, "parent", modules=["module-a", "module-b"])
        write_pom(tmp_path / "module-a", "module-a")
        write_pom(tmp_path / "module-b", "module-b")

        async def create_process(*args, cwd, **kwargs):
            for name in ("parent", "module-a", "module-b"):
                module_dir = tmp_path if name == "parent" else tmp_path / name
                output = module_dir / TREE_OUTPUT_FILE
                output.parent.mkdir(parents=True, exist_ok=True)
                output.write_text(
                    json.dumps(
                        {"groupId": "com.example", "artifactId": name, "version": "1.0"}
                    )
                )
            return fake_process()

        tool = MavenTreeTool()
        with (
            patch.object(MavenTreeTool, "is_available", return_value=True),
            patch(
                "maven_overview.external_tools.maven.asyncio.create_subprocess_exec",
                side_effect=create_process,
            ) as mock_exec,
        ):
            trees = asyncio.run(tool.resolve_reactor(tmp_path))

        assert [tree.artifact_id for tree in trees] == ["parent", "module-a", "module-b"]
        assert "-N" not in mock_exec.call_args.args
