import json

import pytest

from app.models.file_node import FileNode
from app.services.structure_formatter import format_tree
from app.utils.serializers import serialize_node, serialize_tree
from app.utils.tree_utils import calculate_tree_metrics, flatten_file_paths


@pytest.fixture
def tree():
    return FileNode("repo-main", True, [
        FileNode("README.md", False),
        FileNode("empty", True),
        FileNode("src", True, [FileNode("main.go", False)]),
    ])


def test_serialize_omits_children_for_files_and_empty_dirs(tree):
    data = json.loads(serialize_tree(tree))

    assert data["children"][0] == {"name": "README.md", "is_dir": False}
    assert data["children"][1] == {"name": "empty", "is_dir": True}
    assert data["children"][2]["children"] == [{"name": "main.go", "is_dir": False}]


def test_serialize_empty_children_list_is_omitted():
    assert serialize_node(FileNode("d", True, [])) == {"name": "d", "is_dir": True}


def test_serialize_missing_root_is_null():
    assert serialize_tree(None) == "null"


def test_serialize_keeps_unicode():
    assert '"ñandú.txt"' in serialize_tree(FileNode("ñandú.txt", False))


def test_file_cannot_have_children():
    with pytest.raises(ValueError):
        FileNode("a.txt", False).add_child(FileNode("b", False))


def test_format_tree(tree):
    assert format_tree(tree) == "\n".join([
        "📁 repo-main",
        "  📄 README.md",
        "  📁 empty",
        "  📁 src",
        "    📄 main.go",
    ])


def test_format_tree_none():
    assert format_tree(None) == ""


def test_metrics(tree):
    assert calculate_tree_metrics(tree) == {
        "total_nodes": 5,
        "files": 2,
        "folders": 3,
        "max_depth": 2,
    }


def test_metrics_none():
    assert calculate_tree_metrics(None)["total_nodes"] == 0


def test_flatten_file_paths(tree):
    assert flatten_file_paths(tree) == ["README.md", "src/main.go"]
