"""Exported schema documents checked with jsonschema"""

import pytest

from nodeschema import (
    SCHEMA_DIALECT,
    ArrayNode,
    BooleanNode,
    HashNode,
    IntegerNode,
    InvalidSchemaError,
    NumberNode,
    StringNode,
    check_schema_document,
    document_issues,
    to_schema_document,
)


def build_config_node():
    return HashNode(
        {
            "name": StringNode(required=True, min_length=1, pattern="^[a-z]"),
            "replicas": IntegerNode(minimum=1, maximum=5),
            "ratio": NumberNode(exclusive_maximum=1),
            "enabled": BooleanNode(),
            "ports": ArrayNode(IntegerNode(), unique_items=True, max_items=3),
            "pair": ArrayNode(StringNode(), IntegerNode(), additional_items=False),
            "probe": ArrayNode(StringNode(enum=["tcp", "http"]), contains=True),
        },
        [("^x-", StringNode())],
        additional_properties=False,
    )


SAMPLES = [
    {"name": "api"},
    {"name": "api", "replicas": 3, "ratio": 0.5, "enabled": True},
    {"name": "api", "ports": [80, 443], "pair": ["a", 1], "probe": ["udp", "tcp"]},
    {"name": "api", "x-owner": "team"},
    {"name": ""},
    {"name": "API"},
    {"replicas": 2},
    {"name": "api", "replicas": 9},
    {"name": "api", "replicas": True},
    {"name": "api", "ratio": 1},
    {"name": "api", "ports": [80, 80]},
    {"name": "api", "ports": [1, 2, 3, 4]},
    {"name": "api", "pair": ["a"]},
    {"name": "api", "pair": ["a", 1, 2]},
    {"name": "api", "pair": [1, "a"]},
    {"name": "api", "probe": ["udp"]},
    {"name": "api", "x-owner": 3},
    {"name": "api", "unknown": 1},
    ["name"],
]


class TestConsistency:
    @pytest.fixture(scope="class")
    def node(self):
        return build_config_node()

    @pytest.fixture(scope="class")
    def document(self, node):
        return to_schema_document(node)

    def test_document_is_a_valid_draft7_schema(self, document):
        check_schema_document(document)

    @pytest.mark.parametrize("sample", SAMPLES)
    def test_node_and_jsonschema_agree(self, node, document, sample):
        assert node.validate(sample).valid == (not document_issues(document, sample))


class TestDocument:
    def test_dialect(self):
        assert to_schema_document(BooleanNode()) == {"$schema": SCHEMA_DIALECT, "type": "boolean"}
        assert to_schema_document(BooleanNode(), include_dialect=False) == {"type": "boolean"}

    def test_dialect_comes_first(self):
        document = to_schema_document(HashNode({"a": StringNode()}))
        assert list(document)[0] == "$schema"

    def test_invalid_document(self):
        with pytest.raises(InvalidSchemaError, match="invalid"):
            check_schema_document({"type": "array", "minItems": -1})


class TestDocumentIssues:
    def test_paths_use_index_segments(self):
        document = to_schema_document(HashNode({"items": ArrayNode(IntegerNode())}))
        issues = document_issues(document, {"items": [1, "x"]})
        assert [issue.path for issue in issues] == [("items", "[1]")]
        assert issues[0].pointer == "/items/[1]"

    def test_issues_are_sorted_by_path(self):
        document = to_schema_document(HashNode({"a": IntegerNode(), "b": IntegerNode()}))
        issues = document_issues(document, {"b": "x", "a": "y"})
        assert [issue.path for issue in issues] == [("a",), ("b",)]

    def test_no_issues(self):
        document = to_schema_document(IntegerNode(minimum=0))
        assert document_issues(document, 3) == []

    def test_null_handling_differs(self):
        # The node tree treats None as an absent optional value; JSON Schema does not.
        node = HashNode({"a": IntegerNode()})
        assert node.validate({"a": None}).valid
        assert document_issues(to_schema_document(node), {"a": None})
