import pytest

from nodeschema import ArrayNode, HashNode, IntegerNode, StringNode
from nodeschema.utils.formats import unregister_format
from nodeschema.nodes import NodeRegistry


@pytest.fixture
def user_node():
    """Hash with a required name, an optional age and no extra keys"""
    return HashNode(
        {
            "name": StringNode(required=True),
            "age": IntegerNode(),
        },
        additional_properties=False,
    )


@pytest.fixture
def pair_node():
    """Tuple of (string, integer) rejecting additional items"""
    return ArrayNode(StringNode(), IntegerNode(), additional_items=False)


@pytest.fixture
def custom_registrations():
    """Track formats and node kinds registered by a test and remove them afterwards"""
    formats = []
    kinds = []
    yield formats, kinds
    for name in formats:
        unregister_format(name)
    for kind in kinds:
        NodeRegistry.unregister(kind)
