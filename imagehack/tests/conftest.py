import xml.etree.ElementTree as etree

import pytest

from imagehack.settings import ImageHackSettings


@pytest.fixture
def settings():
    """Default settings."""
    return ImageHackSettings()


@pytest.fixture
def tree():
    """Build an ElementTree document from a snippet of XHTML."""

    def build(source):
        return etree.fromstring("<div>" + source + "</div>")

    return build


@pytest.fixture
def html():
    """Serialize the children of a document built by the tree fixture."""

    def serialize(root):
        return (root.text or "") + "".join(
            etree.tostring(child, encoding="unicode") for child in root
        )

    return serialize
