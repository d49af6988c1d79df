""" Runs the rewriter over HTML fragments parsed with lxml """

import lxml.html

from .rewriter import rewrite_tree


def parse_fragment(source):
    """ Parses an HTML fragment into a <div> holding all of its top level nodes """
    container = lxml.html.Element("div")
    for fragment in lxml.html.fragments_fromstring(source):
        if isinstance(fragment, str):
            container.text = (container.text or "") + fragment
        else:
            container.append(fragment)
    return container


def serialize_fragment(container):
    parts = [container.text or ""]
    for child in container:
        parts.append(lxml.html.tostring(child, encoding="unicode"))
    return "".join(parts)


def rewrite_html(source, settings=None):
    if not source.strip():
        return source
    container = parse_fragment(source)
    rewrite_tree(container, settings)
    return serialize_fragment(container)
