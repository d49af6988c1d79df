# Helpers for walking and editing ElementTree style trees.
#
# Works with xml.etree.ElementTree (what Python-Markdown hands to tree
# processors) and with lxml elements. New nodes are always created through
# makeelement() on an existing node so both kinds of tree stay homogeneous.
# Text after an element lives in its tail, so every structural edit moves the
# tail to whatever now occupies the element's slot.


def is_element(node):
    """ comments and processing instructions have a callable tag """
    return isinstance(node.tag, str)


def position(parent, node, start=0):
    for i in range(start, len(parent)):
        if parent[i] is node:
            return i
    for i in range(0, min(start, len(parent))):
        if parent[i] is node:
            return i
    return None


def visit(root, visitor, tags):
    """ Depth-first walk in document order calling
        visitor(node, index, parent, ancestors) for elements whose tag is in tags.

        ancestors runs from the parent outward and is shared by siblings, so an
        edit above the parent can be reflected in it. The visitor returns the
        element that now sits in the node's slot; the walk carries on after it
        without descending into it. """
    _visit(root, [root], visitor, tags)
    return root


def _visit(parent, ancestors, visitor, tags):
    index = 0
    while index < len(parent):
        node = parent[index]
        if not is_element(node):
            index += 1
            continue

        if node.tag in tags:
            placed = visitor(node, index, parent, ancestors)
            if placed is not None:
                found = position(parent, placed, index)
                if found is not None:
                    index = found
        else:
            _visit(node, [node] + ancestors, visitor, tags)
        index += 1


def make_element(like, tag, attrib=None, text=None):
    element = like.makeelement(tag, dict(attrib or {}))
    if text is not None:
        element.text = text
    return element


def replace(parent, index, new):
    old = parent[index]
    new.tail = old.tail
    old.tail = None
    parent[index] = new
    return new


def wrap(parent, index, tag, attrib=None):
    """ Puts parent[index] inside a new tag element which takes its place """
    node = parent[index]
    wrapper = make_element(node, tag, attrib)
    replace(parent, index, wrapper)
    wrapper.append(node)
    return wrapper
