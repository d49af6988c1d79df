from collections import namedtuple

Ancestry = namedtuple("Ancestry", ["inside_link", "inside_figure",
                                   "link_wraps_figure", "figure_wraps_link",
                                   "link", "figure"])


def _tag(node):
    if node is None:
        return None
    return node.tag


def inspect_ancestry(ancestors):
    """ Looks at the parent and, when the parent is a link or a figure, the
        grandparent of a media node.

        ancestors runs from the immediate parent outward. Anything above the
        grandparent is never consulted. """
    parent = ancestors[0] if len(ancestors) > 0 else None
    grandparent = ancestors[1] if len(ancestors) > 1 else None

    link = None
    figure = None
    link_wraps_figure = False
    figure_wraps_link = False

    if _tag(parent) == "a":
        link = parent
        if _tag(grandparent) == "figure":
            figure = grandparent
            figure_wraps_link = True
    elif _tag(parent) == "figure":
        figure = parent
        if _tag(grandparent) == "a":
            link = grandparent
            link_wraps_figure = True

    return Ancestry(link is not None, figure is not None,
                    link_wraps_figure, figure_wraps_link, link, figure)
