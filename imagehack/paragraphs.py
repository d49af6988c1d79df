# Markdown puts images inside paragraphs. Once an image has become a figure,
# a video or an audio element it can no longer live in a <p>, so
#
#    <p>See below <figure>...</figure> and more text</p>
#
# is unravelled into
#
#    <p>See below</p>
#    <figure>...</figure>
#    <p>and more text</p>

from . import treeutil

BLOCK_MEDIA_TAGS = ("figure", "video", "audio")


def is_block_media(node):
    if not treeutil.is_element(node):
        return False
    if node.tag in BLOCK_MEDIA_TAGS:
        return True
    if node.tag == "a":
        return any(treeutil.is_element(child) and child.tag in BLOCK_MEDIA_TAGS
                   for child in node)
    return False


def needs_unravelling(node):
    return (treeutil.is_element(node) and node.tag == "p"
            and any(is_block_media(child) for child in node))


def unravel_paragraphs(root):
    _unravel(root)
    return root


def _unravel(parent):
    index = 0
    while index < len(parent):
        node = parent[index]
        if needs_unravelling(node):
            pieces = split_paragraph(node)
            splice(parent, index, pieces)
            index += len(pieces)
            continue
        if treeutil.is_element(node):
            _unravel(node)
        index += 1


def _is_blank(piece):
    return (piece.tag == "p" and len(piece) == 0
            and not (piece.text or "").strip())


def _trim_edges(paragraph):
    if paragraph.text:
        paragraph.text = paragraph.text.lstrip(" ")
    if len(paragraph):
        last = paragraph[-1]
        if last.tail:
            last.tail = last.tail.rstrip(" ")
    elif paragraph.text:
        paragraph.text = paragraph.text.rstrip(" ")


def split_paragraph(paragraph):
    """ Returns the paragraph's content as a list of new paragraphs and the
        block media lifted out of it, in document order """
    pieces = []
    current = treeutil.make_element(paragraph, "p", paragraph.attrib.items())
    current.text = paragraph.text

    for child in list(paragraph):
        if is_block_media(child):
            tail = child.tail
            child.tail = None
            pieces.append(current)
            pieces.append(child)
            current = treeutil.make_element(paragraph, "p")
            current.text = tail
        else:
            current.append(child)
    pieces.append(current)

    pieces = [piece for piece in pieces if not _is_blank(piece)]
    for piece in pieces:
        if piece.tag == "p":
            _trim_edges(piece)
    return pieces


def splice(parent, index, pieces):
    """ Replaces parent[index] with pieces, one per line """
    old = parent[index]
    tail = old.tail
    old.tail = None
    parent.remove(old)
    for offset, piece in enumerate(pieces):
        parent.insert(index + offset, piece)
        piece.tail = "\n"
    if pieces:
        pieces[-1].tail = tail
