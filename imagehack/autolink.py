# Autolinks
#
# A source wrapped in brackets or parentheses links the image to itself:
#
#    ![Photo]([photo.jpg])   ->  <a href="photo.jpg" target="_blank"><img src="photo.jpg"></a>
#    ![Photo]((photo.jpg))   ->  same, but inside a figure the link goes around
#                                the image rather than around the figure

from collections import namedtuple

BRACKET = "bracket"
PARENTHESIS = "parenthesis"

WRAPPERS = (
    ("[", "]", BRACKET),
    ("(", ")", PARENTHESIS),
)

# serializers may escape the wrapper characters, only those are decoded
ESCAPED_WRAPPERS = {"%5B": "[", "%5D": "]", "%28": "(", "%29": ")"}

AutolinkSpec = namedtuple("AutolinkSpec", ["src", "wrapper", "needs_autolink", "href"])


def decode_wrappers(src):
    """ %5B...%5D -> [...], the escapes are only decoded at either end """
    head = src[:3].upper()
    if head in ESCAPED_WRAPPERS:
        src = ESCAPED_WRAPPERS[head] + src[3:]
    tail = src[-3:].upper()
    if len(src) > 3 and tail in ESCAPED_WRAPPERS:
        src = src[:-3] + ESCAPED_WRAPPERS[tail]
    return src


def detect_autolink(src, inside_link=False):
    """ Strips one level of [...] or (...) from src.
        An autolink is only requested when the node is not already inside a link """
    if not src:
        return AutolinkSpec(src, None, False, None)

    decoded = decode_wrappers(src)
    for opening, closing, wrapper in WRAPPERS:
        if len(decoded) >= 2 and decoded.startswith(opening) and decoded.endswith(closing):
            canonical = decoded[1:-1]
            if inside_link:
                return AutolinkSpec(canonical, wrapper, False, None)
            return AutolinkSpec(canonical, wrapper, True, canonical)

    return AutolinkSpec(src, None, False, None)
