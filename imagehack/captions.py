# Caption markers at the start of the alt text
#
#    ![^A caption](image.png)        figure + figcaption "A caption"
#    ![caption:A caption](image.png) figure + figcaption "A caption"
#    ![*Alt text](image.png)         figure only, alt="Alt text"
#    ![+Alt text](image.png)         figure only, alt="Alt text"

from collections import namedtuple

CaptionSpec = namedtuple("CaptionSpec", ["present", "mode", "text"])

FIGURE_ONLY = "figure"
FIGURE_CAPTION = "figcaption"

CAPTION_MARKERS = (
    ("caption:", FIGURE_CAPTION),
    ("^", FIGURE_CAPTION),
    ("*", FIGURE_ONLY),
    ("+", FIGURE_ONLY),
)


def classify_caption(alt):
    """ The first marker decides the mode. Markers stacked behind it are
        stripped too so the cleaned alt never starts with one """
    if not alt:
        return CaptionSpec(False, None, alt)
    mode = None
    text = alt
    while True:
        for marker, marker_mode in CAPTION_MARKERS:
            if text.startswith(marker):
                mode = mode or marker_mode
                text = text[len(marker):]
                break
        else:
            break
    if mode is None:
        return CaptionSpec(False, None, alt)
    return CaptionSpec(True, mode, text)
