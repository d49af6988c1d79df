# Rewrites img / video / audio elements of a parsed document.
#
# Each media element is handled once, in document order:
#
#   1. classify   - caption marker on alt, autolink wrapper on src, media
#                   kind from the src extension
#   2. directives - "title > directives" split and interpreted
#   3. plan       - which figure / figcaption / anchor wrappers are needed,
#                   given the figure or link the element already sits in
#   4. attributes - directive attributes merged into the element
#   5. structure  - conversion to video / audio, then the wrappers
#
# Elements without a src are left alone.

import logging
from collections import namedtuple

from . import treeutil
from .ancestry import inspect_ancestry
from .attributes import merge_attributes
from .autolink import BRACKET, detect_autolink
from .captions import FIGURE_CAPTION, classify_caption
from .directives import collect_attributes, interpret, parse_title
from .media import IMAGE, MEDIA_TAGS, classify_media
from .paragraphs import unravel_paragraphs
from .settings import ImageHackSettings

logger = logging.getLogger("imagehack")

WrapPlan = namedtuple("WrapPlan", ["needs_figure", "needs_figcaption",
                                   "needs_autolink", "link_href",
                                   "link_outside_figure"])

AUTOLINK_TARGET = "_blank"


def _text(value):
    if isinstance(value, str):
        return value
    return None


def has_figcaption(figure):
    return any(treeutil.is_element(child) and child.tag == "figcaption"
               for child in figure)


def compute_wrap_plan(caption, ancestry, autolink, kind):
    needs_figcaption = (caption.present and caption.mode == FIGURE_CAPTION
                        and bool(caption.text))
    if ancestry.inside_figure and has_figcaption(ancestry.figure):
        needs_figcaption = False

    needs_autolink = autolink.needs_autolink and kind == IMAGE
    return WrapPlan(
        needs_figure=caption.present and not ancestry.inside_figure,
        needs_figcaption=needs_figcaption,
        needs_autolink=needs_autolink,
        link_href=autolink.href if needs_autolink else None,
        link_outside_figure=autolink.wrapper == BRACKET,
    )


class NodeRewriter:
    """ Visitor applied by treeutil.visit to every media element """

    def __init__(self, settings):
        self.settings = settings

    def __call__(self, node, index, parent, ancestors):
        return self.rewrite(node, index, parent, ancestors)

    def rewrite(self, node, index, parent, ancestors):
        src = _text(node.get("src"))
        if not src:
            return node

        ancestry = inspect_ancestry(ancestors)
        caption = classify_caption(_text(node.get("alt")))
        autolink = detect_autolink(src, ancestry.inside_link)
        media = classify_media(autolink.src)
        converting = node.tag == IMAGE and media.kind != IMAGE
        kind = media.kind if converting else node.tag

        original_title = _text(node.get("title"))
        title, directives = parse_title(original_title)
        derived = collect_attributes(interpret(directives, kind))

        plan = compute_wrap_plan(caption, ancestry, autolink, kind)

        node.set("src", autolink.src)
        if caption.present:
            if node.tag == IMAGE and not converting:
                node.set("alt", caption.text)
            else:
                node.attrib.pop("alt", None)
        if title != original_title:
            if title is None:
                node.attrib.pop("title", None)
            else:
                node.set("title", title)
        merge_attributes(node, derived)

        if converting:
            node = self.convert(node, index, parent, kind, media.mime)

        return self.restructure(node, index, parent, ancestors, ancestry, plan, caption)

    def convert(self, node, index, parent, kind, mime):
        src = node.get("src")
        attrib = [(name, value) for name, value in node.attrib.items()
                  if name not in ("src", "alt")]
        converted = treeutil.make_element(node, kind, attrib)
        if self.settings.adds_controls(kind) and converted.get("controls") is None:
            converted.set("controls", "")
        converted.append(treeutil.make_element(node, "source", {"src": src, "type": mime}))
        treeutil.replace(parent, index, converted)
        logger.debug("Converted %s into <%s>", src, kind)
        return converted

    def restructure(self, node, index, parent, ancestors, ancestry, plan, caption):
        placed = node
        link = {"href": plan.link_href, "target": AUTOLINK_TARGET}
        figure_involved = plan.needs_figure or ancestry.inside_figure

        if plan.needs_autolink and not (plan.link_outside_figure and figure_involved):
            placed = treeutil.wrap(parent, index, "a", link)
            logger.debug("Linked %s to itself", plan.link_href)

        if plan.needs_figure:
            placed = treeutil.wrap(parent, index, "figure")
            if plan.needs_figcaption:
                self.add_figcaption(placed, caption.text)
            logger.debug("Wrapped <%s> in a figure", node.tag)
            if plan.needs_autolink and plan.link_outside_figure:
                placed = treeutil.wrap(parent, index, "a", link)
                logger.debug("Linked figure to %s", plan.link_href)
        elif ancestry.inside_figure:
            if plan.needs_figcaption:
                self.add_figcaption(ancestry.figure, caption.text)
            if plan.needs_autolink and plan.link_outside_figure:
                if self.link_parent_figure(ancestry.figure, ancestors, link) is None:
                    # a figcaption inserted above may have shifted the node
                    placed = treeutil.wrap(parent, treeutil.position(parent, placed, index), "a", link)
                    logger.debug("Figure has no parent, linked %s inside it", plan.link_href)

        return placed

    def add_figcaption(self, figure, text):
        figcaption = treeutil.make_element(figure, "figcaption", text=text)
        if self.settings.captions_above():
            figure.insert(0, figcaption)
        else:
            figure.append(figcaption)
        return figcaption

    def link_parent_figure(self, figure, ancestors, link):
        # the figure is ancestors[0], the anchor goes between it and its parent
        if len(ancestors) < 2:
            return None
        grandparent = ancestors[1]
        index = treeutil.position(grandparent, figure)
        if index is None:
            return None
        anchor = treeutil.wrap(grandparent, index, "a", link)
        ancestors.insert(1, anchor)
        logger.debug("Linked existing figure to %s", link["href"])
        return anchor


def make_settings(settings):
    if settings is None:
        return ImageHackSettings()
    if isinstance(settings, ImageHackSettings):
        return settings
    return ImageHackSettings.from_dict(settings)


def rewrite_tree(root, settings=None):
    """ Rewrites every media element below root in place and returns root.
        settings is an ImageHackSettings, a dict of options or None """
    settings = make_settings(settings)
    if not settings.enable:
        logger.debug("imagehack is disabled, tree left untouched")
        return root

    treeutil.visit(root, NodeRewriter(settings), MEDIA_TAGS)
    if settings.unravel_paragraphs:
        unravel_paragraphs(root)
    return root
