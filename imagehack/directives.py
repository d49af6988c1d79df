# Title directives
#
# The title of a media element may carry attributes after a ">":
#
#    ![alt](image.png "A title > 400x300 .rounded #hero style=padding:1rem~2rem lazy")
#
# becomes
#
#    <img alt="alt" src="image.png" title="A title" width="400" height="300"
#         class="rounded" id="hero" style="padding:1rem 2rem" loading="lazy">
#
# "~" stands in for a space inside style values, quotes keep a value with
# spaces together (title="Two words").

import logging
import re
from collections import namedtuple

from .attributes import parse_style

logger = logging.getLogger("imagehack")

Directive = namedtuple("Directive", ["key", "value", "is_flag"])
Effect = namedtuple("Effect", ["category", "name", "value"])

ID = "id"
CLASS = "class"
STYLE = "style"
DIMENSION = "dimension"
BOOLEAN = "boolean"
ATTRIBUTE = "attribute"

DIMENSION_RE = re.compile(r"^(?P<width>\d+(?:px|%)?)?[x×](?P<height>\d+(?:px|%)?)?$")
SIZE_RE = re.compile(r"^\d+(?:px|%)?$")

GLOBAL_BOOLEAN_ATTRIBUTES = frozenset(["hidden", "inert", "autofocus"])
PLAYER_BOOLEAN_ATTRIBUTES = frozenset(["autoplay", "controls", "loop", "muted"])

BOOLEAN_ATTRIBUTES = {
    "img": GLOBAL_BOOLEAN_ATTRIBUTES | {"ismap"},
    "video": GLOBAL_BOOLEAN_ATTRIBUTES | PLAYER_BOOLEAN_ATTRIBUTES
             | {"playsinline", "disablepictureinpicture", "disableremoteplayback"},
    "audio": GLOBAL_BOOLEAN_ATTRIBUTES | PLAYER_BOOLEAN_ATTRIBUTES
             | {"disableremoteplayback"},
}

# flags that expand to an attribute with a value
FLAG_ALIASES = {
    "lazy": ("loading", "lazy"),
}


def split_title(title):
    """ Splits "caption > directives" into the cleaned title and the directive text.
        The title is None when nothing but whitespace is left of the ">" """
    if title is None:
        return None, None
    caption, sep, directive_text = title.partition(">")
    if not sep:
        return title, None
    caption = caption.strip()
    return (caption or None), directive_text


def tokenize(text):
    """ whitespace separated tokens, quoted substrings stay in one token.
        A quote only opens at the start of a token or right after "=", so
        it's and 5'10 are plain text. A token whose quote never closes is
        dropped and tokenizing resumes after it """
    tokens = []
    current = []
    started = False
    quote = None
    quote_at = None
    for i, char in enumerate(text):
        if quote:
            if char == quote:
                quote = None
            else:
                current.append(char)
        elif char in "\"'" and (not started or current[-1:] == ["="]):
            quote = char
            quote_at = i
            started = True
        elif char.isspace():
            if started:
                tokens.append("".join(current))
            current = []
            started = False
        else:
            current.append(char)
            started = True

    if quote:
        logger.debug("Dropping directive with unterminated quote: %r", "".join(current))
        rest = text[quote_at + 1:].split(None, 1)
        if len(rest) > 1:
            tokens.extend(tokenize(rest[1]))
    elif started:
        tokens.append("".join(current))
    return tokens


# anything that could not be written out as an attribute name
INVALID_KEY_RE = re.compile(r"[\s\"'<>/=\x00-\x1f\x7f]")


def parse_token(token):
    key, sep, value = token.partition("=")
    if not key or INVALID_KEY_RE.search(key):
        return None
    if not sep:
        return Directive(key, None, True)
    return Directive(key, value, False)


def parse_directives(text):
    directives = []
    if not text:
        return directives
    for token in tokenize(text):
        directive = parse_token(token)
        if directive is None:
            logger.debug("Ignoring malformed directive %r", token)
            continue
        directives.append(directive)
    return directives


def parse_title(title):
    """ Returns (title, directives) for a title attribute value """
    cleaned, directive_text = split_title(title)
    return cleaned, parse_directives(directive_text)


def _size(value):
    if value.endswith("px"):
        return value[:-2]
    return value


def _dimension_effects(match):
    effects = []
    for name in ("width", "height"):
        value = match.group(name)
        if value:
            effects.append(Effect(DIMENSION, name, _size(value)))
    return effects


def interpret(directives, kind="img"):
    """ Maps directives onto effects, in directive order """
    effects = []
    seen_dimension = False
    booleans = BOOLEAN_ATTRIBUTES.get(kind, GLOBAL_BOOLEAN_ATTRIBUTES)

    for d in directives:
        if d.key[0] in "#.":
            if not d.is_flag or len(d.key) == 1:
                logger.debug("Ignoring malformed directive %r", d.key)
                continue
            if d.key[0] == "#":
                effects.append(Effect(ID, "id", d.key[1:]))
            else:
                effects.append(Effect(CLASS, "class", d.key[1:]))
            continue

        if d.is_flag and not seen_dimension:
            match = DIMENSION_RE.match(d.key)
            if match and (match.group("width") or match.group("height")):
                seen_dimension = True
                effects.extend(_dimension_effects(match))
                continue

        if d.key == "style":
            if d.is_flag:
                logger.debug("Ignoring style directive without a value")
                continue
            for prop, value in parse_style(d.value.replace("~", " ")).items():
                effects.append(Effect(STYLE, prop, value))
            continue

        if d.key == "class" and not d.is_flag:
            for token in d.value.split():
                effects.append(Effect(CLASS, "class", token))
            continue

        if d.key in ("width", "height") and not d.is_flag:
            if SIZE_RE.match(d.value):
                effects.append(Effect(DIMENSION, d.key, _size(d.value)))
            elif d.value:
                effects.append(Effect(STYLE, d.key, d.value.replace("~", " ")))
            continue

        if d.is_flag and d.key in FLAG_ALIASES:
            name, value = FLAG_ALIASES[d.key]
            effects.append(Effect(ATTRIBUTE, name, value))
            continue

        if d.is_flag and d.key in booleans:
            effects.append(Effect(BOOLEAN, d.key, ""))
            continue

        effects.append(Effect(ATTRIBUTE, d.key, "" if d.is_flag else d.value))

    return effects


def collect_attributes(effects):
    """ Folds effects into an attribute set.
        "class" becomes a token list and "style" a dict of declarations,
        every other name keeps the last value given for it """
    attributes = {}
    for effect in effects:
        if effect.category == CLASS:
            tokens = attributes.setdefault("class", [])
            if effect.value not in tokens:
                tokens.append(effect.value)
        elif effect.category == STYLE:
            attributes.setdefault("style", {})[effect.name] = effect.value
        else:
            attributes[effect.name] = effect.value
    return attributes
