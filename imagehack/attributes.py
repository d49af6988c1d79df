# Merges attributes derived from title directives into the attributes already
# present on a media element.
#
#   class  - token union, existing tokens first, duplicates collapsed
#   style  - per-property merge, a property that already exists keeps its
#            position but takes the new value, new properties are appended
#   others - new value overwrites
#
# Style values may be plain strings ("border:none") or StructuredExpression
# values (object literals coming from MDX-like trees). Both are merged through
# the same ordered dict and written back in the variant they came in as.

import json
import logging
import re

logger = logging.getLogger("imagehack")

CAMEL_RE = re.compile(r"-([a-z])")


class StructuredExpression:
    """ An embedded expression attribute value holding an ordered object literal """

    def __init__(self, properties=None):
        self.properties = list(properties or [])

    def to_dict(self):
        return dict(self.properties)

    def to_source(self):
        """ renders the object literal, e.g. {color:"red",width:100} """
        return "{" + ",".join(key + ":" + json.dumps(value)
                              for key, value in self.properties) + "}"

    def __eq__(self, other):
        if not isinstance(other, StructuredExpression):
            return NotImplemented
        return self.properties == other.properties

    def __repr__(self):
        return "StructuredExpression(%r)" % (self.properties,)


def parse_style(text):
    """ "a:b;c:d" -> {"a": "b", "c": "d"}, malformed declarations are skipped """
    declarations = {}
    if not text:
        return declarations
    for declaration in text.split(";"):
        prop, sep, value = declaration.partition(":")
        prop = prop.strip()
        value = value.strip()
        if not sep or not prop or not value:
            continue
        declarations[prop] = value
    return declarations


def serialize_style(declarations):
    return ";".join(prop + ":" + value for prop, value in declarations.items())


def css_to_camel(prop):
    if prop.startswith("--"):
        return prop
    if prop.startswith("-ms-"):
        prop = prop[1:]
    elif prop.startswith("-"):
        prop = prop[1:2].upper() + prop[2:]
    return CAMEL_RE.sub(lambda m: m.group(1).upper(), prop)


def split_classes(value):
    if not value:
        return []
    return value.split()


def join_classes(tokens):
    return " ".join(tokens)


def merge_classes(existing, new_tokens):
    tokens = []
    for token in split_classes(existing) + list(new_tokens):
        if token not in tokens:
            tokens.append(token)
    return join_classes(tokens)


def merge_style(existing, declarations):
    """ returns the merged style in the same variant as existing """
    if isinstance(existing, StructuredExpression):
        merged = existing.to_dict()
        for prop, value in declarations.items():
            merged[css_to_camel(prop)] = value
        return StructuredExpression(merged.items())

    merged = parse_style(existing)
    for prop, value in declarations.items():
        merged[prop] = value
    return serialize_style(merged)


def merge_attributes(element, derived):
    """ Applies a derived attribute set to element in place.

    derived maps attribute names to values; "class" holds a token list and
    "style" an ordered dict of declarations.
    """
    for name, value in derived.items():
        if name == "class":
            if not value:
                continue
            element.set("class", merge_classes(element.get("class"), value))
        elif name == "style":
            if not value:
                continue
            element.set("style", merge_style(element.get("style"), value))
        else:
            element.set(name, value)
        logger.debug("Set %s on <%s>", name, element.tag)
    return element
