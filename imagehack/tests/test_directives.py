import pytest

from imagehack.directives import (
    ATTRIBUTE,
    BOOLEAN,
    CLASS,
    DIMENSION,
    ID,
    STYLE,
    Directive,
    Effect,
    collect_attributes,
    interpret,
    parse_directives,
    parse_title,
    split_title,
    tokenize,
)

# ============================================================================
# Parsing
# ============================================================================


def test_split_title_without_marker():
    """Test that a title without ">" is returned as is."""
    assert split_title("Just a title") == ("Just a title", None)


def test_split_title_on_first_marker():
    """Test that only the first ">" splits the title."""
    assert split_title("a > b > c") == ("a", " b > c")


def test_split_title_empty_caption():
    """Test that an empty caption means no title."""
    assert split_title("  > 400x300") == (None, " 400x300")


def test_split_title_absent():
    """Test that a missing title yields nothing."""
    assert split_title(None) == (None, None)


def test_tokenize_keeps_quoted_values_together():
    """Test that quoted substrings are part of one token, without the quotes."""
    assert tokenize('title="Two words" .big \'a b\'') == ["title=Two words", ".big", "a b"]


def test_tokenize_empty_quoted_value():
    """Test that an empty quoted value still produces a token."""
    assert tokenize('alt=""') == ["alt="]


def test_tokenize_drops_unterminated_quote():
    """Test that a token with an unterminated quote is dropped."""
    assert tokenize('.ok title="broken') == [".ok"]


def test_tokenize_apostrophe_inside_value():
    """Test that a quote in the middle of a token is plain text."""
    assert tokenize("data-note=it's 400x300 .wide") == ["data-note=it's", "400x300", ".wide"]


def test_tokenize_resumes_after_unterminated_quote():
    """Test that only the token with the open quote is lost."""
    assert tokenize('.ok title="broken .wide 400x300') == [".ok", ".wide", "400x300"]


def test_parse_directives_apostrophe_keeps_later_directives():
    """Test that an apostrophe does not swallow the directives after it."""
    assert parse_directives("data-note=it's 400x300 .wide") == [
        Directive("data-note", "it's", False),
        Directive("400x300", None, True),
        Directive(".wide", None, True),
    ]


@pytest.mark.parametrize("token", [">", "a>b", "a/b", "<x", "it's", 'a"b', "a\x01b"])
def test_parse_directives_rejects_invalid_attribute_names(token):
    """Test that keys which cannot be attribute names are ignored."""
    assert parse_directives(token + " .ok") == [Directive(".ok", None, True)]


def test_parse_title_second_marker_is_ignored():
    """Test that a second ">" does not become an attribute."""
    assert parse_title("a > b > .c") == (
        "a",
        [Directive("b", None, True), Directive(".c", None, True)],
    )


def test_parse_title_directives():
    """Test parsing a title into its caption and directives."""
    title, directives = parse_title("title > width=2rem height=1rem")
    assert title == "title"
    assert directives == [
        Directive("width", "2rem", False),
        Directive("height", "1rem", False),
    ]


def test_parse_directives_flags_and_values():
    """Test the three directive shapes."""
    assert parse_directives(" #hero .big loading=lazy autoplay ") == [
        Directive("#hero", None, True),
        Directive(".big", None, True),
        Directive("loading", "lazy", False),
        Directive("autoplay", None, True),
    ]


def test_parse_directives_splits_on_first_equals():
    """Test that only the first "=" separates key and value."""
    assert parse_directives("data-x=a=b") == [Directive("data-x", "a=b", False)]


def test_parse_directives_ignores_malformed_tokens():
    """Test that tokens without a key are ignored."""
    assert parse_directives("=oops .fine") == [Directive(".fine", None, True)]


def test_parse_directives_empty():
    """Test that no directive text yields no directives."""
    assert parse_directives(None) == []
    assert parse_directives("   ") == []


# ============================================================================
# Interpretation
# ============================================================================


def test_interpret_id_and_class():
    """Test "#" and "." prefixes."""
    effects = interpret(parse_directives("#hero .a .b"))
    assert effects == [
        Effect(ID, "id", "hero"),
        Effect(CLASS, "class", "a"),
        Effect(CLASS, "class", "b"),
    ]


def test_interpret_prefix_with_value_is_malformed():
    """Test that "#x=y" and a bare "." are dropped."""
    assert interpret(parse_directives("#x=y . .ok")) == [Effect(CLASS, "class", "ok")]


@pytest.mark.parametrize(
    "token,expected",
    [
        ("400x300", [("width", "400"), ("height", "300")]),
        ("400×300", [("width", "400"), ("height", "300")]),
        ("50%x300", [("width", "50%"), ("height", "300")]),
        ("400pxx300px", [("width", "400"), ("height", "300")]),
        ("400x", [("width", "400")]),
        ("x300", [("height", "300")]),
    ],
)
def test_interpret_dimension_shorthand(token, expected):
    """Test the WxH shorthand."""
    effects = interpret([Directive(token, None, True)])
    assert [(e.name, e.value) for e in effects] == expected
    assert all(e.category == DIMENSION for e in effects)


def test_dimension_checked_before_flags():
    """Test that a dimension-shaped flag is never a boolean attribute, and only the first one is a dimension."""
    effects = interpret(parse_directives("400x300 200x100"))
    assert effects == [
        Effect(DIMENSION, "width", "400"),
        Effect(DIMENSION, "height", "300"),
        Effect(ATTRIBUTE, "200x100", ""),
    ]


def test_lone_x_is_a_flag():
    """Test that "x" alone is not a dimension."""
    assert interpret([Directive("x", None, True)]) == [Effect(ATTRIBUTE, "x", "")]


def test_interpret_style_with_range_values():
    """Test that "~" becomes a space inside style values."""
    effects = interpret(parse_directives("style=padding:1rem~2rem;color:red"))
    assert effects == [
        Effect(STYLE, "padding", "1rem 2rem"),
        Effect(STYLE, "color", "red"),
    ]


def test_interpret_style_flag_is_ignored():
    """Test that "style" without a value is dropped."""
    assert interpret(parse_directives("style")) == []


def test_interpret_width_and_height_values():
    """Test that pixel sizes become attributes and other units become style."""
    effects = interpret(parse_directives("width=200px height=1rem"))
    assert effects == [
        Effect(DIMENSION, "width", "200"),
        Effect(STYLE, "height", "1rem"),
    ]


def test_interpret_boolean_attributes_depend_on_kind():
    """Test that player flags are boolean attributes on video."""
    effects = interpret(parse_directives("autoplay muted loop controls"), "video")
    assert [e.category for e in effects] == [BOOLEAN] * 4
    assert all(e.value == "" for e in effects)


def test_interpret_lazy_flag():
    """Test that "lazy" sets loading=lazy."""
    assert interpret(parse_directives("lazy")) == [Effect(ATTRIBUTE, "loading", "lazy")]


def test_interpret_opaque_attributes_pass_through():
    """Test that unknown keys become attributes verbatim."""
    effects = interpret(parse_directives("data-zoom=2~x referrerpolicy=no-referrer decorative"))
    assert effects == [
        Effect(ATTRIBUTE, "data-zoom", "2~x"),
        Effect(ATTRIBUTE, "referrerpolicy", "no-referrer"),
        Effect(ATTRIBUTE, "decorative", ""),
    ]


def test_interpret_class_value():
    """Test that class=... adds every token."""
    assert interpret(parse_directives('class="a b"')) == [
        Effect(CLASS, "class", "a"),
        Effect(CLASS, "class", "b"),
    ]


def test_keys_are_case_sensitive():
    """Test that "Style" is not "style"."""
    assert interpret(parse_directives("Style=x")) == [Effect(ATTRIBUTE, "Style", "x")]


# ============================================================================
# Collecting
# ============================================================================


def test_collect_later_values_overwrite():
    """Test that the last value for a name wins."""
    attributes = collect_attributes(interpret(parse_directives("#a #b data-x=1 data-x=2")))
    assert attributes == {"id": "b", "data-x": "2"}


def test_collect_merges_style_and_unions_classes():
    """Test that style merges per property and classes are unioned."""
    attributes = collect_attributes(
        interpret(parse_directives(".a style=color:red .b .a style=color:blue;margin:0"))
    )
    assert attributes == {
        "class": ["a", "b"],
        "style": {"color": "blue", "margin": "0"},
    }
