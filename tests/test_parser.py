from __future__ import annotations

import pytest

from sweet import (
    Binding,
    CardinalityError,
    Definition,
    GrammarError,
    Key,
    KeyAttribute,
    Modifier,
    ParseError,
    SwhkdParser,
)


def _parse(contents: str):
    return SwhkdParser().from_text(contents)


def _binding(key: str, command: str, *modifiers: str) -> Binding:
    return Binding(
        definition=Definition(modifiers=[Modifier(m) for m in modifiers], key=Key(key=key)),
        command=command,
    )


def test_basic_keybind() -> None:
    contents = """
r
    alacritty
            """
    parsed = _parse(contents)

    assert parsed.bindings == [_binding("r", "alacritty")]


def test_multiple_keybinds() -> None:
    contents = """
r
    alacritty

w
    kitty

t
    /bin/firefox
        """
    parsed = _parse(contents)

    assert parsed.bindings == [
        _binding("r", "alacritty"),
        _binding("w", "kitty"),
        _binding("t", "/bin/firefox"),
    ]
    assert all(b.definition.modifiers == [] for b in parsed.bindings)


def test_comments() -> None:
    contents = """
r
    alacritty

w
    kitty

#t
    #/bin/firefox
        """
    parsed = _parse(contents)

    assert parsed.bindings == [_binding("r", "alacritty"), _binding("w", "kitty")]


def test_commented_trigger_hides_its_command() -> None:
    contents = """
# t
    /bin/firefox
w
    kitty
"""
    parsed = _parse(contents)

    assert parsed.bindings == [_binding("w", "kitty")]


def test_multiple_keypress() -> None:
    parsed = _parse("super + 5\n    alacritty")

    assert parsed.bindings == [_binding("5", "alacritty", "super")]


def test_keysym_instead_of_modifier() -> None:
    contents = """
shift + k + m
    notify-send 'Hello world!'
            """

    with pytest.raises(GrammarError) as excinfo:
        _parse(contents)
    assert excinfo.value.span.line == 2
    assert isinstance(excinfo.value, ParseError)


def test_binding_without_command_is_rejected() -> None:
    with pytest.raises(GrammarError):
        _parse("super + a\nsuper + b\n    echo b")


def test_modifier_shorthand_expands_in_order() -> None:
    parsed = _parse("{super,alt,ctrl} + a\n    {one,two,three}")

    assert [b.definition.modifiers for b in parsed.bindings] == [["super"], ["alt"], ["ctrl"]]
    assert {b.definition.key.key for b in parsed.bindings} == {"a"}
    assert [b.command for b in parsed.bindings] == ["one", "two", "three"]


def test_modifier_text_is_kept_verbatim() -> None:
    parsed = _parse("Super + a\n    echo")

    assert parsed.bindings[0].definition.modifiers == [Modifier("Super")]


def test_positional_alignment_not_cross_join() -> None:
    parsed = _parse("{super,alt} + {a,b}\n    cmd-{1-4}")

    assert [(b.definition.modifiers, b.definition.key.key, b.command) for b in parsed.bindings] == [
        (["super"], "a", "cmd-1"),
        (["super"], "b", "cmd-2"),
        (["alt"], "a", "cmd-3"),
        (["alt"], "b", "cmd-4"),
    ]


def test_cardinality_mismatch() -> None:
    with pytest.raises(CardinalityError) as excinfo:
        _parse("{super,alt,ctrl} + x\n    cmd-{1,2}")

    err = excinfo.value
    assert err.binding_variants == 3
    assert err.command_variants == 2
    assert err.span.line == 1
    assert "3" in str(err) and "2" in str(err)


def test_key_range_expands_inclusively() -> None:
    parsed = _parse("super + {a-c}\n    echo {a-c}")

    assert [b.definition.key for b in parsed.bindings] == [
        Key(key="a", attribute=KeyAttribute.NONE),
        Key(key="b", attribute=KeyAttribute.NONE),
        Key(key="c", attribute=KeyAttribute.NONE),
    ]
    assert [b.command for b in parsed.bindings] == ["echo a", "echo b", "echo c"]


def test_key_attributes() -> None:
    parsed = _parse("super + ~@Return\n    alacritty\n@a\n    echo released")

    assert parsed.bindings[0].definition.key == Key(
        key="Return", attribute=KeyAttribute.SEND | KeyAttribute.ON_RELEASE
    )
    assert parsed.bindings[1].definition.key == Key(key="a", attribute=KeyAttribute.ON_RELEASE)


def test_escaped_key() -> None:
    parsed = _parse("super + \\{\n    echo brace")

    assert parsed.bindings[0].definition.key.key == "{"


def test_omitted_modifier_variant() -> None:
    parsed = _parse("{_,shift} + a\n    {echo one,echo two}")

    assert parsed.bindings == [
        _binding("a", "echo one"),
        _binding("a", "echo two", "shift"),
    ]


def test_unbinds() -> None:
    parsed = _parse("ignore super + {a,b}\nignore x\n")

    assert parsed.bindings == []
    assert parsed.unbinds == [
        Definition(modifiers=[Modifier("super")], key=Key(key="a")),
        Definition(modifiers=[Modifier("super")], key=Key(key="b")),
        Definition(modifiers=[], key=Key(key="x")),
    ]


def test_modes() -> None:
    contents = """
super + m
    echo default

mode music oneoff swallow
ctrl + {n,p}
    mpc {next,prev}
ignore super + m
endmode

mode plain
a
    echo plain
endmode
"""
    parsed = _parse(contents)

    assert parsed.bindings == [_binding("m", "echo default", "super")]
    music, plain = parsed.modes
    assert music.name == "music"
    assert music.oneoff and music.swallow
    assert [b.command for b in music.bindings] == ["mpc next", "mpc prev"]
    assert music.unbinds == [Definition(modifiers=[Modifier("super")], key=Key(key="m"))]
    assert plain.name == "plain"
    assert not plain.oneoff and not plain.swallow
    assert plain.bindings == [_binding("a", "echo plain")]


def test_display() -> None:
    binding = _parse("super + 5\n    alacritty").bindings[0]

    assert str(binding) == "Binding [Modifier('super'), Key(key='5', attribute=NONE)] → alacritty"


def test_empty_config() -> None:
    parsed = _parse("# nothing here\n\n")

    assert parsed.bindings == []
    assert parsed.unbinds == []
    assert parsed.modes == []
    assert parsed.imports == []


def test_parse_dispatches_on_input_type(tmp_path) -> None:
    path = tmp_path / "swhkdrc"
    path.write_text("a\n    echo file\n", encoding="utf-8")

    parser = SwhkdParser()

    assert parser.parse(path).bindings == [_binding("a", "echo file")]
    assert parser.parse("b\n    echo text").bindings == [_binding("b", "echo text")]
