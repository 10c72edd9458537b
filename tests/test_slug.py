import pytest

from hydrakey.slug import slugify


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Undo", "undo"),
        ("Undo Tree!", "undo-tree"),
        ("  Window  ", "window"),
        ("a--b__c  d", "a-b-c-d"),
        ("Café Menü", "café-menü"),
        ("Zoom 2x", "zoom-2x"),
        ("!!!", ""),
        ("", ""),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


@pytest.mark.parametrize("name", ["Undo Tree!", "--x--", "Window Resize", "ÄÖ ü"])
def test_slugify_is_idempotent(name):
    once = slugify(name)
    assert slugify(once) == once


@pytest.mark.parametrize("value", [None, 42, ["undo"], b"undo"])
def test_slugify_non_string_is_empty(value):
    assert slugify(value) == ""
