import json

from recipe_assist.app.services.recipe_parsing import extract_fenced_json, extract_json_object


def test_extract_object_from_prose():
    text = 'Here is your recipe: {"title": "Soup", "ingredients": ["broth"]} Enjoy!'
    assert json.loads(extract_json_object(text)) == {"title": "Soup", "ingredients": ["broth"]}


def test_nested_objects_are_kept_whole():
    text = 'x {"a": {"b": 1}, "c": 2} y'
    assert json.loads(extract_json_object(text)) == {"a": {"b": 1}, "c": 2}


def test_unparseable_span_is_skipped():
    text = "{not json} then {\"ok\": true}"
    assert extract_json_object(text) == '{"ok": true}'


def test_stray_closing_brace_is_ignored():
    text = '} oops {"title": "Soup"}'
    assert extract_json_object(text) == '{"title": "Soup"}'


def test_first_parseable_span_wins():
    text = '{"small": 1} and later {"title": "Soup", "ingredients": []}'
    assert extract_json_object(text) == '{"small": 1}'


def test_no_object():
    assert extract_json_object("no braces here") is None
    assert extract_json_object("") is None
    assert extract_json_object("{ unbalanced") is None


def test_fenced_block():
    text = 'Sure!\n```json\n{"title": "Soup"}\n```\nAnything else?'
    assert extract_fenced_json(text) == '{"title": "Soup"}'
    assert extract_fenced_json("```python\nprint(1)\n```") is None
