"""Tests for loading reflection dumps."""

from pathlib import Path

import pytest

from doctags.annotation_map import LONG_DESCRIPTION, SHORT_DESCRIPTION
from doctags.errors import ConfigurationError
from doctags.load_reflection import load_reflection

DUMP = """\
elements:
  - name: App\\Model\\User
    kind: class
    namespace: App\\Model
    start_line: 12
    doc_comment: "/**\\n * A user.\\n */"
    aliases:
      Base: App\\Model\\Entity
    inheritance: [App\\Model\\Entity]
    annotations:
      short_description: A user.
      long_description: Stored in the users table.
      author: [Jane, John]
      since: 1.2
    methods:
      - name: save
        start_line: 30
        annotations:
          return: [bool]
    properties:
      - name: email
    constants:
      - name: TABLE
  - name: App\\helper
    kind: function
  - kind: class
"""


def test_load_reflection(tmp_path: Path) -> None:
    """Verify elements, members and annotations are read from a dump."""
    dump = tmp_path / "dump.yml"
    dump.write_text(DUMP, encoding="utf-8")
    store = load_reflection([dump])

    user = store.get_class("App\\Model\\User")
    assert user.namespace_name == "App\\Model"
    assert user.doc_comment_lines == 3
    assert user.inheritance == ["App\\Model\\Entity"]
    assert user.annotations == {
        SHORT_DESCRIPTION: "A user.",
        LONG_DESCRIPTION: "Stored in the users table.",
        "author": ["Jane", "John"],
        "since": ["1.2"],
    }

    save = user.methods["save"]
    assert save.kind == "method"
    assert save.declaring_class == "App\\Model\\User"
    assert save.qualified_name == "App\\Model\\User::save"
    assert save.namespace_name == "App\\Model"
    assert save.aliases == {"Base": "App\\Model\\Entity"}
    assert save.annotation("RETURN") == ["bool"]
    assert user.properties["email"].kind == "property"
    assert user.constants["TABLE"].kind == "class_constant"

    assert store.get_function("App\\helper") is not None
    assert len(list(store)) == 2


def test_load_reflection_invalid_yaml(tmp_path: Path) -> None:
    """Verify that unreadable dumps are reported as configuration errors."""
    dump = tmp_path / "broken.yml"
    dump.write_text("elements: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="broken.yml"):
        load_reflection([dump])
