from pathlib import Path
import textwrap

import pytest

from objtasks.core.recipe_loader import Recipe, RecipeLoader, load_recipes_file


def write(tmp_path: Path, name: str, body: str) -> Path:
    p = tmp_path / name
    p.write_text(textwrap.dedent(body), encoding="utf-8")
    return p


def test_load_recipes_file_multiple_docs(tmp_path: Path):
    f = write(
        tmp_path,
        "multi.yaml",
        """
        name: gallery_link
        selector:
          element: a
          attrs: ['href$=".png"']
          pseudo_classes: [focus]
        ---
        name: rows
        selector:
          combine:
            left: {element: div, id: main}
            combinator: "+"
            right: {element: table, id: data}
        """,
    )

    recipes = load_recipes_file(f)
    assert [r.name for r in recipes] == ["gallery_link", "rows"]
    assert recipes[0].render() == 'a[href$=".png"]:focus'
    assert recipes[1].render() == "div#main + table#data"


def test_compound_parts_render_in_canonical_order():
    recipe = Recipe.model_validate(
        {
            "name": "  everything  ",
            "selector": {
                "pseudo_element": "before",
                "pseudo_classes": ["hover"],
                "attrs": ["lang"],
                "classes": ["a", "b"],
                "id": "main",
                "element": "p",
            },
        }
    )
    assert recipe.name == "everything"
    assert recipe.render() == "p#main.a.b[lang]:hover::before"


def test_nested_combine_matches_builder(tmp_path: Path):
    f = write(
        tmp_path,
        "nested.yml",
        """
        name: table_cells
        selector:
          combine:
            left: {element: table, id: data}
            combinator: "~"
            right:
              combine:
                left: {element: tr, pseudo_classes: ["nth-of-type(even)"]}
                combinator: " "
                right: {element: td}
        """,
    )
    (recipe,) = load_recipes_file(f)
    assert recipe.render() == "table#data ~ tr:nth-of-type(even)   td"


def test_invalid_combinator_reported(tmp_path: Path):
    f = write(
        tmp_path,
        "bad.yaml",
        """
        name: bad
        selector:
          combine:
            left: {element: a}
            combinator: "|"
            right: {element: b}
        """,
    )
    with pytest.raises(ValueError, match="Invalid recipe") as exc:
        load_recipes_file(f)
    assert "document 1" in str(exc.value)


def test_empty_compound_rejected(tmp_path: Path):
    f = write(tmp_path, "empty.yaml", "name: nothing\nselector: {}\n")
    with pytest.raises(ValueError):
        load_recipes_file(f)


def test_unknown_part_rejected(tmp_path: Path):
    f = write(tmp_path, "typo.yaml", "name: typo\nselector: {elemnt: a}\n")
    with pytest.raises(ValueError):
        load_recipes_file(f)


def test_non_mapping_document(tmp_path: Path):
    f = write(tmp_path, "list.yaml", "- just\n- a list\n")
    with pytest.raises(ValueError, match="must be a mapping"):
        load_recipes_file(f)


def test_yaml_error(tmp_path: Path):
    f = write(tmp_path, "broken.yaml", "name: [unclosed\n")
    with pytest.raises(ValueError, match="YAML parse error"):
        load_recipes_file(f)


def test_empty_file(tmp_path: Path):
    f = write(tmp_path, "blank.yaml", "\n")
    with pytest.raises(ValueError, match="No recipe documents"):
        load_recipes_file(f)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_recipes_file(tmp_path / "nope.yaml")


def test_load_directory_skips_invalid(tmp_path: Path):
    write(tmp_path, "one.yaml", "name: one\nselector: {class_: x}\n")
    write(tmp_path, "two.yaml", "name: two\nselector: {classes: [x]}\n")
    sub = tmp_path / "nested"
    sub.mkdir()
    write(sub, "three.yml", "name: three\nselector: {id: y}\n")

    recipes = RecipeLoader().load_directory(tmp_path)
    assert sorted(r.name for r in recipes) == ["three", "two"]

    flat = RecipeLoader().load_directory(tmp_path, recursive=False)
    assert [r.name for r in flat] == ["two"]
