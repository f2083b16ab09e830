# objtasks/core/recipe_loader.py
from __future__ import annotations

"""Selector recipe schema and loader
------------------------------------
Pydantic models describing named selectors in YAML, and a loader for
(multi-document) recipe files. Each recipe renders through the selector
builder, so the output follows the same formatting rules.
"""

from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from objtasks.selectors.builder import SelectorBuilder
from objtasks.utils.logger import get_logger

log = get_logger(__name__)


# ---------- Selector specs ----------


class CompoundSpec(BaseModel):
    """One compound selector, e.g. `a#nav.link[href]:hover`."""

    model_config = ConfigDict(extra="forbid")

    element: Optional[str] = None
    id: Optional[str] = None
    classes: List[str] = Field(default_factory=list)
    attrs: List[str] = Field(default_factory=list)
    pseudo_classes: List[str] = Field(default_factory=list)
    pseudo_element: Optional[str] = None

    @model_validator(mode="after")
    def _not_empty(self) -> "CompoundSpec":
        if not (self.element or self.id or self.classes or self.attrs
                or self.pseudo_classes or self.pseudo_element):
            raise ValueError("selector needs at least one part")
        return self

    def build(self) -> SelectorBuilder:
        # Canonical order; the builder can't reject it.
        b = SelectorBuilder()
        if self.element:
            b.element(self.element)
        if self.id:
            b.id(self.id)
        for c in self.classes:
            b.class_(c)
        for a in self.attrs:
            b.attr(a)
        for p in self.pseudo_classes:
            b.pseudo_class(p)
        if self.pseudo_element:
            b.pseudo_element(self.pseudo_element)
        return b


class CombineBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    left: "SelectorSpec"
    combinator: Literal[" ", "+", "~", ">"]
    right: "SelectorSpec"


class CombineSpec(BaseModel):
    """`{combine: {left: ..., combinator: "+", right: ...}}`; sides may nest."""

    model_config = ConfigDict(extra="forbid")

    combine: CombineBody

    def build(self) -> SelectorBuilder:
        body = self.combine
        return SelectorBuilder.combine(body.left.build(), body.combinator, body.right.build())


SelectorSpec = Union[CombineSpec, CompoundSpec]

CombineBody.model_rebuild()
CombineSpec.model_rebuild()


# ---------- Recipe model ----------


class Recipe(BaseModel):
    name: str = Field(..., description="Recipe key, e.g. 'gallery_link'")
    description: Optional[str] = None
    selector: SelectorSpec

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    def build(self) -> SelectorBuilder:
        return self.selector.build()

    def render(self) -> str:
        return self.build().stringify()


# ---------- Public API ----------


def _validation_message(header: str, ve: ValidationError) -> str:
    lines = [header]
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        msg = e.get("msg", "invalid value")
        lines.append(f"  - {loc}: {msg}")
    return "\n".join(lines)


def load_recipes_file(path: Path | str) -> list[Recipe]:
    """Load one or more recipes from a YAML file (supports multi-document)."""
    fp = Path(path)
    if not fp.exists():
        raise FileNotFoundError(f"Recipe file not found: {fp}")

    try:
        docs = list(yaml.safe_load_all(fp.read_text(encoding="utf-8")))
    except yaml.YAMLError as ye:
        raise ValueError(f"YAML parse error in {fp}: {ye}") from ye

    out: list[Recipe] = []
    for idx, data in enumerate(docs, start=1):
        if data is None:
            continue
        if not isinstance(data, dict):
            raise ValueError(f"Document {idx} in {fp} must be a mapping/object.")
        try:
            out.append(Recipe.model_validate(data))
        except ValidationError as ve:
            raise ValueError(_validation_message(f"Invalid recipe '{fp}' (document {idx}):", ve)) from ve

    if not out:
        raise ValueError(f"No recipe documents found in {fp}")
    log.debug(f"loaded {len(out)} recipe(s) from {fp}")
    return out


def find_recipe_files(root: Path, recursive: bool = True) -> list[Path]:
    if recursive:
        return sorted(list(root.rglob("*.yaml")) + list(root.rglob("*.yml")))
    return sorted(list(root.glob("*.yaml")) + list(root.glob("*.yml")))


class RecipeLoader:
    def load_directory(self, root: Path, *, recursive: bool = True) -> list[Recipe]:
        recipes: list[Recipe] = []
        for fp in find_recipe_files(root, recursive=recursive):
            try:
                recipes.extend(load_recipes_file(fp))
            except ValueError as e:
                log.warning(f"Skipping {fp}: {e}")
        return recipes


__all__ = [
    "CompoundSpec",
    "CombineSpec",
    "SelectorSpec",
    "Recipe",
    "RecipeLoader",
    "find_recipe_files",
    "load_recipes_file",
]
