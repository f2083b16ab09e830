from __future__ import annotations

"""Command-line interface
------------------------
Build selectors from options, render/validate recipe files, and a small
rectangle helper. Thin wrapper around the library modules.
"""

import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click

from objtasks.core.recipe_loader import find_recipe_files, load_recipes_file
from objtasks.selectors import SelectorBuilder
from objtasks.serialization import get_json
from objtasks.shapes import Rectangle
from objtasks.utils.config import get_settings
from objtasks.utils.logger import bind, get_logger, log_with_context, set_log_level, unbind

log = get_logger(__name__)


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _collect_files(targets: Tuple[str, ...], recipes_dir: Optional[str], recursive: bool) -> List[Path]:
    paths: List[Path] = []
    for t in targets:
        p = Path(t).resolve()
        if p.is_dir():
            paths.extend(find_recipe_files(p, recursive=True))
        else:
            paths.append(p)
    if recipes_dir:
        paths.extend(find_recipe_files(Path(recipes_dir), recursive=recursive))
    return paths


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="objtasks")
def cli(log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    s = get_settings()
    _echo_json(s.model_dump(mode="json"))


@cli.command("build")
@click.option("--element", "element", default=None, help="Element (type) selector, e.g. 'a'")
@click.option("--id", "id_", default=None, help="Id without the leading '#'")
@click.option("--class", "classes", multiple=True, help="Class name (repeatable)")
@click.option("--attr", "attrs", multiple=True, help="Attribute condition, e.g. 'href$=\".png\"' (repeatable)")
@click.option("--pseudo-class", "pseudo_classes", multiple=True, help="Pseudo-class, e.g. 'focus' (repeatable)")
@click.option("--pseudo-element", "pseudo_element", default=None, help="Pseudo-element, e.g. 'before'")
def cmd_build(
    element: Optional[str],
    id_: Optional[str],
    classes: Tuple[str, ...],
    attrs: Tuple[str, ...],
    pseudo_classes: Tuple[str, ...],
    pseudo_element: Optional[str],
):
    """
    Build one compound selector.

    Example:
      objtasks build --element a --attr 'href$=".png"' --pseudo-class focus
    """
    b = SelectorBuilder()
    if element:
        b.element(element)
    if id_:
        b.id(id_)
    for c in classes:
        b.class_(c)
    for a in attrs:
        b.attr(a)
    for p in pseudo_classes:
        b.pseudo_class(p)
    if pseudo_element:
        b.pseudo_element(pseudo_element)
    click.echo(b.stringify())


@cli.command("render")
@click.argument("targets", nargs=-1, required=False)
@click.option("--dir", "recipes_dir", type=click.Path(file_okay=False, dir_okay=True, exists=True),
              help="Render all recipes under this directory")
@click.option("--recursive/--no-recursive", default=True, show_default=True)
def cmd_render(targets: Tuple[str, ...], recipes_dir: Optional[str], recursive: bool):
    """Print '<name>\\t<selector>' for every recipe found."""
    paths = _collect_files(targets, recipes_dir, recursive)
    if not paths:
        click.echo("Provide file(s) or --dir to render.")
        sys.exit(2)

    ok = True
    for fp in paths:
        bind(recipe_file=str(fp))
        try:
            for recipe in load_recipes_file(fp):
                rendered = recipe.render()
                log_with_context(log, recipe=recipe.name).debug(f"rendered {rendered!r}")
                click.echo(f"{recipe.name}\t{rendered}")
        except (ValueError, FileNotFoundError) as e:
            ok = False
            log.error(f"Failed to render {fp}")
            click.echo(f"ERR {fp}  ->  {e}")
        finally:
            unbind("recipe_file")

    sys.exit(0 if ok else 1)


@cli.command("validate")
@click.argument("targets", nargs=-1, required=False)
@click.option("--dir", "recipes_dir", type=click.Path(file_okay=False, dir_okay=True, exists=True),
              help="Validate all recipes under this directory")
@click.option("--recursive/--no-recursive", default=True, show_default=True)
def cmd_validate(targets: Tuple[str, ...], recipes_dir: Optional[str], recursive: bool):
    """Validate recipe files (supports multi-doc YAML)."""
    paths = _collect_files(targets, recipes_dir, recursive)
    if not paths:
        click.echo("Provide file(s) or --dir to validate.")
        sys.exit(2)

    ok = True
    for fp in paths:
        try:
            for recipe in load_recipes_file(fp):
                click.echo(f"OK  {fp}  ->  {recipe.name}")
        except (ValueError, FileNotFoundError) as e:
            ok = False
            click.echo(f"ERR {fp}  ->  {e}")

    sys.exit(0 if ok else 1)


@cli.command("area")
@click.argument("width", type=float)
@click.argument("height", type=float)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the rectangle as JSON instead")
def cmd_area(width: float, height: float, as_json: bool):
    """Area of a WIDTH x HEIGHT rectangle."""
    rect = Rectangle(width, height)
    if as_json:
        click.echo(get_json(rect, indent=get_settings().JSON_INDENT))
        return
    click.echo(f"{rect.get_area():g}")


def main() -> None:
    cli(prog_name="objtasks")


if __name__ == "__main__":
    main()
