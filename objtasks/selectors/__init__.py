"""
Selectors package
-----------------
Builder for CSS-like selector strings: typed fragments appended in a fixed
order, joined with combinators, rendered with `stringify()`.
"""

from .builder import (
    DuplicateSelectorPartError,
    Fragment,
    FragmentKind,
    Selector,
    SelectorBuildError,
    SelectorBuilder,
    SelectorOrderError,
)
from .facade import CssSelectorBuilder, css_selector_builder

__all__ = [
    "SelectorBuilder",
    "Selector",
    "Fragment",
    "FragmentKind",
    "SelectorBuildError",
    "DuplicateSelectorPartError",
    "SelectorOrderError",
    "CssSelectorBuilder",
    "css_selector_builder",
]
