from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from objtasks.utils.logger import get_logger

log = get_logger(__name__)


class SelectorBuildError(ValueError):
    pass


class DuplicateSelectorPartError(SelectorBuildError):
    def __init__(self, kind: "FragmentKind") -> None:
        super().__init__(
            "Element, id and pseudo-element should not occur more then one time inside the selector"
        )
        self.kind = kind


class SelectorOrderError(SelectorBuildError):
    def __init__(self, kind: "FragmentKind", conflict: "FragmentKind") -> None:
        super().__init__(
            "Selector parts should be arranged in the following order: "
            "element, id, class, attribute, pseudo-class, pseudo-element"
        )
        self.kind = kind
        self.conflict = conflict


class FragmentKind(str, Enum):
    element = "element"
    id = "id"
    class_ = "class"
    attr = "attr"
    pseudo_class = "pseudoClass"
    pseudo_element = "pseudoElement"
    combinator = "combinator"


# Left-to-right arrangement inside one compound selector. Combinators have no rank.
RANK = {
    FragmentKind.element: 1,
    FragmentKind.id: 2,
    FragmentKind.class_: 3,
    FragmentKind.attr: 4,
    FragmentKind.pseudo_class: 5,
    FragmentKind.pseudo_element: 6,
}

SINGLETONS = frozenset({FragmentKind.element, FragmentKind.id, FragmentKind.pseudo_element})


@dataclass(frozen=True)
class Fragment:
    kind: FragmentKind
    text: str  # already formatted: "#main", ".x", " + "


class SelectorBuilder:
    """
    Accumulates selector fragments in emission order:

        element#id.class[attr]:pseudoClass::pseudoElement
                  \\----/\\----/\\----------/
                  may repeat

    Every append is validated against everything already present, and a
    failing append leaves the builder untouched. Two builders can be joined
    with `combine`, which copies both sides into a fresh builder.
    """

    def __init__(self, fragments: Optional[Iterable[Fragment]] = None) -> None:
        self._fragments: List[Fragment] = list(fragments or [])
        self._touched: Set[FragmentKind] = set()

    # ---------- Appends ----------

    def element(self, value: str) -> "SelectorBuilder":
        return self._append(FragmentKind.element, value)

    def id(self, value: str) -> "SelectorBuilder":
        return self._append(FragmentKind.id, f"#{value}")

    def class_(self, value: str) -> "SelectorBuilder":
        return self._append(FragmentKind.class_, f".{value}")

    def attr(self, value: str) -> "SelectorBuilder":
        return self._append(FragmentKind.attr, f"[{value}]")

    def pseudo_class(self, value: str) -> "SelectorBuilder":
        return self._append(FragmentKind.pseudo_class, f":{value}")

    def pseudo_element(self, value: str) -> "SelectorBuilder":
        return self._append(FragmentKind.pseudo_element, f"::{value}")

    pseudoClass = pseudo_class
    pseudoElement = pseudo_element

    # ---------- Output ----------

    def stringify(self) -> str:
        return "".join(f.text for f in self._fragments)

    def __str__(self) -> str:
        return self.stringify()

    def __repr__(self) -> str:
        return f"SelectorBuilder({self.stringify()!r})"

    @property
    def fragments(self) -> Tuple[Fragment, ...]:
        return tuple(self._fragments)

    # ---------- Composition ----------

    @classmethod
    def combine(cls, left: "SelectorBuilder", combinator: str, right: "SelectorBuilder") -> "SelectorBuilder":
        """
        Join two selectors with a combinator token (" ", "+", "~", ">").

        The result owns copies of both fragment lists and starts with no
        singleton usage recorded; nothing is re-validated.
        """
        joined = cls(
            [*left._fragments, Fragment(FragmentKind.combinator, f" {combinator} "), *right._fragments]
        )
        log.debug("combined %r %r %r", left, combinator, right)
        return joined

    # ---------- Validation ----------

    def _check_unique(self, kind: FragmentKind) -> None:
        if kind in SINGLETONS and kind in self._touched:
            log.debug("duplicate %s on %r", kind.value, self)
            raise DuplicateSelectorPartError(kind)

    def _check_order(self, kind: FragmentKind) -> None:
        rank = RANK[kind]
        for frag in self._fragments:
            if frag.kind is FragmentKind.combinator:
                continue
            if RANK[frag.kind] > rank:
                log.debug("%s after %s on %r", kind.value, frag.kind.value, self)
                raise SelectorOrderError(kind, frag.kind)

    def _append(self, kind: FragmentKind, text: str) -> "SelectorBuilder":
        self._check_unique(kind)
        self._check_order(kind)

        if kind in SINGLETONS:
            self._touched.add(kind)
        self._fragments.append(Fragment(kind, text))
        return self


# `class` is reserved in Python; keep the CSS spelling reachable via getattr.
setattr(SelectorBuilder, "class", SelectorBuilder.class_)

Selector = SelectorBuilder
