from __future__ import annotations

from objtasks.selectors.builder import SelectorBuilder


class CssSelectorBuilder:
    """
    Entry point for building selectors. Each method starts a fresh
    SelectorBuilder seeded with one fragment, so calls never share state:

        builder = css_selector_builder
        builder.id("main").class_("container").class_("editable").stringify()
        # '#main.container.editable'

        builder.combine(
            builder.element("div").id("main"),
            "+",
            builder.element("table").id("data"),
        ).stringify()
        # 'div#main + table#data'
    """

    def element(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().element(value)

    def id(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().id(value)

    def class_(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().class_(value)

    def attr(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().attr(value)

    def pseudo_class(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().pseudo_class(value)

    def pseudo_element(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().pseudo_element(value)

    pseudoClass = pseudo_class
    pseudoElement = pseudo_element

    def stringify(self) -> str:
        return SelectorBuilder().stringify()

    def combine(self, left: SelectorBuilder, combinator: str, right: SelectorBuilder) -> SelectorBuilder:
        return SelectorBuilder.combine(left, combinator, right)


setattr(CssSelectorBuilder, "class", CssSelectorBuilder.class_)

css_selector_builder = CssSelectorBuilder()
