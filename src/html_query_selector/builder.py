# Copyright 2025 The html-query-selector Authors
# SPDX-License-Identifier: Apache-2.0

"""QueryBuilder - Fluent builder for XPath queries."""

from __future__ import annotations

import logging

from .query import (
    AND,
    CHILD,
    DESCENDANT,
    OR,
    AttributeCondition,
    QuerySession,
    TagSelection,
    WildcardSelection,
)

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Accumulates tag and attribute selections into one XPath query.

    Tag and attribute methods return the builder so calls can be chained.
    Attribute conditions always apply to the most recently selected tag;
    with no tag selected, an implicit ``*`` selection is created first.

    build_query() serializes the selections in call order and clears
    the session, so the same builder can start an unrelated query.

    Example:
        >>> builder = QueryBuilder()
        >>> builder.select_tag('div').attribute('id', 'main')
        >>> builder.select_tag('a', recursive=False).attribute('href')
        >>> builder.build_query()
        "//div[@id='main']/a[@href]"
        >>> builder.build_query()
        ''
    """

    __slots__ = ('_session',)

    def __init__(self) -> None:
        self._session = QuerySession()

    @property
    def session(self) -> QuerySession:
        """Access the session under construction."""
        return self._session

    def select_tag(self, name: str, recursive: bool = True) -> QueryBuilder:
        """Select elements by tag name.

        Args:
            name: Tag name. Selecting the same name twice in one query
                creates two distinct path steps.
            recursive: If True, match anywhere below the current scope
                (``//``); if False, only direct children (``/``).

        Returns:
            The builder, for chaining.
        """
        key = self._session.unique_key(name)
        axis = DESCENDANT if recursive else CHILD
        self._session.add(TagSelection(key, name, axis))
        return self

    def select_all_tags(self) -> None:
        """Select any element (``//*``) as the current path step."""
        self._session.add(WildcardSelection(self._session.wildcard_key()))

    def attribute(self, name: str, value: str | None = None) -> QueryBuilder:
        """Add an attribute condition joined with 'and'.

        Args:
            name: Attribute name.
            value: Exact value to match. If None, only the presence
                of the attribute is tested.
        """
        self._add_condition(name, value, AND)
        return self

    def or_attribute(self, name: str, value: str | None = None) -> QueryBuilder:
        """Add an attribute condition joined with 'or'."""
        self._add_condition(name, value, OR)
        return self

    def _add_condition(self, name: str, value: str | None, operator: str) -> None:
        if self._session.current is None:
            self.select_all_tags()
        self._session.current.add_condition(
            AttributeCondition(name, value, operator)
        )

    def build_query(self) -> str:
        """Serialize the session into an XPath query and reset it.

        Returns:
            The query, or an empty string if nothing was selected.
        """
        try:
            query = ''.join(selection.to_xpath() for selection in self._session)
        finally:
            self.reset()
        logger.debug("Built XPath query %r", query)
        return query

    def reset(self) -> None:
        """Discard all selections and conditions."""
        self._session.clear()
