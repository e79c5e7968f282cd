# Copyright 2025 The html-query-selector Authors
# SPDX-License-Identifier: Apache-2.0

"""Query model - typed path steps and predicates for XPath assembly.

A query session is an ordered collection of tag selections. Each selection
owns the attribute conditions that end up in its bracketed predicate:

    //div[@id='main' or @role]/span

    TagSelection('div', DESCENDANT)
        AttributeCondition('id', 'main', AND)
        AttributeCondition('role', None, OR)
    TagSelection('span', CHILD)
"""

from __future__ import annotations

from typing import Iterator, KeysView

# Axis tokens
DESCENDANT = '//'
CHILD = '/'

# Condition join operators
AND = 'and'
OR = 'or'

# Separator between a tag name and its occurrence index: div, div.1, div.2
UNIQUE_KEY_SEPARATOR = '.'

WILDCARD = '*'


class AttributeCondition:
    """A single attribute test inside a predicate.

    With no value the condition only tests for presence (``@name``);
    otherwise it tests exact equality (``@name='value'``).

    Example:
        >>> AttributeCondition('id', 'main').to_xpath()
        "@id='main'"
        >>> AttributeCondition('disabled').to_xpath()
        '@disabled'
    """

    __slots__ = ('name', 'value', 'operator')

    def __init__(
        self,
        name: str,
        value: str | None = None,
        operator: str = AND,
    ) -> None:
        self.name = name
        self.value = value
        self.operator = operator

    def __repr__(self) -> str:
        return (
            f"AttributeCondition({self.name!r}, {self.value!r}, "
            f"operator={self.operator!r})"
        )

    @property
    def is_presence_test(self) -> bool:
        """True if the condition only checks that the attribute exists."""
        return self.value is None

    def to_xpath(self) -> str:
        # Values are quoted as-is: a value holding a single quote
        # produces an unbalanced literal.
        if self.is_presence_test:
            return f"@{self.name}"
        return f"@{self.name}='{self.value}'"


class TagSelection:
    """A path step selecting elements by tag name.

    Attributes:
        key: Unique identifier within the session (div, div.1, ...).
        name: Tag name emitted in the query.
        axis: DESCENDANT ('//') or CHILD ('/').
        conditions: Ordered attribute conditions for this step.
    """

    __slots__ = ('key', 'name', 'axis', 'conditions')

    def __init__(self, key: str, name: str, axis: str = DESCENDANT) -> None:
        self.key = key
        self.name = name
        self.axis = axis
        self.conditions: list[AttributeCondition] = []

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.key!r}, axis={self.axis!r}, "
            f"conditions={len(self.conditions)})"
        )

    @property
    def node_test(self) -> str:
        """The node test written after the axis token."""
        return self.name

    def add_condition(self, condition: AttributeCondition) -> None:
        self.conditions.append(condition)

    def predicate(self) -> str:
        """Serialize the conditions as one bracketed predicate.

        The first condition is written bare; each following one is
        prefixed by its own join operator. Returns an empty string
        if the step has no conditions.

        Example:
            >>> step = TagSelection('a', 'a')
            >>> step.add_condition(AttributeCondition('href'))
            >>> step.add_condition(AttributeCondition('name', operator=OR))
            >>> step.predicate()
            '[@href or @name]'
        """
        if not self.conditions:
            return ''

        parts = []
        for index, condition in enumerate(self.conditions):
            if index > 0:
                parts.append(f" {condition.operator} ")
            parts.append(condition.to_xpath())
        return '[' + ''.join(parts) + ']'

    def to_xpath(self) -> str:
        return self.axis + self.node_test + self.predicate()


class WildcardSelection(TagSelection):
    """A path step matching any element (``//*``)."""

    __slots__ = ()

    def __init__(self, key: str) -> None:
        super().__init__(key, WILDCARD, DESCENDANT)

    @property
    def node_test(self) -> str:
        return WILDCARD


class QuerySession:
    """Mutable state of one query under construction.

    Holds the ordered selections (keyed by their unique key) and a
    pointer to the current selection, the implicit target of
    attribute conditions. clear() returns the session to its empty state.
    """

    __slots__ = ('_selections', 'current')

    def __init__(self) -> None:
        self._selections: dict[str, TagSelection] = {}
        self.current: TagSelection | None = None

    def __len__(self) -> int:
        return len(self._selections)

    def __bool__(self) -> bool:
        return bool(self._selections)

    def __iter__(self) -> Iterator[TagSelection]:
        return iter(self._selections.values())

    def __contains__(self, key: str) -> bool:
        return key in self._selections

    def __repr__(self) -> str:
        return f"QuerySession({list(self._selections)})"

    def keys(self) -> KeysView[str]:
        return self._selections.keys()

    def unique_key(self, name: str) -> str:
        """Return a key for name that no stored selection uses.

        The first selection of a name is keyed by the name itself,
        later ones by name + '.' + number of stored selections.
        """
        if name not in self._selections:
            return name

        index = len(self._selections)
        key = f"{name}{UNIQUE_KEY_SEPARATOR}{index}"
        while key in self._selections:
            index += 1
            key = f"{name}{UNIQUE_KEY_SEPARATOR}{index}"
        return key

    def wildcard_key(self) -> str:
        """Return a fresh key for a wildcard selection (``*.N``)."""
        index = len(self._selections)
        key = f"{WILDCARD}{UNIQUE_KEY_SEPARATOR}{index}"
        while key in self._selections:
            index += 1
            key = f"{WILDCARD}{UNIQUE_KEY_SEPARATOR}{index}"
        return key

    def add(self, selection: TagSelection) -> TagSelection:
        """Store selection and make it the current one."""
        self._selections[selection.key] = selection
        self.current = selection
        return selection

    def clear(self) -> None:
        self._selections.clear()
        self.current = None
