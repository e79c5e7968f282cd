# Copyright 2025 The html-query-selector Authors
# SPDX-License-Identifier: Apache-2.0

"""html-query-selector - Fluent XPath query builder for HTML documents.

Builds XPath queries from chained tag and attribute calls and evaluates
them with lxml.

    >>> from html_query_selector import QuerySelector
    >>> QuerySelector('<p id="x">hi</p>').attribute('id', 'x').to_query()
    "//*[@id='x']"
"""

__version__ = "0.1.0"

from .builder import QueryBuilder
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
from .selector import QuerySelector

__all__ = [
    # Builder and facade
    "QueryBuilder",
    "QuerySelector",
    # Query model
    "QuerySession",
    "TagSelection",
    "WildcardSelection",
    "AttributeCondition",
    # Constants
    "DESCENDANT",
    "CHILD",
    "AND",
    "OR",
]
