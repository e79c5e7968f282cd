# Copyright 2025 The html-query-selector Authors
# SPDX-License-Identifier: Apache-2.0

"""QuerySelector - Run built XPath queries against an HTML document.

Parsing and XPath evaluation are delegated to lxml. The parser runs in
recovery mode, so broken markup still produces a usable document.

Example:
    >>> from html_query_selector import QuerySelector
    >>> selector = QuerySelector('<ul><li class="on">a</li><li>b</li></ul>')
    >>> selector.select_tag('li').attribute('class', 'on').length()
    1
    >>> selector.select_tag('li').length()
    2
"""

from __future__ import annotations

import logging
from typing import Any

from lxml import etree, html as lxml_html

from .builder import QueryBuilder

logger = logging.getLogger(__name__)


def _parse_document(
    markup: str, parser: etree.HTMLParser | None = None
) -> etree._ElementTree:
    """Parse markup into a document, tolerating malformed or empty input.

    lxml rejects str input carrying an XML encoding declaration, so such
    markup is parsed again as UTF-8 bytes. Without a caller supplied
    parser, the retry uses a parser that decodes UTF-8 explicitly.
    """
    if parser is None:
        parser = lxml_html.HTMLParser(recover=True)
        bytes_parser = lxml_html.HTMLParser(recover=True, encoding='utf-8')
    else:
        bytes_parser = parser

    root = None
    if markup.strip():
        try:
            try:
                root = etree.fromstring(markup, parser)
            except ValueError:
                parser = bytes_parser
                root = etree.fromstring(markup.encode('utf-8'), parser)
        except etree.XMLSyntaxError as exc:
            logger.debug("HTML parser produced no document: %s", exc)

    if root is None:
        # lxml gives no root for empty documents
        root = lxml_html.Element('html')

    if parser.error_log:
        logger.debug(
            "Recovered from %d HTML parse errors", len(parser.error_log)
        )
    return root.getroottree()


class QuerySelector(QueryBuilder):
    """Query builder bound to a parsed HTML document.

    Chain select_tag()/attribute()/or_attribute() calls, then finish with
    one of the terminal operations:

    - select(): evaluate the query and return the matching nodes
    - length(): number of matching nodes
    - to_query(): the query string, without evaluating it

    Every terminal operation resets the builder.

    Args:
        markup: Raw HTML text.
        parser: Optional lxml HTMLParser to use instead of the default
            recovering parser.
    """

    __slots__ = ('_document', '_evaluator')

    def __init__(
        self, markup: str, parser: etree.HTMLParser | None = None
    ) -> None:
        super().__init__()
        self._document = _parse_document(markup, parser)
        self._evaluator = etree.XPathDocumentEvaluator(self._document)

    @property
    def document(self) -> etree._ElementTree:
        """The parsed document queries run against."""
        return self._document

    def select(self) -> list[Any] | None:
        """Evaluate the built query against the document.

        Returns:
            List of matching nodes, or None if the query could not be
            evaluated (e.g. nothing was selected).
        """
        query = self.build_query()
        try:
            return self._evaluator(query)
        except etree.XPathError as exc:
            logger.warning("Cannot evaluate XPath query %r: %s", query, exc)
            return None

    def length(self) -> int:
        """Count the nodes matched by the built query."""
        nodes = self.select()
        if nodes is None:
            return 0
        return len(nodes)

    def to_query(self) -> str:
        """Return the built query without evaluating it."""
        return self.build_query()
