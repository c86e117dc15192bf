"""Named HTML character references.

Once ``&`` is seen the rule commits: a missing ``;`` within the scan limit,
or a name that is not in the HTML5 table, is a Fatal failure rather than
two literal characters.

The table is the standard library's ``html.entities.html5``, restricted to
the names written with a terminating semicolon.

"""

from __future__ import annotations

import html.entities

from marcado.config import get_parse_config
from marcado.input import Input
from marcado.location import Span
from marcado.nodes import Entity
from marcado.parsing.charsets import ENTITY_END, ENTITY_START
from marcado.parsing.combinators import char
from marcado.parsing.failure import Failure, FailureKind, failed, fatal

# "&amp;", "&copy;", ...
ENTITY_NAMES: frozenset[str] = frozenset(
    ENTITY_START + name for name in html.entities.html5 if name.endswith(ENTITY_END)
)

_ampersand = char(ENTITY_START)


def entity(input: Input) -> Entity | Failure:
    """Parse ``&name;`` where ``&name;`` is a valid HTML5 entity."""
    opened = _ampersand(input.clone())
    if failed(opened):
        return opened.wrap(FailureKind.ENTITY)

    limit = get_parse_config().entity_scan_limit
    # The ";" may sit at any index up to the limit, counted from the "&".
    end = input.find(ENTITY_END, 0, limit + 1)
    if end < 0:
        start = input.start
        return fatal(FailureKind.ENTITY, Span(start, start + min(limit, len(input))))

    content = input.split_to(end + 1)
    if content.as_str() not in ENTITY_NAMES:
        return fatal(FailureKind.ENTITY, content.to_span())

    return Entity(content)
