"""
URL Linker — turns http(s) runs in plain fragments into ExternalLinks.

Runs after the entity pass and only touches fragments still plain.
"""
import re
from typing import List, Sequence

from catalog_linker.config.constants import URL_PATTERN
from catalog_linker.models.segment import ExternalLink, PlainText, Segment

_URL_RE = re.compile(URL_PATTERN)


def link_urls(segments: Sequence[Segment]) -> List[Segment]:
    """Split plain fragments around every ``http(s)://`` run of non-whitespace."""
    linked: List[Segment] = []

    for segment in segments:
        if not isinstance(segment, PlainText):
            linked.append(segment)
            continue

        text = segment.text
        pos = 0
        for match in _URL_RE.finditer(text):
            if match.start() > pos:
                linked.append(PlainText(text[pos : match.start()]))
            linked.append(ExternalLink(url=match.group(0)))
            pos = match.end()

        if pos == 0:
            linked.append(segment)
        elif pos < len(text):
            linked.append(PlainText(text[pos:]))

    return linked
