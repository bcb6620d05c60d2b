import re
from typing import NamedTuple

# Opening and closing lines must be exactly '---'; the block must start the file
FRONTMATTER_RE = re.compile(r'\A---\r?\n(?:([\s\S]*?)\r?\n)?---(?:\r?\n|\Z)')


class Frontmatter(NamedTuple):
    metadata: dict
    body: str


def parse_metadata(block):
    metadata = {}
    for line in block.split('\n'):
        colon = line.find(':')
        if colon > 0:
            key = line[:colon].strip()
            metadata[key] = line[colon + 1:].strip()
    return metadata


def parse_frontmatter(text):
    """Split a document into its leading `key: value` block and the body.

    Documents without a complete block come back untouched with empty metadata.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return Frontmatter({}, text)

    metadata = parse_metadata(match.group(1) or '')
    return Frontmatter(metadata, text[match.end():])
