"""Token-to-Block conversion using source line positions"""

from mdblog.core.models import Block, BlockKind


BLOCK_KIND_MAP: dict[str, BlockKind] = {
    'heading_open':      BlockKind.heading,
    'paragraph_open':    BlockKind.paragraph,
    'bullet_list_open':  BlockKind.list,
    'ordered_list_open': BlockKind.list,
    'blockquote_open':   BlockKind.quote,
    'table_open':        BlockKind.table,
    'html_block':        BlockKind.html,
    'hr':                BlockKind.rule,
    'fence':             BlockKind.code,
    'code_block':        BlockKind.code,
}


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def fence_lang(token) -> str | None:
    """First word of a fence info string ('csharp', 'lua', ...), else None."""
    if token.type != 'fence':
        return None
    info = token.info.strip().split()
    return info[0] if info else None


def _source_slice(token, source_lines: list[str]) -> str:
    """Extract raw source for a block via token.map; fallback to token.content."""
    if token.map:
        start, end = token.map
        return ''.join(source_lines[start:end]).rstrip()
    return token.content.rstrip()


def tokens_to_blocks(tokens: list, source_lines: list[str]) -> list[Block]:
    """Convert a document's token stream to its ordered top-level Blocks.

    Only level-0 tokens open a block, so paragraphs nested in lists or quotes
    stay part of their container.
    """
    blocks: list[Block] = []
    for tok in tokens:
        if tok.level != 0:
            continue
        kind = BLOCK_KIND_MAP.get(tok.type)
        if kind is None:
            continue
        blocks.append(Block(
            kind=kind,
            content=_source_slice(tok, source_lines),
            lang=fence_lang(tok),
            level=heading_level(tok),
        ))
    return blocks
