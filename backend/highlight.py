# Highlighting of matched filter terms inside rendered cell text
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence

from matcher import compile_term


@dataclass(frozen=True)
class Segment:
    """A run of cell text; depth counts how many terms wrapped it"""
    text: str
    depth: int = 0

    @property
    def is_match(self) -> bool:
        return self.depth > 0

    def to_dict(self) -> Dict:
        return {"text": self.text, "isMatch": self.is_match}


def _split(segment: Segment, pattern) -> List[Segment]:
    pieces: List[Segment] = []
    last = 0
    for m in pattern.finditer(segment.text):
        if m.start() == m.end():
            continue
        if m.start() > last:
            pieces.append(replace(segment, text=segment.text[last:m.start()]))
        pieces.append(Segment(m.group(0), segment.depth + 1))
        last = m.end()
    if last == 0:
        return [segment]
    if last < len(segment.text):
        pieces.append(replace(segment, text=segment.text[last:]))
    return pieces


def highlight(text: Optional[str], terms: Sequence[str]) -> List[Segment]:
    """
    Split text into matched / unmatched segments for the given terms.

    Terms are applied one after another, each inside every segment produced
    so far. A match never spans a boundary introduced by an earlier term, and
    a later match inside an earlier one nests (depth 2) instead of merging,
    mirroring sequential marker wrapping. Joining the segment texts gives
    back the input unchanged.
    """
    if text is None:
        return []
    segments = [Segment(text)]
    if not text:
        return segments
    for term in terms or ():
        pattern = compile_term(term)
        if pattern is None:
            continue
        split: List[Segment] = []
        for segment in segments:
            split.extend(_split(segment, pattern))
        segments = split
    return segments


def highlight_markup(text: Optional[str], terms: Iterable[str], tag: str = "mark") -> Optional[str]:
    """
    Wrap every match in <tag>...</tag>, term by term, over the evolving string.

    Output is not escaped: text must already be plain data. A later term is
    matched against markup produced for earlier terms, so overlapping terms
    may nest markers.
    """
    if not text:
        return text
    for term in terms or ():
        pattern = compile_term(term)
        if pattern is None:
            continue
        text = pattern.sub(lambda m: f"<{tag}>{m.group(0)}</{tag}>", text)
    return text


def segments_to_dicts(segments: Iterable[Segment]) -> List[Dict]:
    return [s.to_dict() for s in segments]
