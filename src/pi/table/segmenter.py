"""Line breaking for cell content.

Break opportunities come from the Unicode line breaking algorithm (UAX #14,
via :mod:`uniseg`). Width is measured per grapheme cluster on the text with
control sequences removed; offsets are mapped back onto the original text
so escapes survive in the output.

Offsets used by :class:`SegmentedText` are indices into the control-free
("plain") text. The module-level :func:`find_break` and :func:`line_starts`
work on, and return offsets into, the original string.
"""

from __future__ import annotations

import sys
from bisect import bisect_right
from itertools import accumulate

from uniseg.linebreak import line_break_boundaries

from pi.table.utils import (
    CONTROL_SEQUENCE_RE,
    MANDATORY_BREAK_CHARS,
    SgrTracker,
    codepoint_widths,
    extract_control_sequence,
    grapheme_boundaries,
)

_RESET = "\x1b[0m"


class SegmentedText:
    """Pre-analysed text: break opportunities, widths and offset maps.

    Built once per content string; :meth:`line_starts` can then be asked for
    any number of widths.
    """

    def __init__(self, text: str) -> None:
        self.text = text

        plain_chars: list[str] = []
        # offsets[i]: position of plain char i in text.
        # anchors[i]: start of the run of escapes directly before plain char i
        # (equal to offsets[i] when there are none).
        offsets: list[int] = []
        anchors: list[int] = []
        pending: int | None = None
        pos = 0
        while pos < len(text):
            seq = extract_control_sequence(text, pos)
            if seq is not None:
                if pending is None:
                    pending = pos
                pos += len(seq)
                continue
            anchors.append(pos if pending is None else pending)
            offsets.append(pos)
            plain_chars.append(text[pos])
            pending = None
            pos += 1
        offsets.append(len(text))
        anchors.append(len(text) if pending is None else pending)

        self.plain = "".join(plain_chars)
        self._offsets = offsets
        self._anchors = anchors
        self._prefix = [0, *accumulate(codepoint_widths(self.plain))]
        self._clusters = grapheme_boundaries(self.plain)

        self._opportunities: list[int] = []
        self._mandatory: list[bool] = []
        for brk in line_break_boundaries(self.plain) if self.plain else ():
            if 0 < brk < len(self.plain):
                self._opportunities.append(brk)
                self._mandatory.append(self.plain[brk - 1] in MANDATORY_BREAK_CHARS)

    def __len__(self) -> int:
        return len(self.plain)

    # -- measurement --------------------------------------------------------

    def _visible_end(self, start: int, end: int) -> int:
        """End of the displayed part of ``plain[start:end]``.

        Break characters are never shown and trailing spaces hang past the
        edge of the line.
        """
        while end > start and self.plain[end - 1] in MANDATORY_BREAK_CHARS:
            end -= 1
        while end > start and self.plain[end - 1] == " ":
            end -= 1
        return end

    def width(self, start: int, end: int) -> int:
        """Display width of the segment ``plain[start:end]`` as it is shown."""
        return self._prefix[self._visible_end(start, end)] - self._prefix[start]

    def segment_widths(self, mandatory_only: bool = False) -> list[int]:
        """Widths of the pieces produced by breaking at every opportunity.

        With *mandatory_only* only forced breaks (newlines) are used.
        """
        cuts = [
            pos
            for pos, mandatory in zip(self._opportunities, self._mandatory)
            if mandatory or not mandatory_only
        ]
        bounds = [0, *cuts, len(self.plain)]
        return [self.width(a, b) for a, b in zip(bounds, bounds[1:])]

    # -- breaking -----------------------------------------------------------

    def find_break(self, start: int, max_width: int) -> int | None:
        """Return where the line beginning at *start* must end.

        ``None`` means the rest of the text fits on one line. A mandatory
        break is always honoured; otherwise the last opportunity that fits is
        used, and when none fits the line is split between grapheme clusters.
        """
        last_fit: int | None = None
        first = bisect_right(self._opportunities, start)
        for idx in range(first, len(self._opportunities)):
            pos = self._opportunities[idx]
            if self.width(start, pos) > max_width:
                return last_fit if last_fit is not None else self._hard_split(start, max_width)
            if self._mandatory[idx]:
                return pos
            last_fit = pos

        if self.width(start, len(self.plain)) > max_width:
            return last_fit if last_fit is not None else self._hard_split(start, max_width)
        return None

    def _hard_split(self, start: int, max_width: int) -> int | None:
        best: int | None = None
        first = bisect_right(self._clusters, start)
        for boundary in self._clusters[first:]:
            if self._prefix[boundary] - self._prefix[start] > max_width:
                break
            best = boundary
        if best is None:
            # Not even one cluster fits: emit exactly one per line.
            best = self._clusters[first] if first < len(self._clusters) else len(self.plain)
        if best >= len(self.plain):
            return None
        return best

    def line_starts(self, max_width: int | None = None) -> list[int]:
        """Start offsets (into :attr:`plain`) of every line at *max_width*.

        ``None`` means unbounded: only mandatory breaks split the text.
        """
        limit = sys.maxsize if max_width is None else max_width
        starts = [0]
        brk = self.find_break(0, limit)
        while brk is not None:
            starts.append(brk)
            brk = self.find_break(brk, limit)
        return starts

    # -- output -------------------------------------------------------------

    def original_offset(self, plain_offset: int) -> int:
        """Offset into :attr:`text` where a line starting at *plain_offset* begins."""
        if plain_offset == 0:
            return 0
        return self._anchors[plain_offset]

    def render_lines(self, starts: list[int]) -> tuple[list[str], list[int]]:
        """Return the display text and width of every line in *starts*.

        Each line keeps the control sequences that fall inside it. SGR state
        still active at the end of a line is reset there and re-opened at the
        start of the next line.
        """
        tracker = SgrTracker()
        lines: list[str] = []
        widths: list[int] = []
        bounds = [*starts, len(self.plain)]
        for a, b in zip(bounds, bounds[1:]):
            begin = self.original_offset(a)
            finish = self._anchors[b] if b < len(self.plain) else len(self.text)
            shown = self._visible_end(a, b)
            cut = min(self._offsets[shown], finish)

            prefix = tracker.get_active_codes()
            body = self.text[begin:cut]
            hidden = "".join(CONTROL_SEQUENCE_RE.findall(self.text, cut, finish))
            for code in CONTROL_SEQUENCE_RE.findall(self.text, begin, finish):
                tracker.process(code)
            suffix = _RESET if tracker.has_active_codes() else ""

            lines.append(prefix + body + hidden + suffix)
            widths.append(self._prefix[shown] - self._prefix[a])
        return lines, widths


# ---------------------------------------------------------------------------
# String-level helpers
# ---------------------------------------------------------------------------


def find_break(text: str, max_width: int) -> int | None:
    """Offset into *text* at which its first line ends, or ``None`` if it fits.

    Escapes directly before the first character of the next line are moved
    to that line, so the offset points at the start of those escapes.
    """
    segmented = SegmentedText(text)
    brk = segmented.find_break(0, max_width)
    if brk is None:
        return None
    return segmented.original_offset(brk)


def line_starts(text: str, max_width: int | None = None) -> list[int]:
    """Offsets into *text* at which each line starts when wrapped at *max_width*."""
    segmented = SegmentedText(text)
    return [segmented.original_offset(s) for s in segmented.line_starts(max_width)]
