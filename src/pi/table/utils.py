"""Terminal text utilities: control sequences, display width, SGR state.

Provides the width measurement used by the segmenter and the cells, the
scanner for embedded control sequences (which occupy no columns but are
kept in the output), and a tracker for SGR colour state so that wrapped
lines can be closed and re-opened without colour leaking into borders.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Control sequences
# ---------------------------------------------------------------------------

# OSC (hyperlinks, titles) and APC payloads, terminated by BEL or ST, then
# CSI and the shorter ESC / 0x9B forms.
CONTROL_SEQUENCE_RE = re.compile(
    r"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|[\x1b\x9b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-PRZcf-nqry=><]"
)

# Characters after which a line must end (UAX #14 classes BK, CR, LF, NL).
MANDATORY_BREAK_CHARS = frozenset("\n\r\x0b\x0c\x85\u2028\u2029")


def strip_control_sequences(text: str) -> str:
    """Return *text* with every recognised control sequence removed."""
    return CONTROL_SEQUENCE_RE.sub("", text)


def extract_control_sequence(text: str, pos: int) -> str | None:
    """Return the control sequence starting at *pos* in *text*, if any."""
    if pos >= len(text) or text[pos] not in "\x1b\x9b":
        return None
    m = CONTROL_SEQUENCE_RE.match(text, pos)
    if m is None:
        return None
    return m.group(0)


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Control characters, combining marks and format characters -> 0
    2. Emoji sequences (VS16, ZWJ, skin tones, flags) -> 2
    3. Otherwise wcwidth of the first code point (CJK wide -> 2).
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2

    cat = unicodedata.category(first)
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(first), 0)


def codepoint_widths(plain: str) -> list[int]:
    """Width of every code point of control-free *plain* text.

    A grapheme cluster's width is charged to its first code point; the rest
    of the cluster is zero-width, so prefix sums over code points never
    split a cluster's width.
    """
    widths: list[int] = []
    for g in grapheme.graphemes(plain):
        widths.append(grapheme_width(g))
        widths.extend([0] * (len(g) - 1))
    return widths


def grapheme_boundaries(plain: str) -> list[int]:
    """Code-point offsets at which each grapheme cluster of *plain* starts."""
    offsets: list[int] = []
    pos = 0
    for g in grapheme.graphemes(plain):
        offsets.append(pos)
        pos += len(g)
    return offsets


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------

def visible_width(text: str) -> int:
    """Calculate the number of terminal columns *text* occupies.

    * Control sequences are zero-width.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = strip_control_sequences(text)
    if not stripped:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(stripped):
        total += grapheme_width(g)

    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# SgrTracker
# ---------------------------------------------------------------------------

class SgrTracker:
    """Track which SGR (Select Graphic Rendition) attributes are active.

    Only answers "is anything switched on, and which codes would switch it
    back on"; non-SGR sequences are ignored.
    """

    _ATTRIBUTES = {1: "bold", 2: "dim", 3: "italic", 4: "underline",
                   5: "blink", 7: "inverse", 8: "hidden", 9: "strikethrough"}
    _RESETS = {22: ("bold", "dim"), 23: ("italic",), 24: ("underline",),
               25: ("blink",), 27: ("inverse",), 28: ("hidden",),
               29: ("strikethrough",), 39: ("fg",), 49: ("bg",)}

    def __init__(self) -> None:
        self._active: dict[str, str] = {}

    def process(self, code: str) -> None:
        """Update tracked state from a sequence like ``\\x1b[1;31m``."""
        if not code.startswith("\x1b[") or not code.endswith("m"):
            return

        params_str = code[2:-1]
        if not params_str:
            self.clear()
            return

        params = params_str.split(";")
        i = 0
        while i < len(params):
            p = params[i]
            val = int(p) if p.isdigit() else 0

            if val == 0:
                self.clear()
            elif val in self._ATTRIBUTES:
                self._active[self._ATTRIBUTES[val]] = f"\x1b[{val}m"
            elif val in self._RESETS:
                for name in self._RESETS[val]:
                    self._active.pop(name, None)
            elif 30 <= val <= 37 or 90 <= val <= 97:
                self._active["fg"] = f"\x1b[{val}m"
            elif 40 <= val <= 47 or 100 <= val <= 107:
                self._active["bg"] = f"\x1b[{val}m"
            elif val in (38, 48):
                # 256-colour (5;N) or truecolour (2;R;G;B)
                slot = "fg" if val == 38 else "bg"
                mode = params[i + 1] if i + 1 < len(params) else ""
                take = 2 if mode == "5" else 4 if mode == "2" else 1
                extended = params[i : i + 1 + take]
                self._active[slot] = "\x1b[" + ";".join(extended) + "m"
                i += take

            i += 1

    def clear(self) -> None:
        """Reset all tracked attributes to off."""
        self._active.clear()

    def get_active_codes(self) -> str:
        """Return a string of SGR codes that reactivate the current state."""
        return "".join(self._active.values())

    def has_active_codes(self) -> bool:
        return bool(self._active)
