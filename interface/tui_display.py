"""Cell-width helpers for the TUI: measuring and fitting styled title fragments."""

from typing import List, Tuple

from wcwidth import wcwidth

StyledFragments = List[Tuple[str, str]]


def cell_width(ch: str) -> int:
    # Control and combining characters report -1 or 0.
    return max(0, wcwidth(ch) or 0)


class DisplayMixin:
    """Unicode-aware width handling shared by the TUI renderers."""

    @staticmethod
    def _display_width(text: str) -> int:
        return sum(cell_width(ch) for ch in text)

    def _trim_display(self, text: str, width: int) -> str:
        """Longest prefix of ``text`` that fits in ``width`` terminal cells."""
        cells = 0
        for pos, ch in enumerate(text):
            cells += cell_width(ch)
            if cells > width:
                return text[:pos]
        return text

    def _fit_fragments(self, fragments: StyledFragments, width: int, fill_style: str = "") -> StyledFragments:
        """Trim styled fragments to ``width`` cells and pad the remainder.

        Animated titles are built fragment by fragment, so trimming has to
        respect fragment boundaries instead of working on the plain string.
        """
        fitted: StyledFragments = []
        remaining = width
        for style, text in fragments:
            if remaining <= 0:
                break
            piece = self._trim_display(text, remaining)
            if piece:
                fitted.append((style, piece))
                remaining -= self._display_width(piece)
            if piece != text:
                break
        if remaining > 0:
            fitted.append((fill_style, " " * remaining))
        return fitted


__all__ = ["DisplayMixin", "cell_width"]
