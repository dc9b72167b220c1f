"""
utils.py

Utility functions for glyph layout: label markup translation and colours.
"""

from __future__ import annotations

from typing import Tuple

from PyQt6.QtGui import QColor


# Commands rendered as HTML entities
LATEX_SYMBOLS = {
    "alpha": "&alpha;", "beta": "&beta;", "gamma": "&gamma;", "delta": "&delta;",
    "epsilon": "&epsilon;", "zeta": "&zeta;", "eta": "&eta;", "theta": "&theta;",
    "iota": "&iota;", "kappa": "&kappa;", "lambda": "&lambda;", "mu": "&mu;",
    "nu": "&nu;", "xi": "&xi;", "pi": "&pi;", "rho": "&rho;", "sigma": "&sigma;",
    "tau": "&tau;", "upsilon": "&upsilon;", "phi": "&phi;", "chi": "&chi;",
    "psi": "&psi;", "omega": "&omega;",
    "Gamma": "&Gamma;", "Delta": "&Delta;", "Theta": "&Theta;", "Lambda": "&Lambda;",
    "Xi": "&Xi;", "Pi": "&Pi;", "Sigma": "&Sigma;", "Upsilon": "&Upsilon;",
    "Phi": "&Phi;", "Psi": "&Psi;", "Omega": "&Omega;",
    "times": "&times;", "cdot": "&middot;", "pm": "&plusmn;", "infty": "&infin;",
    "partial": "&part;", "sum": "&sum;", "int": "&int;", "sqrt": "&radic;",
}

_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}


def latex_to_markup(text: str) -> str:
    """
    Translate a LaTeX-like label into Qt rich-text HTML.

    Supports ``\\name`` symbols (Greek letters and a few operators),
    ``_`` subscripts and ``^`` superscripts on a single character or a
    ``{...}`` group, and bare ``{...}`` grouping.

    Args:
        text: Label source, e.g. ``"\\alpha_{max}^2"``

    Returns:
        HTML fragment suitable for ``QTextDocument.setHtml``
    """
    out, _ = _translate(text or "", 0, stop_at_brace=False)
    return out


def _translate(text: str, i: int, stop_at_brace: bool) -> Tuple[str, int]:
    """Translate from index ``i``; returns (markup, index after last char used)."""
    parts = []
    n = len(text)
    while i < n:
        c = text[i]
        if c == "}" and stop_at_brace:
            return "".join(parts), i + 1
        if c == "{":
            inner, i = _translate(text, i + 1, stop_at_brace=True)
            parts.append(inner)
        elif c == "\\":
            markup, i = _command(text, i + 1)
            parts.append(markup)
        elif c in "_^":
            arg, i = _argument(text, i + 1)
            tag = "sub" if c == "_" else "sup"
            parts.append(f"<{tag}>{arg}</{tag}>")
        else:
            parts.append(_HTML_ESCAPES.get(c, c))
            i += 1
    return "".join(parts), i


def _command(text: str, i: int) -> Tuple[str, int]:
    """Translate a command whose name starts at ``i`` (just past the backslash)."""
    start = i
    while i < len(text) and text[i].isalpha():
        i += 1
    name = text[start:i]
    if not name:
        # escaped single character such as \{ or \_, or a trailing backslash
        if i < len(text):
            return _HTML_ESCAPES.get(text[i], text[i]), i + 1
        return "\\", i
    return LATEX_SYMBOLS.get(name, name), i


def _argument(text: str, i: int) -> Tuple[str, int]:
    """Translate the argument of a sub/superscript starting at ``i``."""
    if i >= len(text):
        return "", i
    if text[i] == "{":
        return _translate(text, i + 1, stop_at_brace=True)
    if text[i] == "\\":
        return _command(text, i + 1)
    return _HTML_ESCAPES.get(text[i], text[i]), i + 1


def hex_to_qcolor(s: str, fallback: QColor) -> QColor:
    """
    Parse a hex string to a QColor.

    Qt reads 8-digit hex as #AARRGGBB, so the alpha byte is handled here.

    Args:
        s: Hex string like "#RRGGBB" or "#RRGGBBAA"
        fallback: Color to return if parsing fails

    Returns:
        Parsed QColor or fallback
    """
    s = (s or "").strip().lstrip("#")
    try:
        if len(s) == 6:
            return QColor(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
        if len(s) == 8:
            return QColor(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16), int(s[6:8], 16))
    except ValueError:
        pass
    return QColor(fallback)
