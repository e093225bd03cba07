"""Colour palette and card grid styling for the web dashboard."""

from __future__ import annotations

from fandash.core.thresholds import Tone

COLORS = {
    "bg_primary": "#212529",
    "bg_secondary": "#343a40",
    "bg_tertiary": "#495057",
    "border": "#495057",
    "text_primary": "#f8f9fa",
    "text_secondary": "#adb5bd",
    "text_dark": "#212529",
    "accent_blue": "#0d6efd",
    "accent_green": "#198754",
    "accent_red": "#dc3545",
    "accent_yellow": "#ffc107",
    "accent_purple": "#6610f2",
    "online": "#4be34b",
    "offline": "#dc3545",
}

# (background, text) per bar tone
TONE_COLORS: dict[Tone, tuple[str, str]] = {
    Tone.DANGER: ("#dc3545", "#ffffff"),
    Tone.WARNING: ("#ffc107", "#212529"),
    Tone.PRIMARY: ("#0d6efd", "#ffffff"),
    Tone.INFO: ("#0dcaf0", "#212529"),
    Tone.SUCCESS: ("#198754", "#ffffff"),
    Tone.NEUTRAL: ("#e2d9f3", "#212529"),
}

CSS = """
body {
    background-color: #212529 !important;
    color: #f8f9fa !important;
}
.q-card {
    background-color: #343a40 !important;
    border: 1px solid #495057 !important;
}
.q-btn {
    text-transform: none !important;
}
.card-grid {
    display: flex;
    flex-wrap: wrap;
    width: 100%;
}
.pi-card {
    padding: 0.5rem;
    flex: 0 0 100%;
    max-width: 100%;
}
@media (min-width: 768px) {
    .pi-card.col-md-6 { flex: 0 0 50%; max-width: 50%; }
}
@media (min-width: 992px) {
    .pi-card.col-lg-6 { flex: 0 0 50%; max-width: 50%; }
    .pi-card.col-lg-4 { flex: 0 0 33.333%; max-width: 33.333%; }
}
.gauge-track {
    background-color: #495057;
    border-radius: 0.375rem;
    height: 1.25rem;
    overflow: hidden;
    width: 100%;
}
.gauge-bar {
    height: 100%;
    font-size: 0.75rem;
    line-height: 1.25rem;
    text-align: center;
    white-space: nowrap;
    background-image: linear-gradient(45deg, rgba(255,255,255,.15) 25%, transparent 25%,
        transparent 50%, rgba(255,255,255,.15) 50%, rgba(255,255,255,.15) 75%,
        transparent 75%, transparent);
    background-size: 1rem 1rem;
    transition: width 0.6s ease;
}
"""


def tone_style(tone: Tone) -> str:
    background, text = TONE_COLORS[tone]
    return f"background-color: {background}; color: {text};"
