"""Render module for gap calculator output display."""

from render.renderers import (
    BaseRenderer,
    GapSummaryRenderer,
    ShareTextRenderer,
    TickerRenderer,
    RENDERER_REGISTRY,
    build_share_text,
    format_cents,
    format_currency,
    format_input_display,
    format_money,
)

__all__ = [
    'BaseRenderer',
    'GapSummaryRenderer',
    'ShareTextRenderer',
    'TickerRenderer',
    'RENDERER_REGISTRY',
    'build_share_text',
    'format_cents',
    'format_currency',
    'format_input_display',
    'format_money',
]
