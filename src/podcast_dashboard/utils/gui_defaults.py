"""Set up default classes and props for the NiceGUI elements the dashboard uses."""

from __future__ import annotations

from nicegui import ui

from podcast_dashboard.utils.logging import get_logger

logger = get_logger(__name__)

# map tailwind text size to quasar size
QUASAR_SIZES = {
    "text-xs": "xs",
    "text-sm": "sm",
    "text-base": "md",
    "text-lg": "lg",
}


def setUpGuiDefaults(text_size: str = "text-base"):
    """Set up default classes and props for labels, buttons and cards.

    Args:
        text_size: Tailwind CSS text size class (e.g., 'text-xs', 'text-sm',
                   'text-base', 'text-lg'). Defaults to 'text-base'.

    Raises:
        ValueError: If ``text_size`` is not one of the supported classes.
    """
    try:
        text_size_quasar = QUASAR_SIZES[text_size]
    except KeyError:
        raise ValueError(f"Unsupported text size {text_size!r}; expected one of {sorted(QUASAR_SIZES)}") from None

    logger.debug(f'using classes text_size:"{text_size}" text_size_quasar:{text_size_quasar}')

    ui.label.default_classes(f"{text_size} select-text")  # select-text allows double-click selection
    ui.label.default_props("dense")
    #
    ui.button.default_classes(text_size)
    ui.button.default_props(f"dense size={text_size_quasar} no-caps")
    #
    ui.card.default_props("flat bordered")
