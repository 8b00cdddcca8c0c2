"""User-configurable board settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chesskernel.ui.theme import theme_for

if TYPE_CHECKING:
    from chesskernel.ui.board_scene import BoardScene


@dataclass
class BoardSettings:
    """All user-configurable settings."""

    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_safe_squares: bool = True
    flipped: bool = False


def apply_settings(scene: BoardScene, settings: BoardSettings) -> None:
    scene.set_theme(theme_for(settings.board_theme))
    scene.set_show_coordinates(settings.show_coordinates)
    scene.set_show_safe_squares(settings.show_safe_squares)
    scene.set_flipped(settings.flipped)
