"""A rectangular clickable button for the game's menus."""

from __future__ import annotations

from collections.abc import Callable

from orbitdrive.geometry import Color, Vec2

_IDLE_COLOR = Color(100, 100, 100, 200)
_HOVER_COLOR = Color(150, 150, 150, 200)


class Button:
    """A rectangle that highlights under the mouse and runs a callback on click."""

    def __init__(
        self,
        position: Vec2,
        size: Vec2,
        text: str,
        callback: Callable[[], None] | None,
    ) -> None:
        self.position = position
        self.size = size
        self.text = text
        self.callback = callback
        self.is_hovered = False
        self.fill_color = _IDLE_COLOR
        self.outline_color = Color.WHITE
        self.outline_thickness = 1.0

    def update(self, mouse_position: Vec2) -> None:
        """Track hovering and highlight the button accordingly."""
        self.is_hovered = self.contains(mouse_position)
        self.fill_color = _HOVER_COLOR if self.is_hovered else _IDLE_COLOR

    def handle_click(self) -> None:
        """Run the callback if the mouse is over the button."""
        if self.is_hovered and self.callback is not None:
            self.callback()

    def contains(self, point: Vec2) -> bool:
        """Return whether the point lies within the button, outline included."""
        edge = self.outline_thickness
        left = self.position.x - edge
        top = self.position.y - edge
        right = self.position.x + self.size.x + edge
        bottom = self.position.y + self.size.y + edge
        return left <= point.x < right and top <= point.y < bottom