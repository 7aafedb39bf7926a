"""Zoom state for a pair of image views: the input image and its processed copy."""

from __future__ import annotations

from dataclasses import dataclass

ZOOM_IN_STEP = 1.25
ZOOM_OUT_STEP = 0.8
MAX_SCALE = 3.0
MIN_SCALE = 0.333


def zoom_in_factor(scale: float) -> float:
    """Return the scale after one zoom-in step, capped at 3."""
    stepped = scale * ZOOM_IN_STEP
    return stepped if stepped < MAX_SCALE else MAX_SCALE


def zoom_out_factor(scale: float) -> float:
    """Return the scale after one zoom-out step, floored at 0.333."""
    stepped = scale * ZOOM_OUT_STEP
    return stepped if stepped > MIN_SCALE else MIN_SCALE


def fit_scale(view_width: float, view_height: float, image_width: float, image_height: float) -> float:
    """Return the scale that fits the image in the view, keeping its aspect ratio."""
    if image_width <= 0 or image_height <= 0:
        raise ValueError("image dimensions must be positive")
    if view_width < 0 or view_height < 0:
        raise ValueError("view dimensions must not be negative")
    return min(view_width / image_width, view_height / image_height)


@dataclass
class ViewScale:
    """The scale at which one image is shown."""

    image_width: int
    image_height: int
    factor: float = 1.0

    def zoom_in(self) -> float:
        self.factor = zoom_in_factor(self.factor)
        return self.factor

    def zoom_out(self) -> float:
        self.factor = zoom_out_factor(self.factor)
        return self.factor

    def normal_size(self) -> float:
        self.factor = 1.0
        return self.factor

    def fit(self, view_width: float, view_height: float) -> float:
        self.factor = fit_scale(view_width, view_height, self.image_width, self.image_height)
        return self.factor


@dataclass
class ImagePairView:
    """An input image and its processed copy, zoomed together.

    Until an image is loaded every zoom action does nothing.
    """

    display: ViewScale | None = None
    processed: ViewScale | None = None

    @property
    def loaded(self) -> bool:
        return self.display is not None and self.processed is not None

    def _views(self) -> list[ViewScale]:
        return [view for view in (self.display, self.processed) if view is not None]

    def load(self, width: int, height: int) -> None:
        """Show a new image of the given size in both views at normal size."""
        if width <= 0 or height <= 0:
            raise ValueError("image dimensions must be positive")
        self.display = ViewScale(width, height)
        self.processed = ViewScale(width, height)

    def zoom_in(self) -> None:
        for view in self._views():
            view.zoom_in()

    def zoom_out(self) -> None:
        for view in self._views():
            view.zoom_out()

    def normal_size(self) -> None:
        for view in self._views():
            view.normal_size()

    def fit_to_window(self, view_width: float, view_height: float) -> None:
        for view in self._views():
            view.fit(view_width, view_height)