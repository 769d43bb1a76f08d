"""Numeric helpers shared by the selection model and the renderer."""

from typing import Tuple, Union

from matplotlib.colors import to_rgba

ColorSpec = Union[str, Tuple[float, ...]]


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into [minimum, maximum].

    The upper bound wins when the bounds cross, so the result is always
    defined.

    Args:
        value: Value to clamp
        minimum: Lower bound
        maximum: Upper bound

    Returns:
        Clamped value
    """
    return min(maximum, max(value, minimum))


def with_alpha(color: ColorSpec, alpha: int) -> Tuple[float, float, float, float]:
    """Return the color with its alpha replaced.

    Args:
        color: Any matplotlib color specification
        alpha: Alpha component in the range 0-255 (clamped)

    Returns:
        RGBA tuple with components in [0, 1]
    """
    alpha = int(clamp(alpha, 0, 255))
    return to_rgba(color, alpha / 255.0)


def scale_px(value: float, density: float) -> int:
    """Convert density-independent pixels to device pixels (truncating)."""
    return int(value * density)
