"""Linear colour gradients.

Classes
-------
RGB
    Integer colour triple.
Gradient
    Two-anchor linear gradient.

Functions
---------
lerp
    Component-wise linear interpolation between two colours.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np
from numpy.typing import ArrayLike


class RGB(NamedTuple):
    r: int
    g: int
    b: int


RED = RGB(255, 0, 0)
BLUE = RGB(0, 0, 255)
BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)


def lerp(c1: Sequence[float], c2: Sequence[float], t: float) -> RGB:
    """Interpolate between colours *c1* (t = 0) and *c2* (t = 1).

    Channels are floor-truncated to integers.  *t* is not clamped, so
    values outside [0, 1] give channels outside [0, 255].

    Args:
        c1: Start colour ``(r, g, b)``.
        c2: End colour ``(r, g, b)``.
        t: Interpolation parameter.

    Returns:
        Interpolated colour.
    """
    return RGB(*(math.floor(a + (b - a) * t) for a, b in zip(c1, c2)))


@dataclass(frozen=True)
class Gradient:
    """Linear gradient from *low* (percent 0) to *high* (percent 1).

    Args:
        low: Colour at zero relative stress.
        high: Colour at full load magnitude.
    """

    low: RGB = RED
    high: RGB = BLUE

    def __post_init__(self) -> None:
        object.__setattr__(self, "low", RGB(*self.low))
        object.__setattr__(self, "high", RGB(*self.high))

    def __call__(self, percent: float) -> RGB:
        return lerp(self.low, self.high, percent)

    def array(self, percent: ArrayLike) -> np.ndarray:
        """Vectorised :meth:`__call__`.

        Args:
            percent: Array of stress ratios, any shape.

        Returns:
            Integer array of shape ``percent.shape + (3,)``.
        """
        p = np.asarray(percent, dtype=float)[..., np.newaxis]
        low = np.asarray(self.low, dtype=float)
        high = np.asarray(self.high, dtype=float)
        return np.floor(low + (high - low) * p).astype(int)
