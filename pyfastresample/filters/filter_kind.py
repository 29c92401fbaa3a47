"""
Filter selection for PyFastResample.

A FilterKind fully describes one reconstruction filter: its family, the
parameters of that family and therefore its support radius and tap range.
Kernels receive it flattened to (kind_id, p0, p1, radius) so that a single
compiled Taichi kernel serves every family.

Recognised configuration strings (see FilterKind.parse):

    nearest, linear
    lanczos, lanczos2, lanczos3, lanczos(a)
    cubic, mitchell, cubic(B, C), mitchell(B, C)
    gaussian, gaussian(sigma), gaussian(sigma, radius)

Parameters accept decimals or fractions ("cubic(1/3, 1/3)").

Author: B.G.
"""

import math
import re
from dataclasses import dataclass
from fractions import Fraction

from .. import constants as cte

_FAMILIES = ("nearest", "linear", "lanczos", "mitchell", "gaussian")

_ALIASES = {
    "nearest": "nearest",
    "point": "nearest",
    "linear": "linear",
    "bilinear": "linear",
    "lanczos": "lanczos",
    "cubic": "mitchell",
    "mitchell": "mitchell",
    "mitchell-netravali": "mitchell",
    "gaussian": "gaussian",
    "gauss": "gaussian",
}

_FILTER_RE = re.compile(r"^([a-z\-]+?)(\d*)\s*(?:\((.*)\))?$")


def _number(text):
    text = text.strip()
    try:
        return float(Fraction(text))
    except (ValueError, ZeroDivisionError):
        raise ValueError(f"Invalid filter parameter '{text}'") from None


@dataclass(frozen=True)
class FilterKind:
    """One reconstruction filter and its parameters.

    Use the constructors (lanczos, mitchell, gaussian, nearest, linear) or
    parse() rather than building instances by hand; they validate the
    parameters.
    """

    family: str
    a: int = 0
    b: float = 0.0
    c: float = 0.0
    sigma: float = 0.0
    gaussian_radius: int = 0

    def __post_init__(self):
        if self.family not in _FAMILIES:
            raise ValueError(f"Unknown filter family '{self.family}'")
        if self.family == "lanczos" and self.a not in cte.LANCZOS_ALLOWED_A:
            raise ValueError(
                f"Lanczos a must be one of {cte.LANCZOS_ALLOWED_A}, got {self.a}"
            )
        if self.family == "mitchell":
            if not (math.isfinite(self.b) and math.isfinite(self.c)):
                raise ValueError("Mitchell-Netravali B and C must be finite")
        if self.family == "gaussian":
            if not math.isfinite(self.sigma) or self.sigma <= 0:
                raise ValueError(f"Gaussian sigma must be > 0, got {self.sigma}")
            if not 1 <= self.gaussian_radius <= cte.GAUSSIAN_MAX_RADIUS:
                raise ValueError(
                    f"Gaussian radius must be in [1, {cte.GAUSSIAN_MAX_RADIUS}], "
                    f"got {self.gaussian_radius}"
                )

    # Constructors ---------------------------------------------------------

    @classmethod
    def nearest(cls):
        return cls("nearest")

    @classmethod
    def linear(cls):
        return cls("linear")

    @classmethod
    def lanczos(cls, a=cte.LANCZOS_DEFAULT_A):
        return cls("lanczos", a=int(a))

    @classmethod
    def mitchell(cls, b=cte.MITCHELL_DEFAULT_B, c=cte.MITCHELL_DEFAULT_C):
        return cls("mitchell", b=float(b), c=float(c))

    @classmethod
    def gaussian(
        cls, sigma=cte.GAUSSIAN_DEFAULT_SIGMA, radius=cte.GAUSSIAN_DEFAULT_RADIUS
    ):
        if int(radius) != radius:
            raise ValueError(f"Gaussian radius must be an integer, got {radius}")
        return cls("gaussian", sigma=float(sigma), gaussian_radius=int(radius))

    @classmethod
    def default(cls):
        return cls.lanczos()

    @classmethod
    def parse(cls, spec):
        """
        Build a FilterKind from a configuration string.

        Args:
            spec: Filter string such as 'lanczos3', 'cubic(0, 0.5)' or
                  'gaussian(1.5, 3)'. A FilterKind is returned unchanged.

        Returns:
            FilterKind

        Raises:
            ValueError: If the string names no known filter or carries
                        invalid parameters.
        """
        if isinstance(spec, FilterKind):
            return spec
        if not isinstance(spec, str):
            raise TypeError("filter spec must be a string or FilterKind")

        text = spec.strip().lower().replace("_", "-")
        match = _FILTER_RE.match(text)
        if match is None:
            raise ValueError(f"Unrecognised filter '{spec}'")
        word, digits, args = match.groups()
        family = _ALIASES.get(word)
        if family is None:
            raise ValueError(
                f"Unrecognised filter '{spec}'. Valid filters: {', '.join(FILTER_NAMES)}"
            )

        values = []
        if args is not None and args.strip():
            values = [_number(v) for v in args.split(",")]

        if family == "lanczos":
            if digits and values:
                raise ValueError(f"Lanczos lobes given twice in '{spec}'")
            if digits:
                return cls.lanczos(int(digits))
            if len(values) > 1:
                raise ValueError("lanczos takes a single parameter (a)")
            if values and not float(values[0]).is_integer():
                raise ValueError(f"Lanczos a must be an integer, got {values[0]}")
            return cls.lanczos(int(values[0])) if values else cls.lanczos()

        if digits:
            raise ValueError(f"Unrecognised filter '{spec}'")

        if family in ("nearest", "linear"):
            if values:
                raise ValueError(f"{family} takes no parameters")
            return cls(family)

        if family == "mitchell":
            if len(values) not in (0, 2):
                raise ValueError("cubic takes two parameters (B, C) or none")
            return cls.mitchell(*values)

        if len(values) > 2:
            raise ValueError("gaussian takes at most two parameters (sigma, radius)")
        return cls.gaussian(*values)

    # Derived properties ---------------------------------------------------

    @property
    def kind_id(self):
        return {
            "nearest": cte.FILTER_NEAREST,
            "linear": cte.FILTER_LINEAR,
            "lanczos": cte.FILTER_LANCZOS,
            "mitchell": cte.FILTER_MITCHELL,
            "gaussian": cte.FILTER_GAUSSIAN,
        }[self.family]

    @property
    def uses_kernel(self):
        """False for the pass-through kinds (nearest, linear)."""
        return self.family in ("lanczos", "mitchell", "gaussian")

    @property
    def radius(self):
        """Support radius in source pixels."""
        if self.family == "lanczos":
            return self.a
        if self.family == "mitchell":
            return 2
        if self.family == "gaussian":
            return self.gaussian_radius
        return 1 if self.family == "linear" else 0

    @property
    def tap_range(self):
        """Inclusive (first, last) integer tap offsets around the centre texel."""
        if self.family == "mitchell":
            return (-1, 2)
        if self.family == "linear":
            return (0, 1)
        if self.family == "nearest":
            return (0, 0)
        return (-self.radius, self.radius)

    @property
    def n_taps(self):
        first, last = self.tap_range
        return last - first + 1

    @property
    def params(self):
        """(p0, p1) as read by the device kernels."""
        if self.family == "lanczos":
            return (float(self.a), 0.0)
        if self.family == "mitchell":
            return (self.b, self.c)
        if self.family == "gaussian":
            return (self.sigma, 0.0)
        return (0.0, 0.0)

    @property
    def name(self):
        if self.family == "lanczos":
            return f"lanczos{self.a}"
        if self.family == "mitchell":
            if (self.b, self.c) == (cte.MITCHELL_DEFAULT_B, cte.MITCHELL_DEFAULT_C):
                return "cubic"
            return f"cubic({self.b:g},{self.c:g})"
        if self.family == "gaussian":
            if (self.sigma, self.gaussian_radius) == (
                cte.GAUSSIAN_DEFAULT_SIGMA,
                cte.GAUSSIAN_DEFAULT_RADIUS,
            ):
                return "gaussian"
            return f"gaussian({self.sigma:g},{self.gaussian_radius})"
        return self.family

    def label(self, component):
        """Name a resource that belongs to this filter, e.g. 'lanczos3_output_filter'."""
        return f"{self.name}_{component}_filter"

    def __str__(self):
        return self.name


# The three kernel families with their default parameters
FilterKind.ALL = (FilterKind.mitchell(), FilterKind.lanczos(), FilterKind.gaussian())

FILTER_NAMES = (
    "nearest",
    "linear",
    "lanczos2",
    "lanczos3",
    "cubic(B,C)",
    "gaussian(sigma,radius)",
)

__all__ = ["FilterKind", "FILTER_NAMES"]
