"""
Value-Per-Point Calibration

Derives the league's dollars-per-point-above-replacement constant from its
own auction market. Blending a sum ratio with a median ratio keeps a few
expensive outliers from dominating the conversion.
"""

from collections.abc import Iterable

import numpy as np


def vorp_points(projected_ppg: float, baseline_ppg: float, epsilon: float) -> float:
    """Points above replacement, floored at ``epsilon``."""
    return max(epsilon, projected_ppg - baseline_ppg)


def blend_value_per_point(
    samples: Iterable[tuple[float, float]],
    *,
    floor: float,
    default: float,
    blend_weight: float = 0.5,
) -> float:
    """
    Blend sum-based and median-based dollars-per-point estimates.

    Args:
        samples: (price, vorp_points) pairs; vorp_points already floored
        floor: Minimum returned value
        default: Value returned when there are no samples
        blend_weight: Weight of the sum-based estimate

    Returns:
        Calibrated value per point
    """
    pairs = [(float(price), float(points)) for price, points in samples]
    if not pairs:
        return default

    total_price = sum(price for price, _ in pairs)
    total_points = sum(points for _, points in pairs)
    vpp_sum = total_price / total_points
    vpp_median = float(np.median([price / points for price, points in pairs]))

    vpp = blend_weight * vpp_sum + (1.0 - blend_weight) * vpp_median
    return max(floor, vpp)


class ValuePerPointCalibrator:
    """Calibrates vpp from known auction prices."""

    def __init__(
        self,
        epsilon: float = 0.1,
        floor: float = 1.0,
        default: float = 1.0,
        blend_weight: float = 0.5,
    ):
        self.epsilon = epsilon
        self.floor = floor
        self.default = default
        self.blend_weight = blend_weight

    def calibrate(self, priced_players: Iterable[tuple[float, float, float]]) -> float:
        """
        Calibrate from (price, projected_ppg, baseline_ppg) triples.

        Only players with a known auction price should be passed in.
        """
        samples = [
            (price, vorp_points(projected, baseline, self.epsilon))
            for price, projected, baseline in priced_players
        ]
        return blend_value_per_point(
            samples,
            floor=self.floor,
            default=self.default,
            blend_weight=self.blend_weight,
        )
