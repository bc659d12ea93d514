"""
Rounding and formatting helpers.

Values stay exact in memory; rounding to cents happens only when models are
serialized or rendered into text.
"""

from typing import Annotated

from pydantic import PlainSerializer


def round2(value: float) -> float:
    """Round to 2 decimal places, normalizing negative zero."""
    rounded = round(value, 2)
    return rounded + 0.0


# Float that serializes rounded to cents
Rounded = Annotated[float, PlainSerializer(round2, return_type=float)]
