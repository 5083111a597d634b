"""
Mini Invaders utils
"""

from __future__ import annotations

import logging

logger = logging.getLogger("mini_invaders")


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure the root logging handler.

    :param level: Logging level
    :type level: int
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def clamp(value: float, low: float, high: float) -> float:
    """
    Clamp a value into [low, high]

    :param value: Value to clamp
    :type value: float

    :param low: Lower bound
    :type low: float

    :param high: Upper bound
    :type high: float

    :return: float
    :rtype: float
    """
    return max(low, min(high, value))
