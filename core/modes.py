"""
modes - 节点连续性模式
"""

from enum import Enum


class ControlPointMode(Enum):
    """
    节点处两个切线手柄的约束方式。

    - FREE: 两个手柄互不影响
    - ALIGNED: 两个手柄方向相反，长度各自保留
    - MIRRORED: 两个手柄方向相反且长度相等
    """

    FREE = "free"
    ALIGNED = "aligned"
    MIRRORED = "mirrored"
