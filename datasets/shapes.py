"""
shapes - 预置样条形状

用于测试和示例的常见曲线，均在 XY 平面内。
"""

import numpy as np

from ..core.modes import ControlPointMode
from ..core.spline import Spline
from ..core.transform import Transform

# 四段三次 Bézier 近似单位圆时手柄长度系数 4(√2-1)/3
CIRCLE_KAPPA = 0.5522847498


def straight_line_spline(transform: Transform | None = None) -> Spline:
    """默认单段样条：(1,0,0) → (4,0,0) 的直线。"""
    return Spline(transform)


def circle_spline(radius: float = 1.0, transform: Transform | None = None) -> Spline:
    """
    以原点为圆心的近似圆，4 段，所有节点为 MIRRORED，闭环。

    Args:
        radius: 半径
        transform: 坐标映射

    Returns:
        Spline 对象，起点为 (radius, 0, 0)，逆时针
    """
    r = float(radius)
    k = CIRCLE_KAPPA * r

    points = np.array([
        [r, 0, 0], [r, k, 0], [k, r, 0],
        [0, r, 0], [-k, r, 0], [-r, k, 0],
        [-r, 0, 0], [-r, -k, 0], [-k, -r, 0],
        [0, -r, 0], [k, -r, 0], [r, -k, 0],
        [r, 0, 0],
    ], dtype=float)
    modes = [ControlPointMode.MIRRORED] * 5

    return Spline.from_arrays(points, modes, loop=True, transform=transform)


def figure_eight_spline(transform: Transform | None = None) -> Spline:
    """
    过原点的 8 字形，2 段，节点为 ALIGNED，闭环。

    两个环的手柄长度不同，用于观察 ALIGNED 只约束方向、不约束长度。
    """
    points = np.array([
        [0, 0, 0], [2, 2, 0], [2, -2, 0],
        [0, 0, 0], [-1, 1, 0], [-1, -1, 0],
        [0, 0, 0],
    ], dtype=float)
    modes = [ControlPointMode.ALIGNED] * 3

    return Spline.from_arrays(points, modes, loop=True, transform=transform)
