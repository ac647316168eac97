"""
datasets - 预置样条

包含:
- straight_line_spline: 默认单段直线
- circle_spline: 四段 MIRRORED 闭环近似圆
- figure_eight_spline: 两段 ALIGNED 闭环 8 字形
"""

from .shapes import CIRCLE_KAPPA, circle_spline, figure_eight_spline, straight_line_spline

__all__ = [
    "CIRCLE_KAPPA",
    "circle_spline",
    "figure_eight_spline",
    "straight_line_spline",
]
