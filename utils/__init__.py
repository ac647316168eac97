"""
utils - 工具函数模块

包含:
- geometry: 几何计算工具
"""

from .geometry import as_vector3, is_degenerate, normalize, rescale

__all__ = [
    "as_vector3",
    "is_degenerate",
    "normalize",
    "rescale",
]
