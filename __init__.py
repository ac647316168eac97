"""
bezier_spline - 分段三次 Bézier 样条库

由首尾相接的三次 Bézier 段组成的曲线，支持节点连续性约束
(FREE / ALIGNED / MIRRORED)、闭环拓扑，以及按全局参数求位置和切线。
"""

from .algorithm import SplinePath
from .core.errors import DegenerateTangentError, IndexOutOfRangeError
from .core.modes import ControlPointMode
from .core.spline import Spline
from .core.transform import AffineTransform, IdentityTransform

__version__ = "0.1.0"
__all__ = [
    "AffineTransform",
    "ControlPointMode",
    "DegenerateTangentError",
    "IdentityTransform",
    "IndexOutOfRangeError",
    "Spline",
    "SplinePath",
]
