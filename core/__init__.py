"""
core - 核心算法模块

包含:
- bezier: 单段三次 Bézier 求值
- indexing: 节点 / 手柄索引运算
- spline: 分段 Bézier 样条容器
- transform: 局部到世界坐标映射
"""

from .bezier import first_derivative, point
from .errors import DegenerateTangentError, IndexOutOfRangeError
from .modes import ControlPointMode
from .spline import Spline
from .transform import AffineTransform, IdentityTransform, Transform

__all__ = [
    "first_derivative",
    "point",
    "DegenerateTangentError",
    "IndexOutOfRangeError",
    "ControlPointMode",
    "Spline",
    "AffineTransform",
    "IdentityTransform",
    "Transform",
]
