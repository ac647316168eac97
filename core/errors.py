"""
errors - 样条操作的异常类型
"""


class IndexOutOfRangeError(IndexError):
    """控制点或曲线段索引越界。索引不会被静默裁剪。"""

    def __init__(self, index: int, size: int, what: str = "control point"):
        self.index = index
        self.size = size
        super().__init__(f"{what} index {index} out of range [0, {size})")


class DegenerateTangentError(ValueError):
    """切向量为零向量，方向无定义（例如控制点重合）。"""

    def __init__(self, t: float):
        self.t = t
        super().__init__(f"tangent is zero at t={t}, direction is undefined")
