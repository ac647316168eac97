"""
transform - 曲线局部坐标到世界坐标的映射

样条本身只在局部坐标系中计算，世界坐标变换由宿主注入。
点的映射使用完整仿射变换，方向的映射只使用线性部分（不含平移）。
"""

from typing import Protocol

import numpy as np
from scipy.spatial.transform import Rotation


class Transform(Protocol):
    """宿主提供的坐标映射接口"""

    def to_world_point(self, point: np.ndarray) -> np.ndarray: ...

    def to_world_direction(self, vector: np.ndarray) -> np.ndarray: ...


class IdentityTransform:
    """恒等变换，局部坐标即世界坐标。"""

    def to_world_point(self, point: np.ndarray) -> np.ndarray:
        return np.array(point, dtype=float)

    def to_world_direction(self, vector: np.ndarray) -> np.ndarray:
        return np.array(vector, dtype=float)

    def to_local_point(self, point: np.ndarray) -> np.ndarray:
        return np.array(point, dtype=float)

    def __repr__(self) -> str:
        return "IdentityTransform()"


class AffineTransform:
    """
    4×4 齐次矩阵表示的仿射变换。

    Attributes:
        matrix: (4, 4) 局部到世界的齐次变换矩阵
    """

    def __init__(self, matrix: np.ndarray):
        matrix = np.asarray(matrix, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError(f"Affine matrix must be 4x4, got shape {matrix.shape}")
        self.matrix = matrix
        self._inverse: np.ndarray | None = None

    @classmethod
    def from_trs(
        cls,
        translation: np.ndarray = (0.0, 0.0, 0.0),
        rotation: Rotation | np.ndarray | None = None,
        scale: float | np.ndarray = 1.0,
    ) -> "AffineTransform":
        """
        由平移、旋转、缩放构造变换，组合顺序为 T·R·S。

        Args:
            translation: (3,) 平移
            rotation: scipy Rotation 对象或 (x, y, z, w) 四元数，None 表示不旋转
            scale: 标量或 (3,) 各轴缩放

        Returns:
            AffineTransform 对象
        """
        if rotation is None:
            R = np.eye(3)
        elif isinstance(rotation, Rotation):
            R = rotation.as_matrix()
        else:
            R = Rotation.from_quat(np.asarray(rotation, dtype=float)).as_matrix()

        S = np.diag(np.broadcast_to(np.asarray(scale, dtype=float), (3,)))

        matrix = np.eye(4)
        matrix[:3, :3] = R @ S
        matrix[:3, 3] = np.asarray(translation, dtype=float)
        return cls(matrix)

    @property
    def linear(self) -> np.ndarray:
        """(3, 3) 线性部分"""
        return self.matrix[:3, :3]

    @property
    def translation(self) -> np.ndarray:
        """(3,) 平移部分"""
        return self.matrix[:3, 3]

    def to_world_point(self, point: np.ndarray) -> np.ndarray:
        return self.linear @ np.asarray(point, dtype=float) + self.translation

    def to_world_direction(self, vector: np.ndarray) -> np.ndarray:
        return self.linear @ np.asarray(vector, dtype=float)

    def to_local_point(self, point: np.ndarray) -> np.ndarray:
        """世界坐标点映射回局部坐标。矩阵奇异时抛出 numpy.linalg.LinAlgError。"""
        if self._inverse is None:
            self._inverse = np.linalg.inv(self.matrix)
        homogeneous = np.append(np.asarray(point, dtype=float), 1.0)
        return (self._inverse @ homogeneous)[:3]

    def __repr__(self) -> str:
        return f"AffineTransform(translation={self.translation.tolist()})"
