"""
algorithm - 样条采样与编辑辅助

SplinePath 封装一个 Spline，提供按全局参数 t 的均匀采样、批量求值，
以及编辑器所需的世界坐标控制点读写。采样在参数 t 上均匀，不做弧长参数化。
"""

import logging

import numpy as np

from .core.bezier import first_derivative_batch, point_batch
from .core.indexing import segments_for
from .core.spline import Spline
from .utils.geometry import DEGENERATE_TOLERANCE

logger = logging.getLogger(__name__)


class SplinePath:
    """
    样条采样器。

    Attributes:
        spline: 被采样的样条
        steps_per_curve: 每段曲线的采样步数
    """

    def __init__(self, spline: Spline, steps_per_curve: int = 10):
        """
        Args:
            spline: 样条对象
            steps_per_curve: 每段的采样步数，至少为 1
        """
        if steps_per_curve < 1:
            raise ValueError(f"steps_per_curve must be >= 1, got {steps_per_curve}")
        self.spline = spline
        self.steps_per_curve = steps_per_curve

    def evaluate_batch(self, t_values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        批量在全局参数处求位置和速度。

        Args:
            t_values: (M,) 全局参数数组

        Returns:
            positions: (M, 3) 世界坐标位置
            velocities: (M, 3) 世界坐标速度（未归一化）
        """
        t_values = np.atleast_1d(np.asarray(t_values, dtype=float))
        starts, u = segments_for(t_values, self.spline.curve_count)

        local_positions = np.zeros((len(t_values), 3))
        local_velocities = np.zeros((len(t_values), 3))
        for start in np.unique(starts):
            mask = starts == start
            control_points = self.spline.segment(int(start) // 3)
            local_positions[mask] = point_batch(control_points, u[mask])
            local_velocities[mask] = first_derivative_batch(control_points, u[mask])

        transform = self.spline.transform
        positions = np.array([transform.to_world_point(p) for p in local_positions]).reshape(-1, 3)
        velocities = np.array([transform.to_world_direction(v) for v in local_velocities]).reshape(-1, 3)
        return positions, velocities

    def sample_uniform(self, num_points: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        沿全局参数 t 均匀采样。

        Args:
            num_points: 采样点数

        Returns:
            t_values: (M,) 参数值
            positions: (M, 3) 位置
            directions: (M, 3) 单位方向，退化处为零向量
        """
        t_values = np.linspace(0.0, 1.0, num_points)
        positions, velocities = self.evaluate_batch(t_values)

        norms = np.linalg.norm(velocities, axis=1, keepdims=True)
        degenerate = norms < DEGENERATE_TOLERANCE
        directions = np.where(degenerate, 0.0, velocities / np.where(degenerate, 1.0, norms))
        return t_values, positions, directions

    def sample_per_curve(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """按每段 steps_per_curve 步采样，共 steps_per_curve * curve_count + 1 个点。"""
        num_points = self.steps_per_curve * self.spline.curve_count + 1
        logger.debug("Sampling %d points over %d curves", num_points, self.spline.curve_count)
        return self.sample_uniform(num_points)

    def world_control_points(self) -> np.ndarray:
        """(N, 3) 世界坐标下的全部控制点"""
        to_world = self.spline.transform.to_world_point
        return np.array([to_world(p) for p in self.spline.points])

    def move_control_point_world(self, index: int, world_position: np.ndarray):
        """
        用世界坐标移动控制点：先映射回局部坐标，再调用 Spline.set_control_point。

        Raises:
            TypeError: 样条的变换不支持逆映射 (to_local_point)
        """
        to_local = getattr(self.spline.transform, "to_local_point", None)
        if to_local is None:
            raise TypeError(f"{type(self.spline.transform).__name__} does not support to_local_point")
        self.spline.set_control_point(index, to_local(world_position))

    def __repr__(self) -> str:
        return f"SplinePath(curves={self.spline.curve_count}, steps_per_curve={self.steps_per_curve})"


if __name__ == "__main__":
    from bezier_spline.datasets import circle_spline

    spline = circle_spline(radius=2.0)

    print("=== 样条采样测试 ===")
    print(spline)

    path = SplinePath(spline, steps_per_curve=8)
    t_values, positions, directions = path.sample_per_curve()

    radii = np.linalg.norm(positions, axis=1)
    print(f"采样点数: {len(t_values)}")
    print(f"半径范围: [{radii.min():.4f}, {radii.max():.4f}]")
    print(f"方向归一化: {np.allclose(np.linalg.norm(directions, axis=1), 1.0)}")
