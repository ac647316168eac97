"""
spline - 分段三次 Bézier 样条

由首尾相接的三次 Bézier 段组成的曲线容器。

实现:
1. 控制点 / 节点模式的查询与修改
2. 节点连续性约束 (FREE / ALIGNED / MIRRORED) 的维护
3. 闭环拓扑 (首尾节点视为同一点)
4. 全局参数 t 上的位置、速度、方向求值
"""

import logging

import numpy as np

from ..utils.geometry import as_vector3, is_degenerate, rescale
from . import bezier
from .errors import DegenerateTangentError, IndexOutOfRangeError
from .indexing import curve_count_for, handle_pair, is_joint, joint_point_index, mode_index, segment_for
from .modes import ControlPointMode
from .transform import IdentityTransform, Transform

logger = logging.getLogger(__name__)

_DEFAULT_POINTS = np.array([
    [1.0, 0.0, 0.0],
    [2.0, 0.0, 0.0],
    [3.0, 0.0, 0.0],
    [4.0, 0.0, 0.0],
])

# add_curve 新增点沿 +X 方向的单位步长
_EXTENSION_STEP = np.array([1.0, 0.0, 0.0])


class Spline:
    """
    分段三次 Bézier 样条。

    控制点序列长度恒为 3k+1 (k 为段数, k >= 1)，节点模式序列长度为 k+1。
    每次修改之后都会重新施加连续性约束，保证：

    - ALIGNED / MIRRORED 节点的两个手柄与节点共线且方向相反
      （MIRRORED 还要求长度相等）
    - 闭环时首尾控制点相等，首尾模式相同
    - 非闭环时首尾节点不受约束

    Attributes:
        transform: 局部坐标到世界坐标的映射，仅用于 get_point / get_velocity / get_direction
    """

    def __init__(self, transform: Transform | None = None):
        """
        创建默认的单段样条：(1,0,0) 到 (4,0,0) 的直线，两端 FREE，非闭环。

        Args:
            transform: 宿主提供的坐标映射，默认为恒等变换
        """
        self.transform = transform if transform is not None else IdentityTransform()
        self._points: np.ndarray = _DEFAULT_POINTS.copy()
        self._modes: list[ControlPointMode] = [ControlPointMode.FREE, ControlPointMode.FREE]
        self._loop = False

    @classmethod
    def from_arrays(
        cls,
        points: np.ndarray,
        modes,
        loop: bool = False,
        transform: Transform | None = None,
    ) -> "Spline":
        """
        从宿主保存的数组恢复样条，数据按原样载入，不重新施加约束。

        Args:
            points: (3k+1, 3) 控制点, k >= 1
            modes: 长度 k+1 的模式序列，元素为 ControlPointMode 或其字符串值
            loop: 是否闭环
            transform: 坐标映射

        Returns:
            Spline 对象

        Raises:
            ValueError: 数组形状或长度关系不满足要求，或闭环时首尾点 / 模式不一致
        """
        points = np.array(points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 3:
            raise ValueError(f"Control points must have shape (N, 3), got {points.shape}")

        n = len(points)
        if n < 4 or (n - 1) % 3 != 0:
            raise ValueError(f"Control point count must be 3k+1 with k >= 1, got {n}")

        modes = [m if isinstance(m, ControlPointMode) else ControlPointMode(m) for m in modes]
        if len(modes) != curve_count_for(n) + 1:
            raise ValueError(f"Expected {curve_count_for(n) + 1} modes for {n} control points, got {len(modes)}")

        if loop and (not np.array_equal(points[0], points[-1]) or modes[0] is not modes[-1]):
            raise ValueError("Looped spline must start and end on the same control point and mode")

        spline = cls(transform)
        spline._points = points
        spline._modes = modes
        spline._loop = bool(loop)
        logger.debug("Restored spline with %d curves (loop=%s)", spline.curve_count, spline._loop)
        return spline

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    @property
    def control_point_count(self) -> int:
        return len(self._points)

    @property
    def curve_count(self) -> int:
        return curve_count_for(len(self._points))

    @property
    def points(self) -> np.ndarray:
        """(N, 3) 控制点副本"""
        return self._points.copy()

    @property
    def modes(self) -> tuple[ControlPointMode, ...]:
        return tuple(self._modes)

    def _check_index(self, index: int):
        if not 0 <= index < len(self._points):
            raise IndexOutOfRangeError(index, len(self._points))

    def get_control_point(self, index: int) -> np.ndarray:
        """
        获取控制点（局部坐标）。

        Raises:
            IndexOutOfRangeError: index 不在 [0, control_point_count) 内
        """
        self._check_index(index)
        return self._points[index].copy()

    def get_control_point_mode(self, index: int) -> ControlPointMode:
        """获取控制点所属节点的模式。手柄返回其所属节点的模式。"""
        self._check_index(index)
        return self._modes[mode_index(index)]

    def segment(self, i: int) -> np.ndarray:
        """
        第 i 段的 4 个控制点。

        Raises:
            IndexOutOfRangeError: i 不在 [0, curve_count) 内
        """
        if not 0 <= i < self.curve_count:
            raise IndexOutOfRangeError(i, self.curve_count, what="curve")
        return self._points[3 * i : 3 * i + 4].copy()

    # ------------------------------------------------------------------
    # 修改
    # ------------------------------------------------------------------

    @property
    def loop(self) -> bool:
        return self._loop

    @loop.setter
    def loop(self, value: bool):
        """
        设置闭环。开启时把首节点的模式和位置同步到尾节点；
        关闭时不恢复已经同步的数值，只是不再继续传播。
        """
        self._loop = bool(value)
        logger.debug("Spline loop set to %s", self._loop)

        if self._loop:
            self._modes[-1] = self._modes[0]
            self.set_control_point(0, self._points[0].copy())

    def set_control_point(self, index: int, point):
        """
        移动控制点。

        移动节点时，其两侧手柄随之平移相同的位移，保持节点处切线方向不变。
        闭环时首尾节点同步移动。最后对该点施加所属节点的连续性约束。

        Args:
            index: 控制点索引
            point: (3,) 新位置（局部坐标）

        Raises:
            IndexOutOfRangeError: index 越界
            ValueError: point 不是 3 分量向量
        """
        self._check_index(index)
        point = as_vector3(point)
        points = self._points
        last = len(points) - 1

        if is_joint(index):
            delta = point - points[index]

            if self._loop:
                if index == 0:
                    points[1] += delta
                    points[last - 1] += delta
                    points[last] = point
                elif index == last:
                    points[0] = point
                    points[1] += delta
                    points[index - 1] += delta
                else:
                    points[index - 1] += delta
                    points[index + 1] += delta
            else:
                if index > 0:
                    points[index - 1] += delta
                if index < last:
                    points[index + 1] += delta

        points[index] = point
        self._enforce_mode(index)

    def set_control_point_mode(self, index: int, mode: ControlPointMode | str):
        """
        设置控制点所属节点的模式，闭环时首尾节点模式同步，然后施加约束。

        Raises:
            IndexOutOfRangeError: index 越界
            ValueError: mode 不是合法模式
        """
        self._check_index(index)
        mode = ControlPointMode(mode)
        m = mode_index(index)
        self._modes[m] = mode

        if self._loop:
            if m == 0:
                self._modes[-1] = mode
            elif m == len(self._modes) - 1:
                self._modes[0] = mode

        self._enforce_mode(index)

    def add_curve(self):
        """
        在末尾追加一段曲线。

        新增 3 个点沿 +X 轴依次偏移 1、2、3 个单位，新节点模式沿用原末节点模式。
        闭环时新的末节点直接取首节点的位置和模式，使新段成为回到起点的闭合段。
        """
        step = np.arange(1, 4)[:, np.newaxis] * _EXTENSION_STEP
        extension = self._points[-1] + step

        self._points = np.vstack([self._points, extension])
        self._modes.append(self._modes[-1])
        self._enforce_mode(len(self._points) - 4)

        if self._loop:
            self._points[-1] = self._points[0]
            self._modes[-1] = self._modes[0]
            self._enforce_mode(0)

        assert len(self._points) == 3 * (len(self._modes) - 1) + 1
        logger.debug("Added curve, spline now has %d curves", self.curve_count)

    def reset(self):
        """恢复为默认的单段直线样条（FREE，非闭环）。"""
        self._points = _DEFAULT_POINTS.copy()
        self._modes = [ControlPointMode.FREE, ControlPointMode.FREE]
        self._loop = False
        logger.debug("Spline reset to default")

    def _enforce_mode(self, index: int):
        """
        对 index 所属节点施加连续性约束。

        index 一侧的手柄保持不动，只重新计算另一侧手柄：
        MIRRORED 取固定手柄的长度，ALIGNED 保留被约束手柄原有的长度。
        """
        m = mode_index(index)
        mode = self._modes[m]

        if mode is ControlPointMode.FREE:
            return
        if not self._loop and (m == 0 or m == len(self._modes) - 1):
            return

        points = self._points
        middle = joint_point_index(m)
        fixed_index, enforced_index = handle_pair(index, len(points))

        tangent = points[middle] - points[fixed_index]
        if mode is ControlPointMode.ALIGNED:
            tangent = rescale(tangent, np.linalg.norm(points[enforced_index] - points[middle]))

        points[enforced_index] = points[middle] + tangent

    # ------------------------------------------------------------------
    # 求值
    # ------------------------------------------------------------------

    def _local_segment(self, t: float) -> tuple[np.ndarray, float]:
        start, u = segment_for(t, self.curve_count)
        return self._points[start : start + 4], u

    def get_point(self, t: float) -> np.ndarray:
        """
        在全局参数 t 处求曲线位置（世界坐标）。

        Args:
            t: 全局参数，裁剪到 [0, 1]

        Returns:
            (3,) 世界坐标位置
        """
        P, u = self._local_segment(t)
        return self.transform.to_world_point(bezier.point(P[0], P[1], P[2], P[3], u))

    def get_velocity(self, t: float) -> np.ndarray:
        """
        在全局参数 t 处求段内一阶导数，只经过变换的线性部分。

        结果不是单位向量，也没有按段数缩放。
        """
        P, u = self._local_segment(t)
        return self.transform.to_world_direction(bezier.first_derivative(P[0], P[1], P[2], P[3], u))

    def get_direction(self, t: float, strict: bool = False) -> np.ndarray:
        """
        在全局参数 t 处求单位切线方向。

        导数为零向量（例如控制点重合）时方向无定义：
        strict=False 返回零向量，strict=True 抛出 DegenerateTangentError。

        Args:
            t: 全局参数
            strict: 是否对退化切线抛出异常

        Returns:
            (3,) 单位方向向量，退化时为零向量
        """
        velocity = self.get_velocity(t)
        if is_degenerate(velocity):
            if strict:
                raise DegenerateTangentError(t)
            return np.zeros(3)
        return velocity / np.linalg.norm(velocity)

    def __repr__(self) -> str:
        return f"Spline(curves={self.curve_count}, loop={self._loop})"
