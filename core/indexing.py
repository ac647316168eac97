"""
indexing - 控制点索引运算

控制点存储在一个扁平序列中，每第 3 个点 (index % 3 == 0) 是节点，
节点前后相邻的两个点是它的切线手柄。这里集中了所有模运算和首尾回绕规则。
"""

import numpy as np


def is_joint(index: int) -> bool:
    """index 是否为节点（而非手柄）"""
    return index % 3 == 0


def mode_index(index: int) -> int:
    """
    将任意控制点索引映射到其所属节点的模式索引。

    手柄 3k-1 和 3k+1 都归属于节点 3k。
    """
    return (index + 1) // 3


def joint_point_index(mode_idx: int) -> int:
    """模式索引对应的节点控制点索引"""
    return mode_idx * 3


def curve_count_for(point_count: int) -> int:
    """点数 3k+1 对应的曲线段数 k"""
    return (point_count - 1) // 3


def handle_pair(index: int, point_count: int) -> tuple[int, int]:
    """
    确定节点两侧手柄中哪一个保持不动、哪一个需要重新计算。

    index 所在一侧的手柄为固定手柄；另一侧为被约束手柄。
    越过数组边界时回绕到另一端 (point_count - 2 或 1)，对应闭环拓扑。

    Args:
        index: 触发约束的控制点索引
        point_count: 控制点总数

    Returns:
        fixed_index: 保持不动的手柄索引
        enforced_index: 需要重新计算的手柄索引
    """
    middle = joint_point_index(mode_index(index))

    if index <= middle:
        fixed_index = middle - 1
        if fixed_index < 0:
            fixed_index = point_count - 2
        enforced_index = middle + 1
        if enforced_index >= point_count:
            enforced_index = 1
    else:
        fixed_index = middle + 1
        if fixed_index >= point_count:
            fixed_index = 1
        enforced_index = middle - 1
        if enforced_index < 0:
            enforced_index = point_count - 2

    return fixed_index, enforced_index


def segment_for(t: float, curve_count: int) -> tuple[int, float]:
    """
    将全局参数 t 映射到曲线段起始控制点索引和段内局部参数 u。

    t >= 1 时落在最后一段且 u = 1；否则 t 先裁剪到 [0, 1]，
    再乘以段数，整数部分为段号，小数部分为 u。
    NaN 无法裁剪，直接拒绝。

    Args:
        t: 全局参数
        curve_count: 曲线段数

    Returns:
        start: 该段第一个控制点的索引
        u: 段内参数 [0, 1]

    Raises:
        ValueError: t 为 NaN
    """
    if np.isnan(t):
        raise ValueError("Global parameter t must not be NaN")
    if t >= 1.0:
        return (curve_count - 1) * 3, 1.0

    scaled = max(t, 0.0) * curve_count
    segment = int(scaled)
    return segment * 3, scaled - segment


def segments_for(t_values: np.ndarray, curve_count: int) -> tuple[np.ndarray, np.ndarray]:
    """
    segment_for 的向量化版本。

    Args:
        t_values: (M,) 全局参数数组
        curve_count: 曲线段数

    Returns:
        starts: (M,) 各参数所在段的起始控制点索引
        u: (M,) 段内参数

    Raises:
        ValueError: t_values 中含有 NaN
    """
    t = np.atleast_1d(np.asarray(t_values, dtype=float))
    if np.isnan(t).any():
        raise ValueError("Global parameter t must not be NaN")

    scaled = np.clip(t, 0.0, 1.0) * curve_count
    segments = np.minimum(np.floor(scaled).astype(int), curve_count - 1)
    u = scaled - segments
    return segments * 3, u
