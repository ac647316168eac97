"""
bezier - 单段三次 Bézier 曲线求值

无状态纯函数，输入 4 个控制点和局部参数 u，输出位置或一阶导数。

实现:
1. 三次 Bernstein 混合求位置
2. 一阶导数 (未按段时长归一化)
3. 单段批量求值 (向量化版本)
"""

import numpy as np


def _clamp01(t):
    return np.clip(t, 0.0, 1.0)


def point(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, t: float) -> np.ndarray:
    """
    计算三次 Bézier 曲线在参数 t 处的位置。

        B(t) = (1-t)³·p0 + 3(1-t)²t·p1 + 3(1-t)t²·p2 + t³·p3

    Args:
        p0, p1, p2, p3: (3,) 控制点
        t: 局部参数，会被裁剪到 [0, 1]

    Returns:
        (3,) 曲线上的点
    """
    t = float(_clamp01(t))
    one_minus_t = 1.0 - t

    return (
        one_minus_t * one_minus_t * one_minus_t * np.asarray(p0, dtype=float)
        + 3.0 * one_minus_t * one_minus_t * t * np.asarray(p1, dtype=float)
        + 3.0 * one_minus_t * t * t * np.asarray(p2, dtype=float)
        + t * t * t * np.asarray(p3, dtype=float)
    )


def first_derivative(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, t: float) -> np.ndarray:
    """
    计算三次 Bézier 曲线对 t 的一阶导数。

        B'(t) = 3(1-t)²·(p1-p0) + 6(1-t)t·(p2-p1) + 3t²·(p3-p2)

    结果是切向量，不是单位向量。

    Args:
        p0, p1, p2, p3: (3,) 控制点
        t: 局部参数，会被裁剪到 [0, 1]

    Returns:
        (3,) 切向量
    """
    t = float(_clamp01(t))
    one_minus_t = 1.0 - t
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))

    return (
        3.0 * one_minus_t * one_minus_t * (p1 - p0)
        + 6.0 * one_minus_t * t * (p2 - p1)
        + 3.0 * t * t * (p3 - p2)
    )


def point_batch(control_points: np.ndarray, t_values: np.ndarray) -> np.ndarray:
    """
    批量计算单段曲线上的点（向量化版本）。

    Args:
        control_points: (4, 3) 控制点 [p0, p1, p2, p3]
        t_values: (M,) 局部参数数组

    Returns:
        (M, 3) 位置数组
    """
    P = np.asarray(control_points, dtype=float)
    t = _clamp01(np.atleast_1d(np.asarray(t_values, dtype=float)))[:, np.newaxis]
    s = 1.0 - t

    return s**3 * P[0] + 3.0 * s**2 * t * P[1] + 3.0 * s * t**2 * P[2] + t**3 * P[3]


def first_derivative_batch(control_points: np.ndarray, t_values: np.ndarray) -> np.ndarray:
    """
    批量计算单段曲线的一阶导数（向量化版本）。

    Args:
        control_points: (4, 3) 控制点 [p0, p1, p2, p3]
        t_values: (M,) 局部参数数组

    Returns:
        (M, 3) 切向量数组
    """
    P = np.asarray(control_points, dtype=float)
    t = _clamp01(np.atleast_1d(np.asarray(t_values, dtype=float)))[:, np.newaxis]
    s = 1.0 - t

    return 3.0 * s**2 * (P[1] - P[0]) + 6.0 * s * t * (P[2] - P[1]) + 3.0 * t**2 * (P[3] - P[2])


if __name__ == "__main__":
    print("=== 单段 Bézier 测试 ===")

    P = np.array([
        [0, 0, 0],
        [1, 2, 0],
        [3, 2, 0],
        [4, 0, 0],
    ], dtype=float)

    for t in (0.0, 0.25, 0.5, 0.75, 1.0):
        print(f"t={t:.2f}: B={point(*P, t)}, B'={first_derivative(*P, t)}")

    batch = point_batch(P, np.linspace(0, 1, 5))
    print(f"批量求值形状: {batch.shape}")
