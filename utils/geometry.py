"""
geometry - 几何计算工具函数

提供向量归一化、长度计算、三维向量校验等基础几何操作。
"""

import numpy as np

EPSILON = 1e-16
DEGENERATE_TOLERANCE = 1e-12


def normalize(vectors: np.ndarray) -> np.ndarray:
    """
    将向量归一化为单位向量。

    零向量归一化后仍为零向量。

    Args:
        vectors: 单个向量 (n,) 或向量数组 (m, n)

    Returns:
        归一化后的单位向量，与输入形状相同
    """
    vectors = np.asarray(vectors, dtype=float)
    if vectors.ndim == 1:
        norm = np.linalg.norm(vectors)
        return vectors / (norm + EPSILON)
    norm = np.linalg.norm(vectors, axis=-1, keepdims=True)
    return vectors / (norm + EPSILON)


def is_degenerate(vector: np.ndarray, tol: float = DEGENERATE_TOLERANCE) -> bool:
    """向量长度是否小于 tol（视为零向量）"""
    return bool(np.linalg.norm(vector) < tol)


def as_vector3(value) -> np.ndarray:
    """
    将输入转换为 (3,) 浮点向量。

    Raises:
        ValueError: 输入不是 3 分量向量
    """
    v = np.array(value, dtype=float)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {v.shape}")
    return v


def rescale(vector: np.ndarray, length: float) -> np.ndarray:
    """保持方向，将向量缩放到给定长度。零向量保持为零。"""
    vector = np.asarray(vector, dtype=float)
    norm = np.linalg.norm(vector)
    if norm == 0.0:
        return np.zeros_like(vector)
    return vector * (length / norm)
