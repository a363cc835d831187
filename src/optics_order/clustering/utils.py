"""
聚类工具函数
距离函数、度量方式解析以及聚类结果转换
"""

import math
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np
from numba import jit

DistanceFunction = Callable[[Sequence[float], Sequence[float]], float]

EARTH_RADIUS_M = 6371000.0  # 地球平均半径（米）


def euclidean_distance(p: Sequence[float], q: Sequence[float]) -> float:
    """
    计算多维空间中的欧氏距离

    维度不同时只比较公共前缀，即前 min(len(p), len(q)) 个坐标。

    Args:
        p: 第一个点
        q: 第二个点

    Returns:
        两点之间的欧氏距离
    """
    n_dims = min(len(p), len(q))
    diff = np.asarray(p[:n_dims], dtype=np.float64) - np.asarray(q[:n_dims], dtype=np.float64)
    return float(np.sqrt(np.dot(diff, diff)))


@jit(nopython=True)
def _haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    lat1 = math.radians(lat1)
    lon1 = math.radians(lon1)
    lat2 = math.radians(lat2)
    lon2 = math.radians(lon2)

    dlon = lon2 - lon1
    dlat = lat2 - lat1

    # Haversine公式
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def haversine_distance(p: Sequence[float], q: Sequence[float]) -> float:
    """
    Haversine距离，适用于地理坐标

    Args:
        p: 第一个点 [lat, lon]（度）
        q: 第二个点 [lat, lon]（度）

    Returns:
        两点之间的球面距离（米）
    """
    return float(_haversine(float(p[0]), float(p[1]), float(q[0]), float(q[1])))


_METRICS = {
    'euclidean': euclidean_distance,
    'haversine': haversine_distance,
}


def get_distance_function(metric: Union[str, DistanceFunction]) -> DistanceFunction:
    """
    解析距离度量方式

    Args:
        metric: 距离函数，或度量名称 'euclidean' / 'haversine'

    Returns:
        距离函数
    """
    if callable(metric):
        return metric

    if metric in _METRICS:
        return _METRICS[metric]

    raise ValueError(f"不支持的度量方式: {metric}")


def clusters_to_labels(clusters: List[List[int]], n_samples: int) -> np.ndarray:
    """
    将聚类列表转换为标签数组

    Args:
        clusters: 聚类列表，每个聚类是点索引列表
        n_samples: 点的总数

    Returns:
        每个点的聚类编号，未分配的点为-1
    """
    labels = np.full(n_samples, -1, dtype=np.int32)

    for cluster_id, members in enumerate(clusters):
        labels[members] = cluster_id

    return labels


def reachability_plot_to_arrays(
        plot: Sequence[Tuple[int, Optional[float]]]) -> Tuple[np.ndarray, np.ndarray]:
    """
    将可达图转换为numpy数组

    Args:
        plot: (点索引, 可达距离) 列表，未定义的可达距离为None

    Returns:
        (访问顺序数组, 可达距离数组)，未定义的可达距离为nan
    """
    ordering = np.array([point_id for point_id, _ in plot], dtype=np.int64)
    reachability = np.array(
        [np.nan if distance is None else distance for _, distance in plot],
        dtype=np.float64
    )
    return ordering, reachability
