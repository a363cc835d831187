"""
聚类排序模块
包含OPTICS算法及其种子列表
"""

from .optics import OPTICS
from .seed_list import SeedList
from .utils import (euclidean_distance, haversine_distance, get_distance_function,
                    clusters_to_labels, reachability_plot_to_arrays)

__all__ = [
    'OPTICS',
    'SeedList',
    'euclidean_distance',
    'haversine_distance',
    'get_distance_function',
    'clusters_to_labels',
    'reachability_plot_to_arrays'
]
