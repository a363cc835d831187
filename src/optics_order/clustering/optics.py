"""
OPTICS聚类排序实现
Ordering Points To Identify the Clustering Structure
"""

import time
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .seed_list import SeedList
from .utils import (DistanceFunction, euclidean_distance, get_distance_function,
                    clusters_to_labels)


class OPTICS:
    """
    OPTICS聚类排序

    按密度可达关系遍历所有点，输出访问顺序和每个点的可达距离（可达图），
    并记录遍历过程中发现的聚类。
    """

    epsilon: float = 1
    min_pts: int = 1
    distance: DistanceFunction = staticmethod(euclidean_distance)

    def __init__(self, dataset: Optional[Sequence[Sequence[float]]] = None,
                 epsilon: Optional[float] = None,
                 min_pts: Optional[int] = None,
                 distance: Union[str, DistanceFunction, None] = None):
        """
        初始化OPTICS参数

        Args:
            dataset: 数据集，点的序列
            epsilon: 邻域半径
            min_pts: 核心点的最小邻居数（包含点本身）
            distance: 距离函数，或度量名称 'euclidean' / 'haversine'
        """
        self.dataset: Sequence[Sequence[float]] = []
        self.clusters: List[List[int]] = []

        # 遍历状态
        self._processed: List[bool] = []
        self._reachability: List[Optional[float]] = []
        self._core_distances: List[Optional[float]] = []
        self._ordered_list: List[int] = []

        self.labels_ = None
        self.ordering_ = None
        self.reachability_ = None
        self.core_distances_ = None
        self.core_sample_indices_ = None
        self.execution_time = 0

        self._init(dataset, epsilon, min_pts, distance)

    def run(self, dataset: Sequence[Sequence[float]],
            epsilon: Optional[float] = None,
            min_pts: Optional[int] = None,
            distance: Union[str, DistanceFunction, None] = None) -> List[List[int]]:
        """
        执行OPTICS聚类排序

        Args:
            dataset: 数据集，list、tuple或numpy数组
            epsilon: 邻域半径，None表示沿用当前值
            min_pts: 最小邻居数，None表示沿用当前值
            distance: 距离函数，None表示沿用当前值

        Returns:
            聚类列表，每个聚类是按发现顺序排列的点索引列表
        """
        start_time = time.time()

        self._init(dataset, epsilon, min_pts, distance)

        for point_id in range(len(self.dataset)):
            if self._processed[point_id]:
                continue

            self._processed[point_id] = True
            self.clusters.append([point_id])
            cluster_id = len(self.clusters) - 1

            self._ordered_list.append(point_id)
            neighbors = self.region_query(point_id)

            core_distance = self.distance_to_core(point_id)
            self._core_distances[point_id] = core_distance

            # 核心点：用种子列表扩展当前聚类
            if core_distance is not None:
                seed_list = SeedList(sorting='asc')
                self._update_queue(point_id, neighbors, seed_list)
                self._expand_cluster(cluster_id, seed_list)

        self._collect_results()
        self.execution_time = time.time() - start_time

        return self.clusters

    def fit(self, points: np.ndarray) -> 'OPTICS':
        """
        执行聚类排序（估计器风格接口）

        Args:
            points: 点的序列或形状为(n_samples, n_features)的数组，
                list/tuple原样传入，允许各点维度不同

        Returns:
            self: 返回聚类器实例
        """
        if not isinstance(points, (list, tuple, np.ndarray)):
            points = np.asarray(points)

        self.run(points)
        return self

    def get_reachability_plot(self) -> List[Tuple[int, Optional[float]]]:
        """
        生成可达图

        Returns:
            按访问顺序排列的 (点索引, 可达距离) 列表，未定义的可达距离为None
        """
        return [(point_id, self._reachability[point_id]) for point_id in self._ordered_list]

    def region_query(self, point_id: int, radius: Optional[float] = None) -> List[int]:
        """
        查找指定点邻域内的所有点（线性扫描）

        Args:
            point_id: 目标点的索引
            radius: 查询半径，None或0表示使用epsilon

        Returns:
            距离严格小于半径的点索引列表（包含点本身）
        """
        radius = radius or self.epsilon
        point = self.dataset[point_id]

        return [i for i in range(len(self.dataset))
                if self.distance(point, self.dataset[i]) < radius]

    def distance_to_core(self, point_id: int) -> Optional[float]:
        """
        计算核心距离

        依次尝试小于epsilon的整数半径 0, 1, 2, ...，返回第一个邻居数不少于
        min_pts的半径。这是按整数步长的近似，不是到第min_pts个近邻的距离。
        半径0在region_query中等价于epsilon。

        Args:
            point_id: 点的索引

        Returns:
            核心距离，不是核心点时为None
        """
        candidate = 0
        while candidate < self.epsilon:
            if len(self.region_query(point_id, candidate)) >= self.min_pts:
                return candidate
            candidate += 1

        return None

    def get_cluster_stats(self) -> dict:
        """
        获取聚类统计信息

        Returns:
            包含聚类统计信息的字典
        """
        if self.labels_ is None:
            return {}

        stats = {
            'n_clusters': len(self.clusters),
            'n_singletons': sum(1 for members in self.clusters if len(members) == 1),
            'n_core_points': len(self.core_sample_indices_),
            'n_points': len(self.dataset),
            'execution_time': self.execution_time,
            'cluster_sizes': {}
        }

        for cluster_id, members in enumerate(self.clusters):
            stats['cluster_sizes'][cluster_id] = len(members)

        return stats

    def _init(self, dataset=None, epsilon=None, min_pts=None, distance=None) -> None:
        """设置参数，传入数据集时重置遍历状态"""
        if dataset is not None:
            if not isinstance(dataset, (list, tuple, np.ndarray)):
                raise TypeError(f"Dataset must be of type array, {type(dataset).__name__} given")

            n_samples = len(dataset)
            self.dataset = dataset
            self.clusters = []
            self._processed = [False] * n_samples
            self._reachability = [None] * n_samples
            self._core_distances = [None] * n_samples
            self._ordered_list = []

        if epsilon is not None:
            self.epsilon = epsilon

        if min_pts is not None:
            self.min_pts = min_pts

        if distance is not None:
            self.distance = get_distance_function(distance)

    def _update_queue(self, point_id: int, neighbors: List[int], seed_list: SeedList) -> None:
        """
        用核心点的邻居更新种子列表

        Args:
            point_id: 核心点索引
            neighbors: 核心点的邻居
            seed_list: 种子列表
        """
        core_distance = self.distance_to_core(point_id)
        if core_distance is None:
            core_distance = 0

        for neighbor_id in neighbors:
            if self._processed[neighbor_id]:
                continue

            dist = self.distance(self.dataset[point_id], self.dataset[neighbor_id])
            new_reachability = max(core_distance, dist)

            if self._reachability[neighbor_id] is None:
                self._reachability[neighbor_id] = new_reachability
                seed_list.insert(neighbor_id, new_reachability)
            elif new_reachability < self._reachability[neighbor_id]:
                self._reachability[neighbor_id] = new_reachability
                seed_list.remove(neighbor_id)
                seed_list.insert(neighbor_id, new_reachability)

    def _expand_cluster(self, cluster_id: int, seed_list: SeedList) -> None:
        """
        从种子列表扩展聚类

        每一轮扫描记录进入时的列表长度，按下标从前向后访问实时列表；
        遇到核心点时更新种子列表并开始新一轮扫描，新一轮结束后回到上一轮
        的位置继续。用显式栈代替递归。

        Args:
            cluster_id: 当前聚类ID
            seed_list: 种子列表
        """
        elements = seed_list.get_elements()
        # 每个栈帧: [下一个位置, 进入时的长度]
        stack = [[0, len(elements)]]

        while stack:
            frame = stack[-1]
            position, length = frame

            if position >= length:
                stack.pop()
                continue

            frame[0] = position + 1
            point_id = elements[position]

            if self._processed[point_id]:
                continue

            neighbors = self.region_query(point_id)
            self._processed[point_id] = True

            self.clusters[cluster_id].append(point_id)
            self._ordered_list.append(point_id)

            core_distance = self.distance_to_core(point_id)
            self._core_distances[point_id] = core_distance

            if core_distance is not None:
                self._update_queue(point_id, neighbors, seed_list)
                stack.append([0, len(elements)])

    def _collect_results(self) -> None:
        """整理遍历结果为numpy数组"""
        n_samples = len(self.dataset)

        self.labels_ = clusters_to_labels(self.clusters, n_samples)
        self.ordering_ = np.array(self._ordered_list, dtype=np.int64)
        self.reachability_ = np.array(
            [np.nan if r is None else r for r in self._reachability], dtype=np.float64)
        self.core_distances_ = np.array(
            [np.nan if c is None else c for c in self._core_distances], dtype=np.float64)
        self.core_sample_indices_ = np.where(~np.isnan(self.core_distances_))[0]
