"""
聚类排序结果可视化
可达图和二维聚类分布图
"""

from typing import Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from scipy.spatial import ConvexHull, QhullError

from ..clustering.utils import reachability_plot_to_arrays


class ReachabilityVisualizer:
    """可达图可视化器"""

    def __init__(self, figsize: Tuple[int, int] = (12, 6),
                 colormap: str = 'tab20', dpi: int = 150):
        """
        初始化可视化器

        Args:
            figsize: 图形大小
            colormap: 颜色映射
            dpi: 保存图片的分辨率
        """
        self.figsize = figsize
        self.colormap = colormap
        self.cmap = plt.get_cmap(colormap)
        self.dpi = dpi

    def plot_reachability(self, plot: Sequence[Tuple[int, Optional[float]]],
                          labels: Optional[np.ndarray] = None,
                          title: str = "OPTICS可达图",
                          save_path: Optional[str] = None) -> plt.Figure:
        """
        绘制可达图

        Args:
            plot: OPTICS.get_reachability_plot() 的结果
            labels: 每个点的聚类标签（按点索引），用于着色
            title: 图表标题
            save_path: 保存路径

        Returns:
            matplotlib图形对象
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        ordering, reachability = reachability_plot_to_arrays(plot)
        undefined = np.isnan(reachability)
        positions = np.arange(len(ordering))

        # 未定义的可达距离画在坐标轴顶部
        finite = reachability[~undefined]
        top = finite.max() * 1.1 if finite.size and finite.max() > 0 else 1.0
        heights = np.where(undefined, top, reachability)

        if labels is not None and len(ordering):
            cluster_ids = np.asarray(labels)[ordering]
            colors = self.cmap(cluster_ids % self.cmap.N)
        else:
            colors = np.tile(self.cmap(0), (len(ordering), 1))

        if np.any(~undefined):
            ax.bar(positions[~undefined], heights[~undefined],
                   color=colors[~undefined], width=1.0, label='可达距离')
        if np.any(undefined):
            ax.bar(positions[undefined], heights[undefined],
                   color='lightgray', width=1.0, hatch='//', label='未定义')

        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_xlabel('访问顺序')
        ax.set_ylabel('可达距离')
        ax.set_ylim(0, top * 1.05)
        ax.grid(True, axis='y', alpha=0.3)
        if len(ordering):
            ax.legend(loc='upper right')

        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight')
            print(f"可达图已保存到: {save_path}")

        return fig

    def plot_clusters_2d(self, points: np.ndarray, labels: np.ndarray,
                         title: str = "OPTICS聚类结果",
                         save_path: Optional[str] = None,
                         alpha: float = 0.7,
                         s: float = 20.0) -> plt.Figure:
        """
        绘制2D聚类结果（使用前两个坐标）

        Args:
            points: 点数据，形状为(n, d)，d >= 2
            labels: 聚类标签，形状为(n,)
            title: 图表标题
            save_path: 保存路径
            alpha: 透明度
            s: 点的大小

        Returns:
            matplotlib图形对象
        """
        points = np.asarray(points, dtype=np.float64)
        labels = np.asarray(labels)

        fig, ax = plt.subplots(figsize=self.figsize)

        unique_labels, counts = np.unique(labels, return_counts=True)
        singleton_mask = np.isin(labels, unique_labels[counts == 1])

        # 单点聚类统一用灰色显示
        if np.any(singleton_mask):
            ax.scatter(points[singleton_mask, 0], points[singleton_mask, 1],
                       c='gray', marker='x', s=s * 0.5, alpha=alpha * 0.5,
                       label='单点聚类')

        for label, count in zip(unique_labels, counts):
            if count == 1:
                continue

            cluster_points = points[labels == label]
            color = self.cmap(label % self.cmap.N)

            ax.scatter(cluster_points[:, 0], cluster_points[:, 1],
                       color=color, label=f'聚类 {label}',
                       s=s, alpha=alpha, edgecolors='w', linewidths=0.5)

            # 绘制凸包（对于较大的聚类）
            if count > 3:
                try:
                    hull = ConvexHull(cluster_points[:, :2])
                except (QhullError, ValueError):
                    # 共线或重合的点没有凸包
                    continue
                hull_points = cluster_points[hull.vertices, :2]
                hull_points = np.vstack([hull_points, hull_points[0]])
                ax.plot(hull_points[:, 0], hull_points[:, 1],
                        color=color, alpha=0.3, linewidth=1, linestyle='--')

        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_xlabel('X坐标')
        ax.set_ylabel('Y坐标')
        ax.grid(True, alpha=0.3)

        # 图例只显示前15项
        handles, labels_legend = ax.get_legend_handles_labels()
        if handles:
            ax.legend(handles[:15], labels_legend[:15], loc='upper right', fontsize=8)

        n_clusters = int(np.sum(counts > 1))
        n_singletons = int(np.sum(counts == 1))
        stats_text = f'聚类数: {n_clusters}\n单点聚类: {n_singletons}\n总点数: {len(points)}'
        ax.text(0.02, 0.98, stats_text, transform=ax.transAxes,
                fontsize=10, verticalalignment='top',
                bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8))

        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight')
            print(f"聚类图已保存到: {save_path}")

        return fig


def plot_reachability(optics, save_path: Optional[str] = None) -> plt.Figure:
    """
    绘制OPTICS实例的可达图的便捷函数

    Args:
        optics: 已执行run的OPTICS实例
        save_path: 保存路径

    Returns:
        matplotlib图形对象
    """
    visualizer = ReachabilityVisualizer()
    return visualizer.plot_reachability(
        optics.get_reachability_plot(),
        labels=optics.labels_,
        title=f"OPTICS可达图 (epsilon={optics.epsilon}, min_pts={optics.min_pts})",
        save_path=save_path
    )
