#!/usr/bin/env python3
"""
运行OPTICS聚类排序
输出访问顺序、可达图和遍历中发现的聚类
"""

import sys
from pathlib import Path

# 添加src目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

import argparse
import json
import time
from typing import Any, Dict, List, Optional

import numpy as np

from optics_order.clustering.optics import OPTICS
from optics_order.data_processing.loader import load_points_csv, save_ordering_csv
from optics_order.visualization.plot_reachability import ReachabilityVisualizer


def load_data(data_path: str, columns: Optional[List[str]] = None) -> np.ndarray:
    """
    加载点数据

    Args:
        data_path: CSV文件路径
        columns: 坐标列名

    Returns:
        点数据数组
    """
    print("=" * 60)
    print("数据加载")
    print("=" * 60)

    start_time = time.time()
    points = load_points_csv(data_path, columns=columns)

    if len(points) == 0:
        raise ValueError("没有加载到任何点数据")

    print(f"加载了 {len(points)} 个点，维度: {points.shape[1]}")
    print(f"数据加载耗时: {time.time() - start_time:.2f} 秒")

    return points


def run_optics(points: np.ndarray,
               epsilon: float = 1.0,
               min_pts: int = 1,
               metric: str = 'euclidean') -> Dict[str, Any]:
    """
    运行OPTICS算法

    Args:
        points: 点数据
        epsilon: 邻域半径
        min_pts: 最小邻居数
        metric: 距离度量

    Returns:
        聚类结果和性能数据
    """
    print("\n" + "=" * 60)
    print("运行OPTICS聚类排序")
    print("=" * 60)

    print(f"算法参数:")
    print(f"  epsilon (邻域半径): {epsilon}")
    print(f"  min_pts (最小邻居数): {min_pts}")
    print(f"  metric (距离度量): {metric}")
    print(f"  数据点数量: {len(points)}")

    optics = OPTICS(epsilon=epsilon, min_pts=min_pts, distance=metric)
    optics.fit(points)

    stats = optics.get_cluster_stats()

    print(f"\n聚类结果:")
    print(f"  聚类数量: {stats['n_clusters']}")
    print(f"  单点聚类数量: {stats['n_singletons']}")
    print(f"  核心点数量: {stats['n_core_points']}")

    sizes = sorted(stats['cluster_sizes'].items(), key=lambda item: item[1], reverse=True)
    if sizes:
        print(f"  聚类大小分布:")
        for cluster_id, size in sizes[:10]:  # 显示最大的10个聚类
            print(f"    聚类 {cluster_id}: {size} 个点")
        if len(sizes) > 10:
            print(f"    ... 还有 {len(sizes) - 10} 个聚类")

    print(f"\n执行时间: {optics.execution_time:.4f} 秒")

    return {
        'algorithm': 'OPTICS',
        'parameters': {
            'epsilon': epsilon,
            'min_pts': min_pts,
            'metric': metric,
            'n_points': len(points)
        },
        'results': {
            'n_clusters': stats['n_clusters'],
            'n_singletons': stats['n_singletons'],
            'n_core_points': stats['n_core_points'],
            'cluster_sizes': stats['cluster_sizes'],
            'clusters': optics.clusters
        },
        'performance': {
            'execution_time': optics.execution_time
        },
        'optics_object': optics
    }


def visualize_results(points: np.ndarray, result: Dict[str, Any],
                      output_dir: str = "./results/optics") -> None:
    """
    可视化可达图和聚类结果

    Args:
        points: 点数据
        result: 聚类结果
        output_dir: 输出目录
    """
    print("\n" + "=" * 60)
    print("可视化结果")
    print("=" * 60)

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    optics = result['optics_object']
    params = result['parameters']
    visualizer = ReachabilityVisualizer()

    print("生成可达图...")
    visualizer.plot_reachability(
        optics.get_reachability_plot(),
        labels=optics.labels_,
        title=f"OPTICS可达图 (epsilon={params['epsilon']}, min_pts={params['min_pts']})",
        save_path=str(output_path / "optics_reachability.png")
    )

    if points.shape[1] >= 2:
        print("生成2D聚类图...")
        visualizer.plot_clusters_2d(
            points, optics.labels_,
            title=f"OPTICS聚类结果 (epsilon={params['epsilon']}, min_pts={params['min_pts']})",
            save_path=str(output_path / "optics_clusters_2d.png")
        )


def save_results(result: Dict[str, Any], output_dir: str = "./results/optics") -> None:
    """
    保存聚类结果

    Args:
        result: 聚类结果
        output_dir: 输出目录
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    serializable_result = {
        'algorithm': result['algorithm'],
        'parameters': result['parameters'],
        'results': result['results'],
        'performance': result['performance']
    }

    result_file = output_path / "optics_results.json"
    with open(result_file, 'w') as f:
        json.dump(serializable_result, f, indent=2, default=str)

    ordering_file = save_ordering_csv(result['optics_object'], output_path / "optics_ordering.csv")

    print(f"结果已保存到: {result_file}")
    print(f"访问顺序已保存到: {ordering_file}")


def main():
    """主函数"""
    parser = argparse.ArgumentParser(description='运行OPTICS聚类排序算法')
    parser.add_argument('--data', type=str, required=True,
                        help='点数据CSV文件路径')
    parser.add_argument('--columns', type=str, nargs='+',
                        help='作为坐标的列名（默认: 所有数值列）')
    parser.add_argument('--epsilon', type=float, default=1.0,
                        help='OPTICS邻域半径（默认: 1.0）')
    parser.add_argument('--min-pts', type=int, default=1,
                        help='核心点的最小邻居数（默认: 1）')
    parser.add_argument('--metric', type=str, default='euclidean',
                        choices=['euclidean', 'haversine'],
                        help='距离度量方式（默认: euclidean）')
    parser.add_argument('--output-dir', type=str, default='./results/optics',
                        help='输出目录（默认: ./results/optics）')
    parser.add_argument('--no-visualize', action='store_true',
                        help='不生成可视化图表')

    args = parser.parse_args()

    try:
        print("OPTICS聚类排序")
        print("=" * 60)

        # 1. 加载数据
        points = load_data(args.data, columns=args.columns)

        # 2. 运行OPTICS
        result = run_optics(
            points,
            epsilon=args.epsilon,
            min_pts=args.min_pts,
            metric=args.metric
        )

        # 3. 可视化结果
        if not args.no_visualize:
            visualize_results(points, result, args.output_dir)

        # 4. 保存结果
        save_results(result, args.output_dir)

        print("\n" + "=" * 60)
        print("OPTICS聚类排序完成")
        print("=" * 60)

    except Exception as e:
        print(f"错误: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
