"""
可视化模块
可达图和聚类结果的可视化
"""

from .plot_reachability import ReachabilityVisualizer, plot_reachability

__all__ = [
    'ReachabilityVisualizer',
    'plot_reachability'
]
