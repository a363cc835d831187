"""
数据处理模块
点数据的加载和聚类排序结果的保存
"""

from .loader import load_points_csv, ordering_to_dataframe, save_ordering_csv

__all__ = [
    'load_points_csv',
    'ordering_to_dataframe',
    'save_ordering_csv'
]
