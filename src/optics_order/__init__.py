"""
OPTICS密度聚类排序
计算点集的聚类访问顺序和可达图
"""

from .clustering import OPTICS, SeedList

__version__ = '0.1.0'

__all__ = [
    'OPTICS',
    'SeedList'
]
