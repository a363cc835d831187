"""
点数据加载器
负责读取CSV点数据和保存聚类排序结果
"""

import warnings
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd

from ..clustering.optics import OPTICS


def load_points_csv(file_path: Union[str, Path],
                    columns: Optional[List[str]] = None) -> np.ndarray:
    """
    从CSV文件加载点数据

    Args:
        file_path: CSV文件路径
        columns: 作为坐标的列名，None表示使用所有数值列

    Returns:
        形状为(n_samples, n_features)的浮点数组
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise FileNotFoundError(f"数据文件不存在: {file_path}")

    df = pd.read_csv(file_path)

    if columns:
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ValueError(f"CSV中缺少列: {missing}")
        df = df[columns].apply(pd.to_numeric, errors='coerce')
    else:
        df = df.select_dtypes(include=[np.number])

    if df.shape[1] == 0:
        raise ValueError(f"文件 {file_path} 中没有数值列")

    # 删除含缺失值的行
    invalid_rows = df.isna().any(axis=1)
    n_invalid = int(invalid_rows.sum())
    if n_invalid:
        warnings.warn(f"跳过 {n_invalid} 行含缺失值的数据")
        df = df[~invalid_rows]

    return df.to_numpy(dtype=np.float64)


def ordering_to_dataframe(optics: OPTICS) -> pd.DataFrame:
    """
    将聚类排序结果转换为DataFrame

    Args:
        optics: 已执行run的OPTICS实例

    Returns:
        每个点一行的DataFrame，按访问顺序排列
    """
    if optics.labels_ is None:
        raise ValueError("OPTICS尚未执行，没有可保存的结果")

    ordering = optics.ordering_
    return pd.DataFrame({
        'order': np.arange(len(ordering)),
        'point_id': ordering,
        'reachability': optics.reachability_[ordering],
        'core_distance': optics.core_distances_[ordering],
        'cluster': optics.labels_[ordering]
    })


def save_ordering_csv(optics: OPTICS, file_path: Union[str, Path]) -> Path:
    """
    保存聚类排序结果到CSV

    Args:
        optics: 已执行run的OPTICS实例
        file_path: 输出文件路径

    Returns:
        实际写入的文件路径
    """
    df = ordering_to_dataframe(optics)

    file_path = Path(file_path).with_suffix('.csv')
    file_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(file_path, index=False)

    return file_path
