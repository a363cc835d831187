"""
Test loading points from CSV and saving the ordering
"""

import numpy as np
import pandas as pd
import pytest

from optics_order.clustering.optics import OPTICS
from optics_order.data_processing.loader import (load_points_csv, ordering_to_dataframe,
                                                 save_ordering_csv)


def test_load_numeric_columns(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text("name,x,y\na,0,0\nb,0,1\nc,0,8\n")

    points = load_points_csv(csv_file)

    assert points.dtype == np.float64
    np.testing.assert_array_equal(points, [[0, 0], [0, 1], [0, 8]])


def test_load_selected_columns(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text("lat,lon,speed\n39.9,116.4,10\n39.8,116.3,12\n")

    points = load_points_csv(csv_file, columns=['lat', 'lon'])

    np.testing.assert_allclose(points, [[39.9, 116.4], [39.8, 116.3]])


def test_load_drops_rows_with_missing_values(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text("x,y\n0,0\n1,\n2,2\n")

    with pytest.warns(UserWarning, match="跳过 1 行"):
        points = load_points_csv(csv_file)

    np.testing.assert_array_equal(points, [[0, 0], [2, 2]])


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_points_csv(tmp_path / "missing.csv")


def test_load_unknown_column(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text("x,y\n0,0\n")

    with pytest.raises(ValueError, match="缺少列"):
        load_points_csv(csv_file, columns=['x', 'z'])


def test_load_without_numeric_columns(tmp_path):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text("name,label\na,b\nc,d\n")

    with pytest.raises(ValueError):
        load_points_csv(csv_file)


def test_ordering_to_dataframe(two_cluster_points):
    optics = OPTICS(epsilon=3, min_pts=2)
    optics.run(two_cluster_points)

    df = ordering_to_dataframe(optics)

    assert list(df.columns) == ['order', 'point_id', 'reachability', 'core_distance', 'cluster']
    assert df['point_id'].tolist() == [0, 1, 2, 3]
    assert df['cluster'].tolist() == [0, 0, 1, 1]
    assert df['reachability'].isna().tolist() == [True, False, True, False]


def test_save_ordering_csv(tmp_path, blob_points):
    optics = OPTICS(epsilon=2, min_pts=3)
    optics.run(blob_points)

    written = save_ordering_csv(optics, tmp_path / "out" / "ordering")

    assert written.suffix == '.csv'
    df = pd.read_csv(written)
    assert len(df) == len(blob_points)
    assert df['point_id'].tolist() == [point_id for point_id, _ in optics.get_reachability_plot()]


def test_save_before_run_raises(tmp_path):
    with pytest.raises(ValueError):
        save_ordering_csv(OPTICS(), tmp_path / "ordering.csv")
