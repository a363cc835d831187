import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest


@pytest.fixture
def two_cluster_points():
    """Two well separated pairs on a line."""
    return [[0, 0], [0, 1], [0, 8], [0, 9]]


@pytest.fixture
def identical_points():
    return [[1, 1], [1, 1], [1, 1], [1, 1]]


@pytest.fixture
def blob_points():
    """Three gaussian blobs plus a few scattered outliers."""
    rng = np.random.default_rng(0)
    blobs = [rng.normal(center, 0.4, size=(15, 2)) for center in ([0, 0], [6, 6], [0, 8])]
    outliers = np.array([[20.0, 20.0], [-15.0, 3.0], [10.0, -12.0]])
    return np.vstack(blobs + [outliers])


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
