#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Тесты карты отклика углов.
"""

import numpy as np
import pytest
from models.response import CornerMeasure, compute_response


def tensor(a, b, c, shape=(3, 3)):
    return (np.full(shape, a, dtype=np.float32),
            np.full(shape, b, dtype=np.float32),
            np.full(shape, c, dtype=np.float32))


def test_harris_measure_value():
    response = compute_response(*tensor(4.0, 4.0, 1.0), CornerMeasure.HARRIS, 0.04, 0.0)
    assert response.dtype == np.float32
    assert np.allclose(response, 12.44, atol=1e-5)


def test_noble_measure_value():
    response = compute_response(*tensor(4.0, 4.0, 1.0), CornerMeasure.NOBLE, 0.04, 0.0)
    assert np.allclose(response, 15.0 / 8.0, atol=1e-5)


def test_values_at_or_below_threshold_not_written():
    response = compute_response(*tensor(4.0, 4.0, 1.0), CornerMeasure.HARRIS, 0.04, 20.0)
    assert not response.any()


def test_edge_gives_negative_harris_response():
    response = compute_response(*tensor(10.0, 0.0, 0.0), CornerMeasure.HARRIS, 0.04, 0.0)
    assert not response.any()


@pytest.mark.parametrize("measure", [CornerMeasure.HARRIS, CornerMeasure.NOBLE])
def test_flat_region_is_zero_for_both_measures(measure):
    response = compute_response(*tensor(0.0, 0.0, 0.0, (8, 8)), measure, 0.04, -1.0)
    assert np.all(np.isfinite(response))
    assert not response.any()


def test_only_cells_above_threshold_written():
    a = np.array([[4.0, 0.0]], dtype=np.float32)
    b = np.array([[4.0, 0.0]], dtype=np.float32)
    c = np.array([[1.0, 0.0]], dtype=np.float32)

    response = compute_response(a, b, c, CornerMeasure.HARRIS, 0.04, 1.0)

    assert response[0, 0] == pytest.approx(12.44, abs=1e-5)
    assert response[0, 1] == 0.0


def test_mismatched_maps_rejected():
    with pytest.raises(ValueError):
        compute_response(np.zeros((2, 2), np.float32), np.zeros((2, 3), np.float32),
                         np.zeros((2, 2), np.float32), CornerMeasure.HARRIS, 0.04, 0.0)
