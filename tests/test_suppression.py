#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Тесты подавления немаксимумов.
"""

import numpy as np
from models.suppression import CornerPoint, suppress_non_maximum


def response_with(shape, points):
    response = np.zeros(shape, dtype=np.float32)
    for (x, y), value in points.items():
        response[y, x] = value
    return response


def test_single_peak():
    response = response_with((9, 9), {(4, 4): 10.0})
    assert suppress_non_maximum(response, 3) == [CornerPoint(4, 4)]


def test_larger_neighbour_wins():
    response = response_with((11, 11), {(4, 4): 5.0, (6, 4): 6.0})
    assert suppress_non_maximum(response, 3) == [CornerPoint(6, 4)]


def test_ties_both_survive_in_raster_order():
    response = response_with((11, 11), {(5, 4): 7.0, (4, 4): 7.0, (5, 5): 7.0})
    assert suppress_non_maximum(response, 3) == [(4, 4), (5, 4), (5, 5)]


def test_maxima_one_window_apart_both_survive():
    response = response_with((7, 14), {(3, 3): 1.0, (10, 3): 2.0})
    assert suppress_non_maximum(response, 3) == [(3, 3), (10, 3)]


def test_raster_order():
    response = response_with((20, 20), {(3, 12): 1.0, (12, 3): 1.0, (16, 12): 1.0})
    assert suppress_non_maximum(response, 3) == [(12, 3), (3, 12), (16, 12)]


def test_border_band_excluded():
    response = response_with((12, 12), {(1, 1): 9.0, (10, 6): 9.0, (6, 6): 1.0})
    assert suppress_non_maximum(response, 3) == [(6, 6)]


def test_zero_radius_keeps_one_pixel_border():
    response = response_with((6, 6), {(0, 0): 9.0, (1, 1): 3.0, (2, 1): 4.0})
    assert suppress_non_maximum(response, 0) == [(1, 1), (2, 1)]


def test_negative_response_loses_to_empty_neighbours():
    # Пустые ячейки (0) больше отрицательного отклика
    response = response_with((9, 9), {(4, 4): -1.0, (5, 4): -2.0})
    assert suppress_non_maximum(response, 1) == []


def test_map_smaller_than_window():
    response = np.ones((5, 5), dtype=np.float32)
    assert suppress_non_maximum(response, 3) == []
