import numpy as np
import pytest

from logiopt.data.generate_data import generate_city_positions
from logiopt.engine import ShapeError, construct, tour_length
from logiopt.glue.io import build_distance_matrix, compute_euclid


def _three_cities():
    return np.array(
        [
            [0.0, 10.0, 15.0],
            [10.0, 0.0, 12.0],
            [15.0, 12.0, 0.0],
        ]
    )


def test_three_city_example():
    res = construct(_three_cities())
    assert res.tour == (0, 1, 2, 0)
    assert res.total_distance == pytest.approx(37.0)
    assert res.all_visited
    assert res.num_visited == 3
    assert [s.distance for s in res.segments] == [10.0, 12.0, 15.0]
    assert res.average_segment_distance == pytest.approx(37.0 / 3)


def test_dashboard_default_instance():
    dist = build_distance_matrix(
        5, "0-1:10, 0-2:15, 0-3:20, 1-2:35, 1-3:25, 2-3:30, 0-4:12, 1-4:20, 2-4:25, 3-4:18"
    )
    res = construct(dist)
    # 0 -> 1 (10) -> 4 (20) -> 3 (18) -> 2 (30) -> 0 (15)
    assert res.tour == (0, 1, 4, 3, 2, 0)
    assert res.total_distance == pytest.approx(93.0)


def test_ties_go_to_lowest_index():
    dist = np.array(
        [
            [0.0, 5.0, 5.0, 5.0],
            [5.0, 0.0, 1.0, 1.0],
            [5.0, 1.0, 0.0, 1.0],
            [5.0, 1.0, 1.0, 0.0],
        ]
    )
    res = construct(dist)
    assert res.tour == (0, 1, 2, 3, 0)


def test_tour_visits_every_vertex_once_and_sums_legs():
    for seed in range(10):
        coords = generate_city_positions(9, seed=seed)
        dist = compute_euclid(coords)
        res = construct(dist)
        assert len(res.tour) == 10
        assert res.tour[0] == 0 and res.tour[-1] == 0
        assert sorted(res.tour[:-1]) == list(range(9))
        assert res.total_distance == pytest.approx(tour_length(dist, res.tour))


def test_custom_start_vertex():
    res = construct(_three_cities(), start=2)
    assert res.tour == (2, 1, 0, 2)
    assert res.total_distance == pytest.approx(12.0 + 10.0 + 15.0)


def test_disconnected_vertex_flags_incomplete_tour():
    dist = np.array(
        [
            [0.0, 1.0, np.inf],
            [1.0, 0.0, np.inf],
            [np.inf, np.inf, 0.0],
        ]
    )
    res = construct(dist)
    assert not res.all_visited
    assert res.num_visited == 2
    assert res.tour == (0, 1, 0)
    assert res.total_distance == pytest.approx(2.0)


def test_missing_closing_edge_gives_no_total():
    dist = [
        [0.0, 1.0, None],
        [1.0, 0.0, 1.0],
        [None, 1.0, 0.0],
    ]
    res = construct(dist)
    assert res.tour == (0, 1, 2, 0)
    assert res.all_visited
    assert res.total_distance is None
    assert res.segments[-1].distance is None
    assert res.to_dict()["total_distance"] is None


def test_single_vertex():
    res = construct([[0.0]])
    assert res.tour == (0, 0)
    assert res.total_distance == 0.0
    assert res.all_visited


def test_construct_is_deterministic():
    dist = compute_euclid(generate_city_positions(12, seed=4))
    assert construct(dist).tour == construct(dist).tour


@pytest.mark.parametrize(
    "dist, exc",
    [
        (np.zeros((2, 3)), ShapeError),
        (np.zeros((0, 0)), ShapeError),
        (np.array([[0.0, -1.0], [-1.0, 0.0]]), ValueError),
        (np.array([[0.0, 1.0], [2.0, 0.0]]), ValueError),
        (np.array([[1.0, 1.0], [1.0, 0.0]]), ValueError),
        (np.array([[0.0, 1.0], [np.inf, 0.0]]), ValueError),
    ],
)
def test_invalid_distances(dist, exc):
    with pytest.raises(exc):
        construct(dist)


def test_start_out_of_range():
    with pytest.raises(ValueError):
        construct(_three_cities(), start=3)


@pytest.mark.parametrize("start", ["1", 1.7, None, True])
def test_start_must_be_an_integer(start):
    with pytest.raises(ValueError):
        construct(_three_cities(), start=start)


def test_start_accepts_numpy_integers():
    assert construct(_three_cities(), start=np.int64(1)).tour[0] == 1


@pytest.mark.parametrize("tour", [[0, -1, 0], [0, 3, 0], [0, 1.0, 0]])
def test_tour_length_rejects_bad_vertices(tour):
    with pytest.raises(ValueError):
        tour_length(_three_cities(), tour)
