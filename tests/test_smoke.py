from logiopt.data.generate_data import generate_city_positions, generate_items, generate_stage_graph
from logiopt.engine import allocate, construct, solve
from logiopt.glue.io import compute_euclid


def test_all_three_solvers_smoke():
    cost, _ = generate_stage_graph(6, 4, seed=0)
    assert solve(cost).minimum_cost is not None

    tour = construct(compute_euclid(generate_city_positions(20, seed=0)))
    assert tour.all_visited and len(tour.tour) == 21

    res = allocate(generate_items(30, seed=0), 100.0)
    assert res.used_capacity <= 100.0
