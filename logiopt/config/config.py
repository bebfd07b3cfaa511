# Simple parameter defaults (extend freely)
DEFAULTS = {
    "start_vertex": 0,          # tour start / return vertex
    "ordering": "ratio",        # allocation ordering: weight | value | ratio
    "symmetry_tol": 1e-9,       # max |d(i,j) - d(j,i)| accepted for tours
    "canvas_width": 600.0,      # random city positions are drawn inside this box
    "canvas_height": 400.0,
    "canvas_margin": 50.0,
    "num_cities": 5,            # random tour size when no distances are given
    "seed": 0,
    "trace": False,             # export trace.csv next to result.json
}
