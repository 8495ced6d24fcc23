"""Per-method TSP solvers; each exposes `from_options(problem, options, rng)` and `solve()`."""
