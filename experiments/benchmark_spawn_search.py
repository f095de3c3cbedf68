import time

from bulletgrid.engine import build_reachability
from bulletgrid.spawn_search import choose_spawn_sets, spawn_candidates


def run_benchmark(size: int = 9, count: int = 3, workers: int = 4):
    print("--- Exhaustive Spawn Search Benchmark ---")
    graph = build_reachability((0, 0), [], size)
    candidates = spawn_candidates(size)

    # 1. Sequential Baseline
    print(f"Running sequential search (size={size}, count={count})...")
    start = time.time()
    family = choose_spawn_sets(graph, candidates, count)
    seq_time = time.time() - start
    print(f"Sequential: {len(family)} sets in {seq_time:.2f}s")

    # 2. Process pool
    print(f"Running parallel search ({workers} workers)...")
    start = time.time()
    par_family = choose_spawn_sets(graph, candidates, count, workers=workers)
    par_time = time.time() - start
    print(f"Parallel:   {len(par_family)} sets in {par_time:.2f}s")

    # 3. Analysis
    assert [p.indices for p in family] == [p.indices for p in par_family]
    speedup = seq_time / par_time if par_time > 0 else 0.0
    print(f"Speedup: {speedup:.2f}x")

    if speedup > 1.0:
        print("SUCCESS: Parallel rounds improve throughput.")
    else:
        print("NOTE: Pickling graphs per round may outweigh the benefit for small boards.")


if __name__ == "__main__":
    run_benchmark()
