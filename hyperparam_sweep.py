"""
This script runs a hyperparameter sweep for the Softmax balancer
by testing different combinations of its learning rate (ALPHA) and
temperature (TAU) defined in `config.py`.

Every combination is run on the same seed, so Round-Robin and Random
see the same servers and act as a fixed reference. At the end, it
prints a table of all runs, sorted by the best improvement of Softmax
over Round-Robin.
"""

import itertools
import sys
import io
import time

import config
from simulation import run_simulation
from metrics import metrics

# --- Define the Parameter Grid to Test ---
alphas_to_test = [0.05, 0.1, 0.3, 0.5]
taus_to_test = [0.5, 1.0, 2.0, 5.0]


def run_sweep(alphas, taus, steps=None, seed=None):
    """Run one simulation per (alpha, tau) and return rows, best first"""
    param_grid = list(itertools.product(alphas, taus))
    total_runs = len(param_grid)
    results_list = []

    original_alpha = config.SOFTMAX_ALPHA
    original_tau = config.SOFTMAX_TAU

    # Store the original stdout to suppress simulation output
    original_stdout = sys.stdout

    try:
        for i, (alpha, tau) in enumerate(param_grid):
            print(f"\n--- Running {i + 1}/{total_runs} (Alpha={alpha}, Tau={tau}) ---")

            # Set the hyperparameters in the config module for this run
            config.SOFTMAX_ALPHA = alpha
            config.SOFTMAX_TAU = tau

            sys.stdout = io.StringIO()
            try:
                run_simulation(steps=steps, seed=seed, verbose=False)
            except ValueError as e:
                sys.stdout = original_stdout
                print(f"ERROR during run {i + 1}: {e}")
                continue
            finally:
                sys.stdout = original_stdout

            s_avg = metrics.final_report['Softmax']['avg']
            rr_avg = metrics.final_report['Round-Robin']['avg']
            rand_avg = metrics.final_report['Random']['avg']

            # A positive value means Softmax had the lower average latency
            pct_improvement = (1 - s_avg / rr_avg) * 100 if rr_avg > 0 else 0.0

            results_list.append({
                'alpha': alpha,
                'tau': tau,
                'softmax_avg': s_avg,
                'round_robin_avg': rr_avg,
                'random_avg': rand_avg,
                'improvement_pct': pct_improvement,
            })

            print(f"Result: Softmax={s_avg:.2f}ms, Round-Robin={rr_avg:.2f}ms. "
                  f"Improvement: {pct_improvement:+.2f}%")
    finally:
        config.SOFTMAX_ALPHA = original_alpha
        config.SOFTMAX_TAU = original_tau

    results_list.sort(key=lambda x: x['improvement_pct'], reverse=True)
    return results_list


def print_results(results_list):
    if not results_list:
        print("No results to display. The sweep may have encountered errors.")
        return

    print("\nHyperparameter Sweep Results (Sorted by Best Improvement)")
    print("-" * 80)
    print(f"{'Alpha':<7} | {'Tau':<7} | {'Softmax':<10} | {'Round-Robin':<12} | "
          f"{'Random':<10} | {'Improvement':<12}")
    print("-" * 80)

    for res in results_list:
        print(f"{res['alpha']:<7.2f} | {res['tau']:<7.2f} | "
              f"{res['softmax_avg']:<10.2f} | {res['round_robin_avg']:<12.2f} | "
              f"{res['random_avg']:<10.2f} | {res['improvement_pct']:<+12.2f}%")

    print("-" * 80)
    best = results_list[0]
    print(f"\nBest Run: A={best['alpha']}, T={best['tau']} "
          f"with {best['improvement_pct']:+.2f}% improvement.")


if __name__ == '__main__':
    print("=" * 80)
    print("STARTING HYPERPARAMETER SWEEP")
    print(f"Total combinations to test: {len(alphas_to_test) * len(taus_to_test)}")
    print("=" * 80)

    start_time = time.time()
    results = run_sweep(alphas_to_test, taus_to_test)
    end_time = time.time()

    print("\n" + "=" * 80)
    print(f"SWEEP COMPLETED in {end_time - start_time:.2f} seconds")
    print("=" * 80)

    print_results(results)
