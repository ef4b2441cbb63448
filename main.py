"""
Main entry point for the 3-way comparison:
1. Softmax (value-based, learns per-server latency)
2. Round-Robin (Baseline)
3. Random (Baseline)
"""
import argparse

import config
from simulation import run_simulation
from metrics import metrics


def print_simulation_header(num_servers, steps, alpha, tau):
    """Prints the shared simulation parameters"""
    print("\n" + "="*65)
    print("SOFTMAX LOAD BALANCER SIMULATION: 3-Way Comparison")
    print("="*65)
    print("\nShared Scenario:")
    print(f"  • {num_servers} servers, base latency "
          f"{config.INITIAL_LATENCY_MIN:.0f}-"
          f"{config.INITIAL_LATENCY_MIN + config.INITIAL_LATENCY_SPAN:.0f}ms "
          f"at start")
    print(f"  • Base latency drifts by N(0, {config.DRIFT_STD}) per step "
          f"(floor {config.MIN_BASE_LATENCY}ms)")
    print(f"  • Request noise N(0, {config.NOISE_STD}), {steps} steps")
    print("\nBalancers:")
    print(f"  1. SOFTMAX: tau={tau}, alpha={alpha} (constant step size)")
    print("  2. ROUND-ROBIN: cycles through servers")
    print("  3. RANDOM: uniform choice")
    print("\n" + "="*65)


def print_comparison():
    """Prints Softmax against each baseline"""
    print("\n" + "="*65)
    print("COMPARISON")
    print("="*65)

    s_avg = metrics.final_report.get('Softmax', {}).get('avg', 0)

    for baseline in ('Round-Robin', 'Random'):
        b_avg = metrics.final_report.get(baseline, {}).get('avg', 0)
        if not (s_avg and b_avg):
            continue
        diff = b_avg - s_avg
        pct = (1 - s_avg / b_avg) * 100
        if diff > 0:
            print(f"✅ Softmax vs {baseline:<12} {diff:.2f}ms ({pct:+.1f}%) better")
        else:
            print(f"❌ Softmax vs {baseline:<12} {-diff:.2f}ms ({pct:+.1f}%) worse")

    print("="*65)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Compare Softmax, Round-Robin and Random dispatch "
                    "against drifting server latencies")
    parser.add_argument("--servers", type=int, default=config.NUM_SERVERS,
                        help="number of servers (K)")
    parser.add_argument("--steps", type=int, default=config.NUM_STEPS,
                        help="number of simulation steps (T)")
    parser.add_argument("--alpha", type=float, default=config.SOFTMAX_ALPHA,
                        help="softmax learning rate, in (0, 1]")
    parser.add_argument("--tau", type=float, default=config.SOFTMAX_TAU,
                        help="softmax temperature, > 0")
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED,
                        help="random seed")
    parser.add_argument("--quiet", action="store_true",
                        help="skip progress lines")
    return parser, parser.parse_args(argv)


def main(argv=None):
    parser, args = parse_args(argv)

    print_simulation_header(args.servers, args.steps, args.alpha, args.tau)
    try:
        results = run_simulation(
            num_servers=args.servers, steps=args.steps, alpha=args.alpha,
            tau=args.tau, seed=args.seed, verbose=not args.quiet)
    except ValueError as e:
        parser.error(str(e))

    print_comparison()
    return results


if __name__ == '__main__':
    main()
