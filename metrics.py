from dataclasses import dataclass
import numpy as np
import config


@dataclass(frozen=True)
class PolicyResult:
    """Accumulated latency of one policy over a run"""
    name: str
    total_latency: float
    step_count: int

    @property
    def average_latency(self):
        if self.step_count == 0:
            return 0.0
        return self.total_latency / self.step_count


class MetricsCollector:
    """Collects and reports per-policy latency statistics"""

    def __init__(self):
        self.totals = {}
        self.step_counts = {}
        self.latencies = {}
        self.selections = {}
        self.final_report = {}

    def record_latency(self, policy_name, server_index, latency):
        if policy_name not in self.totals:
            self.totals[policy_name] = 0.0
            self.step_counts[policy_name] = 0
            self.latencies[policy_name] = []
            self.selections[policy_name] = {}
        self.totals[policy_name] += latency
        self.step_counts[policy_name] += 1
        self.latencies[policy_name].append(latency)

        counts = self.selections[policy_name]
        counts[server_index] = counts.get(server_index, 0) + 1

    def results(self):
        return [PolicyResult(name, self.totals[name], self.step_counts[name])
                for name in self.totals]

    def log_metrics(self, now):
        """Print running average latency of every policy"""
        for res in self.results():
            print(f"  [{res.name.upper()}] t={now:.0f} | "
                  f"avg={res.average_latency:.2f}ms | "
                  f"total={res.total_latency:.0f}ms")

    def reset(self):
        self.totals = {}
        self.step_counts = {}
        self.latencies = {}
        self.selections = {}
        # Do NOT reset final_report

    def report(self):
        print(f"\n{'='*65}")
        print("FINAL RESULTS")
        print(f"{'='*65}")

        for res in self.results():
            print(f"{res.name:<15} | Avg Latency: {res.average_latency:.2f} ms "
                  f"| Total: {res.total_latency:.0f} ms")

        print(f"{'-'*65}")
        for res in self.results():
            report_data = {
                'total': res.total_latency,
                'steps': res.step_count,
                'avg': res.average_latency,
            }

            samples = self.latencies[res.name]
            if samples:
                pcts = np.percentile(samples, config.PERCENTILES)
                for p, value in zip(config.PERCENTILES, pcts):
                    report_data[f'p{p}'] = float(value)
                print(f"{res.name:<15} | " + " ".join(
                    f"p{p}={report_data[f'p{p}']:.2f}ms"
                    for p in config.PERCENTILES))

            counts = self.selections[res.name]
            shares = {idx: counts[idx] / res.step_count
                      for idx in sorted(counts)}
            report_data['share'] = shares
            print(f"{'':<15} | share: " + " ".join(
                f"S{idx}={share:.0%}" for idx, share in shares.items()))

            self.final_report[res.name] = report_data


# Shared singleton instance
metrics = MetricsCollector()
