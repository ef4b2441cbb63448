"""
Contains the simulation engine and the main simulation running logic.
"""
import numpy as np
import simpy

import config
from server import Server
from balancers import create_balancers
from metrics import MetricsCollector, metrics


class SimulationEngine:
    """
    Drives the servers and the three policies in lock-step.
    Each step drifts every server once, then each policy independently
    selects a server, samples its latency and learns from it.
    """

    def __init__(self, num_servers=None, steps=None, alpha=None, tau=None,
                 rng=None, servers=None, collector=None, log_interval=None):
        self.steps = config.NUM_STEPS if steps is None else steps
        if self.steps <= 0:
            raise ValueError(f"Number of steps must be > 0, got {self.steps}")

        # One generator shared by every component keeps a run reproducible
        self.rng = np.random.default_rng(config.RANDOM_SEED) if rng is None else rng

        if servers is None:
            num_servers = config.NUM_SERVERS if num_servers is None else num_servers
            if num_servers <= 0:
                raise ValueError(
                    f"Number of servers must be > 0, got {num_servers}")
            servers = [Server(i, self.rng) for i in range(num_servers)]
        elif not servers:
            raise ValueError("Explicit server list must not be empty")
        elif num_servers is not None and num_servers != len(servers):
            raise ValueError(
                f"num_servers={num_servers} does not match the "
                f"{len(servers)} servers given")
        self.servers = list(servers)

        self.policies = create_balancers(
            len(self.servers), self.rng, tau=tau, alpha=alpha)
        self.collector = MetricsCollector() if collector is None else collector
        self.log_interval = (config.LOG_INTERVAL if log_interval is None
                             else log_interval)
        self.steps_done = 0
        self._finished = False

    def step(self):
        """Run one discrete time step"""
        for server in self.servers:
            server.drift()

        for name, policy in self.policies.items():
            index = policy.select()
            latency = self.servers[index].sample_latency()
            policy.update(index, latency)
            self.collector.record_latency(name, index, latency)

        self.steps_done += 1

    def _run_steps(self, env):
        for _ in range(self.steps):
            self.step()
            yield env.timeout(1)

    def _logger(self, env):
        while True:
            yield env.timeout(self.log_interval)
            self.collector.log_metrics(env.now)

    def run(self):
        """Run all steps on a simpy clock and return the per-policy results"""
        if self._finished:
            raise RuntimeError("Simulation engine has already been run")

        env = simpy.Environment()
        stepper = env.process(self._run_steps(env))
        if self.log_interval:
            env.process(self._logger(env))

        env.run(until=stepper)
        self._finished = True
        return self.results()

    def results(self):
        return self.collector.results()


def run_simulation(num_servers=None, steps=None, alpha=None, tau=None,
                   seed=None, verbose=True):
    """Run a single seeded simulation of all three balancers"""
    seed = config.RANDOM_SEED if seed is None else seed

    # Reset metrics for this run
    metrics.reset()

    engine = SimulationEngine(
        num_servers=num_servers, steps=steps, alpha=alpha, tau=tau,
        rng=np.random.default_rng(seed), collector=metrics,
        log_interval=None if verbose else 0)

    if verbose:
        print(f"\n{'='*65}")
        print(f"RUNNING: {len(engine.servers)} servers, {engine.steps} steps "
              f"(seed={seed})")
        print(f"{'='*65}")

    results = engine.run()

    # Generate final report
    metrics.report()
    return results
