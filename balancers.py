"""Dispatch policies: Softmax (value-based), Round-Robin and Random"""
import abc
import numpy as np
import config


def softmax_probabilities(q_values, tau):
    """
    Boltzmann distribution over q_values at temperature tau.
    The max is subtracted before exponentiating so large |q| cannot
    overflow; it cancels out in the normalization.
    """
    if not tau > 0:
        raise ValueError(f"Temperature must be > 0, got {tau}")

    q_values = np.asarray(q_values, dtype=float)
    exp_values = np.exp((q_values - np.max(q_values)) / tau)
    return exp_values / np.sum(exp_values)


class SelectionPolicy(abc.ABC):
    """Picks a server index for each request and learns from its latency"""

    name = 'policy'

    def __init__(self, num_servers):
        if num_servers <= 0:
            raise ValueError(
                f"{self.name}: need at least one server, got {num_servers}")
        self.num_servers = num_servers

    @abc.abstractmethod
    def select(self):
        """Return a server index in [0, num_servers)"""

    def update(self, index, latency):
        """Feed back the observed latency (no-op for the baselines)"""


class SoftmaxBalancer(SelectionPolicy):
    """
    Softmax action selection over per-server value estimates.
    Reward is the negated latency, and estimates use a constant step
    size so that they keep tracking servers whose latency drifts.
    """

    name = 'Softmax'

    def __init__(self, num_servers, rng, tau=None, alpha=None):
        super().__init__(num_servers)
        self.rng = rng
        self.tau = config.SOFTMAX_TAU if tau is None else tau
        self.alpha = config.SOFTMAX_ALPHA if alpha is None else alpha

        if not self.tau > 0:
            raise ValueError(f"Softmax: tau must be > 0, got {self.tau}")
        if not 0 < self.alpha <= 1:
            raise ValueError(
                f"Softmax: alpha must be in (0, 1], got {self.alpha}")

        # Estimated reward (negative latency) per server
        self._q_values = np.zeros(num_servers)

    @property
    def q_values(self):
        return self._q_values.copy()

    def probabilities(self):
        return softmax_probabilities(self._q_values, self.tau)

    def select(self):
        cumulative = np.cumsum(self.probabilities())
        r = self.rng.random()

        # First index whose cumulative probability reaches r
        index = int(np.searchsorted(cumulative, r, side='left'))
        # Rounding can leave cumulative[-1] just under r
        return min(index, self.num_servers - 1)

    def update(self, index, latency):
        if not 0 <= index < self.num_servers:
            raise IndexError(
                f"Softmax: server index {index} out of range "
                f"[0, {self.num_servers})")
        reward = -latency
        self._q_values[index] += self.alpha * (reward - self._q_values[index])


class RoundRobinBalancer(SelectionPolicy):
    """Cycles through the servers in order"""

    name = 'Round-Robin'

    def __init__(self, num_servers):
        super().__init__(num_servers)
        self.current = 0

    def select(self):
        index = self.current
        self.current = (self.current + 1) % self.num_servers
        return index


class RandomBalancer(SelectionPolicy):
    """Picks a server uniformly at random"""

    name = 'Random'

    def __init__(self, num_servers, rng):
        super().__init__(num_servers)
        self.rng = rng

    def select(self):
        return int(self.rng.integers(self.num_servers))


def create_balancers(num_servers, rng, tau=None, alpha=None):
    """The three policies under comparison, in per-step execution order"""
    balancers = [
        SoftmaxBalancer(num_servers, rng, tau=tau, alpha=alpha),
        RoundRobinBalancer(num_servers),
        RandomBalancer(num_servers, rng),
    ]
    return {b.name: b for b in balancers}
