import config


class Server:
    """A backend server whose latency drifts over time (random walk)"""

    def __init__(self, server_id, rng, base_latency=None, drift_std=None,
                 noise_std=None, min_latency=None):
        self._server_id = server_id
        self.rng = rng
        self.drift_std = config.DRIFT_STD if drift_std is None else drift_std
        self.noise_std = config.NOISE_STD if noise_std is None else noise_std
        self.min_latency = (config.MIN_BASE_LATENCY if min_latency is None
                            else min_latency)

        if self.drift_std < 0 or self.noise_std < 0:
            raise ValueError(
                f"Server {server_id}: standard deviations must be >= 0 "
                f"(drift={self.drift_std}, noise={self.noise_std})")

        if base_latency is None:
            # Uniform start in [20, 50) ms
            base_latency = (config.INITIAL_LATENCY_MIN
                            + self.rng.random() * config.INITIAL_LATENCY_SPAN)
        self.base_latency = max(float(base_latency), self.min_latency)

    @property
    def server_id(self):
        return self._server_id

    def drift(self):
        """Move the base latency one random-walk step, clamped at the floor"""
        self.base_latency += self.rng.normal(0.0, self.drift_std)
        if self.base_latency < self.min_latency:
            self.base_latency = self.min_latency

    def sample_latency(self):
        """Observed latency of one request: base latency plus noise"""
        return self.base_latency + self.rng.normal(0.0, self.noise_std)

    def __repr__(self):
        return f"Server(id={self._server_id}, base={self.base_latency:.2f}ms)"
