# ====================================================================
# --- SIMULATION SETTINGS ---
# ====================================================================
RANDOM_SEED = 42
NUM_SERVERS = 5
NUM_STEPS = 10000  # Total simulation steps (one request per policy per step)

# ====================================================================
# --- SERVER LATENCY MODEL ---
# ====================================================================
# Initial base latency is drawn from [MIN, MIN + SPAN)
INITIAL_LATENCY_MIN = 20.0   # ms
INITIAL_LATENCY_SPAN = 30.0  # ms
DRIFT_STD = 0.5              # random walk step of the base latency, per step
NOISE_STD = 2.0              # per-request noise on top of the base latency
MIN_BASE_LATENCY = 5.0       # floor for the drifting base latency

# ====================================================================
# --- BALANCER SETTINGS ---
# ====================================================================
# --- Softmax (Boltzmann) action selection ---
SOFTMAX_ALPHA = 0.1  # constant step size (non-stationary servers)
SOFTMAX_TAU = 2.0    # temperature: low = greedy, high = near uniform

# ====================================================================
# --- METRICS & MONITORING ---
# ====================================================================
LOG_INTERVAL = 2500        # steps between progress lines (0 disables)
PERCENTILES = [50, 95, 99]  # latency percentiles in the final report
