"""
Environment and evaluation configuration for the shoot-'em-up environment
Reward shaping settings for comparing scripted policies
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # set by the caller
    "width": 800,
    "height": 600,
    "dt_ms": 1000 / 60,
    "max_steps": 36_000,  # 10 minutes at 60 FPS
    "k_enemies": 6,
    "m_projectiles": 6,
    "lives": 5,
    "max_level": 4,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (score-driven, balanced penalties)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Score-driven reward with balanced life penalties",
    "R_SCORE": 0.01,     # Per score point
    "R_KILL": 0.5,       # Per enemy destroyed by weapon fire
    "R_BOSS": 10.0,      # Boss defeated
    "R_LEVEL": 5.0,      # Level cleared
    "R_LIFE": 2.0,       # Penalty per life lost
    "R_SHOT": 0.005,     # Penalty per shot fired
    "R_TIME": 0.001,     # Small time penalty
    "R_DEATH": 5.0,      # Game over penalty
}

# Reward Config 2: SURVIVAL (dodging matters more than killing)
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - heavy life/death penalties",
    "R_SCORE": 0.005,
    "R_KILL": 0.2,
    "R_BOSS": 5.0,
    "R_LEVEL": 5.0,
    "R_LIFE": 6.0,       # MUCH higher life penalty - encourages dodging
    "R_SHOT": 0.01,
    "R_TIME": 0.0005,
    "R_DEATH": 15.0,
}

# Reward Config 3: AGGRESSIVE (combat and bosses)
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize combat - high kill/boss rewards, low penalties",
    "R_SCORE": 0.02,
    "R_KILL": 1.0,
    "R_BOSS": 25.0,
    "R_LEVEL": 10.0,
    "R_LIFE": 1.0,
    "R_SHOT": 0.0,       # Free ammunition
    "R_TIME": 0.002,
    "R_DEATH": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "n_episodes": 5,
    "seed": 42,
    "policies": ["random", "idle", "fire"],
}


def reward_params(name: str) -> dict:
    """Reward weights for `name`, without the descriptive keys"""
    if name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {name}")
    return {k: v for k, v in REWARD_CONFIGS[name].items() if k.startswith("R_")}
