"""
Gameplay constants for the shoot-'em-up core.
Times are in milliseconds, distances in pixels, speeds in pixels per tick.
"""

# Playfield
PLAYFIELD = {
    "width": 800,
    "height": 600,
    "fps": 60,
}

# Player ship (inertia model)
PLAYER_CONFIG = {
    "start_x": 100,
    "display_size": 64,
    "hitbox_size": 50,
    "acceleration": 0.8,
    "max_speed": 8.0,
    "friction": 0.9,       # velocity multiplier on an axis with no input
    "stop_threshold": 0.1,
    "rotation_speed": 0.1,  # rad per tick
    "shoot_interval": 200,
    "power_up_shoot_interval": 100,
    "bullet_speed": 10.0,
    "damage_flash_duration": 1000,
}

LIVES = 5

# Wave pacing
WAVE_CONFIG = {
    "base_interval": 5000,
    "min_interval": 3000,
    "interval_per_difficulty": 200,
    "difficulty_step": 0.5,
    "boss_difficulty": 5,
    "max_turrets": 2,
    "swarm_size": 5,
    "spawn_spacing": 80,
    "spawn_margin": 50,
}

# Invulnerability + rapid fire pickup
POWER_UP_CONFIG = {
    "duration": 30000,
    "wave_threshold": 6,
    "size": 60,
    "speed": 1.0,
    "rotation_speed": 0.05,
    "burst_count": 10,
}

# Level progression / end screens
LEVEL_CONFIG = {
    "max_level": 4,
    "transition_delay": 2000,
    "fade_duration": 1000,
    "game_over_duration": 5000,
    "victory_duration": 5000,
}

# Score per kill is this times the enemy type code
SCORE_PER_TYPE = 10
