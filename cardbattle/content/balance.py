# cardbattle/content/balance.py
DEFAULTS = {
    "health": 5,
    "hand": {"attacks": 2, "counters": 1, "rests": 1},
}

CAPS = {
    "health_min": 0,
    "health_max": 5,
}
