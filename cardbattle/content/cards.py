# cardbattle/content/cards.py
# Keys are Card values. A nested list in a reward row is a choice between
# its entries; plain strings are granted outright.
CARDS = {
    "Attack": {"name": "Attack", "hand_field": "attacks"},
    "Counter": {"name": "Counter", "hand_field": "counters"},
    "Rest": {"name": "Rest", "hand_field": "rests"},
}

# row = own card, column = opponent card -> own health delta
HEALTH_DELTA = {
    "Attack": {"Attack": -1, "Counter": -1, "Rest": 0},
    "Counter": {"Attack": 0, "Counter": 0, "Rest": 0},
    "Rest": {"Attack": -1, "Counter": 0, "Rest": 0},
}

# row = own card, column = opponent card -> rewards earned by own side
REWARDS = {
    "Attack": {"Attack": [], "Counter": [], "Rest": []},
    "Counter": {"Attack": ["Counter"], "Counter": [], "Rest": []},
    "Rest": {
        "Attack": ["Attack", "Rest"],
        "Counter": [["Attack", "Counter"], "Rest"],
        "Rest": [["Attack", "Counter"], "Rest"],
    },
}
