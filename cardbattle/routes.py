# cardbattle/routes.py
from flask import Blueprint, current_app, jsonify

cards_bp = Blueprint("cards", __name__)


@cards_bp.route("/health")
def health():
    return jsonify({"status": "ok"})


@cards_bp.route("/stats")
def stats():
    store = current_app.extensions["cardbattle"]
    return jsonify(store.snapshot_counts())
