from flask import Blueprint, current_app, jsonify

main = Blueprint("main", __name__)


@main.route("/health")
def health():
    return jsonify({"status": "ok"})


@main.route("/rooms")
def rooms():
    """Active room ids (debug endpoint)."""
    registry = current_app.extensions["ashakk.rooms"]
    return jsonify({"rooms": registry.all_room_ids()})
