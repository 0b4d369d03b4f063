#!/usr/bin/env python3
"""
Simple web interface for the proof script checker
- POST a script (JSON {"script": ...} or a form field) to /api/run
- Returns the session report: buffer message, rendered proof state and log
- The editor re-posts the whole script after every edit; nothing is stored here
"""
from flask import Flask, jsonify, request

from natded import DEMO, run_session

app = Flask(__name__)

@app.route("/", methods=["GET"])
def index():
    return jsonify({"script": DEMO, "report": run_session(DEMO)})

@app.route("/api/run", methods=["POST"])
def api_run():
    # accept either a JSON body or a form-encoded 'script' field
    data = request.get_json(silent=True) or {}
    script = data.get("script")
    if script is None:
        script = request.form.get("script")
    if not isinstance(script, str):
        return jsonify({"ok": False, "buffer": "Missing script."}), 400
    return jsonify(run_session(script))

if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=True)
