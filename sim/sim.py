"""Stand-in for the detection/watering service, for local runs.

    python sim/sim.py          # listens on SIM_PORT (8000)
    UPSTREAM_URL=http://localhost:8000 weedwatch
"""
import os
import random
import uuid

from flask import Flask, jsonify, request

PORT = int(os.getenv("SIM_PORT", "8000"))
BASE_URL = os.getenv("SIM_BASE_URL", f"http://localhost:{PORT}")

app = Flask(__name__)


@app.route("/detect/", methods=["POST"])
def detect():
    if "file" not in request.files:
        return jsonify({"detail": "file is required"}), 422

    request.files["file"].read()
    name = uuid.uuid4().hex
    weeds = random.randint(0, 20)
    eliminated = random.randint(0, weeds)
    payload = {
        "original_image_url": f"{BASE_URL}/images/{name}.jpg",
        "processed_image_url": f"{BASE_URL}/images/{name}_processed.jpg",
        "weedCount": weeds,
        "weedsEliminated": eliminated,
        "successRate": round(100.0 * eliminated / weeds, 1) if weeds else 100.0,
    }
    print("TX", payload)
    return jsonify(payload)


@app.route("/water/", methods=["POST"])
def water():
    success = random.random() > 0.1
    print("TX", {"success": success})
    return jsonify({"success": success})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT)
