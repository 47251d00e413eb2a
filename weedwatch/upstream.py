"""Calls to the external detection/watering service.

Each call is made at most once; there is no retry. ``UPSTREAM_TIMEOUT`` of
``None`` means requests waits for the service indefinitely.
"""
import os

import requests
from flask import current_app

from weedwatch.errors import UpstreamError
from weedwatch.logging_config import get_logger
from weedwatch.schemas import parse_detection_result

logger = get_logger(__name__)


def _url(path):
    return current_app.config["UPSTREAM_URL"].rstrip("/") + path


def _timeout():
    return current_app.config.get("UPSTREAM_TIMEOUT")


def detect(image_path):
    """Send the image at ``image_path`` to ``/detect/`` and return a DetectionResult."""
    url = _url("/detect/")
    logger.info("Calling detection endpoint %s", url)
    try:
        with open(image_path, "rb") as fh:
            resp = requests.post(
                url,
                files={"file": (os.path.basename(image_path), fh)},
                timeout=_timeout(),
            )
    except (requests.RequestException, OSError) as e:
        raise UpstreamError(f"Detection service unreachable: {e}") from e

    if not resp.ok:
        raise UpstreamError(f"Detection service returned {resp.status_code}")

    try:
        payload = resp.json()
    except ValueError as e:
        raise UpstreamError("Detection service response was not JSON") from e

    logger.info("Detection response received")
    return parse_detection_result(payload)


def water():
    """Trigger ``/water/`` and return its success flag.

    A reachable service that does not answer ``{"success": true}`` counts as
    an unsuccessful watering, not an error.
    """
    url = _url("/water/")
    try:
        resp = requests.post(url, timeout=_timeout())
    except requests.RequestException as e:
        raise UpstreamError("Watering failed") from e

    if not resp.ok:
        raise UpstreamError("Watering failed")

    try:
        payload = resp.json()
    except ValueError:
        return False
    return isinstance(payload, dict) and payload.get("success") is True
