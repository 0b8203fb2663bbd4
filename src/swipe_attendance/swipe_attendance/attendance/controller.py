from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import BatchValidationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/processor/process", methods=["POST"], endpoint="process_swipes")
    def process_swipes():
        """Run the reconstruction pipeline over a JSON batch of swipe rows."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("events"), list):
            return jsonify({"success": False, "error": "Body must be a JSON object with an 'events' list"}), 400

        try:
            processor = container.processor_for(data.get("policy"))
        except ValueError:
            return jsonify({"success": False, "error": f"Unknown policy: {data.get('policy')!r}"}), 400

        try:
            result = processor.process(data["events"])
        except BatchValidationError as e:
            return jsonify({"success": False, "error": str(e), "details": e.to_details()}), 400
        except ValidationError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception:
            logger.exception("Attendance processing failed")
            return jsonify({"success": False, "error": "Processing failed"}), 500

        return jsonify(result.to_dict()), 200
