from __future__ import annotations

from typing import Optional

import requests

from dme.domain.ports.Submission_provider import Submission_provider
from dme.lib.logger import get_logger


class SubmissionService(Submission_provider):
    """POST canonical DME JSON to the downstream endpoint."""

    def __init__(self, timeout_s: float = 15, session: Optional[requests.Session] = None) -> None:
        self.logger = get_logger("submit")
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def submit(self, payload: str, endpoint: str) -> bool:
        if not payload or not payload.strip():
            raise ValueError("JSON payload cannot be empty")
        if not endpoint or not endpoint.strip():
            raise ValueError("endpoint cannot be empty")

        self.logger.info("posting DME data to endpoint: %s", endpoint)
        try:
            resp = self.session.post(
                endpoint,
                data=payload.encode("utf-8"),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_s,
            )
        except requests.RequestException as e:
            self.logger.error("request to %s failed: %s", endpoint, e)
            raise

        if 200 <= resp.status_code < 300:
            self.logger.info("posted DME data, status=%d", resp.status_code)
            return True
        self.logger.warning("API request failed, status=%d, body=%s", resp.status_code, resp.text[:500])
        return False
