"""Error taxonomy shared by the routers and the provider clients.

Every error knows its HTTP status and how to render itself as a JSON body;
the handlers registered in ``main.py`` pass that body through the attribution
normalizer before it leaves the process.
"""

from typing import Any


class MusicGateError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        return {"ok": False, "message": self.message}


class ValidationFailed(MusicGateError):
    """Client input broke one or more request rules. Carries every violation."""

    status_code = 400

    def __init__(self, violations: list[str], message: str = "Invalid request") -> None:
        super().__init__(message)
        self.violations = list(violations)

    def to_body(self) -> dict[str, Any]:
        return {"ok": False, "message": self.message, "errors": self.violations}


class UpstreamError(MusicGateError):
    """A provider answered non-2xx, or with a body we could not use."""

    status_code = 502

    def __init__(self, message: str, status: int | None, upstream: Any) -> None:
        super().__init__(message)
        self.status = status
        self.upstream = upstream

    def to_body(self) -> dict[str, Any]:
        return {
            "ok": False,
            "message": self.message,
            "status": self.status,
            "upstream": self.upstream,
        }


class PollTimeoutError(MusicGateError):
    """The polling budget ran out before the job reached ``done``.

    Keeps the job id, the status address and the last decoded status so the
    caller can resume with a plain status check.
    """

    status_code = 408

    def __init__(self, job_id: str | None, status_url: str, last: Any) -> None:
        super().__init__("Timeout waiting for music generation to finish")
        self.job_id = job_id
        self.status_url = status_url
        self.last = last

    def to_body(self) -> dict[str, Any]:
        last_status = self.last.get("status") if isinstance(self.last, dict) else None
        return {
            "ok": False,
            "status": last_status or "unknown",
            "message": self.message,
            "jobId": self.job_id,
            "task_url": self.status_url,
            "lastResponse": self.last,
        }


class ConfigurationError(MusicGateError):
    """A required credential is missing from the deployment."""

    status_code = 500


class UploadError(Exception):
    """Re-hosting a single file failed. Reported per item, never per request."""

    def __init__(self, status: int | None, upstream: Any) -> None:
        super().__init__(
            f"KIE upload failed with status {status}" if status else "KIE upload failed: unreachable"
        )
        self.status = status
        self.upstream = upstream

    def to_body(self) -> dict[str, Any]:
        return {"ok": False, "status": self.status, "upstream": self.upstream}
