"""JSON-over-HTTP client for the early start backend."""

from typing import Any, Optional

import requests

from ..config.defaults import ApiParams
from ..errors import ApiError, MalformedResponseError
from ..logging.config import get_diagnostic_logger, get_logger

logger = get_logger(__name__)


class ApiClient:
    """
    Adapter around the backend's HTTP contract.

    All requests send and accept JSON. Non-2xx replies and transport
    failures are raised as ApiError so callers deal with exactly one
    failure type.
    """

    def __init__(self, params: ApiParams, session: Optional[requests.Session] = None):
        self.params = params
        self.base_url = params.base_url.rstrip("/")
        self.session = session or requests.Session()
        self.logger = logger.bind(base_url=self.base_url)

    def call(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[dict[str, Any]] = None
    ) -> Any:
        """
        Perform one backend request.

        Args:
            endpoint: Path below the base address, e.g. "/early-start/count"
            method: HTTP method
            body: JSON body for the request, if any

        Returns:
            Decoded JSON payload of a 2xx reply

        Raises:
            ApiError: on transport failure, non-JSON reply or non-2xx status
        """
        url = f"{self.base_url}{endpoint}"
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            response = self.session.request(
                method,
                url,
                json=body,
                headers=headers,
                timeout=self.params.timeout_seconds,
            )
        except requests.RequestException as e:
            self.logger.warning(
                "Backend request failed",
                endpoint=endpoint,
                method=method,
                error=str(e)
            )
            raise ApiError(f"Network error: {e}", endpoint=endpoint) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not 200 <= response.status_code < 300:
            message = None
            if isinstance(data, dict):
                message = data.get("error")
            if not message:
                message = f"HTTP error! status: {response.status_code}"

            self.logger.warning(
                "Backend returned error",
                endpoint=endpoint,
                method=method,
                status_code=response.status_code,
                error=message
            )
            raise ApiError(message, status_code=response.status_code, endpoint=endpoint)

        if data is None:
            self.logger.warning(
                "Backend returned non-JSON body",
                endpoint=endpoint,
                status_code=response.status_code
            )
            raise MalformedResponseError(
                "Unexpected response from server",
                status_code=response.status_code,
                endpoint=endpoint,
            )

        self.logger.debug(
            "Backend request succeeded",
            endpoint=endpoint,
            method=method,
            status_code=response.status_code
        )
        return data

    # Early start endpoints

    def signup(
        self,
        email: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> dict[str, Any]:
        """Request a one-time code for email; returns {message, otp?}."""
        body: dict[str, Any] = {"email": email}
        if first_name:
            body["firstName"] = first_name
        if last_name:
            body["lastName"] = last_name

        response = self.call("/early-start/signup", "POST", body)

        if self.params.dev_mode and isinstance(response, dict) and response.get("otp"):
            get_diagnostic_logger().info(
                "Development mode one-time code",
                email=email,
                otp=response["otp"]
            )

        return response

    def verify_otp(self, email: str, otp: str) -> dict[str, Any]:
        """Verify the one-time code for email; the code is sent uppercased."""
        return self.call("/early-start/verify", "POST", {"email": email, "otp": otp.upper()})

    def get_count(self) -> dict[str, Any]:
        """Fetch signup statistics: {total, verified}."""
        return self.call("/early-start/count", "GET")

    # Admin and health endpoints

    def list_signups(self) -> dict[str, Any]:
        """List early start signups: {users: [...], pagination}."""
        return self.call("/admin/early-start", "GET")

    def health_check(self) -> Any:
        """Backend health check; payload is implementation-defined."""
        return self.call("/health", "GET")
