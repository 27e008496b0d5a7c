"""
Energy API - HTTP Client

Fetches heatmap matrices and rolling/demand series from the remote energy
backend. The session cookie is held on the client instance and passed in
explicitly; nothing is read from ambient storage.
"""

import time
from typing import Any, Optional

import requests
from loguru import logger

from api.errors import ApiError, AuthenticationError, ConnectionFailedError
from api.models import (
    ApiEnvelope,
    DemandSeriesSet,
    RollingSeriesSet,
    ValueMatrix,
    parse_record,
)
from viz.config import load_config

HEATMAP_FUELS = ("naturalgas", "hydro", "lignite", "importcoal")


class EnergyApiClient:
    """
    Client for the energy data backend.

    Provides:
    - Form login / logout with an explicit session cookie
    - Heatmap matrices per fuel (day-ahead plan or realtime)
    - Rolling-average and demand series
    - Retry on connection failures
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        session_cookie: Optional[str] = None,
        endpoints: Optional[dict] = None,
        heatmaps: Optional[dict] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend root URL
            timeout: Request timeout in seconds
            max_retries: Attempts for requests that get no response
            retry_delay: Seconds to wait between attempts
            session_cookie: Previously obtained session cookie, if any
            endpoints: Endpoint path overrides
            heatmaps: Fuel -> {dpp, realtime} endpoint map
            session: requests.Session to use (a new one by default)
        """
        config = load_config()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.session_cookie = session_cookie
        self.endpoints = endpoints or config.get("endpoints", {})
        self.heatmaps = heatmaps or config.get("heatmaps", {})
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    @classmethod
    def from_config(cls, config: Optional[dict] = None, **kwargs) -> "EnergyApiClient":
        """Build a client from the api section of the configuration."""
        config = config or load_config()
        api = config.get("api", {})
        return cls(
            base_url=api["base_url"],
            timeout=api.get("timeout", 30.0),
            max_retries=api.get("max_retries", 3),
            retry_delay=api.get("retry_delay", 1.0),
            endpoints=config.get("endpoints"),
            heatmaps=config.get("heatmaps"),
            **kwargs,
        )

    # ============== Transport ==============

    @property
    def is_authenticated(self) -> bool:
        return self.session_cookie is not None

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        headers = dict(kwargs.pop("headers", {}) or {})
        if self.session_cookie:
            headers["Cookie"] = self.session_cookie

        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.request(
                    method, url, headers=headers, timeout=self.timeout, **kwargs
                )
            except (requests.ConnectionError, requests.Timeout) as e:
                last_error = e
                logger.warning(f"{method} {path} attempt {attempt}/{self.max_retries} failed: {e}")
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay)
                continue

            if response.status_code == 401:
                logger.info("Session rejected by server, clearing session cookie")
                self.session_cookie = None
                raise AuthenticationError(self._server_message(response), status_code=401)
            if not response.ok:
                raise ApiError(self._server_message(response), status_code=response.status_code)
            return response

        raise ConnectionFailedError(
            "No response from server. Please check your connection."
        ) from last_error

    @staticmethod
    def _server_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return "Server error occurred"

    def _json(self, method: str, path: str, **kwargs) -> Any:
        response = self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Server returned a non-JSON response", response.status_code) from e

    def _envelope_data(self, method: str, path: str, **kwargs) -> Any:
        envelope = parse_record(ApiEnvelope, self._json(method, path, **kwargs))
        if not envelope.ok:
            raise ApiError(envelope.message or f"Request failed with code {envelope.code}",
                           status_code=envelope.code)
        return envelope.data

    # ============== Authentication ==============

    def login(self, username: str, password: str) -> bool:
        """Log in with form credentials and keep the returned session cookie."""
        try:
            response = self._request(
                "POST",
                self.endpoints.get("login", "/login"),
                data={"username": username, "password": password},
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except ApiError as e:
            logger.warning(f"Login failed for {username}: {e.message}")
            return False

        cookie = response.headers.get("Set-Cookie")
        if cookie:
            self.session_cookie = cookie.split(";", 1)[0]
        logger.info(f"Logged in as {username}")
        return True

    def logout(self) -> None:
        """Log out; the local session is cleared even if the request fails."""
        try:
            self._request("GET", self.endpoints.get("logout", "/logout"))
        except ApiError as e:
            logger.warning(f"Logout request failed: {e.message}")
        finally:
            self.session_cookie = None

    # ============== Heatmaps ==============

    def heatmap_endpoint(self, fuel: str, realtime: bool = False) -> str:
        if fuel not in self.heatmaps:
            raise ValueError(f"Unknown heatmap fuel '{fuel}', expected one of {HEATMAP_FUELS}")
        path = self.heatmaps[fuel].get("realtime" if realtime else "dpp")
        if not path:
            raise ValueError(f"No {'realtime' if realtime else 'DPP'} heatmap for '{fuel}'")
        return path

    def get_heatmap(
        self,
        fuel: str,
        date: str,
        version: str = "first",
        realtime: bool = False,
    ) -> ValueMatrix:
        """
        Fetch an hour x plant generation matrix.

        Args:
            fuel: One of naturalgas, hydro, lignite, importcoal
            date: Day as YYYY-MM-DD
            version: Plan version, "first" or "current" (ignored for realtime)
            realtime: Fetch realtime generation instead of the day-ahead plan

        Returns:
            Validated ValueMatrix
        """
        body = {"date": date} if realtime else {"date": date, "version": version}
        logger.info(f"Fetching {fuel} heatmap for {date} ({'realtime' if realtime else version})")
        data = self._envelope_data("POST", self.heatmap_endpoint(fuel, realtime), json=body)
        return parse_record(ValueMatrix, data)

    # ============== Charts ==============

    def get_rolling_data(self) -> RollingSeriesSet:
        payload = self._json("GET", self.endpoints.get("rolling_data", "/get-rolling-data"))
        if not isinstance(payload, dict):
            raise ApiError("Rolling data payload is not an object")
        return RollingSeriesSet.from_payload(payload)

    def get_demand_data(self) -> DemandSeriesSet:
        payload = self._json("GET", self.endpoints.get("demand_data", "/get_demand_data"))
        return parse_record(DemandSeriesSet, payload)

    # ============== Other Screens ==============

    def get_power_plants(self) -> Any:
        return self._envelope_data("GET", self.endpoints.get("power_plants", "/powerplants"))

    def get_realtime_data(self, power_plant_id: str, start: str, end: str) -> Any:
        return self._envelope_data(
            "POST",
            self.endpoints.get("realtime_data", "/realtime_data"),
            json={"powerPlantId": power_plant_id, "start": start, "end": end},
        )

    def get_aic_data(self, range_: str = "week") -> Any:
        return self._envelope_data(
            "GET", self.endpoints.get("aic_data", "/get_aic_data"), params={"range": range_}
        )

    def get_forecast_performance(self, period: int = 30) -> Any:
        return self._json(
            "GET",
            self.endpoints.get("forecast_performance", "/forecast-performance-data"),
            params={"period": period},
        )
