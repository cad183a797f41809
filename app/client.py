"""
HTTP client for the Stillwater API.

Every call goes through the same RouteContract entries the server mounts: the URL
comes from ``contract.url()``, request bodies are validated with ``contract.input``
and responses are decoded with the model declared for the returned status code.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from app.contracts import RouteContract, api
from app.schemas.auth import AuthResponse, UserOut

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, field: str | None = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.field = field


class StillwaterClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str | None = None,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token = token
        self.user: UserOut | None = None

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "StillwaterClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ─────────────────────────────────────────────────────────────
    # transport
    # ─────────────────────────────────────────────────────────────
    def call(
        self,
        contract: RouteContract,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        url = contract.url(**(params or {}))
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        request_kwargs: dict[str, Any] = {"headers": headers}
        if contract.input is not None and body is not None:
            data = contract.input.model_validate(body).model_dump(
                mode="json", by_alias=True, exclude_unset=True
            )
            if contract.method == "GET":
                request_kwargs["params"] = {k: v for k, v in data.items() if v is not None}
            else:
                request_kwargs["json"] = data

        resp = self.http.request(contract.method, url, **request_kwargs)

        if resp.status_code >= 400 or resp.status_code not in contract.responses:
            try:
                payload = resp.json()
            except ValueError:
                payload = {}
            message = payload.get("message", resp.reason_phrase) if isinstance(payload, dict) else resp.reason_phrase
            field = payload.get("field") if isinstance(payload, dict) else None
            logger.debug("%s %s -> %s %s", contract.method, url, resp.status_code, message)
            raise ApiError(resp.status_code, message, field)

        model = contract.responses[resp.status_code]
        if model is None:
            return None
        return TypeAdapter(model).validate_python(resp.json())

    # ─────────────────────────────────────────────────────────────
    # auth
    # ─────────────────────────────────────────────────────────────
    def _remember(self, result: AuthResponse) -> AuthResponse:
        self.token = result.token
        self.user = result.user
        return result

    def register(self, email: str, password: str, name: str) -> AuthResponse:
        body = {"email": email, "password": password, "name": name}
        return self._remember(self.call(api.auth.register, body=body))

    def login(self, email: str, password: str) -> AuthResponse:
        return self._remember(self.call(api.auth.login, body={"email": email, "password": password}))

    def me(self) -> UserOut:
        self.user = self.call(api.auth.me)
        return self.user

    def rehydrate(self) -> UserOut | None:
        """Reload the user behind the stored token; drop the token when it is rejected."""
        if not self.token:
            return None
        try:
            return self.me()
        except ApiError as exc:
            if exc.status_code != 401:
                raise
            self.token = None
            self.user = None
            return None

    def logout(self) -> None:
        self.call(api.auth.logout)
        self.token = None
        self.user = None

    # ─────────────────────────────────────────────────────────────
    # catalog
    # ─────────────────────────────────────────────────────────────
    def list_sessions(self, **filters: Any):
        return self.call(api.sessions.list, body=filters)

    def get_session(self, session_id: int):
        return self.call(api.sessions.get, params={"session_id": session_id})

    def create_session(self, data: dict[str, Any]):
        return self.call(api.sessions.create, body=data)

    def update_session(self, session_id: int, data: dict[str, Any]):
        return self.call(api.sessions.update, params={"session_id": session_id}, body=data)

    def delete_session(self, session_id: int) -> None:
        self.call(api.sessions.delete, params={"session_id": session_id})

    def play(self, session_id: int):
        return self.call(api.sessions.increment_play, params={"session_id": session_id})

    def list_teachers(self):
        return self.call(api.teachers.list)

    def get_teacher(self, teacher_id: int):
        return self.call(api.teachers.get, params={"teacher_id": teacher_id})

    def create_teacher(self, data: dict[str, Any]):
        return self.call(api.teachers.create, body=data)

    def update_teacher(self, teacher_id: int, data: dict[str, Any]):
        return self.call(api.teachers.update, params={"teacher_id": teacher_id}, body=data)

    def delete_teacher(self, teacher_id: int) -> None:
        self.call(api.teachers.delete, params={"teacher_id": teacher_id})

    def daily(self):
        return self.call(api.home.daily)

    def featured(self):
        return self.call(api.home.featured)

    def popular(self):
        return self.call(api.home.popular)

    # ─────────────────────────────────────────────────────────────
    # listener data
    # ─────────────────────────────────────────────────────────────
    def favorites(self):
        return self.call(api.favorites.list)

    def toggle_favorite(self, session_id: int) -> bool:
        return self.call(api.favorites.toggle, params={"session_id": session_id}).is_favorite

    def is_favorite(self, session_id: int) -> bool:
        return self.call(api.favorites.check, params={"session_id": session_id}).is_favorite

    def record_progress(self, session_id: int, minutes_listened: int) -> bool:
        body = {"session_id": session_id, "minutes_listened": minutes_listened}
        return self.call(api.progress.record, body=body).success

    def stats(self):
        return self.call(api.progress.stats)

    def usage(self):
        return self.call(api.stats.usage)
