"""
Route contracts shared by the FastAPI routers and the HTTP client.

Each entry declares the method, the path template (``:param`` placeholders), the
request model and the response model per status code. Routers take their path,
request body and response_model from here; ``app.client`` builds URLs and decodes
responses from the same entries, so a route changes in one place.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Iterator, Mapping
from urllib.parse import quote

from pydantic import BaseModel

from app.schemas.auth import AuthResponse, LoginRequest, LogoutResponse, RegisterRequest, UserOut
from app.schemas.errors import ErrorOut, ValidationErrorOut
from app.schemas.favorite import FavoriteStatus
from app.schemas.progress import ProgressCreate, ProgressRecorded, UserStats
from app.schemas.session import (
    SessionCreate,
    SessionFilters,
    SessionOut,
    SessionUpdate,
    SessionWithTeacherOut,
    TeacherWithSessionsOut,
)
from app.schemas.stats import UsageStats
from app.schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate

_PARAM_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def build_url(path: str, params: Mapping[str, Any] | None = None, strict: bool = False) -> str:
    """
    Substitute ``:key`` tokens in `path` with values from `params`.

    Tokens without a value are left as-is unless `strict` is set, in which case
    a ValueError names the missing ones.
    """
    url = path
    for key, value in (params or {}).items():
        url = re.sub(rf":{re.escape(key)}\b", quote(str(value), safe=""), url)

    if strict:
        missing = _PARAM_RE.findall(url)
        if missing:
            raise ValueError(f"Missing path parameters for {path}: {', '.join(missing)}")
    return url


@dataclass(frozen=True)
class RouteContract:
    method: str
    path: str
    responses: dict[int, Any]
    input: type[BaseModel] | None = None
    auth: bool = False
    # status used when `input` fails validation
    validation_status: int = 400
    summary: str | None = field(default=None, compare=False)

    @property
    def route_path(self) -> str:
        """Path in FastAPI syntax: /api/sessions/:session_id -> /api/sessions/{session_id}"""
        return _PARAM_RE.sub(r"{\1}", self.path)

    @property
    def success_status(self) -> int:
        return min(code for code in self.responses if code < 300)

    @property
    def response_model(self) -> Any:
        return self.responses[self.success_status]

    def url(self, **params: Any) -> str:
        return build_url(self.path, params, strict=True)


api = SimpleNamespace(
    auth=SimpleNamespace(
        register=RouteContract(
            method="POST",
            path="/api/auth/register",
            input=RegisterRequest,
            responses={201: AuthResponse, 400: ValidationErrorOut},
            summary="Create an account and receive a bearer token",
        ),
        login=RouteContract(
            method="POST",
            path="/api/auth/login",
            input=LoginRequest,
            responses={200: AuthResponse, 401: ErrorOut},
            validation_status=401,
            summary="Exchange email + password for a bearer token",
        ),
        me=RouteContract(
            method="GET",
            path="/api/auth/me",
            auth=True,
            responses={200: UserOut, 401: ErrorOut},
            summary="Current user",
        ),
        logout=RouteContract(
            method="POST",
            path="/api/auth/logout",
            responses={200: LogoutResponse},
            summary="Stateless logout acknowledgement",
        ),
    ),
    sessions=SimpleNamespace(
        list=RouteContract(
            method="GET",
            path="/api/sessions",
            input=SessionFilters,
            responses={200: list[SessionWithTeacherOut], 400: ValidationErrorOut},
        ),
        get=RouteContract(
            method="GET",
            path="/api/sessions/:session_id",
            responses={200: SessionWithTeacherOut, 404: ErrorOut},
        ),
        create=RouteContract(
            method="POST",
            path="/api/sessions",
            input=SessionCreate,
            responses={201: SessionOut, 400: ValidationErrorOut},
        ),
        update=RouteContract(
            method="PUT",
            path="/api/sessions/:session_id",
            input=SessionUpdate,
            responses={200: SessionOut, 400: ValidationErrorOut, 404: ErrorOut},
        ),
        delete=RouteContract(
            method="DELETE",
            path="/api/sessions/:session_id",
            responses={204: None, 404: ErrorOut},
        ),
        increment_play=RouteContract(
            method="POST",
            path="/api/sessions/:session_id/play",
            responses={200: SessionOut, 404: ErrorOut},
        ),
    ),
    teachers=SimpleNamespace(
        list=RouteContract(
            method="GET",
            path="/api/teachers",
            responses={200: list[TeacherOut]},
        ),
        get=RouteContract(
            method="GET",
            path="/api/teachers/:teacher_id",
            responses={200: TeacherWithSessionsOut, 404: ErrorOut},
        ),
        create=RouteContract(
            method="POST",
            path="/api/teachers",
            input=TeacherCreate,
            responses={201: TeacherOut, 400: ValidationErrorOut},
        ),
        update=RouteContract(
            method="PUT",
            path="/api/teachers/:teacher_id",
            input=TeacherUpdate,
            responses={200: TeacherOut, 400: ValidationErrorOut, 404: ErrorOut},
        ),
        delete=RouteContract(
            method="DELETE",
            path="/api/teachers/:teacher_id",
            responses={204: None, 404: ErrorOut},
        ),
    ),
    favorites=SimpleNamespace(
        list=RouteContract(
            method="GET",
            path="/api/favorites",
            auth=True,
            responses={200: list[SessionWithTeacherOut], 401: ErrorOut},
        ),
        toggle=RouteContract(
            method="POST",
            path="/api/favorites/:session_id",
            auth=True,
            responses={200: FavoriteStatus, 401: ErrorOut, 404: ErrorOut},
        ),
        check=RouteContract(
            method="GET",
            path="/api/favorites/:session_id/check",
            auth=True,
            responses={200: FavoriteStatus, 401: ErrorOut},
        ),
    ),
    progress=SimpleNamespace(
        record=RouteContract(
            method="POST",
            path="/api/progress",
            input=ProgressCreate,
            auth=True,
            responses={201: ProgressRecorded, 400: ValidationErrorOut, 401: ErrorOut, 404: ErrorOut},
        ),
        stats=RouteContract(
            method="GET",
            path="/api/progress/stats",
            auth=True,
            responses={200: UserStats, 401: ErrorOut},
        ),
    ),
    stats=SimpleNamespace(
        usage=RouteContract(
            method="GET",
            path="/api/stats/usage",
            responses={200: UsageStats},
        ),
    ),
    home=SimpleNamespace(
        daily=RouteContract(
            method="GET",
            path="/api/home/daily",
            responses={200: SessionWithTeacherOut, 404: ErrorOut},
        ),
        featured=RouteContract(
            method="GET",
            path="/api/home/featured",
            responses={200: list[SessionWithTeacherOut]},
        ),
        popular=RouteContract(
            method="GET",
            path="/api/home/popular",
            responses={200: list[SessionWithTeacherOut]},
        ),
    ),
)


def iter_contracts() -> Iterator[tuple[str, RouteContract]]:
    """Yield ("group.name", contract) for every registered route."""
    for group_name, group in vars(api).items():
        for name, contract in vars(group).items():
            yield f"{group_name}.{name}", contract


def find_contract(method: str, route_path: str) -> RouteContract | None:
    """Look up a contract by HTTP method and FastAPI-style path."""
    for _, contract in iter_contracts():
        if contract.method == method and contract.route_path == route_path:
            return contract
    return None
