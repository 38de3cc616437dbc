# client/state.py
"""
Dashboard state as one immutable value plus pure update functions.

Every detail view opened gets a fresh token; image results are applied only
when they carry the token of the detail view currently on screen, so a slow
response for a previously opened exercise or meal is dropped.
"""

from dataclasses import dataclass, replace
from typing import Literal

from ..schemas.plan import FitnessPlan
from ..schemas.profile import UserProfile

Tab = Literal["workout", "diet"]


@dataclass(frozen=True)
class DetailView:
    kind: str
    title: str
    token: int
    image_url: str | None = None
    loading: bool = True
    error: str | None = None


@dataclass(frozen=True)
class AppState:
    profile: UserProfile | None = None
    plan: FitnessPlan | None = None
    tab: Tab = "workout"
    detail: DetailView | None = None
    last_token: int = 0

    @property
    def has_plan(self) -> bool:
        return self.profile is not None and self.plan is not None


def with_plan(state: AppState, profile: UserProfile, plan: FitnessPlan) -> AppState:
    # 재생성 시에도 플랜 전체를 통째로 교체
    return replace(state, profile=profile, plan=plan, tab="workout", detail=None)


def start_over(state: AppState) -> AppState:
    # 토큰은 유지해야 이전에 보낸 이미지 요청 결과가 새 화면에 붙지 않음
    return AppState(last_token=state.last_token)


def select_tab(state: AppState, tab: Tab) -> AppState:
    if tab not in ("workout", "diet"):
        raise ValueError(f"Unknown tab: {tab}")
    return replace(state, tab=tab)


def open_detail(state: AppState, kind: str, title: str) -> tuple[AppState, int]:
    token = state.last_token + 1
    detail = DetailView(kind=kind, title=title, token=token)
    return replace(state, detail=detail, last_token=token), token


def close_detail(state: AppState) -> AppState:
    return replace(state, detail=None)


def _is_current(state: AppState, token: int) -> bool:
    return state.detail is not None and state.detail.token == token


def apply_detail_image(state: AppState, token: int, image_url: str) -> AppState:
    if not _is_current(state, token):
        return state
    return replace(state, detail=replace(state.detail, image_url=image_url, loading=False, error=None))


def fail_detail_image(state: AppState, token: int, message: str) -> AppState:
    if not _is_current(state, token):
        return state
    return replace(state, detail=replace(state.detail, loading=False, error=message))
