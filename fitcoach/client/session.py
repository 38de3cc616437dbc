# client/session.py

import logging

from ..core.errors import ApiError, StoreError
from ..schemas.plan import FitnessPlan
from ..schemas.profile import UserProfile
from . import state as st
from .api import FitnessCoachClient
from .store import PlanStore

logger = logging.getLogger(__name__)


class CoachSession:
    """Glue between the API client, the local store and the dashboard state."""

    def __init__(self, client: FitnessCoachClient, store: PlanStore):
        self.client = client
        self.store = store
        self.state = st.AppState()

    def restore(self) -> bool:
        """저장된 플랜이 있으면 네트워크 호출 없이 복원합니다."""
        saved = self.store.load()
        if saved is None:
            return False
        profile, plan = saved
        self.state = st.with_plan(self.state, profile, plan)
        return True

    def submit(self, profile: UserProfile) -> FitnessPlan:
        """
        새 플랜을 생성하고 저장한 뒤 화면 상태를 교체합니다.

        생성이 실패하면 ApiError 가 그대로 전파되고 기존 상태/저장본은 유지됩니다.
        저장이 실패하면 이전 플랜을 다시 저장해 저장본을 화면 상태와 맞춘 뒤
        StoreError 를 전파합니다.
        """
        plan = self.client.generate_plan(profile)
        try:
            self.store.save(profile, plan)
        except StoreError:
            self._resave_current()
            raise
        self.state = st.with_plan(self.state, profile, plan)
        logger.info("Your personalized plan is ready, %s", profile.name)
        return plan

    def _resave_current(self) -> None:
        if not self.state.has_plan:
            return
        try:
            self.store.save(self.state.profile, self.state.plan)
        except StoreError as e:
            logger.warning("Could not restore the previous plan: %s", e)

    def regenerate(self) -> FitnessPlan:
        if self.state.profile is None:
            raise RuntimeError("No profile to regenerate a plan for")
        return self.submit(self.state.profile)

    def start_over(self) -> None:
        self.store.clear()
        self.state = st.start_over(self.state)

    def select_tab(self, tab: st.Tab) -> None:
        self.state = st.select_tab(self.state, tab)

    def daily_quote(self) -> str:
        return self.client.fetch_daily_quote()

    def show_detail_image(self, kind: str, title: str) -> st.DetailView | None:
        """
        상세 화면을 열고 이미지를 요청합니다.

        응답이 도착했을 때 다른 상세 화면이 열려 있으면 결과를 버립니다.
        """
        self.state, token = st.open_detail(self.state, kind, title)
        try:
            image_url = self.client.generate_image(title, kind)
        except ApiError as e:
            self.state = st.fail_detail_image(self.state, token, str(e))
        else:
            self.state = st.apply_detail_image(self.state, token, image_url)
        return self.state.detail
