"""
VowsPoller — keeps the vows display in sync with the unlock gate.

Each tick checks GET /api/unlock-status. While unlocked it fetches
GET /api/vows and renders the content view; while locked it renders the
locked view without fetching. Switching language re-renders from the cached
payload only.
"""
import logging
from typing import Callable

from vowsite.core.config import settings
from vowsite.core.errors import NetworkError
from vowsite.client.api import VowsApiClient
from vowsite.client.models import DEFAULT_LANGUAGE, RenderContext, VowsPayload, normalize_language
from vowsite.client.scheduler import PeriodicTask
from vowsite.client.storage import DATA_KEY, LANGUAGE_KEY, UNLOCKED_KEY, LocalStorage
from vowsite.client.view import VowsView

logger = logging.getLogger(__name__)


class VowsPoller:
    def __init__(
        self,
        api: VowsApiClient,
        storage: LocalStorage,
        sink: Callable[[str], None],
        view: VowsView | None = None,
        interval: float | None = None,
    ) -> None:
        self.api = api
        self.storage = storage
        self.sink = sink
        self.view = view or VowsView()
        self.context = self._restore()
        self._task = PeriodicTask(
            self.tick,
            interval if interval is not None else settings.poll_interval_seconds,
            name="vows_poll",
        )

    def _restore(self) -> RenderContext:
        """Context from the last session: language, gate state and vows."""
        language = normalize_language(self.storage.get(LANGUAGE_KEY)) or DEFAULT_LANGUAGE
        payload = None
        cached = self.storage.get(DATA_KEY)
        if cached:
            try:
                payload = VowsPayload.model_validate(cached)
            except ValueError:
                logger.warning("cached_vows_invalid")
                self.storage.remove(DATA_KEY)
        return RenderContext(
            payload=payload,
            is_unlocked=self.storage.get(UNLOCKED_KEY) is True,
            language=language,
        )

    def refresh(self) -> str:
        """Render the current context and hand it to the sink."""
        html = self.view.render(self.context)
        self.sink(html)
        return html

    async def tick(self) -> None:
        try:
            is_unlocked = await self.api.get_unlock_status()
        except NetworkError as e:
            logger.warning("poll_status_failed", extra={"error": str(e)})
            is_unlocked = False
        self.context.is_unlocked = is_unlocked
        if self.storage.get(UNLOCKED_KEY) is not is_unlocked:
            self.storage.set(UNLOCKED_KEY, is_unlocked)

        if is_unlocked:
            try:
                payload = await self.api.get_vows()
            except NetworkError as e:
                # Keep showing the last vows we had
                logger.warning("poll_vows_failed", extra={"error": str(e)})
            else:
                self.context.payload = payload
                if payload is None:
                    self.storage.remove(DATA_KEY)
                else:
                    self.storage.set(DATA_KEY, payload.model_dump())
        self.refresh()

    def set_language(self, code: str) -> None:
        language = normalize_language(code)
        if language is None:
            raise ValueError(f"Unsupported language: {code!r}")
        self.context.language = language
        self.storage.set(LANGUAGE_KEY, language)
        logger.info("language_changed", extra={"language": language})
        self.refresh()

    def toggle_language(self) -> None:
        """Switch between en and pt."""
        self.set_language("pt" if self.context.language == "en" else "en")

    def start(self) -> None:
        self.refresh()
        self._task.start()

    async def stop(self) -> None:
        await self._task.stop()
