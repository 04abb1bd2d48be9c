from __future__ import annotations

from dataclasses import dataclass
import logging

from translator_app.config import AppConfig, history_path
from translator_app.services.audio_player import SoundDevicePlayer
from translator_app.services.gateway_service import GatewayService
from translator_app.services.history import HistoryStore
from translator_app.services.runtime import AsyncRuntime

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppServices:
    runtime: AsyncRuntime
    gateway: GatewayService
    history: HistoryStore
    player: SoundDevicePlayer

    @classmethod
    def create(cls, config: AppConfig) -> "AppServices":
        runtime = AsyncRuntime()
        gateway = GatewayService(
            runtime=runtime,
            settings=config.gateway_settings(),
            timeout=config.gateway.timeout,
        )
        history = HistoryStore(path=history_path(), max_entries=config.history_limit)
        return cls(
            runtime=runtime,
            gateway=gateway,
            history=history,
            player=SoundDevicePlayer(),
        )

    def start(self) -> None:
        self.runtime.start()

    def stop(self) -> None:
        if not self.runtime.is_running:
            return
        close_gateway = self.runtime.submit(self.gateway.close())
        try:
            close_gateway.result(timeout=1.0)
        except Exception:
            logger.warning("gateway session did not close cleanly", exc_info=True)
        self.runtime.stop()
