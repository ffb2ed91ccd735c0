"""레코드 변경 알림 모듈.

Record change notification module.
Repositories call ``change_notifier.publish`` explicitly after a write has
been committed. Listeners are plain callables registered at startup; the
Axiom listener ships events to the configured dataset.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from axiom_py import Client as AxiomClient
from pydantic import BaseModel, ConfigDict, Field

ACTION_CREATED: str = "created"
ACTION_UPDATED: str = "updated"
ACTION_DELETED: str = "deleted"


class ChangeEvent(BaseModel):
    """커밋된 변경 하나 (One committed change).

    Attributes:
        table: 테이블명 (Table name)
        action: created / updated / deleted
        record_id: 레코드 ID (Record identifier)
        fields: 변경된 컬럼명 목록, 값은 포함하지 않음 (Changed column names only, never values)
        occurred_at: 발생 일시 UTC (Event timestamp)
    """

    table: str
    action: str
    record_id: Any
    fields: tuple[str, ...] = ()
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True)

    def as_dict(self) -> dict[str, Any]:
        """Axiom 전송용 JSON 호환 dict (JSON-safe dict for ingestion)."""
        return self.model_dump(mode="json")


ChangeListener = Callable[[ChangeEvent], None]


class ChangeNotifier:
    """변경 이벤트 리스너 레지스트리 (Registry of change listeners)."""

    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def clear(self) -> None:
        self._listeners.clear()

    def publish(self, event: ChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class AxiomChangeListener:
    """변경 이벤트를 Axiom 데이터셋으로 전송하는 리스너.

    Listener that ingests change events into an Axiom dataset.
    """

    def __init__(self, token: str, dataset: str) -> None:
        self._client: AxiomClient = AxiomClient(token=token)
        self._dataset: str = dataset

    def __call__(self, event: ChangeEvent) -> None:
        try:
            self._client.ingest_events(self._dataset, [event.as_dict()])
        except Exception:
            pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure


# 전역 알림 싱글턴 — Process-wide notifier
change_notifier: ChangeNotifier = ChangeNotifier()
