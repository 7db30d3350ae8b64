"""
Competition event publish/subscribe

Participants publish lift and weight changes; the competition subscribes to
re-sort its groups, and outer layers may subscribe to refresh displays.
"""

from typing import Dict, Any, List, Callable, Optional
from datetime import datetime
from enum import Enum
from dataclasses import dataclass, field
from collections import defaultdict
import json

from loguru import logger


class EventType(str, Enum):
    """Event types"""
    # participants
    PARTICIPANT_ADDED = "participant.added"
    PARTICIPANT_REMOVED = "participant.removed"
    PARTICIPANT_WEIGHED_IN = "participant.weighed_in"
    PARTICIPANT_CHECKED_OUT = "participant.checked_out"

    # attempts
    LIFT_RECORDED = "lift.recorded"
    LIFT_CORRECTED = "lift.corrected"
    WEIGHT_CHANGED = "weight.changed"

    # competition
    WEIGH_IN_FINISHED = "competition.weigh_in_finished"
    COMPETITION_COMPLETED = "competition.completed"


@dataclass
class CompetitionEvent:
    """A change in one competition"""
    event_type: EventType
    entity_type: str                    # "participant", "competition"
    entity_id: Optional[str] = None
    subject: Any = None                 # the changed object, not serialized
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


Subscriber = Callable[[CompetitionEvent], None]


class EventPublisher:
    """Synchronous event publisher with a bounded in-memory log"""

    def __init__(self, max_log_size: int = 1000):
        self.local_subscribers: Dict[EventType, List[Subscriber]] = defaultdict(list)
        self._event_log: List[CompetitionEvent] = []
        self._max_log_size = max_log_size

    def publish(self, event: CompetitionEvent) -> None:
        """Publish an event to every subscriber of its type"""
        logger.debug(f"📢 Event published: {event.event_type.value} - {event.entity_type}:{event.entity_id}")

        self._event_log.append(event)
        if len(self._event_log) > self._max_log_size:
            self._event_log = self._event_log[-self._max_log_size:]

        for subscriber in list(self.local_subscribers.get(event.event_type, [])):
            try:
                subscriber(event)
            except Exception:
                logger.exception(f"Subscriber failed for {event.event_type.value}")
                raise

    def subscribe(self, event_type: EventType, callback: Subscriber) -> None:
        self.local_subscribers[event_type].append(callback)
        logger.debug(f"✅ Subscribed to {event_type.value}")

    def unsubscribe(self, event_type: EventType, callback: Subscriber) -> None:
        if callback in self.local_subscribers[event_type]:
            self.local_subscribers[event_type].remove(callback)
            logger.debug(f"❌ Unsubscribed from {event_type.value}")

    def get_recent_events(self, limit: int = 100) -> List[CompetitionEvent]:
        return self._event_log[-limit:]

    # convenience
    def publish_participant_event(self, event_type: EventType, participant, **data) -> None:
        self.publish(CompetitionEvent(
            event_type=event_type,
            entity_type="participant",
            entity_id=participant.participant_id,
            subject=participant,
            data=data,
        ))

    def publish_competition_event(self, event_type: EventType, competition, **data) -> None:
        self.publish(CompetitionEvent(
            event_type=event_type,
            entity_type="competition",
            entity_id=competition.competition_id,
            subject=competition,
            data=data,
        ))
