"""Tests for the EventBus domain event dispatch system."""

from scroller.events import EventBus, ObstaclePassed, ObstacleSpawned, RoundEnded


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        """Verify events are delivered to subscribed handlers."""
        bus = EventBus()
        received_events: list = []

        bus.subscribe(RoundEnded, received_events.append)

        event = RoundEnded(score=12, high_score=12, new_record=True, frame=640)
        bus.emit(event)

        assert len(received_events) == 1
        assert received_events[0] is event

    def test_no_subscribers_no_crash(self) -> None:
        bus = EventBus()
        bus.emit(ObstaclePassed(obstacle_id=1, score=1, frame=50))
        assert bus.subscriber_count(ObstaclePassed) == 0

    def test_multiple_handlers_in_registration_order(self) -> None:
        bus = EventBus()
        results: list = []

        bus.subscribe(ObstaclePassed, lambda e: results.append(("h1", e.obstacle_id)))
        bus.subscribe(ObstaclePassed, lambda e: results.append(("h2", e.obstacle_id)))
        bus.emit(ObstaclePassed(obstacle_id=99, score=3, frame=200))

        assert results == [("h1", 99), ("h2", 99)]

    def test_handler_receives_correct_type_only(self) -> None:
        """Verify handlers only receive events of their subscribed type."""
        bus = EventBus()
        spawned: list = []
        passed: list = []

        bus.subscribe(ObstacleSpawned, spawned.append)
        bus.subscribe(ObstaclePassed, passed.append)

        bus.emit(ObstacleSpawned(obstacle_id=1, kind="gap", x=400.0, frame=91))
        bus.emit(ObstaclePassed(obstacle_id=2, score=1, frame=20))

        assert [e.obstacle_id for e in spawned] == [1]
        assert [e.obstacle_id for e in passed] == [2]

    def test_unsubscribe_removes_handler(self) -> None:
        bus = EventBus()
        received: list = []

        def handler(event: ObstaclePassed) -> None:
            received.append(event)

        bus.subscribe(ObstaclePassed, handler)
        bus.emit(ObstaclePassed(obstacle_id=1, score=1, frame=1))
        assert bus.unsubscribe(ObstaclePassed, handler)
        bus.emit(ObstaclePassed(obstacle_id=2, score=2, frame=2))

        assert len(received) == 1
        assert not bus.unsubscribe(ObstaclePassed, handler)
        assert not bus.has_subscribers(ObstaclePassed)

    def test_clear_subscribers(self) -> None:
        bus = EventBus()
        bus.subscribe(RoundEnded, lambda e: None)
        bus.clear_subscribers()
        assert bus.subscriber_count(RoundEnded) == 0
