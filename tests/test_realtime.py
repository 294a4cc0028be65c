from app.core.realtime import ChangeChannel, ChangeEvent
from app.models.enums import ChangeEventType


def test_publish_reaches_matching_table_only():
    channel = ChangeChannel()
    announcements, applications, everything = [], [], []
    channel.subscribe("announcements", announcements.append)
    channel.subscribe("applications", applications.append)
    channel.subscribe("*", everything.append)

    delivered = channel.publish(ChangeEvent(table="announcements", event_type=ChangeEventType.INSERT, record_id="a1"))

    assert delivered == 2
    assert [e.record_id for e in announcements] == ["a1"]
    assert applications == []
    assert len(everything) == 1


def test_unsubscribe_stops_delivery():
    channel = ChangeChannel()
    seen = []
    subscription = channel.subscribe("announcements", seen.append)
    subscription.unsubscribe()
    assert channel.publish(ChangeEvent(table="announcements", event_type=ChangeEventType.DELETE)) == 0
    assert seen == []
    assert channel.subscriber_count == 0


def test_failing_subscriber_does_not_block_others():
    channel = ChangeChannel()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    channel.subscribe("announcements", broken)
    channel.subscribe("announcements", seen.append)

    delivered = channel.publish(ChangeEvent(table="announcements", event_type=ChangeEventType.UPDATE))
    assert delivered == 1
    assert len(seen) == 1
