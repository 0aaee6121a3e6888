import json

from models.state import ChannelRecord, RelayState


def test_defaults():
    state = RelayState()

    assert state.global_muted is False
    assert state.channels == {}


def test_channel_record_defaults():
    record = ChannelRecord(title="News")

    assert record.muted is False
    assert record.last_group_id is None
    assert record.last_group_timestamp == 0


def test_to_json_uses_camel_case_and_string_keys():
    state = RelayState(
        global_muted=True,
        channels={
            -100123: ChannelRecord(
                title="News", muted=True, last_group_id="g", last_group_timestamp=5
            )
        },
    )

    blob = json.loads(state.to_json())

    assert blob == {
        "globalMuted": True,
        "channels": {
            "-100123": {
                "title": "News",
                "muted": True,
                "lastGroupId": "g",
                "lastGroupTimestamp": 5,
            }
        },
    }


def test_parse_blob_with_missing_optional_fields():
    state = RelayState.model_validate_json(
        '{"globalMuted": false, "channels": {"42": {"title": "News"}}}'
    )

    assert state.channels[42].title == "News"
    assert state.channels[42].muted is False
    assert state.channels[42].last_group_timestamp == 0
