import pytest

from tuxchannels.recording import RecordingInfo, RecordingStatus


@pytest.fixture
def recording():
    return RecordingInfo("News", begin_time=100, end_time=200, channel_id=7)


def test_defaults():
    rec = RecordingInfo("Movie")
    assert rec.id == -1
    assert rec.channel_id == -1
    assert rec.status is RecordingStatus.NOTSET
    assert rec.filename is None
    assert rec.begin_time == 0 and rec.end_time == 0


def test_fields_kept(recording):
    assert recording.title == "News"
    assert recording.channel_id == 7
    assert (recording.begin_time, recording.end_time) == (100, 200)


@pytest.mark.parametrize("ref", [100, 150, 200])
def test_has_time_inside_and_on_bounds(recording, ref):
    assert recording.has_time(ref) is True


@pytest.mark.parametrize("ref", [99, 201])
def test_has_time_outside(recording, ref):
    assert recording.has_time(ref) is False


def test_is_time_greater(recording):
    assert recording.is_time_greater(201) is True
    assert recording.is_time_greater(200) is False
    assert recording.is_time_greater(50) is False


def test_status_and_filename_can_change(recording):
    recording.status = RecordingStatus.FINISHED
    recording.filename = "news.ts"
    assert recording.status is RecordingStatus.FINISHED
    assert recording.filename == "news.ts"


def test_zero_length_recording_holds_only_its_instant():
    rec = RecordingInfo("Flash", begin_time=500, end_time=500)
    assert rec.has_time(500) is True
    assert rec.has_time(499) is False
    assert rec.has_time(501) is False
    assert rec.is_time_greater(501) is True
    assert rec.is_time_greater(500) is False