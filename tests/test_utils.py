import pytest

from app.utils import (
    best_effort,
    decode_json_segment,
    encode_json_segment,
    extract_video_id,
)


def test_extract_video_id():
    assert extract_video_id("https://youtube.com/watch?v=YoHD9XEInc0&t=1") == "YoHD9XEInc0"


def test_extract_video_id_without_marker():
    with pytest.raises(ValueError):
        extract_video_id("https://youtu.be/YoHD9XEInc0")


def test_best_effort_swallows_value_errors():
    assert best_effort(extract_video_id, "https://youtube.com/watch?v=abc") is None
    assert best_effort(int, "42") == 42


def test_json_segment_roundtrip_is_unpadded():
    segment = encode_json_segment({"catalogs": [{"id": "x", "name": "y"}]})

    assert "=" not in segment
    assert decode_json_segment(segment) == {"catalogs": [{"id": "x", "name": "y"}]}


@pytest.mark.parametrize("segment", ["!!!!", "bm90IGpzb24"])
def test_decode_json_segment_rejects_garbage(segment):
    with pytest.raises(ValueError, match="Invalid configuration segment"):
        decode_json_segment(segment)
