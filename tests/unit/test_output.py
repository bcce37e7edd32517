import pytest

from thumbforge.output import from_data_url, save_thumbnail, to_data_url


def test_to_data_url():
    assert to_data_url(b"abc") == "data:image/png;base64,YWJj"
    assert to_data_url(b"abc", "image/jpeg").startswith("data:image/jpeg;base64,")


def test_from_data_url_recovers_bytes_and_mime():
    assert from_data_url("data:image/jpeg;base64,YWJj") == (b"abc", "image/jpeg")


@pytest.mark.parametrize("value", ["YWJj", "data:image/png,YWJj", "data:image/png;base64,@@@"])
def test_from_data_url_rejects_malformed_input(value):
    with pytest.raises(ValueError):
        from_data_url(value)


def test_save_thumbnail_creates_directory(tmp_path):
    path = save_thumbnail(b"img", tmp_path / "nested" / "dir", "thumb.png")

    assert path == tmp_path / "nested" / "dir" / "thumb.png"
    assert path.read_bytes() == b"img"
