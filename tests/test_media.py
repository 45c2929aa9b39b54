"""Tests for image detection."""

from albumscan.media import is_path_image


def test_real_png_is_image(tmp_path, make_photo):
    assert is_path_image(make_photo(tmp_path / "photo.png"))


def test_extension_is_case_insensitive(tmp_path, make_photo):
    assert is_path_image(make_photo(tmp_path / "PHOTO.PNG"))


def test_raw_files_trusted_by_extension(tmp_path):
    raw = tmp_path / "IMG_0001.NEF"
    raw.write_bytes(b"\x00" * 16)
    assert is_path_image(raw)


def test_corrupt_image_is_not_image(tmp_path):
    bogus = tmp_path / "broken.jpg"
    bogus.write_bytes(b"definitely not a jpeg")
    assert not is_path_image(bogus)


def test_unknown_extension_is_not_image(tmp_path, make_photo):
    # valid PNG content, but not named like one
    assert not is_path_image(make_photo(tmp_path / "notes.txt"))


def test_missing_file_is_not_image(tmp_path):
    assert not is_path_image(tmp_path / "gone.jpg")


def test_oversized_image_is_still_an_image(tmp_path, make_oversized_png):
    # a 100000x100000 header trips Pillow's decompression bomb guard on open
    assert is_path_image(make_oversized_png(tmp_path / "panorama.png"))


def test_heic_trusted_by_extension(tmp_path):
    heic = tmp_path / "IMG_2001.HEIC"
    heic.write_bytes(b"\x00\x00\x00\x18ftypheic")
    assert is_path_image(heic)
