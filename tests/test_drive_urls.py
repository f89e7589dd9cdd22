import pytest

from utils.drive_urls import convert_url_list, extract_file_id, to_direct_image_url

URLS = [
    "",
    "https://drive.google.com/uc?export=view&id=ABC123",
    "https://drive.google.com/open?id=XYZ_9-8",
    "https://drive.google.com/file/d/FILE42/view?usp=sharing",
    "https://drive.google.com/file/d/FILE42/",
    "https://lh3.googleusercontent.com/d/ALREADY",
    "https://www.googleapis.com/drive/v3/files/ID?alt=media",
    "https://example.com/photo.jpg",
    "https://example.com/view?id=a&id=b",
    "data:image/jpeg;base64,/file/d/notanid",
    "not a url at all",
]


def test_query_id_is_rewritten():
    assert to_direct_image_url("https://drive.google.com/uc?export=view&id=ABC123") == \
        "https://lh3.googleusercontent.com/d/ABC123"


def test_file_path_id_is_rewritten():
    assert to_direct_image_url("https://drive.google.com/file/d/FILE42/view?usp=sharing") == \
        "https://lh3.googleusercontent.com/d/FILE42"


def test_query_parameter_takes_priority_over_path():
    assert extract_file_id("https://drive.google.com/file/d/PATHID/view?id=QUERYID") == "QUERYID"


@pytest.mark.parametrize("url", [
    "https://lh3.googleusercontent.com/d/ALREADY",
    "https://www.googleapis.com/drive/v3/files/ID?alt=media",
    "https://example.com/photo.jpg",
    "",
])
def test_unknown_or_direct_urls_are_unchanged(url):
    assert to_direct_image_url(url) == url


def test_data_urls_pass_through():
    url = "data:image/jpeg;base64,/file/d/notanid"
    assert to_direct_image_url(url) == url


@pytest.mark.parametrize("url", URLS)
def test_normalizer_is_idempotent(url):
    once = to_direct_image_url(url)
    assert to_direct_image_url(once) == once


def test_convert_url_list_trims_and_converts_each():
    urls = "https://drive.google.com/open?id=A , https://example.com/b.png"
    converted = convert_url_list(urls)
    assert converted == "https://lh3.googleusercontent.com/d/A,https://example.com/b.png"
    assert convert_url_list(converted) == converted
