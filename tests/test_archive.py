import pytest

from pkgmeta.exceptions import DataExtractionError
from pkgmeta.utils.archive import read_entry, read_matching_entry

from .conftest import write_zip


@pytest.fixture
def archive(tmp_path):
    return write_zip(
        tmp_path / "sample.zip",
        {
            "manifest.json": b"{}",
            "Payload/A.app/Icon.png": b"small",
            "Payload/A.app/Icon@2x.png": b"much larger",
            "Payload/A.app/Sub/Icon.png": b"nested",
        },
    )


def test_read_entry(archive):
    assert read_entry(archive, "manifest.json") == b"{}"


def test_read_entry_missing(archive):
    with pytest.raises(DataExtractionError) as exc_info:
        read_entry(archive, "icon.png")
    assert exc_info.value.stage == "archive"


def test_read_matching_entry_first_match(archive):
    name, data = read_matching_entry(archive, r"Payload/[^/]+/Icon(@2x)?\.png")

    assert (name, data) == ("Payload/A.app/Icon.png", b"small")


def test_read_matching_entry_largest(archive):
    name, data = read_matching_entry(
        archive, r"Payload/[^/]+/Icon(@2x)?\.png", prefer_largest=True
    )

    assert (name, data) == ("Payload/A.app/Icon@2x.png", b"much larger")


def test_read_matching_entry_unique(archive):
    with pytest.raises(DataExtractionError, match="Ambiguous"):
        read_matching_entry(archive, r"Payload/.+/Icon\.png", unique=True)


def test_read_matching_entry_none(archive):
    with pytest.raises(DataExtractionError, match="No entry matching"):
        read_matching_entry(archive, r"Payload/[^/]+/Info\.plist")


def test_not_a_zip(tmp_path):
    path = tmp_path / "plain.zip"
    path.write_bytes(b"plain text")

    with pytest.raises(DataExtractionError, match="Not a valid ZIP"):
        read_entry(path, "manifest.json")
