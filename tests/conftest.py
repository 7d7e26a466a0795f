"""Shared fixtures: package archives built on the fly."""

import json
import plistlib
import struct
import subprocess
import zipfile
import zlib
from collections.abc import Callable
from pathlib import Path

import pytest

from pkgmeta.utils import config

# Minimal but valid 1x1 PNG.
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000105d2e4f60000000049454e44ae426082"
)

BADGING_OUTPUT = (
    "package: name='com.example.app' versionCode='12' versionName='1.2.0' "
    "platformBuildVersionName='14'\n"
    "sdkVersion:'21'\n"
    "targetSdkVersion:'34'\n"
    "application-label:'Example'\n"
    "application: label='Example' icon='res/icon.png'\n"
    "launchable-activity: name='com.example.app.MainActivity'\n"
)

XAPK_MANIFEST = {
    "name": "Example",
    "package_name": "com.example.app",
    "version_name": "1.0",
    "version_code": "3",
    "min_sdk_version": "19",
}

INFO_PLIST = {
    "CFBundleDisplayName": "Example",
    "CFBundleName": "ExampleApp",
    "CFBundleIdentifier": "com.example.ios",
    "CFBundleShortVersionString": "2.1",
    "CFBundleVersion": "210",
    "MinimumOSVersion": "15.0",
    "UIDeviceFamily": [1, 2],
    "CFBundleIcons": {
        "CFBundlePrimaryIcon": {
            "CFBundleIconFiles": ["AppIcon29x29", "AppIcon60x60"],
        }
    },
}


def chunk(chunk_type: bytes, body: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + body) & 0xFFFFFFFF
    return struct.pack(">I", len(body)) + chunk_type + body + struct.pack(">I", crc)


def make_cgbi(rows: bytes, width: int, height: int) -> bytes:
    """Build an Apple CgBI PNG from already filtered BGRA rows."""
    compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
    idat = compressor.compress(rows) + compressor.flush()
    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return b"".join(
        [
            PNG_BYTES[:8],
            chunk(b"CgBI", b"\x50\x00\x20\x06"),
            chunk(b"IHDR", header),
            chunk(b"IDAT", idat),
            chunk(b"IEND", b""),
        ]
    )


def write_zip(path: Path, entries: dict[str, bytes]) -> Path:
    """Write a zip archive holding ``entries`` to ``path``."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config loader at an empty per-test location."""
    config_file = tmp_path / "home" / ".pkgmeta" / "config.json"
    monkeypatch.setattr(config, "CONFIG_FILE", config_file)
    monkeypatch.delenv("PKGMETA_AAPT", raising=False)
    config.load_config.cache_clear()
    return config_file


@pytest.fixture
def apk_file(tmp_path: Path) -> Path:
    return write_zip(
        tmp_path / "example.apk",
        {"AndroidManifest.xml": b"\x03\x00\x08\x00", "res/icon.png": PNG_BYTES},
    )


@pytest.fixture
def xapk_file(tmp_path: Path) -> Path:
    return write_zip(
        tmp_path / "example.xapk",
        {
            "manifest.json": json.dumps(XAPK_MANIFEST).encode(),
            "icon.png": PNG_BYTES,
            "com.example.app.apk": b"PK\x03\x04",
        },
    )


@pytest.fixture
def make_ipa(tmp_path: Path) -> Callable[..., Path]:
    """Build an .ipa with the given Info.plist and extra bundle files."""

    def _make(
        info: dict | None = None,
        *,
        fmt: plistlib.PlistFormat = plistlib.FMT_BINARY,
        files: dict[str, bytes] | None = None,
        name: str = "example.ipa",
    ) -> Path:
        info = INFO_PLIST if info is None else info
        entries = {"Payload/Example.app/Info.plist": plistlib.dumps(info, fmt=fmt)}
        if files is None:
            files = {
                "AppIcon60x60@2x.png": PNG_BYTES,
                "AppIcon60x60@3x.png": PNG_BYTES + b"\x00" * 64,
            }
        for filename, data in files.items():
            entries[f"Payload/Example.app/{filename}"] = data
        return write_zip(tmp_path / name, entries)

    return _make


@pytest.fixture
def fake_aapt(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list[list[str]]]:
    """Replace subprocess.run for aapt; returns the list of recorded commands."""

    def _install(
        stdout: str = BADGING_OUTPUT, stderr: str = "", returncode: int = 0
    ) -> list[list[str]]:
        calls: list[list[str]] = []

        def fake_run(command, **kwargs):
            calls.append(command)
            return subprocess.CompletedProcess(command, returncode, stdout, stderr)

        monkeypatch.setattr("pkgmeta.utils.process.subprocess.run", fake_run)
        return calls

    return _install
