"""Shared test fixtures for osximg tests."""
import json
import os
import subprocess
from typing import Dict, List, Optional

import pytest


@pytest.fixture(autouse=True)
def clean_osximg_env(monkeypatch):
    """Keep the developer's OSXIMG_* settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("OSXIMG_"):
            monkeypatch.delenv(name, raising=False)


class ScriptedPrompter:
    """Prompter that replays canned answers and records the questions."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.questions: List[str] = []

    def ask(self, message: str) -> str:
        self.questions.append(message)
        return self.answers.pop(0) if self.answers else ""


class FakeDiskTools:
    """Stands in for diskutil and plutil.

    diskutil returns a token naming the record; plutil turns that token
    into the JSON of the matching record.
    """

    def __init__(self, records: Dict[str, object]):
        self.records = records
        self.calls: List[List[str]] = []

    def __call__(self, args: List[str], input: Optional[bytes] = None) -> bytes:
        self.calls.append(list(args))
        if args[0] == "diskutil":
            key = " ".join(args[1:])
            if key not in self.records:
                raise subprocess.CalledProcessError(1, args, output=b"", stderr=b"Could not find disk\n")
            return key.encode()
        if args[0] == "plutil":
            return json.dumps(self.records[input.decode()]).encode()
        raise FileNotFoundError(args[0])


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter


@pytest.fixture
def disk2_record():
    """External disk with one EFI partition and an unlabelled size."""
    return {
        "DeviceIdentifier": "disk2",
        "Content": "",
        "Size": 500000000000,
        "Partitions": [
            {
                "DeviceIdentifier": "disk2s1",
                "Content": "EFI",
                "VolumeName": "",
                "Size": 209715200,
            }
        ],
        "APFSVolumes": [],
    }


@pytest.fixture
def apfs_container_record():
    """Synthesized APFS container with two volumes and no Content."""
    return {
        "DeviceIdentifier": "disk3",
        "Size": 994662584320,
        "APFSVolumes": [
            {"DeviceIdentifier": "disk3s1", "VolumeName": "Macintosh HD", "Size": 11201568768},
            {"DeviceIdentifier": "disk3s5", "VolumeName": "Data", "Size": 402331648000},
        ],
    }


@pytest.fixture
def fake_disk_tools(disk2_record, apfs_container_record):
    return FakeDiskTools({
        "list -plist": {"AllDisksAndPartitions": [disk2_record, apfs_container_record]},
        "info -plist /dev/disk2": {
            "DeviceIdentifier": "disk2",
            "TotalSize": 500000000000,
            "Internal": False,
        },
        "info -plist /dev/rdisk0": {
            "DeviceIdentifier": "disk0",
            "TotalSize": 1000555581440,
            "Internal": True,
        },
        "info -plist /dev/disk9": {"DeviceIdentifier": "disk9"},
    })
