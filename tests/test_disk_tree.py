"""Tests for disk tree rendering."""
from osximg.core.disk_tree import describe, render_disk, render_disks
from osximg.models.disk import DiskNode


class TestDescribe:
    """Test the bracketed label/content field."""

    def test_both_placeholders(self):
        assert describe(DiskNode("disk1")) == "-"

    def test_label_only(self):
        assert describe(DiskNode("disk1s1", volume_name="Backup")) == "Backup"

    def test_content_only(self):
        assert describe(DiskNode("disk1s1", content="EFI")) == "EFI"

    def test_label_then_content(self):
        node = DiskNode("disk1s2", content="Apple_HFS", volume_name="Untitled")
        assert describe(node) == "Untitled | Apple_HFS"

    def test_apfs_container_without_content(self):
        node = DiskNode("disk3", apfs_volumes=[DiskNode("disk3s1")])
        assert describe(node) == "APFS"


class TestRenderDisk:
    """Test exact line output for single disks."""

    def test_disk_with_efi_partition(self, disk2_record):
        lines = render_disk(DiskNode.from_plist(disk2_record))

        assert lines == [
            "└─ /dev/disk2 [-] (465.7 GB)",
            "   └─ /dev/disk2s1 [EFI] (200.0 MB)",
        ]

    def test_zero_size_has_no_parentheses(self):
        lines = render_disk(DiskNode("disk5", content="FDisk_partition_scheme"))

        assert lines == ["└─ /dev/disk5 [FDisk_partition_scheme]"]

    def test_not_last_sibling_connector(self):
        lines = render_disk(DiskNode("disk5s1", size=1024), prefix="   ", is_last=False)

        assert lines == ["   ├─ /dev/disk5s1 [-] (1.0 KB)"]

    def test_apfs_container(self, apfs_container_record):
        lines = render_disk(DiskNode.from_plist(apfs_container_record))

        assert lines == [
            "└─ /dev/disk3 [APFS] (926.4 GB)",
            "   ├─ /dev/disk3s1 [Macintosh HD] (10.4 GB)",
            "   └─ /dev/disk3s5 [Data] (374.7 GB)",
        ]

    def test_partitions_before_apfs_volumes(self):
        node = DiskNode(
            "disk0",
            partitions=[DiskNode("disk0s1"), DiskNode("disk0s2")],
            apfs_volumes=[DiskNode("disk0v1")],
        )

        ids = [line.split("/dev/")[1].split(" ")[0] for line in render_disk(node)]
        assert ids == ["disk0", "disk0s1", "disk0s2", "disk0v1"]

    def test_non_last_subtree_uses_pipe_prefix(self):
        node = DiskNode(
            "disk0",
            content="GUID_partition_scheme",
            partitions=[
                DiskNode(
                    "disk0s2",
                    content="Apple_APFS",
                    apfs_volumes=[DiskNode("disk0s2v1", volume_name="Data")],
                ),
                DiskNode("disk0s3", content="Apple_Boot"),
            ],
        )

        assert render_disk(node) == [
            "└─ /dev/disk0 [GUID_partition_scheme]",
            "   ├─ /dev/disk0s2 [Apple_APFS]",
            "   │  └─ /dev/disk0s2v1 [Data]",
            "   └─ /dev/disk0s3 [Apple_Boot]",
        ]

    def test_last_subtree_uses_space_prefix(self):
        node = DiskNode(
            "disk1",
            partitions=[
                DiskNode("disk1s1"),
                DiskNode("disk1s2", apfs_volumes=[DiskNode("disk1s2v1")]),
            ],
        )

        lines = render_disk(node)
        assert lines[-1] == "      └─ /dev/disk1s2v1 [-]"

    def test_renders_do_not_reorder_input(self):
        node = DiskNode("disk6", partitions=[DiskNode("disk6s3"), DiskNode("disk6s1")])

        assert render_disk(node)[1:] == [
            "   ├─ /dev/disk6s3 [-]",
            "   └─ /dev/disk6s1 [-]",
        ]


class TestRenderDisks:
    """Test multi-disk output."""

    def test_blank_line_between_disks(self, disk2_record, apfs_container_record):
        disks = [DiskNode.from_plist(disk2_record), DiskNode.from_plist(apfs_container_record)]

        lines = render_disks(disks)

        assert lines == [
            "└─ /dev/disk2 [-] (465.7 GB)",
            "   └─ /dev/disk2s1 [EFI] (200.0 MB)",
            "",
            "└─ /dev/disk3 [APFS] (926.4 GB)",
            "   ├─ /dev/disk3s1 [Macintosh HD] (10.4 GB)",
            "   └─ /dev/disk3s5 [Data] (374.7 GB)",
        ]

    def test_single_disk_has_no_trailing_blank(self):
        assert render_disks([DiskNode("disk0")]) == ["└─ /dev/disk0 [-]"]

    def test_no_disks(self):
        assert render_disks([]) == []
