"""Managed-flag conversion and bit-preservation tests."""

from __future__ import annotations

import unittest

from attrtree.attributes import MANAGED_ATTRIBUTES, AttributeFlags, FileAttribute, describe_attributes


class AttributeFlagsTests(unittest.TestCase):
    def test_from_bits_reads_only_managed_bits(self) -> None:
        bits = FileAttribute.READONLY | FileAttribute.SYSTEM | FileAttribute.COMPRESSED
        flags = AttributeFlags.from_bits(bits)
        self.assertEqual(flags, AttributeFlags(read_only=True, system=True))

    def test_merge_into_keeps_unmanaged_bits(self) -> None:
        current = int(FileAttribute.COMPRESSED | FileAttribute.ENCRYPTED | FileAttribute.HIDDEN)

        cleared = AttributeFlags().merge_into(current)
        all_set = AttributeFlags(read_only=True, hidden=True, archive=True, system=True).merge_into(current)

        self.assertEqual(cleared, int(FileAttribute.COMPRESSED | FileAttribute.ENCRYPTED))
        self.assertEqual(all_set, int(FileAttribute.COMPRESSED | FileAttribute.ENCRYPTED | MANAGED_ATTRIBUTES))

    def test_merge_into_is_idempotent(self) -> None:
        flags = AttributeFlags(hidden=True, archive=True)
        once = flags.merge_into(0x800)
        self.assertEqual(flags.merge_into(once), once)

    def test_replace_ignores_none_and_rejects_unknown_names(self) -> None:
        flags = AttributeFlags(read_only=True, archive=True)

        updated = flags.replace(read_only=False, hidden=None, system=True)

        self.assertEqual(updated, AttributeFlags(read_only=False, archive=True, system=True))
        with self.assertRaises(TypeError):
            flags.replace(compressed=True)

    def test_letters_and_description(self) -> None:
        self.assertEqual(AttributeFlags(read_only=True, system=True).letters(), "R--S")
        self.assertEqual(describe_attributes(0), "Normal")
        self.assertEqual(describe_attributes(0x21), "Readonly, Archive")


if __name__ == "__main__":
    unittest.main()
