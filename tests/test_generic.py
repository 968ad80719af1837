"""Tests for the generic descriptor reader and class dispatch."""

import logging

import pytest

from usbtree.descriptor import (ClassCodeTriplet, GenericDescriptor,
                                read_extra, split_descriptors)
from usbtree.descriptor.cursor import Cursor, Invalid
from usbtree.exception import DescriptorTooShort

VENDOR = ClassCodeTriplet(0xff, 0x00, 0x00)


class TestCursor:
    def test_reads_little_endian(self):
        c = Cursor(bytes([0x01, 0x34, 0x12, 0x56, 0x34, 0x12]), "Test")
        assert c.u8() == 1
        assert c.u16() == 0x1234
        assert c.u24() == 0x123456
        assert c.remaining == 0

    def test_short_read_names_expected_length(self):
        c = Cursor(b"\x01\x02", "Test")
        c.u8()
        with pytest.raises(DescriptorTooShort) as e:
            c.u32()
        assert e.value.name == "Test"
        assert e.value.expected == 5
        assert e.value.actual == 2


class TestGenericDescriptor:
    def test_from_bytes(self):
        g = GenericDescriptor.from_bytes(bytes([5, 0x24, 0x01, 0xaa, 0xbb]))
        assert g.length == 5
        assert g.descriptor_type == 0x24
        assert g.descriptor_subtype == 0x01
        assert g.payload == b"\xaa\xbb"

    def test_two_byte_chunk(self):
        g = GenericDescriptor.from_bytes(bytes([2, 0x30]))
        assert g.descriptor_subtype is None
        assert g.data is None
        assert g.to_bytes() == bytes([2, 0x30])

    def test_bad_length(self):
        with pytest.raises(DescriptorTooShort):
            GenericDescriptor.from_bytes(bytes([9, 0x24, 0x01]))


class TestSplit:
    def test_concatenated(self):
        data = bytes([3, 0x24, 1, 4, 0x24, 2, 9])
        chunks, unconsumed = split_descriptors(data)
        assert [c.to_bytes() for c in chunks] == [data[:3], data[3:]]
        assert unconsumed == 0

    def test_stops_on_overlong_chunk(self):
        data = bytes([3, 0x24, 1, 8, 0x24, 2])
        chunks, unconsumed = split_descriptors(data)
        assert len(chunks) == 1
        assert unconsumed == 3

    def test_stops_on_zero_length(self):
        chunks, unconsumed = split_descriptors(bytes([0, 0x24, 3, 0x24, 1]))
        assert chunks == []
        assert unconsumed == 5


class TestReadExtra:
    def test_empty(self):
        assert read_extra(b"", VENDOR) == []

    def test_unknown_class_is_generic(self):
        data = bytes([4, 0x24, 0x01, 0x00])
        out = read_extra(data, VENDOR)
        assert out == [GenericDescriptor.from_bytes(data)]

    def test_malformed_tail_dropped(self, caplog):
        data = bytes([4, 0x24, 0x01, 0x00, 1, 0x24])
        with caplog.at_level(logging.WARNING):
            out = read_extra(data, VENDOR)
        assert len(out) == 1
        assert "Dropping 2 bytes" in caplog.text

    def test_interface_association(self):
        data = bytes([8, 0x0b, 0, 2, 0x01, 0x01, 0x00, 4])
        d, = read_extra(data, VENDOR)
        assert d.interface.first_interface == 0
        assert d.interface.interface_count == 2
        assert d.interface.function_string_index == 4
        assert d.to_generic().to_bytes() == data

    def test_truncated_interface_association_is_invalid(self):
        data = bytes([5, 0x0b, 0, 2, 0x01])
        d, = read_extra(data, VENDOR)
        assert isinstance(d.interface, Invalid)
        assert d.to_generic().to_bytes() == data
