"""Tests for USB Audio Class descriptor decoding."""

import logging

import pytest

from usbtree.descriptor import ClassCodeTriplet, GenericDescriptor, read_extra
from usbtree.descriptor import audio
from usbtree.descriptor.audio import (AudioSubclass, ControlSubtype,
                                      StreamingSubtype, UacProtocol)
from usbtree.descriptor.cursor import Generic, Invalid, Undefined
from usbtree.descriptor.midi import JackType, MidiDescriptor

UAC1_CONTROL = ClassCodeTriplet(0x01, 0x01, 0x00)
UAC2_CONTROL = ClassCodeTriplet(0x01, 0x01, 0x20)
UAC3_CONTROL = ClassCodeTriplet(0x01, 0x01, 0x30)
UAC1_STREAMING = ClassCodeTriplet(0x01, 0x02, 0x00)
UAC3_STREAMING = ClassCodeTriplet(0x01, 0x02, 0x30)
MIDI_STREAMING = ClassCodeTriplet(0x01, 0x03, 0x00)


def cs(descriptor_type, subtype, payload):
    payload = bytes(payload)
    return GenericDescriptor.from_bytes(
        bytes([3 + len(payload), descriptor_type, subtype]) + payload)


def cs_interface(subtype, payload):
    return cs(0x24, subtype, payload)


def decode(triplet, generic):
    return audio.from_generic(triplet, generic)


class TestSubtypeRemap:
    @pytest.mark.parametrize("value,protocol,expected", [
        (0x04, UacProtocol.Uac1, ControlSubtype.MixerUnit),
        (0x05, UacProtocol.Uac1, ControlSubtype.SelectorUnit),
        (0x06, UacProtocol.Uac1, ControlSubtype.FeatureUnit),
        (0x07, UacProtocol.Uac1, ControlSubtype.ProcessingUnit),
        (0x08, UacProtocol.Uac1, ControlSubtype.ExtensionUnit),
        (0x06, UacProtocol.Uac2, ControlSubtype.FeatureUnit),
        (0x07, UacProtocol.Uac2, ControlSubtype.EffectUnit),
        (0x0a, UacProtocol.Uac2, ControlSubtype.ClockSource),
        (0x0d, UacProtocol.Uac2, ControlSubtype.SampleRateConverter),
        (0x04, UacProtocol.Uac3, ControlSubtype.ExtendedTerminal),
        (0x06, UacProtocol.Uac3, ControlSubtype.SelectorUnit),
        (0x10, UacProtocol.Uac3, ControlSubtype.PowerDomain),
        (0x02, UacProtocol.Uac1, ControlSubtype.InputTerminal),
        (0x7f, UacProtocol.Uac2, ControlSubtype.Undefined),
    ])
    def test_control_subtype(self, value, protocol, expected):
        assert audio.control_subtype(value, protocol) == expected


class TestAudioControl:
    def test_uac1_input_terminal(self):
        d = decode(UAC1_CONTROL, cs_interface(0x02, [0x02, 0x00, 0x01, 0, 0, 0, 0, 0, 0]))
        assert d.subclass == AudioSubclass.Control
        assert d.subtype == ControlSubtype.InputTerminal
        assert d.interface == audio.InputTerminal1(
            terminal_id = 2, terminal_type = 0x0100, assoc_terminal = 0,
            nr_channels = 0, channel_config = 0, channel_names_index = 0,
            terminal_index = 0)

    def test_header1(self):
        payload = bytes([0x00, 0x01, 0x28, 0x00, 0x02, 0x01, 0x02])
        d = decode(UAC1_CONTROL, cs_interface(0x01, payload))
        assert d.interface.version == 0x0100
        assert d.interface.total_length == 0x28
        assert d.interface.interfaces == [1, 2]
        assert d.interface.encode() == payload

    def test_header1_collection_overrun_is_invalid(self, caplog):
        payload = bytes([0x00, 0x01, 0x28, 0x00, 0x02, 0x01])
        with caplog.at_level(logging.WARNING):
            d = decode(UAC1_CONTROL, cs_interface(0x01, payload))
        assert isinstance(d.interface, Invalid)
        assert "Header1" in caplog.text

    def test_mixer_unit1(self):
        payload = bytes([5, 2, 1, 2, 2, 0x03, 0x00, 0, 0xff, 0])
        d = decode(UAC1_CONTROL, cs_interface(0x04, payload))
        assert d.subtype == ControlSubtype.MixerUnit
        mixer = d.interface
        assert mixer.source_ids == [1, 2]
        assert mixer.nr_in_pins == 2
        assert mixer.controls == b"\xff"
        assert mixer.encode() == payload

    def test_uac1_selector(self):
        d = decode(UAC1_CONTROL, cs_interface(0x05, [4, 2, 1, 2, 0]))
        assert isinstance(d.interface, audio.SelectorUnit1)
        assert d.interface.source_ids == [1, 2]

    def test_uac3_extended_terminal_shares_mixer_code(self):
        d = decode(UAC3_CONTROL, cs_interface(0x04, [0x01, 0x00, 0x02]))
        assert d.subtype == ControlSubtype.ExtendedTerminal
        assert d.interface == audio.ExtendedTerminalHeader(descriptor_id = 1,
                                                           nr_channels = 2)

    def test_feature_unit1(self):
        payload = bytes([3, 2, 1, 0x01, 0x02, 0x02, 0])
        d = decode(UAC1_CONTROL, cs_interface(0x06, payload))
        assert d.interface.controls == [0x01, 0x02, 0x02]
        assert d.interface.encode() == payload

    def test_processing_unit1_modes(self):
        payload = bytes([7, 0x01, 0x00, 1, 6, 2, 0x03, 0x00, 0, 1, 0x01, 0,
                         2, 0x03, 0x00, 0x07, 0x00])
        d = decode(UAC1_CONTROL, cs_interface(0x07, payload))
        unit = d.interface
        assert unit.kind == audio.ProcessingUnitType1.UpDownMix
        assert unit.controls == b"\x01"
        assert unit.specific.modes == [0x0003, 0x0007]
        assert unit.encode() == payload

    def test_undefined_subtype(self):
        d = decode(UAC1_CONTROL, cs_interface(0x00, [1, 2]))
        assert d.interface == Undefined(b"\x01\x02")

    def test_unknown_protocol_is_invalid(self):
        triplet = ClassCodeTriplet(0x01, 0x01, 0x10)
        d = decode(triplet, cs_interface(0x02, [0x02, 0x00, 0x01, 0, 0, 0, 0, 0, 0]))
        assert isinstance(d.interface, Invalid)

    def test_every_short_prefix_is_invalid(self):
        payload = bytes([0x02, 0x00, 0x01, 0, 0, 0, 0, 0, 0])
        for n in range(len(payload)):
            d = decode(UAC1_CONTROL, cs_interface(0x02, payload[:n]))
            assert isinstance(d.interface, Invalid), n
            assert d.interface.raw == payload[:n]

    def test_not_class_specific(self):
        g = GenericDescriptor.from_bytes(bytes([4, 0x05, 0x81, 0x03]))
        assert decode(UAC1_CONTROL, g) is g

    def test_to_generic_is_exact(self):
        data = bytes([
            9, 0x24, 0x01, 0x00, 0x01, 0x28, 0x00, 0x01, 0x01,
            12, 0x24, 0x02, 0x01, 0x01, 0x01, 0x00, 0x02, 0x03, 0x00, 0x00, 0x00,
            9, 0x24, 0x03, 0x03, 0x01, 0x03, 0x00, 0x02, 0x00,
            # trailing vendor byte after iTerminal
            10, 0x24, 0x03, 0x04, 0x01, 0x03, 0x00, 0x02, 0x00, 0xee,
            3, 0x24, 0x00,
        ])
        out = read_extra(data, UAC1_CONTROL)
        assert len(out) == 5
        assert b"".join(d.to_generic().to_bytes() for d in out) == data

    def test_resolve_strings(self):
        class Strings:
            def get_descriptor_string(self, index):
                return "string %d" % index

        d = decode(UAC1_CONTROL, cs_interface(0x02, [0x02, 0x00, 0x01, 0, 2, 0x03, 0x00, 4, 5]))
        d.resolve_strings(Strings())
        assert d.interface.channel_names == "string 4"
        assert d.interface.terminal == "string 5"

    def test_channel_names(self):
        assert audio.channel_names(0x0003, UacProtocol.Uac1) == [
            "Left Front (L)", "Right Front (R)"]


class TestRemapFixtures:
    """
    The same subtype byte under the three audio control protocols.
    """
    @pytest.mark.parametrize("triplet, value, payload, shape", [
        (UAC1_CONTROL, 0x04, "05 02 01 02 02 03 00 00 ff 00", audio.MixerUnit1),
        (UAC1_CONTROL, 0x05, "04 02 01 02 00", audio.SelectorUnit1),
        (UAC1_CONTROL, 0x06, "03 02 01 01 02 02 00", audio.FeatureUnit1),
        (UAC2_CONTROL, 0x04, "05 02 01 02 02 03 00 00 00 00 ff 00 00", audio.MixerUnit2),
        (UAC2_CONTROL, 0x05, "04 02 01 02 03 00", audio.SelectorUnit2),
        (UAC2_CONTROL, 0x06, "06 01 0f 00 00 00 0c 00 00 00 00", audio.FeatureUnit2),
        (UAC3_CONTROL, 0x04, "01 00 02", audio.ExtendedTerminalHeader),
        (UAC3_CONTROL, 0x05, "05 02 01 02 10 00 ff 00 00 00 00 08 00", audio.MixerUnit3),
        (UAC3_CONTROL, 0x06, "04 02 01 02 00 00 00 00 09 00", audio.SelectorUnit3),
    ])
    def test_decode(self, triplet, value, payload, shape):
        generic = cs_interface(value, bytes.fromhex(payload))
        d = decode(triplet, generic)
        assert type(d.interface) is shape
        assert d.descriptor_subtype == value
        assert d.to_generic().to_bytes() == generic.to_bytes()

    def test_uac2_feature_unit(self):
        d = decode(UAC2_CONTROL, cs_interface(0x06, bytes.fromhex(
            "06 01 0f 00 00 00 0c 00 00 00 07")))
        assert d.subtype == ControlSubtype.FeatureUnit
        assert d.interface.controls == [0x0f, 0x0c]
        assert d.interface.feature_index == 7

    def test_uac2_effect_unit(self):
        d = decode(UAC2_CONTROL, cs_interface(0x07, bytes.fromhex(
            "08 01 00 06 0f 00 00 00 03")))
        assert d.subtype == ControlSubtype.EffectUnit
        assert d.interface.kind == audio.EffectUnitType.ParametricEqualizer
        assert d.interface.controls == [0x0f]
        assert d.interface.effect_index == 3


class TestControlWords:
    def test_effect_unit2_index_read_from_end(self):
        payload = bytes.fromhex("08 01 00 06 0f 00 00 00 aa bb 05")
        unit = audio.EffectUnit2.decode(payload)
        assert unit.controls == [0x0f]
        assert unit.padding == b"\xaa\xbb"
        assert unit.effect_index == 5
        assert unit.encode() == payload

    def test_effect_unit3_index_read_from_end(self):
        payload = bytes.fromhex("08 01 00 06 0f 00 00 00 aa 0c 00")
        unit = audio.EffectUnit3.decode(payload)
        assert unit.controls == [0x0f]
        assert unit.padding == b"\xaa"
        assert unit.effect_descr_str == 0x0c
        assert unit.encode() == payload

    def test_feature_unit2_index_read_from_end(self):
        payload = bytes.fromhex("06 01 0f 00 00 00 aa bb cc 09")
        unit = audio.FeatureUnit2.decode(payload)
        assert unit.controls == [0x0f]
        assert unit.padding == b"\xaa\xbb\xcc"
        assert unit.feature_index == 9
        assert unit.encode() == payload

    def test_feature_unit3_index_read_from_end(self):
        payload = bytes.fromhex("06 01 0f 00 00 00 aa 0d 00")
        unit = audio.FeatureUnit3.decode(payload)
        assert unit.controls == [0x0f]
        assert unit.padding == b"\xaa"
        assert unit.feature_descr_str == 0x0d
        assert unit.encode() == payload

    def test_aligned_unit_has_no_padding(self):
        unit = audio.FeatureUnit2.decode(bytes.fromhex("06 01 0f 00 00 00 09"))
        assert unit.padding == b""
        assert unit == audio.FeatureUnit2(unit_id = 6, source_id = 1,
                                          controls = [0x0f], feature_index = 9)


class TestAudioStreaming:
    def test_general_interface(self):
        d = decode(UAC1_STREAMING, cs_interface(0x01, [1, 1, 0x01, 0x00]))
        assert d.subtype == StreamingSubtype.General
        assert d.interface == audio.StreamingInterface1(
            terminal_link = 1, delay = 1, format_tag = 1)

    def test_general_endpoint(self):
        d = decode(UAC1_STREAMING, cs(0x25, 0x01, [0x01, 0x00, 0x00, 0x00]))
        assert isinstance(d.interface, audio.DataStreamingEndpoint1)
        assert d.interface.attributes == 1

    def test_format_type_i_discrete(self):
        payload = bytes([0x01, 2, 2, 16, 2, 0x44, 0xac, 0x00, 0x80, 0xbb, 0x00])
        d = decode(UAC1_STREAMING, cs_interface(0x02, payload))
        fmt = d.interface
        assert fmt.kind == audio.FormatType.TypeI
        assert fmt.interface.frequencies == [44100, 48000]
        assert not fmt.interface.continuous
        assert fmt.encode() == payload

    def test_format_type_i_continuous(self):
        payload = bytes([0x01, 2, 2, 16, 0, 0x40, 0x1f, 0x00, 0x00, 0x77, 0x01])
        d = decode(UAC1_STREAMING, cs_interface(0x02, payload))
        assert d.interface.interface.continuous
        assert d.interface.interface.frequencies == [8000, 96000]

    def test_format_type_truncated_frequencies(self):
        payload = bytes([0x01, 2, 2, 16, 2, 0x44, 0xac, 0x00])
        d = decode(UAC1_STREAMING, cs_interface(0x02, payload))
        assert isinstance(d.interface, Invalid)

    def test_unknown_format_type(self):
        d = decode(UAC1_STREAMING, cs_interface(0x02, [0x09, 1, 2]))
        assert d.interface.interface == Undefined(b"\x01\x02")

    def test_format_specific_mpeg(self):
        payload = bytes([0x01, 0x10, 0x34, 0x12, 0x05])
        d = decode(UAC1_STREAMING, cs_interface(0x03, payload))
        assert d.interface.interface == audio.MpegFormat(capabilities = 0x1234,
                                                         features = 5)
        assert d.interface.encode() == payload

    def test_uac3_format_type_is_generic(self):
        d = decode(UAC3_STREAMING, cs_interface(0x02, [0x01, 2, 16]))
        assert d.interface == Generic(b"\x01\x02\x10")


class TestMidiRouting:
    def test_jacks_and_endpoint(self):
        data = bytes([6, 0x24, 0x02, 0x01, 0x01, 0x00,
                      9, 0x24, 0x03, 0x01, 0x02, 1, 0x01, 0x01, 0x00,
                      5, 0x25, 0x01, 1, 0x01])
        jack_in, jack_out, endpoint = read_extra(data, MIDI_STREAMING)
        assert isinstance(jack_in, MidiDescriptor)
        assert jack_in.interface.kind == JackType.Embedded
        assert jack_out.interface.sources == [(1, 1)]
        assert jack_out.interface.num_input_pins == 1
        assert endpoint.interface.jack_ids == [1]
        assert b"".join(d.to_generic().to_bytes()
                        for d in (jack_in, jack_out, endpoint)) == data
