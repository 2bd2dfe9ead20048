import pytest

from till.app.printing import commands as cmd
from till.app.printing.commands import QrModel1, QrModel2


def test_fixed_sequences_are_byte_exact():
    assert cmd.INIT == b"\x1b@"
    assert cmd.ALIGN_CENTER == bytes([0x1B, 0x61, 0x01])
    assert cmd.FONT_B == bytes([0x1B, 0x4D, 0x01])
    assert cmd.CUT_FULL == bytes([0x1B, 0x69])
    assert cmd.FEED_LINE == b"\n"


def test_feed_generators():
    assert cmd.feed_lines(3) == bytes([0x1B, 0x64, 3])
    assert cmd.feed_units(24) == bytes([0x1B, 0x4A, 24])
    assert cmd.line_spacing(30) == bytes([0x1B, 0x33, 30])


@pytest.mark.parametrize("n", [-1, 256])
def test_generator_parameters_must_fit_a_byte(n):
    with pytest.raises(ValueError):
        cmd.feed_lines(n)


def test_model1_store_length_counts_sub_header():
    data = b"1736937000000"
    frame = QrModel1.store(data)
    assert frame[:3] == b"\x1d(k"
    length = frame[3] | (frame[4] << 8)
    assert length == len(data) + 3
    assert frame[5:8] == b"\x31\x50\x30"
    assert frame[8:] == data


def test_model1_store_uses_little_endian_high_byte():
    frame = QrModel1.store(b"x" * 300)
    assert frame[3:5] == bytes([303 & 0xFF, 303 >> 8])


def test_model1_encode_sequence():
    encoded = QrModel1(module_size=6, error_level=49).encode("42")
    assert encoded == (
        QrModel1.MODEL
        + b"\x1d\x28\x6b\x03\x00\x31\x43\x06"
        + b"\x1d\x28\x6b\x03\x00\x31\x45\x31"
        + b"\x1d\x28\x6b\x05\x00\x31\x50\x3042"
        + QrModel1.PRINT
    )


def test_model2_prefix_is_exact_payload_length():
    encoded = QrModel2(size=3).encode("123456")
    assert encoded[:5] == QrModel2.HEADER
    assert encoded[5] == 3
    assert encoded[6:8] == bytes([6, 0])
    assert encoded[8:] == b"123456"


def test_dialects_reject_payloads_they_cannot_frame():
    assert QrModel1().encode("x" * (0xFFFF - 2)) is None
    assert QrModel2().encode("x" * (0xFFFF - 2)) is not None
    assert QrModel2().encode("x" * 0x10000) is None
