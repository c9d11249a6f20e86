"""Tests for the splicer header encoder."""

import io

import pytest

from bleed_squares.exceptions import EncodingOverflowError
from bleed_squares.header import HeaderEncoder
from bleed_squares.ledger import PingLedger, SpliceLedger
from bleed_squares.models import GenerationSettings, Ping, Splice
from bleed_squares.profiles import InputPreset, create_inputs


@pytest.fixture
def ledgers():
    splices = SpliceLedger()
    splices.append(Splice(tool=0, position=30.0, length=100.0))
    splices.append(Splice(tool=1, position=130.0, length=250.5))
    pings = PingLedger()
    pings.append(Ping(351.0))
    return splices, pings


def _encode(splices, pings, total, settings=None, profile_id="0123456789abcdef"):
    out = io.StringIO()
    HeaderEncoder(profile_id, settings or GenerationSettings()).encode(
        out, splices, pings, total
    )
    return out.getvalue()


class TestHeaderEncoder:
    """Test HeaderEncoder.encode() field order and formatting."""

    def test_field_order(self, ledgers):
        lines = _encode(*ledgers, 350.5).splitlines()
        assert lines[:12] == [
            "O21 D0014 ; msf version 2.0 (20 = 0x14)",
            "O22 D0123456789abcdef",
            "O23 D0001 ; unused",
            "O24 D0000 ; unused",
            "O25 D1FFFFFFWhite_PLA D10F80FFDodgerBlue_PLA D1E8D89AKhaki_PLA "
            "D1000000Black_PLA ; inputs: filament type + hex color + color_material",
            "O26 D0002 ; number of splices",
            "O27 D0001 ; number of pings",
            "O28 D0001 ; number of splice algorithms",
            "O29 D0000 ; number of hotswaps",
            "O30 D0 D43020000",
            "O30 D1 D43BE4000",
            "O32 D11 D0000 D0000 D0000 ; splice algorithm table",
        ]

    def test_total_truncated_to_integer(self, ledgers):
        text = _encode(*ledgers, 2867.9)
        assert "O1 Dbleedsquares D00000B33\n" in text

    def test_splice_comments(self, ledgers):
        text = _encode(*ledgers, 380.5)
        assert "; Tool: 0 Location: 30.00 length 100.00  ends 130.00 (D43020000)" in text
        assert "; Tool: 1 Location: 130.00 length 250.50  ends 380.50 (D43BE4000)" in text

    def test_reset_block_last(self, ledgers):
        lines = _encode(*ledgers, 380.5).splitlines()
        assert lines[-3:] == ["M0", "T0", "M107"]

    def test_custom_inputs_and_job_name(self, ledgers):
        settings = GenerationSettings(
            inputs=create_inputs(InputPreset.PRIMARY), job_name="mytest"
        )
        text = _encode(*ledgers, 10.0, settings=settings)
        assert "O25 D1FFFFFFWhite_PLA D1FF0000Red_PLA" in text
        assert "O1 Dmytest D0000000A" in text

    def test_empty_ledgers(self):
        text = _encode(SpliceLedger(), PingLedger(), 0.0)
        assert "O26 D0000 ; number of splices" in text
        assert "O30" not in text


class TestHeaderOverflow:
    """Counts that do not fit their fields raise instead of wrapping."""

    def test_too_many_pings(self, ledgers):
        splices, _ = ledgers
        pings = [Ping(float(i)) for i in range(0x10000)]
        with pytest.raises(EncodingOverflowError, match="ping count"):
            _encode(splices, pings, 10.0)

    def test_total_too_large(self, ledgers):
        with pytest.raises(EncodingOverflowError, match="total extrusion"):
            _encode(*ledgers, float(2**32))

    def test_nothing_written_on_overflow(self, ledgers):
        out = io.StringIO()
        with pytest.raises(EncodingOverflowError):
            HeaderEncoder("id", GenerationSettings()).encode(out, *ledgers, float(2**32))
        assert out.getvalue() == ""
