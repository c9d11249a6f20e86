"""Tests for purge square emission."""

import io

import pytest

from bleed_squares.exceptions import GeometryError
from bleed_squares.gcode import GCodeEmitter, write_ping
from bleed_squares.models import ExtrusionProfile, GenerationSettings
from bleed_squares.purge import PurgeSquareEmitter
from bleed_squares.tracker import ExtrusionTracker


class RecordingTracker(ExtrusionTracker):
    """Tracker that remembers every delta passed to extrude()."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.deltas = []

    def extrude(self, delta):
        self.deltas.append(delta)
        return super().extrude(delta)


def _lines(out):
    return out.getvalue().splitlines()


class TestPurgeGeometry:
    """Test derived line geometry."""

    def test_line_width(self, profile, settings):
        """5 mm³ / 0.08 mm² = 62.5 mm per line, minus one 0.4 mm Y step."""
        emitter = PurgeSquareEmitter(profile, settings)
        assert emitter.line_width == pytest.approx(62.1)

    def test_footprint(self, profile, settings):
        emitter = PurgeSquareEmitter(profile, settings)
        width, height = emitter.footprint(500.0)
        assert width == pytest.approx(62.5)
        assert height == pytest.approx(40.4)

    def test_pass_consumes_two_line_volumes(self, profile, settings):
        emitter = PurgeSquareEmitter(profile, settings)
        per_pass = 2 * (emitter.x_length + emitter.y_length) * emitter.filament_xsection
        assert per_pass == pytest.approx(2 * settings.line_volume)

    def test_line_volume_too_small_raises_geometry_error(self, profile):
        settings = GenerationSettings(line_volume=0.01)
        with pytest.raises(GeometryError, match="fill line width"):
            PurgeSquareEmitter(profile, settings)


class TestPurgeScenario:
    """200 mm³ square with 0.4 mm lines, 0.2 mm layers and 1.75 mm filament."""

    @pytest.fixture
    def run(self, profile, settings):
        emitter = PurgeSquareEmitter(profile, settings)
        tracker = RecordingTracker(splice_offset=profile.splice_offset)
        out = io.StringIO()
        ystep = emitter.emit(out, tracker, (10.0, 290.0), 200.0)
        return emitter, tracker, out, ystep

    def test_extrudes_positive_length(self, run):
        _, tracker, _, _ = run
        assert tracker.total_extruded > 0

    def test_transition_within_square(self, run):
        emitter, _, _, ystep = run
        _, height = emitter.footprint(200.0)
        assert 0 <= ystep <= height

    def test_current_splice_equals_deltas(self, run):
        _, tracker, _, _ = run
        assert tracker.current_splice == pytest.approx(sum(tracker.deltas))
        assert tracker.total_extruded == pytest.approx(sum(tracker.deltas))

    def test_volume_close_to_target(self, run):
        """Actual volume may exceed the target by at most one zigzag pass."""
        emitter, tracker, _, _ = run
        volume = tracker.total_extruded * emitter.filament_xsection
        assert 200.0 - 1e-9 <= volume <= 200.0 + 2 * emitter.settings.line_volume + 1e-9

    def test_every_extruding_line_accounted(self, run):
        """One extrude() call per G1 line carrying an E value after the prime."""
        _, tracker, out, _ = run
        lines = _lines(out)
        start = lines.index("G1 E0.800 F2100.00") + 3
        extruding = [
            line for line in lines[start:]
            if line.startswith("G1 ") and " E" in line and not line.startswith("G1 E")
        ]
        assert len(extruding) == len(tracker.deltas)

    def test_e_values_are_cumulative(self, run):
        _, tracker, out, _ = run
        e_values = [
            float(line.split(" E")[1].split()[0])
            for line in _lines(out)
            if line.startswith("G1 ") and " E" in line and not line.startswith("G1 E")
        ]
        assert e_values == sorted(e_values)
        assert e_values[-1] == pytest.approx(tracker.total_extruded, abs=1e-4)

    def test_block_framing(self, run):
        _, _, out, _ = run
        text = out.getvalue()
        assert "; --- purge block at 10.00, 290.00 layer height 0.20 ---" in text
        assert text.index("G0 X72.500 Y290.000 F9000") < text.index("G1 Z0.200 F600")
        assert "G1 E-0.800 F2100.00" in text
        assert "G1 Z0.700 F600" in text
        assert text.rstrip().endswith("; --- end purge block ---")

    def test_outline(self, run):
        _, _, out, _ = run
        lines = _lines(out)
        outline = [l for l in lines if l.startswith("G1 Y") or l.startswith("G1 X")][:3]
        assert outline[0].startswith("G1 Y273.600 ")
        assert outline[1].startswith("G1 X10.000 ")
        assert outline[2].startswith("G1 Y290.000 ")

    def test_zigzag_alternates(self, run):
        _, _, out, _ = run
        xs = [l.split()[1] for l in _lines(out) if l.startswith("G1 X")][1:]
        assert xs[0] == "X72.300"
        assert xs[1] == "X10.200"
        assert all(a != b for a, b in zip(xs, xs[1:]))


class TestTransitionStep:
    """Transition distance depends on the splice offset."""

    def test_zero_offset_gives_zero_transition(self, settings):
        tracker = ExtrusionTracker(splice_offset=0.0)
        profile_no_offset = ExtrusionProfile(
            extrusion_width=0.4,
            layer_height=0.2,
            filament_diameter=1.75,
            retract_length=0.8,
            retract_speed=35.0,
            splice_offset=0.0,
        )
        emitter = PurgeSquareEmitter(profile_no_offset, settings)
        assert emitter.emit(io.StringIO(), tracker, (0.0, 100.0), 500.0) == 0.0

    def test_offset_counts_steps_inside_margin(self, profile, settings):
        """With a 30 mm offset the transition covers the steps before 30 mm of splice."""
        emitter = PurgeSquareEmitter(profile, settings)
        tracker = RecordingTracker()
        ystep = emitter.emit(io.StringIO(), tracker, (0.0, 100.0), 500.0)

        # replay the accounting: every second delta after the outline is a Y step
        running = sum(tracker.deltas[:3])
        expected = 0.0
        for i, delta in enumerate(tracker.deltas[3:]):
            running += delta
            if i % 2 == 1 and running < profile.splice_offset:
                expected += profile.extrusion_width
        assert ystep == pytest.approx(expected)
        assert ystep > 0

    def test_huge_offset_covers_whole_fill(self, settings):
        profile = ExtrusionProfile(
            extrusion_width=0.4,
            layer_height=0.2,
            filament_diameter=1.75,
            retract_length=0.8,
            retract_speed=35.0,
            splice_offset=1e6,
        )
        emitter = PurgeSquareEmitter(profile, settings)
        out = io.StringIO()
        ystep = emitter.emit(out, ExtrusionTracker(), (0.0, 100.0), 500.0)
        y_steps = [l for l in _lines(out) if l.startswith("G1 Y")][2:]
        assert ystep == pytest.approx(len(y_steps) * 0.4)
        assert ystep <= emitter.footprint(500.0)[1]


class TestPing:
    """Ping emission inside the fill."""

    def test_write_ping(self):
        tracker = ExtrusionTracker()
        tracker.extrude(351.0)
        out = io.StringIO()
        write_ping(out, tracker)
        assert _lines(out) == [
            "; -- ping! -- ",
            "G4 S0",
            "O31 D43AF8000",
            "; -- /ping -- ",
        ]
        assert tracker.since_last_ping == 0.0

    def test_ping_before_next_extruding_line(self, profile, settings):
        """Crossing the threshold pings once, before the following line."""
        emitter = GCodeEmitter(profile, settings)
        tracker = ExtrusionTracker()
        tracker.extrude(349.9)
        out = io.StringIO()

        emitter._extrude(out, tracker, 0.2)
        assert out.getvalue() == ""
        assert tracker.ping_due(profile.linear_ping)

        emitter._extrude(out, tracker, 0.2)
        assert len(tracker.pings) == 1
        assert tracker.pings[0].position == pytest.approx(350.1)
        assert tracker.since_last_ping == pytest.approx(0.2)
        assert out.getvalue().count("ping!") == 1

    def test_square_pings_at_threshold(self, profile, settings):
        emitter = PurgeSquareEmitter(profile, settings)
        tracker = ExtrusionTracker()
        tracker.extrude(349.99)
        out = io.StringIO()
        emitter.emit(out, tracker, (0.0, 100.0), 500.0)

        lines = _lines(out)
        ping_at = lines.index("; -- ping! -- ")
        # first outline edge crosses the threshold, ping precedes the second edge
        assert lines[ping_at - 1].startswith("G1 Y59.600 ")
        assert lines[ping_at + 4].startswith("G1 X0.000 ")
        assert len(tracker.pings) == 1
        assert tracker.pings[0].position > 350.0
