"""Tests for commands/play.py"""

import argparse
from unittest.mock import Mock, patch

import pytest

from chakrabeats.commands.play import add_play_parser, describe, format_bars, play_command
from chakrabeats.config import AppConfig, EngineConfig, OutputConfig
from chakrabeats.engine import AudioUnavailable, EngineState, SynthesisEngine


def parse(argv):
    parser = argparse.ArgumentParser()
    subparsers = parser.add_subparsers(dest="command")
    add_play_parser(subparsers)
    return parser.parse_args(["play"] + argv)


class TestFormatting:
    """Test output helpers."""

    def test_format_bars(self):
        """Test bar glyph mapping."""
        assert format_bars([0.0, 50.0, 100.0]) == " ▄█"

    def test_format_bars_clamps(self):
        """Test values out of range are clamped."""
        assert format_bars([-10.0, 250.0]) == " █"

    def test_describe_with_preset(self):
        """Test the status line includes preset ids."""
        engine = SynthesisEngine(stream_factory=Mock())
        engine.apply_preset("heart", "relax")
        text = describe(engine.get_state())
        assert "L 639.0 Hz" in text
        assert "beat 6.0 Hz" in text
        assert "preset heart/relax" in text


class TestPlayCommand:
    """Test play_command."""

    def setup_method(self):
        """Set up test fixtures."""
        config = AppConfig(engine=EngineConfig(), output=OutputConfig())
        self.engine = SynthesisEngine(config, stream_factory=Mock(return_value=Mock(active=False)))

    @patch("chakrabeats.commands.play.time.sleep")
    @patch("chakrabeats.commands.play.time.monotonic")
    @patch("chakrabeats.commands.play.get_engine")
    def test_plays_for_duration(self, mock_get_engine, mock_monotonic, mock_sleep, capsys):
        """Test play starts, waits out the duration and stops."""
        mock_get_engine.return_value = self.engine
        mock_monotonic.side_effect = [0.0, 0.0, 1.0, 2.0]
        args = parse(["--chakra", "heart", "--offset", "relax", "--seconds", "2", "--gain", "0.2"])

        assert play_command(args) == 0

        assert self.engine.state is EngineState.IDLE
        state = self.engine.get_state()
        assert (state.left_freq, state.right_freq) == (639.0, 645.0)
        assert state.gain == 0.2
        assert mock_sleep.call_count == 2
        out = capsys.readouterr().out
        assert "Playing:" in out
        assert "Stopped." in out

    @patch("chakrabeats.commands.play.time.sleep")
    @patch("chakrabeats.commands.play.time.monotonic")
    @patch("chakrabeats.commands.play.get_engine")
    def test_prints_bars(self, mock_get_engine, mock_monotonic, mock_sleep, capsys):
        """Test --bars prints one line per interval."""
        mock_get_engine.return_value = self.engine
        mock_monotonic.side_effect = [0.0, 0.0, 5.0]
        assert play_command(parse(["--seconds", "1", "--bars"])) == 0
        assert "L [" in capsys.readouterr().out

    @patch("chakrabeats.commands.play.time.sleep", side_effect=KeyboardInterrupt)
    @patch("chakrabeats.commands.play.get_engine")
    def test_interrupt_stops_engine(self, mock_get_engine, mock_sleep):
        """Test Ctrl+C still stops the engine."""
        mock_get_engine.return_value = self.engine
        with pytest.raises(KeyboardInterrupt):
            play_command(parse([]))
        assert self.engine.state is EngineState.IDLE

    @patch("chakrabeats.commands.play.get_engine")
    def test_audio_unavailable(self, mock_get_engine, capsys):
        """Test a failed start reports and exits 1."""
        engine = Mock()
        engine.start.side_effect = AudioUnavailable("no output device")
        mock_get_engine.return_value = engine
        assert play_command(parse(["--seconds", "1"])) == 1
        assert "Couldn't start audio" in capsys.readouterr().out

    @patch("chakrabeats.commands.play.get_engine")
    def test_explicit_frequencies(self, mock_get_engine):
        """Test --base/--beat override presets."""
        mock_get_engine.return_value = self.engine
        with patch("chakrabeats.commands.play.time.sleep", side_effect=KeyboardInterrupt):
            with pytest.raises(KeyboardInterrupt):
                play_command(parse(["--chakra", "root", "--base", "300", "--beat", "9"]))
        state = self.engine.get_state()
        assert (state.left_freq, state.right_freq) == (300.0, 309.0)
        assert state.chakra_id is None

    @patch("chakrabeats.commands.play.get_engine")
    def test_custom_offset_with_other_offset(self, mock_get_engine, caplog):
        """Test --custom-offset with a non-custom --offset exits 2 without touching the slot."""
        mock_get_engine.return_value = self.engine
        args = parse(["--offset", "focus", "--custom-offset", "7", "--seconds", "1"])
        assert play_command(args) == 2
        assert "custom_offset" in caplog.text
        assert self.engine.catalog.custom_offset == 4.0
        assert self.engine.state is EngineState.IDLE
