"""Unit tests for the alert players and player selection."""

import subprocess
import pyaudio
import pytest
from unittest.mock import Mock, patch

from multalert.audio import (
    DeviceTonePlayer,
    ExternalTonePlayer,
    FilePlaybackPlayer,
    create_alert_player,
)
from multalert.audio.tone import synthesize_tone, tone_to_pcm
from multalert.config import MultAlertConfig


@pytest.mark.unit
class TestFilePlaybackPlayer:
    """Test cases for FilePlaybackPlayer."""

    def test_play_launches_player_without_waiting(self):
        player = FilePlaybackPlayer("/sounds/handbell.wav")

        with patch("multalert.audio.file_player.subprocess.Popen") as mock_popen:
            mock_popen.return_value = Mock(pid=4242)
            assert player.play() is True

        args, kwargs = mock_popen.call_args
        assert args[0] == ["aplay", "-q", "/sounds/handbell.wav"]
        assert kwargs["stdout"] == subprocess.DEVNULL
        mock_popen.return_value.wait.assert_not_called()
        mock_popen.return_value.communicate.assert_not_called()

    def test_custom_player_command(self):
        player = FilePlaybackPlayer("bell.wav", command="paplay")
        assert player.build_command() == ["paplay", "-q", "bell.wav"]

    def test_launch_failure_is_a_warning(self, caplog):
        player = FilePlaybackPlayer("bell.wav", command="no-such-player")

        with patch("multalert.audio.file_player.subprocess.Popen",
                   side_effect=FileNotFoundError("no-such-player")):
            assert player.play() is False

        assert any(r.levelname == "WARNING" for r in caplog.records)

    def test_previous_player_is_polled(self):
        player = FilePlaybackPlayer("bell.wav")
        previous = Mock(pid=1)
        player.last_process = previous

        with patch("multalert.audio.file_player.subprocess.Popen", return_value=Mock(pid=2)):
            player.play()

        previous.poll.assert_called_once()

    def test_initialize_reports_missing_file(self, temp_data_dir):
        player = FilePlaybackPlayer(f"{temp_data_dir}/missing.wav")

        with patch("multalert.audio.file_player.shutil.which", return_value="/usr/bin/aplay"):
            assert player.initialize() is False

    def test_initialize_with_file_and_player(self, temp_data_dir):
        sound = f"{temp_data_dir}/bell.wav"
        with open(sound, "wb") as f:
            f.write(b"RIFF")
        player = FilePlaybackPlayer(sound)

        with patch("multalert.audio.file_player.shutil.which", return_value="/usr/bin/aplay"):
            assert player.initialize() is True

    def test_describe(self):
        assert FilePlaybackPlayer("./handbell.wav").describe() == "WAV file via aplay (./handbell.wav)"


@pytest.mark.unit
class TestExternalTonePlayer:
    """Test cases for ExternalTonePlayer."""

    def test_play_pipes_raw_pcm_and_waits(self, short_tone):
        player = ExternalTonePlayer(short_tone)

        with patch("multalert.audio.external_tone.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
            assert player.play() is True

        args, kwargs = mock_run.call_args
        assert args[0] == ["aplay", "-q", "-t", "raw", "-f", "S16_LE", "-r", "8000", "-c", "1"]
        assert kwargs["input"] == tone_to_pcm(synthesize_tone(short_tone))
        assert len(kwargs["input"]) == 2 * short_tone.num_samples

    def test_tone_is_synthesised_once(self, short_tone):
        player = ExternalTonePlayer(short_tone)

        with patch("multalert.audio.external_tone.synthesize_tone",
                   wraps=synthesize_tone) as mock_synth, \
                patch("multalert.audio.external_tone.subprocess.run",
                      return_value=subprocess.CompletedProcess(args=[], returncode=0)):
            player.play()
            player.play()

        assert mock_synth.call_count == 1

    def test_nonzero_exit_is_failure(self, short_tone):
        player = ExternalTonePlayer(short_tone)

        with patch("multalert.audio.external_tone.subprocess.run",
                   return_value=subprocess.CompletedProcess(args=[], returncode=1)):
            assert player.play() is False

    def test_missing_player_is_failure(self, short_tone):
        player = ExternalTonePlayer(short_tone, command="no-such-player")

        with patch("multalert.audio.external_tone.subprocess.run", side_effect=FileNotFoundError()):
            assert player.play() is False

    def test_hung_player_times_out(self, short_tone):
        player = ExternalTonePlayer(short_tone, timeout=0.5)

        with patch("multalert.audio.external_tone.subprocess.run",
                   side_effect=subprocess.TimeoutExpired(cmd="aplay", timeout=0.5)):
            assert player.play() is False

    def test_default_timeout_covers_tone(self, short_tone):
        assert ExternalTonePlayer(short_tone).timeout > short_tone.duration_ms / 1000.0

    def test_out_of_memory_abandons_alert(self, short_tone):
        player = ExternalTonePlayer(short_tone)

        with patch("multalert.audio.external_tone.synthesize_tone", side_effect=MemoryError), \
                patch("multalert.audio.external_tone.subprocess.run") as mock_run:
            assert player.play() is False

        mock_run.assert_not_called()


@pytest.mark.unit
class TestDeviceTonePlayer:
    """Test cases for DeviceTonePlayer."""

    def test_play_writes_tone_to_default_device(self, mock_pyaudio, short_tone):
        player = DeviceTonePlayer(short_tone)

        assert player.play() is True

        mock_pyaudio['instance'].open.assert_called_once_with(
            format=pyaudio.paInt16,
            channels=1,
            rate=8000,
            output=True,
            output_device_index=None,
        )
        mock_pyaudio['stream'].write.assert_called_once_with(tone_to_pcm(synthesize_tone(short_tone)))
        mock_pyaudio['stream'].stop_stream.assert_called_once()
        mock_pyaudio['stream'].close.assert_called_once()
        mock_pyaudio['instance'].terminate.assert_called_once()

    @pytest.mark.parametrize("device,expected_index", [
        ("default", None),
        (None, None),
        (1, 1),
        ("0", 0),
        ("usb", 1),
        ("Headphones", 0),
    ])
    def test_device_selection(self, mock_pyaudio, short_tone, device, expected_index):
        player = DeviceTonePlayer(short_tone, device=device)

        player.play()

        _, kwargs = mock_pyaudio['instance'].open.call_args
        assert kwargs["output_device_index"] == expected_index

    def test_unknown_device_is_failure(self, mock_pyaudio, short_tone):
        player = DeviceTonePlayer(short_tone, device="HDMI")

        assert player.play() is False
        mock_pyaudio['instance'].open.assert_not_called()
        mock_pyaudio['instance'].terminate.assert_called_once()

    def test_busy_device_is_failure(self, mock_pyaudio, short_tone):
        mock_pyaudio['instance'].open.side_effect = OSError("Device unavailable")
        player = DeviceTonePlayer(short_tone)

        assert player.play() is False
        mock_pyaudio['instance'].terminate.assert_called_once()

    def test_initialize(self, mock_pyaudio, short_tone):
        assert DeviceTonePlayer(short_tone, device="usb").initialize() is True
        assert DeviceTonePlayer(short_tone, device="HDMI").initialize() is False


@pytest.mark.unit
class TestCreateAlertPlayer:
    """Test cases for create_alert_player."""

    def test_default_is_file_playback(self):
        player = create_alert_player(MultAlertConfig())

        assert isinstance(player, FilePlaybackPlayer)
        assert player.file_path == "./handbell.wav"

    def test_tone_mode(self):
        config = MultAlertConfig()
        config.set('alert.mode', 'tone')
        config.set('alert.tone.frequency_hz', 1000)

        player = create_alert_player(config)

        assert isinstance(player, ExternalTonePlayer)
        assert player.settings.frequency_hz == 1000.0
        assert player.settings.duration_ms == 400

    def test_device_mode(self):
        config = MultAlertConfig()
        config.set('alert.mode', 'device')
        config.set('alert.device', 'plughw:0,0')

        player = create_alert_player(config)

        assert isinstance(player, DeviceTonePlayer)
        assert player.device == 'plughw:0,0'

    def test_unknown_mode(self):
        config = MultAlertConfig()
        config.set('alert.mode', 'midi')

        with pytest.raises(ValueError):
            create_alert_player(config)
