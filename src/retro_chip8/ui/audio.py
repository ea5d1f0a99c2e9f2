# src/retro_chip8/ui/audio.py
"""
ビープ音出力モジュール。

サウンドタイマーが非ゼロの間、矩形波を再生します。
QtMultimediaのQAudioSinkをプルモードで使用し、QIODeviceから波形を連続生成します。
"""
import logging
import struct

from PySide6.QtCore import QIODevice
from PySide6.QtMultimedia import QAudio, QAudioFormat, QAudioSink, QMediaDevices

from retro_chip8.config.models import AudioConfig

logger = logging.getLogger(__name__)

# @intent:responsibility 指定周波数の矩形波（16bit符号付きモノラル）を無限に生成するデバイスです。
class SquareWaveGenerator(QIODevice):
    def __init__(self, config: AudioConfig, parent=None):
        super().__init__(parent)
        amplitude = int(32767 * max(0.0, min(1.0, config.volume)))
        half_period = max(1, config.sample_rate // (2 * max(1, config.tone_hz)))
        samples = [amplitude] * half_period + [-amplitude] * half_period
        self._period = struct.pack(f"<{len(samples)}h", *samples)
        self._position = 0

    def readData(self, maxlen: int) -> bytes:
        # 1周期分のバイト列を繰り返し切り出す
        maxlen -= maxlen % 2
        chunk = bytearray()
        while len(chunk) < maxlen:
            take = min(maxlen - len(chunk), len(self._period) - self._position)
            chunk += self._period[self._position:self._position + take]
            self._position = (self._position + take) % len(self._period)
        return bytes(chunk)

    def writeData(self, data: bytes) -> int:
        return 0

    def bytesAvailable(self) -> int:
        return len(self._period) + super().bytesAvailable()

    def isSequential(self) -> bool:
        return True

# @intent:responsibility サウンドタイマーの状態に応じてトーンのオン/オフを切り替えます。
class Beeper:
    """
    外部音声コラボレータ。set_active(True) の間だけトーンを鳴らします。
    出力デバイスが無い環境では無音で動作します。
    """
    def __init__(self, config: AudioConfig):
        self._config = config
        self._active = False
        self._sink = None
        self._generator = None

        if not config.enabled:
            return
        device = QMediaDevices.defaultAudioOutput()
        if device.isNull():
            logger.warning("No audio output device available; sound disabled.")
            return

        audio_format = QAudioFormat()
        audio_format.setSampleRate(config.sample_rate)
        audio_format.setChannelCount(1)
        audio_format.setSampleFormat(QAudioFormat.SampleFormat.Int16)

        self._generator = SquareWaveGenerator(config)
        self._generator.open(QIODevice.OpenModeFlag.ReadOnly)
        self._sink = QAudioSink(device, audio_format)

    @property
    def available(self) -> bool:
        return self._sink is not None

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        if active == self._active:
            return
        self._active = active
        if self._sink is None:
            return
        if active:
            if self._sink.state() == QAudio.State.SuspendedState:
                self._sink.resume()
            else:
                self._sink.start(self._generator)
        else:
            self._sink.suspend()

    def stop(self) -> None:
        self._active = False
        if self._sink is not None:
            self._sink.stop()
