"""
Collaborators the engine reports to: render sinks, score keeping and audio.
"""

from .sinks import RenderSink, RecordingRenderSink, BoardView, ScoreSink, ScoreBoard
from .audio_service import AudioSink, NullAudio, AudioService

__all__ = [
    'RenderSink',
    'RecordingRenderSink',
    'BoardView',
    'ScoreSink',
    'ScoreBoard',
    'AudioSink',
    'NullAudio',
    'AudioService',
]
