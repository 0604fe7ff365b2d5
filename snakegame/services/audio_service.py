"""
Audio cues for the engine.

AudioService plays short clips through pygame.mixer. Loading and playback
problems are logged and otherwise ignored; a missing sound never stops a
game.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from ..domain.constants import Sound  # noqa: E402

logger = logging.getLogger(__name__)

SOUND_EXTENSIONS = (".wav", ".ogg")


class AudioSink:
    """Base class/interface for audio collaborators."""

    def play(self, cue: Union[Sound, str]) -> None:
        raise NotImplementedError

    def release(self) -> None:
        """Free any clips held by the sink."""
        raise NotImplementedError


class NullAudio(AudioSink):
    """An audio sink that plays nothing."""

    def play(self, cue: Union[Sound, str]) -> None:
        return None

    def release(self) -> None:
        return None


class AudioService(AudioSink):
    """
    Loads named sound clips and plays them on demand.

    The mixer is initialised lazily on the first load. If this service
    initialised it, shutdown() also shuts it down.
    """

    def __init__(self):
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self._owns_mixer = False

    @property
    def loaded(self) -> Dict[str, "pygame.mixer.Sound"]:
        return dict(self._sounds)

    def _ensure_mixer(self) -> None:
        if pygame.mixer.get_init() is None:
            pygame.mixer.init()
            self._owns_mixer = True

    def load_sound(self, cue: Union[Sound, str], path: Union[str, Path]) -> None:
        """
        Load a clip for a cue, replacing any clip already loaded for it.

        Raises:
            FileNotFoundError: if the file does not exist
            pygame.error: if the mixer cannot be opened or the file cannot be decoded
        """
        key = Sound(cue).value
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Sound file not found: {path}")
        self._ensure_mixer()
        self._sounds[key] = pygame.mixer.Sound(str(path))
        logger.debug(f"Loaded sound '{key}' from {path}")

    def load_sounds(self, directory: Union[str, Path]) -> int:
        """
        Load every cue found in a directory as <cue>.wav or <cue>.ogg.

        Cues that are missing or fail to load are logged and skipped.

        Returns:
            Number of cues loaded
        """
        directory = Path(directory)
        loaded = 0
        for cue in Sound:
            path = self._find_clip(directory, cue.value)
            if path is None:
                logger.warning(f"No sound file for cue '{cue.value}' in {directory}")
                continue
            try:
                self.load_sound(cue, path)
                loaded += 1
            except (pygame.error, OSError) as e:
                logger.warning(f"Failed to load sound '{cue.value}' from {path}: {e}")
        logger.info(f"Loaded {loaded}/{len(Sound)} sound cues from {directory}")
        return loaded

    @staticmethod
    def _find_clip(directory: Path, name: str) -> Optional[Path]:
        for extension in SOUND_EXTENSIONS:
            candidate = directory / f"{name}{extension}"
            if candidate.is_file():
                return candidate
        return None

    def play(self, cue: Union[Sound, str]) -> Optional["pygame.mixer.Channel"]:
        """
        Play a cue from the start, restarting it if it is already playing.

        Returns the channel it plays on, or None if the cue is not loaded.
        """
        key = Sound(cue).value
        sound = self._sounds.get(key)
        if sound is None:
            logger.warning(f"Sound clip '{key}' not found.")
            return None
        if sound.get_num_channels() > 0:
            sound.stop()
        return sound.play()

    def release(self) -> None:
        """
        Drop all loaded clips.

        A clip that is still playing finishes on its channel.
        """
        count = len(self._sounds)
        self._sounds.clear()
        logger.debug(f"Released {count} sound clips")

    def shutdown(self) -> None:
        self.release()
        if self._owns_mixer and pygame.mixer.get_init() is not None:
            pygame.mixer.quit()
            self._owns_mixer = False
