from .protracker import ProTracker, ModSong
from .mus import MUS
from .sequencer import PatternSequencer
