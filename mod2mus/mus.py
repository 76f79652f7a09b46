# Code to export MUS files, the sequenced music format of Psycho Pinball and Micro Machines 2
#
# A MUS file is a "SONG" chunk (header followed by the event stream) and then one "SMPL" chunk
# (header followed by raw 8-bit sample data) per non-empty sample.  Chunk sizes include the
# chunk's own header.  All multi-byte fields are little-endian.

from dataclasses import dataclass, field
from mod2mus import base
from mod2mus import constants
from mod2mus.byte_util import little_endian_bytes, little_endian_int, pad_or_truncate, c_string, \
    blank_control_chars, write_binary_file
from mod2mus.sequencer import PatternSequencer
from mod2mus.errors import *


@dataclass
class MusSampleReference:
    name: bytes = b''
    finetune: int = 0
    volume: int = 0

    def to_bytes(self):
        result = bytearray()
        result += pad_or_truncate(self.name, constants.MUS_NAME_LEN)
        result.append(self.finetune)
        result.append(self.volume)
        return result

    @classmethod
    def from_bytes(cls, in_bytes, starting_index=0):
        i = starting_index + constants.MUS_NAME_LEN
        return cls(bytes(in_bytes[starting_index:i]), in_bytes[i], in_bytes[i + 1])


@dataclass
class MusSongHeader:
    name: bytes = b''
    samples: list = field(
        default_factory=lambda: [MusSampleReference() for _ in range(constants.MUS_NUM_SAMPLES)])
    num_channels: int = 0
    restart_pos: int = 0   #: byte offset into the event stream where looped playback resumes
    music_size: int = 0    #: length of the event stream

    @property
    def chunk_size(self):
        return constants.MUS_SONG_HEADER_LEN + self.music_size

    def to_bytes(self):
        """
        Converts the song header into MUS bytes.
        :return: the 1108-byte song header
        :rtype: bytes
        """
        result = bytearray()
        result += constants.MUS_SONG_ID
        result += little_endian_bytes(self.chunk_size, 4)
        result += pad_or_truncate(self.name, constants.MUS_NAME_LEN)
        for sample in self.samples:
            result += sample.to_bytes()
        result += little_endian_bytes(0, 2)  # unknown, always 0
        result += little_endian_bytes(self.num_channels, 4)
        result += little_endian_bytes(self.restart_pos, 4)
        result += little_endian_bytes(self.music_size, 4)
        return result

    @classmethod
    def from_bytes(cls, in_bytes, starting_index=0):
        """
        Constructor that builds a song header from MUS bytes

        :param in_bytes: Raw MUS bytes
        :type in_bytes: bytes
        :param starting_index: starting index in in_bytes from which to start parsing, defaults to 0
        :type starting_index: int, optional
        :return: new MusSongHeader instance
        :rtype: MusSongHeader
        """
        if starting_index + constants.MUS_SONG_HEADER_LEN > len(in_bytes):
            raise Mod2MusFormatError("Error: index out of range when instantiating MusSongHeader")
        if in_bytes[starting_index:starting_index + 4] != constants.MUS_SONG_ID:
            raise Mod2MusFormatError("Error: missing SONG chunk")

        i = starting_index + 8
        result = cls()
        result.name = bytes(in_bytes[i:i + constants.MUS_NAME_LEN])
        i += constants.MUS_NAME_LEN
        result.samples = []
        for _ in range(constants.MUS_NUM_SAMPLES):
            result.samples.append(MusSampleReference.from_bytes(in_bytes, i))
            i += constants.MUS_SAMPLE_REF_LEN
        i += 2
        result.num_channels = little_endian_int(in_bytes[i:i + 4])
        result.restart_pos = little_endian_int(in_bytes[i + 4:i + 8])
        result.music_size = little_endian_int(in_bytes[i + 8:i + 12])
        return result


@dataclass
class MusSampleHeader:
    name: bytes = b''
    loop_start: int = 0   #: in bytes; equal to sample_size when the sample doesn't loop
    sample_size: int = 0  #: in bytes

    @property
    def chunk_size(self):
        return constants.MUS_SAMPLE_HEADER_LEN + self.sample_size

    def is_looped(self):
        return self.loop_start < self.sample_size

    def to_bytes(self):
        result = bytearray()
        result += constants.MUS_SAMPLE_ID
        result += little_endian_bytes(self.chunk_size, 4)
        result += pad_or_truncate(self.name, constants.MUS_NAME_LEN)
        result += little_endian_bytes(self.loop_start, 4)
        result += little_endian_bytes(self.sample_size, 4)
        return result

    @classmethod
    def from_bytes(cls, in_bytes, starting_index=0):
        if starting_index + constants.MUS_SAMPLE_HEADER_LEN > len(in_bytes):
            raise Mod2MusFormatError("Error: index out of range when instantiating MusSampleHeader")
        if in_bytes[starting_index:starting_index + 4] != constants.MUS_SAMPLE_ID:
            raise Mod2MusFormatError("Error: missing SMPL chunk")

        i = starting_index + 8
        result = cls()
        result.name = bytes(in_bytes[i:i + constants.MUS_NAME_LEN])
        i += constants.MUS_NAME_LEN
        result.loop_start = little_endian_int(in_bytes[i:i + 4])
        result.sample_size = little_endian_int(in_bytes[i + 4:i + 8])
        return result


def song_name(mod_name):
    """
    Converts a MOD song name field into a MUS name field

    :param mod_name: raw MOD song name (20 bytes)
    :type mod_name: bytes
    :return: 32-byte MUS name
    :rtype: bytes
    """
    name = c_string(mod_name[:constants.MOD_SONG_NAME_LEN])
    return pad_or_truncate(blank_control_chars(name), constants.MUS_NAME_LEN)


def sample_name(slot, mod_name):
    """
    Builds a MUS sample name: the two-digit slot number, a colon, and the MOD sample name

    :param slot: 1-based sample slot
    :type slot: int
    :param mod_name: raw MOD sample name (22 bytes)
    :type mod_name: bytes
    :return: 32-byte MUS name, e.g. b'01:bassdrum'
    :rtype: bytes
    """
    name = blank_control_chars(c_string(mod_name[:constants.MOD_SAMPLE_NAME_LEN]))
    return pad_or_truncate(b'%02d:' % slot + name, constants.MUS_NAME_LEN)


def build_sample_header(slot, mod_sample):
    """
    Derives the MUS sample header for a MOD sample.  MOD lengths and loop points are in words.

    A loop is kept when it is longer than one word and starts inside the sample.  The exported
    sample ends where the loop ends (but never past the sample's own data).  Without a loop the
    whole sample is exported and the loop point sits at its end.

    :param slot: 1-based sample slot
    :type slot: int
    :param mod_sample: the MOD sample header
    :type mod_sample: protracker.ModSampleHeader
    :return: the MUS sample header
    :rtype: MusSampleHeader
    """
    result = MusSampleHeader(name=sample_name(slot, mod_sample.name))
    if mod_sample.loop_length > 1 and mod_sample.loop_start < mod_sample.length:
        result.loop_start = mod_sample.loop_start * 2
        result.sample_size = min(result.loop_start + mod_sample.loop_length * 2, mod_sample.byte_length)
    else:
        result.sample_size = mod_sample.byte_length
        result.loop_start = result.sample_size
    return result


def build_sample_reference(slot, mod_sample):
    """
    Derives the song header's entry for a MOD sample.  Empty samples get an all-zero entry.
    """
    if mod_sample.is_empty():
        return MusSampleReference()
    return MusSampleReference(name=sample_name(slot, mod_sample.name),
                              finetune=mod_sample.finetune & 0x0F,
                              volume=min(mod_sample.volume, constants.MUS_MAX_VOLUME))


class MUS(base.Mod2MusIO):
    """
    The IO interface for MUS files

    Supports export of a ModSong to MUS
    """
    @classmethod
    def cts_type(cls):
        return 'MUS'

    def __init__(self):
        base.Mod2MusIO.__init__(self)
        self.set_options(verbose=True)

    def set_options(self, **kwargs):
        """
        Sets options for this module, with validation when required

        :param kwargs: keyword arguments for options
        :type kwargs: keyword arguments
        """
        for op, val in kwargs.items():
            op = op.lower()  # All option names must be lowercase
            if op != 'verbose':
                raise Mod2MusValueError(f'Error: Unknown option "{op}"')
            self._options[op] = val

    def build_song_header(self, mod_song):
        """
        Builds the song header, minus the fields that depend on the event stream

        :param mod_song: the source song
        :type mod_song: protracker.ModSong
        :return: song header
        :rtype: MusSongHeader
        """
        result = MusSongHeader(name=song_name(mod_song.header.name), num_channels=mod_song.num_channels)
        if not c_string(result.name):
            self.warn("song name is empty")
        result.samples = [build_sample_reference(i + 1, mod_sample)
                          for i, mod_sample in enumerate(mod_song.header.samples)]
        return result

    def to_bin(self, mod_song, **kwargs):
        """
        Convert a ModSong into MUS file format

        :param mod_song: parsed MOD
        :type mod_song: protracker.ModSong
        :return: MUS binary file format
        :rtype: bytearray

        :keyword options:
            * **verbose** (bool) - print warnings.  Defaults to True
        """
        self.set_options(**kwargs)

        song_header = self.build_song_header(mod_song)
        music = PatternSequencer().sequence(mod_song)
        song_header.restart_pos = music.restart_offset
        song_header.music_size = len(music.data)

        result = bytearray()
        result += song_header.to_bytes()
        result += music.data

        for i, (mod_sample, sample_data) in enumerate(zip(mod_song.header.samples, mod_song.sample_data())):
            if mod_sample.is_empty():
                continue
            sample_header = build_sample_header(i + 1, mod_sample)
            result += sample_header.to_bytes()
            result += sample_data[:sample_header.sample_size]
        return result

    def to_file(self, mod_song, filename, **kwargs):
        """
        Convert and save a ModSong as a MUS file

        :param mod_song: parsed MOD
        :type mod_song: protracker.ModSong
        :param filename: output path and file name
        :type filename: str

        :keyword options:  see `to_bin()`
        """
        write_binary_file(filename, self.to_bin(mod_song, **kwargs))
