# Code to import ProTracker .mod files
#
# Notes:
# - Only the 31-sample format with the 1CHN, 2CHN, 3CHN and M.K. signatures is supported
# - All multi-byte MOD fields are big-endian; lengths and loop points are in 16-bit words

import collections
from dataclasses import dataclass, field
import more_itertools as moreit
from mod2mus import base
from mod2mus import constants
from mod2mus.byte_util import big_endian_bytes, big_endian_int, pad_or_truncate, read_binary_file
from mod2mus.errors import *


class ModCell(collections.namedtuple('ModCell', ['period', 'instrument', 'effect', 'param'])):
    """
    One channel's note/effect record for one row of one pattern
    """
    __slots__ = ()

    @classmethod
    def from_bytes(cls, cell_bytes):
        """
        Unpacks a 4-byte MOD cell

        Byte layout: iiiipppp pppppppp iiiieeee xxxxxxxx
        (i = sample number, p = period, e = effect, x = effect parameter)

        :param cell_bytes: the packed cell
        :type cell_bytes: bytes
        :return: unpacked cell
        :rtype: ModCell
        """
        if len(cell_bytes) != constants.MOD_CELL_LEN:
            raise Mod2MusValueError(f"Error: MOD cell must be 4 bytes, got {len(cell_bytes)}")
        b0, b1, b2, b3 = cell_bytes
        period = ((b0 & 0x0F) << 8) | b1
        instrument = (b2 >> 4) | (b0 & 0x10)
        return cls(period, instrument, b2 & 0x0F, b3)

    def to_bytes(self):
        return bytes([
            (self.instrument & 0x10) | ((self.period >> 8) & 0x0F),
            self.period & 0xFF,
            ((self.instrument & 0x0F) << 4) | (self.effect & 0x0F),
            self.param & 0xFF,
        ])


EMPTY_CELL = ModCell(0, 0, 0, 0)


@dataclass
class ModSampleHeader:
    name: bytes = b''       #: raw 22-byte name field
    length: int = 0         #: sample length in words
    finetune: int = 0
    volume: int = 0
    loop_start: int = 0     #: loop start in words
    loop_length: int = 0    #: loop length in words

    @property
    def byte_length(self):
        return self.length * 2

    def is_empty(self):
        """
        Samples shorter than one word pair carry no usable data and are dropped on export
        """
        return self.length < 2

    def to_bytes(self):
        """
        Converts a sample header into MOD bytes.
        :return: bytes that represent the sample header
        :rtype: bytes
        """
        result = bytearray()
        result += pad_or_truncate(self.name, constants.MOD_SAMPLE_NAME_LEN)
        result += big_endian_bytes(self.length, 2)
        result.append(self.finetune)
        result.append(self.volume)
        result += big_endian_bytes(self.loop_start, 2)
        result += big_endian_bytes(self.loop_length, 2)
        return result

    @classmethod
    def from_bytes(cls, in_bytes, starting_index=0):
        """
        Constructor that builds a sample header from MOD bytes

        :param in_bytes: Raw MOD bytes
        :type in_bytes: bytes
        :param starting_index: starting index in in_bytes from which to start parsing, defaults to 0
        :type starting_index: int, optional
        :return: new ModSampleHeader instance
        :rtype: ModSampleHeader
        """
        if starting_index + constants.MOD_SAMPLE_HEADER_LEN > len(in_bytes):
            raise Mod2MusValueError("Error: index out of range when instantiating ModSampleHeader")

        i = starting_index + constants.MOD_SAMPLE_NAME_LEN
        result = cls()
        result.name = bytes(in_bytes[starting_index:i])
        result.length = big_endian_int(in_bytes[i:i + 2])
        result.finetune = in_bytes[i + 2]
        result.volume = in_bytes[i + 3]
        result.loop_start = big_endian_int(in_bytes[i + 4:i + 6])
        result.loop_length = big_endian_int(in_bytes[i + 6:i + 8])
        return result


@dataclass
class ModHeader:
    name: bytes = b''  #: raw 20-byte song name field
    samples: list = field(
        default_factory=lambda: [ModSampleHeader() for _ in range(constants.MOD_NUM_SAMPLES)])
    num_orders: int = 0
    restart_pos: int = 0
    order_list: list = field(default_factory=lambda: [0] * constants.MOD_MAX_ORDERS)
    signature: bytes = b'M.K.'

    @property
    def num_channels(self):
        """
        Channel count implied by the signature, or 0 if the signature is not supported
        """
        return constants.MOD_SIGNATURES.get(bytes(self.signature), 0)

    @property
    def num_patterns(self):
        """
        Number of patterns stored in the file.  Derived from all 128 order list entries, not
        just the played ones, since it determines where the sample data starts.
        """
        stored = [p for p in self.order_list if p <= constants.MOD_MAX_PATTERN_INDEX]
        if not stored:
            return 0
        return max(stored) + 1

    def validate(self):
        """
        Raises an exception if the header can't be converted

        :raises Mod2MusSignatureError: signature is not 1CHN, 2CHN, 3CHN or M.K.
        :raises Mod2MusOrderCountError: more than 128 orders
        """
        if self.num_channels == 0:
            raise Mod2MusSignatureError(
                "Error: cannot identify input file (MOD signature is not 1CHN, 2CHN, 3CHN or M.K.)")
        if self.num_orders > constants.MOD_MAX_ORDERS:
            raise Mod2MusOrderCountError("Error: input file is malformed (claims > 128 orders)")

    def to_bytes(self):
        """
        Converts the header into MOD bytes.
        :return: the 1084-byte MOD header
        :rtype: bytes
        """
        result = bytearray()
        result += pad_or_truncate(self.name, constants.MOD_SONG_NAME_LEN)
        for sample in self.samples:
            result += sample.to_bytes()
        result.append(self.num_orders)
        result.append(self.restart_pos)
        result += bytes(self.order_list).ljust(constants.MOD_MAX_ORDERS, b'\0')
        result += pad_or_truncate(self.signature, 4)
        return result

    @classmethod
    def from_bytes(cls, in_bytes):
        """
        Constructor that builds a header from the first 1084 bytes of a MOD file

        :param in_bytes: Raw MOD bytes
        :type in_bytes: bytes
        :return: new ModHeader instance
        :rtype: ModHeader
        """
        if len(in_bytes) < constants.MOD_HEADER_LEN:
            raise Mod2MusSignatureError("Error: input file is too short to be a MOD file")

        samples_start = constants.MOD_SONG_NAME_LEN
        samples_end = samples_start + constants.MOD_NUM_SAMPLES * constants.MOD_SAMPLE_HEADER_LEN

        result = cls()
        result.name = bytes(in_bytes[0:samples_start])
        result.samples = [ModSampleHeader.from_bytes(sample_bytes) for sample_bytes
                          in moreit.sliced(in_bytes[samples_start:samples_end], constants.MOD_SAMPLE_HEADER_LEN)]
        result.num_orders = in_bytes[samples_end]
        result.restart_pos = in_bytes[samples_end + 1]
        orders_start = samples_end + 2
        result.order_list = list(in_bytes[orders_start:orders_start + constants.MOD_MAX_ORDERS])
        result.signature = bytes(in_bytes[constants.MOD_HEADER_LEN - 4:constants.MOD_HEADER_LEN])
        return result


class ModSong:
    """
    A parsed MOD file: the header plus the raw file bytes, from which pattern cells and sample
    data are addressed.  Anything addressed past the end of the file reads as zeros.
    """
    def __init__(self, header=None, binary=b''):
        self.header = header if header is not None else ModHeader()
        self.binary = bytes(binary)

    @property
    def num_channels(self):
        return self.header.num_channels

    @property
    def pattern_len(self):
        """Size in bytes of one pattern"""
        return self.num_channels * constants.MOD_ROWS_PER_PATTERN * constants.MOD_CELL_LEN

    @property
    def sample_data_offset(self):
        return constants.MOD_HEADER_LEN + self.header.num_patterns * self.pattern_len

    @property
    def expected_len(self):
        """File length needed to hold every pattern and every sample"""
        return self.sample_data_offset + sum(s.byte_length for s in self.header.samples)

    def is_truncated(self):
        return len(self.binary) < self.expected_len

    def _read(self, offset, length):
        return self.binary[offset:offset + length].ljust(length, b'\0')

    def cell(self, pattern, row, channel):
        """
        Gets the cell for one channel of one row of a pattern

        :param pattern: pattern index (as found in the order list)
        :type pattern: int
        :param row: row number, 0-63
        :type row: int
        :param channel: channel number, 0-based
        :type channel: int
        :return: unpacked cell
        :rtype: ModCell
        """
        offset = constants.MOD_HEADER_LEN + pattern * self.pattern_len \
            + (row * self.num_channels + channel) * constants.MOD_CELL_LEN
        return ModCell.from_bytes(self._read(offset, constants.MOD_CELL_LEN))

    def sample_data(self):
        """
        Splits the sample area into one block per sample slot.  Every slot consumes its declared
        length, including the ones too short to be exported.

        :return: 31 blocks of raw sample bytes
        :rtype: list of bytes
        """
        result = []
        offset = self.sample_data_offset
        for sample in self.header.samples:
            result.append(self._read(offset, sample.byte_length))
            offset += sample.byte_length
        return result


def period_to_note(period):
    """
    Converts a ProTracker period into a note number, 1 (C-1) through 36 (B-3).

    Periods between two table entries resolve to the nearer one; an exact midpoint resolves to
    the higher note (the smaller period).  Periods above the table clamp to note 1, periods below
    it give NO_NOTE.

    :param period: 12-bit period from a MOD cell
    :type period: int
    :return: note number, or NO_NOTE
    :rtype: int
    """
    if not 0 <= period <= 0xFFF:
        raise Mod2MusValueError(f"Error: illegal period {period}")
    if period == 0 or period == constants.MOD_NO_PERIOD:
        return constants.NO_NOTE

    table = constants.PROTRACKER_PERIODS
    for i, table_period in enumerate(table):
        if period >= table_period:
            if period != table_period and i != 0:
                if table[i - 1] - period < period - table_period:
                    return i
            return i + 1
    return constants.NO_NOTE


def import_mod_binary(binary):
    """
    Parses and validates MOD file bytes

    :param binary: contents of a MOD file
    :type binary: bytes
    :return: the parsed song
    :rtype: ModSong
    :raises Mod2MusFormatError: the file isn't a supported MOD
    """
    header = ModHeader.from_bytes(binary)
    header.validate()
    return ModSong(header, binary)


class ProTracker(base.Mod2MusIO):
    """
    The IO interface for ProTracker MOD files

    Supports import of 1-4 channel MODs into a ModSong
    """
    @classmethod
    def cts_type(cls):
        return 'ProTracker'

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

    def to_mod_song(self, filename, **kwargs):
        """
        Import a MOD file

        :param filename: File name of the .mod file
        :type filename: str
        :return: parsed song
        :rtype: ModSong

        :keyword options:
            * **verbose** (bool) - print warnings.  Defaults to True
        """
        self.set_options(**kwargs)
        mod_song = import_mod_binary(read_binary_file(filename))
        if mod_song.is_truncated():
            self.warn("input file is truncated")
        return mod_song
